# boards/admin.py
from django.contrib import admin

from .models import Entry, Leaderboard


class EntryInline(admin.TabularInline):
    model = Entry
    extra = 0
    fields = ("team_name", "score", "created_at", "updated_at")
    readonly_fields = ("created_at", "updated_at")


@admin.register(Leaderboard)
class LeaderboardAdmin(admin.ModelAdmin):
    list_display = ("id", "name", "scoring_type", "score_label", "allow_updates", "is_active", "created_at")
    list_filter = ("scoring_type", "is_active", "allow_updates")
    search_fields = ("name",)
    inlines = (EntryInline,)


@admin.register(Entry)
class EntryAdmin(admin.ModelAdmin):
    list_display = ("team_name", "leaderboard", "score", "created_at", "updated_at")
    list_filter = ("leaderboard",)
    search_fields = ("team_name", "leaderboard__name")
