# golf/admin.py
from django.contrib import admin

from .models import Submission
from .services import validate


@admin.register(Submission)
class SubmissionAdmin(admin.ModelAdmin):
    list_display = (
        "id",
        "team_label",
        "category",
        "team_number",
        "character_count",
        "solve_time_seconds",
        "is_valid",
        "created_at",
    )
    list_filter = ("is_valid", "category", "language")
    search_fields = ("team_number",)
    readonly_fields = ("character_count", "validated_at", "created_at")
    actions = ("revalidate",)

    @admin.display(description="Team")
    def team_label(self, obj: Submission) -> str:
        return obj.team_label

    @admin.action(description="Re-check output of selected submissions")
    def revalidate(self, request, queryset):
        valid = sum(1 for sub in queryset if validate(sub))
        self.message_user(request, f"{valid}/{queryset.count()} submissions valid.")
