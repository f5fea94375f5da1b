# golf/urls.py
from django.urls import path

from . import views

app_name = "golf"

urlpatterns = [
    path("", views.team_entry, name="start"),
    path("challenge/", views.challenge, name="challenge"),
    path("leaderboard/", views.leaderboard, name="leaderboard"),
    path("leaderboard/rows/", views.leaderboard_rows, name="rows"),
    path("leaderboard/events/", views.leaderboard_events, name="events"),
]
