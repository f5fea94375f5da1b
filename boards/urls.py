# boards/urls.py
from django.urls import path

from . import views

app_name = "boards"

urlpatterns = [
    path("create/", views.create_leaderboard, name="create"),
    path("<int:leaderboard_id>/edit/", views.edit_leaderboard, name="edit"),
    path("<int:leaderboard_id>/delete/", views.delete_leaderboard, name="delete"),
    path("<int:leaderboard_id>/entry/", views.submit_entry_view, name="entry"),
    path("<int:leaderboard_id>/leaderboard/", views.leaderboard_view, name="leaderboard"),
    path("<int:leaderboard_id>/leaderboard/rows/", views.leaderboard_rows, name="rows"),
    path("<int:leaderboard_id>/leaderboard/data/", views.leaderboard_data, name="data"),
    path("<int:leaderboard_id>/leaderboard/events/", views.leaderboard_events, name="events"),
]
