from django.shortcuts import render

from boards.services import active_leaderboards


def home(request):
    """Active leaderboards with their entry counts."""
    leaderboards = active_leaderboards()
    return render(request, "core/home.html", {"leaderboards": leaderboards})
