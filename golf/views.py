# golf/views.py
from __future__ import annotations

import logging
import time

from django.conf import settings
from django.contrib import messages
from django.http import HttpRequest, HttpResponse, StreamingHttpResponse
from django.shortcuts import redirect, render
from django.views.decorators.http import require_GET

from boards.events import GOLF_CHANNEL
from boards.views import sse_response
from .forms import ChallengeForm, TeamStartForm
from .services import create_submission, ranked_submissions
from .tasks import validate_submission

logger = logging.getLogger(__name__)

SESSION_KEY = "golf_challenge"


def team_entry(request: HttpRequest) -> HttpResponse:
    if request.method == "POST":
        form = TeamStartForm(request.POST)
        if form.is_valid():
            request.session[SESSION_KEY] = {
                "category": form.cleaned_data["category"],
                "team_number": form.cleaned_data["team_number"],
                "language": "javascript",
                "start_time": time.time(),
            }
            return redirect("golf:challenge")
    else:
        form = TeamStartForm()

    return render(request, "golf/team_entry.html", {"form": form})


def challenge(request: HttpRequest) -> HttpResponse:
    state = request.session.get(SESSION_KEY)
    if not state:
        messages.info(request, "Enter your team number to start the challenge.")
        return redirect("golf:start")

    if request.method == "POST":
        form = ChallengeForm(request.POST)
        if form.is_valid():
            sub = create_submission(
                category=state["category"],
                team_number=state["team_number"],
                language=state.get("language", "javascript"),
                code=form.cleaned_data["code"],
                output=form.cleaned_data["output"],
                started_at=state.get("start_time"),
            )
            try:
                validate_submission.delay(sub.id)
            except Exception:
                # broker unreachable: validate_pending_submissions picks it up later
                logger.exception("could not queue validation for submission %s", sub.id)
            del request.session[SESSION_KEY]
            messages.success(
                request,
                f"Submitted {sub.character_count} characters. It shows up on the board once verified.",
            )
            return redirect("golf:leaderboard")
    else:
        form = ChallengeForm()

    return render(request, "golf/challenge.html", {"form": form, "state": state})


def leaderboard(request: HttpRequest) -> HttpResponse:
    return render(
        request,
        "golf/leaderboard.html",
        {
            "rows": ranked_submissions(),
            "refresh_interval": int(getattr(settings, "REFRESH_INTERVAL_SECONDS", 30)),
        },
    )


@require_GET
def leaderboard_rows(request: HttpRequest) -> HttpResponse:
    return render(request, "golf/_rows.html", {"rows": ranked_submissions()})


@require_GET
def leaderboard_events(request: HttpRequest) -> StreamingHttpResponse:
    return sse_response(GOLF_CHANNEL)
