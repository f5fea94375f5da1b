# boards/views.py
from __future__ import annotations

import logging

from django.conf import settings
from django.contrib import messages
from django.http import Http404, HttpRequest, HttpResponse, JsonResponse, StreamingHttpResponse
from django.shortcuts import get_object_or_404, redirect, render
from django.views.decorators.http import require_GET, require_POST

from .events import board_channel, watch
from .forms import EntryForm, LeaderboardForm
from .formatting import format_relative
from .models import Leaderboard
from .services import DuplicateTeamError, board_snapshot, submit_entry

logger = logging.getLogger(__name__)


def _refresh_interval() -> int:
    return int(getattr(settings, "REFRESH_INTERVAL_SECONDS", 30))


def _active_board(leaderboard_id: int) -> Leaderboard:
    return get_object_or_404(Leaderboard, pk=leaderboard_id, is_active=True)


# =========================================
# leaderboard management
# =========================================
def create_leaderboard(request: HttpRequest) -> HttpResponse:
    if request.method == "POST":
        form = LeaderboardForm(request.POST)
        if form.is_valid():
            lb = form.save()
            logger.info("leaderboard created id=%s name=%s", lb.id, lb.name)
            return redirect("boards:leaderboard", leaderboard_id=lb.id)
    else:
        form = LeaderboardForm()

    return render(request, "boards/leaderboard_form.html", {"form": form, "creating": True})


def edit_leaderboard(request: HttpRequest, leaderboard_id: int) -> HttpResponse:
    lb = get_object_or_404(Leaderboard, pk=leaderboard_id)

    if request.method == "POST":
        form = LeaderboardForm(request.POST, instance=lb)
        if form.is_valid():
            form.save()
            messages.success(request, "Leaderboard updated successfully!")
            return redirect("home")
    else:
        form = LeaderboardForm(instance=lb)

    return render(request, "boards/leaderboard_form.html", {"form": form, "leaderboard": lb, "creating": False})


@require_POST
def delete_leaderboard(request: HttpRequest, leaderboard_id: int) -> HttpResponse:
    lb = get_object_or_404(Leaderboard, pk=leaderboard_id)
    name = lb.name
    lb.delete()
    logger.info("leaderboard deleted id=%s name=%s", leaderboard_id, name)
    messages.success(request, f"Leaderboard \"{name}\" deleted successfully!")
    return redirect("home")


# =========================================
# entries
# =========================================
def submit_entry_view(request: HttpRequest, leaderboard_id: int) -> HttpResponse:
    lb = _active_board(leaderboard_id)

    if request.method == "POST":
        form = EntryForm(request.POST, leaderboard=lb)
        if form.is_valid():
            try:
                _, created = submit_entry(
                    leaderboard=lb,
                    team_name=form.cleaned_data["team_name"],
                    score=form.cleaned_data["score"],
                )
            except DuplicateTeamError as e:
                messages.error(request, str(e))
            else:
                if created:
                    messages.success(request, "Entry submitted successfully!")
                else:
                    messages.success(request, "Score updated successfully!")
                return redirect("boards:leaderboard", leaderboard_id=lb.id)
    else:
        form = EntryForm(leaderboard=lb)

    return render(request, "boards/entry_form.html", {"leaderboard": lb, "form": form})


# =========================================
# live board
# =========================================
def leaderboard_view(request: HttpRequest, leaderboard_id: int) -> HttpResponse:
    lb = _active_board(leaderboard_id)
    snapshot = board_snapshot(lb)
    return render(
        request,
        "boards/leaderboard.html",
        {"leaderboard": lb, "snapshot": snapshot, "refresh_interval": _refresh_interval()},
    )


@require_GET
def leaderboard_rows(request: HttpRequest, leaderboard_id: int) -> HttpResponse:
    """Rows fragment the page swaps in on every refresh."""
    lb = _active_board(leaderboard_id)
    return render(request, "boards/_rows.html", {"leaderboard": lb, "snapshot": board_snapshot(lb)})


@require_GET
def leaderboard_data(request: HttpRequest, leaderboard_id: int) -> JsonResponse:
    try:
        lb = _active_board(leaderboard_id)
    except Http404:
        return JsonResponse({"error": "Leaderboard not found"}, status=404)

    snapshot = board_snapshot(lb)
    return JsonResponse(
        {
            "leaderboard": {
                "id": lb.id,
                "name": lb.name,
                "scoring_type": lb.scoring_type,
                "score_label": lb.score_label,
            },
            "entries": [
                {
                    "rank": row.rank,
                    "id": row.entry.id,
                    "team_name": row.entry.team_name,
                    "score": row.entry.score,
                    "display_score": row.display_score,
                    "created_at": row.entry.created_at.isoformat(),
                    "submitted": format_relative(row.entry.created_at),
                }
                for row in snapshot.rows
            ],
        }
    )


def sse_stream(channel: str, interval: float):
    """
    text/event-stream body: one `refresh` event per change notification or
    timer tick. Django closes the generator when the client goes away, which
    releases the subscription.
    """
    events = watch(channel, interval)
    try:
        yield "retry: 5000\n\n"
        for reason in events:
            yield f"event: refresh\ndata: {reason}\n\n"
    finally:
        events.close()


def sse_response(channel: str) -> StreamingHttpResponse:
    resp = StreamingHttpResponse(sse_stream(channel, _refresh_interval()), content_type="text/event-stream")
    resp["Cache-Control"] = "no-cache"
    resp["X-Accel-Buffering"] = "no"
    return resp


@require_GET
def leaderboard_events(request: HttpRequest, leaderboard_id: int) -> StreamingHttpResponse:
    lb = _active_board(leaderboard_id)
    return sse_response(board_channel(lb.id))
