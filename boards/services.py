# boards/services.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Tuple

from django.db import IntegrityError, transaction
from django.db.models import Count
from django.utils import timezone

from .models import Entry, Leaderboard
from .ranking import RankedEntry, is_valid_score, rank_entries

logger = logging.getLogger(__name__)


class ScoreboardError(Exception):
    pass


class DuplicateTeamError(ScoreboardError):
    def __init__(self, team_name: str):
        super().__init__(
            f"Team name '{team_name}' already exists and updates are not allowed for this leaderboard."
        )
        self.team_name = team_name


class InvalidScoreError(ScoreboardError, ValueError):
    pass


@dataclass(frozen=True)
class BoardSnapshot:
    """What one refresh of a board page renders. Built fresh on every request."""

    leaderboard: Leaderboard
    rows: List[RankedEntry]

    @property
    def is_empty(self) -> bool:
        return not self.rows


def active_leaderboards():
    return Leaderboard.objects.filter(is_active=True).annotate(entry_count=Count("entries")).order_by("id")


def board_snapshot(leaderboard: Leaderboard) -> BoardSnapshot:
    entries = [e.to_score_entry() for e in Entry.objects.filter(leaderboard=leaderboard)]
    return BoardSnapshot(leaderboard=leaderboard, rows=rank_entries(entries, leaderboard.policy))


def submit_entry(*, leaderboard: Leaderboard, team_name: str, score: float) -> Tuple[Entry, bool]:
    """
    Insert a team's score, or update it when the board allows updates.
    Returns (entry, created).

    Uniqueness of (leaderboard, team_name) is enforced by the database, so two
    clients racing on the same name cannot both insert.
    """
    team_name = (team_name or "").strip()
    if not team_name:
        raise ValueError("team_name is required")
    if not is_valid_score(score):
        raise InvalidScoreError(f"score must be a finite number, got {score!r}")

    if leaderboard.allow_updates:
        entry, created = Entry.objects.update_or_create(
            leaderboard=leaderboard,
            team_name=team_name,
            defaults={"score": score, "updated_at": timezone.now()},
        )
        logger.info(
            "entry %s board=%s team=%s score=%s",
            "created" if created else "updated", leaderboard.id, team_name, score,
        )
        return entry, created

    try:
        with transaction.atomic():
            entry = Entry.objects.create(leaderboard=leaderboard, team_name=team_name, score=score)
    except IntegrityError:
        logger.info("duplicate team rejected board=%s team=%s", leaderboard.id, team_name)
        raise DuplicateTeamError(team_name) from None

    logger.info("entry created board=%s team=%s score=%s", leaderboard.id, team_name, score)
    return entry, True

