# boards/models.py
from __future__ import annotations

from django.db import models
from django.utils import timezone

from .ranking import ScoreEntry, ScoringPolicy


class Leaderboard(models.Model):
    SCORING_CHOICES = (
        ("points_high", "Points (High Score Wins)"),
        ("points_low", "Points (Low Score Wins)"),
        ("time_fast", "Time (Fastest Wins)"),
        ("time_slow", "Time (Longest Wins)"),
    )

    name = models.CharField(max_length=200)
    description = models.TextField(blank=True, default="")
    scoring_type = models.CharField(max_length=20, choices=SCORING_CHOICES, default="points_high")
    score_label = models.CharField(max_length=50, default="Points")
    allow_updates = models.BooleanField(default=False)
    is_active = models.BooleanField(default=True, db_index=True)

    created_at = models.DateTimeField(default=timezone.now)

    class Meta:
        ordering = ("id",)

    def __str__(self) -> str:
        return f"#{self.id} {self.name}"

    @property
    def policy(self) -> ScoringPolicy:
        return ScoringPolicy.from_scoring_type(self.scoring_type)

    @property
    def scoring_type_display(self) -> str:
        # "points_high" -> "points high"
        return self.scoring_type.replace("_", " ")


def default_score_label(scoring_type: str) -> str:
    return "Time" if scoring_type.startswith("time") else "Points"


class Entry(models.Model):
    leaderboard = models.ForeignKey(Leaderboard, on_delete=models.CASCADE, related_name="entries")
    team_name = models.CharField(max_length=120)
    score = models.FloatField()
    metadata = models.JSONField(default=dict, blank=True)

    created_at = models.DateTimeField(default=timezone.now)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        constraints = [
            models.UniqueConstraint(fields=["leaderboard", "team_name"], name="uniq_entry_board_team")
        ]
        indexes = [
            models.Index(fields=["leaderboard", "created_at"], name="entry_board_created_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.team_name} {self.score} (board #{self.leaderboard_id})"

    def to_score_entry(self) -> ScoreEntry:
        return ScoreEntry(
            id=self.id,
            team_name=self.team_name,
            score=self.score,
            created_at=self.created_at,
            metadata=self.metadata or {},
        )
