# golf/models.py
from __future__ import annotations

from django.db import models
from django.utils import timezone


class Submission(models.Model):
    CATEGORY_CHOICES = (
        (1, "Category 1"),
        (2, "Category 2"),
    )
    LANGUAGE_CHOICES = (
        ("javascript", "JavaScript"),
    )

    category = models.PositiveSmallIntegerField(choices=CATEGORY_CHOICES, default=1)
    team_number = models.PositiveIntegerField()
    language = models.CharField(max_length=20, choices=LANGUAGE_CHOICES, default="javascript")

    code = models.TextField()
    output = models.TextField(blank=True, default="")
    character_count = models.PositiveIntegerField()
    solve_time_seconds = models.PositiveIntegerField(null=True, blank=True)

    # set by golf.tasks.validate_submission
    is_valid = models.BooleanField(default=False, db_index=True)
    validated_at = models.DateTimeField(null=True, blank=True)

    created_at = models.DateTimeField(default=timezone.now)

    class Meta:
        ordering = ("character_count", "solve_time_seconds", "created_at")
        indexes = [
            models.Index(fields=["is_valid", "character_count"], name="golf_valid_chars_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.team_label} chars={self.character_count} valid={self.is_valid}"

    @property
    def team_label(self) -> str:
        return f"cat-{self.category}-team-{self.team_number}"

    def ranking_key(self) -> tuple:
        # missing solve time sorts after every recorded one
        solve = self.solve_time_seconds
        return (
            self.character_count,
            solve is None,
            solve or 0,
            self.created_at,
            self.id or 0,
        )
