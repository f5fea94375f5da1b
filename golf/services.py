# golf/services.py
from __future__ import annotations

import logging
from typing import List, Optional

from django.utils import timezone

from boards.ranking import RankedEntry, rank_by
from .fizzbuzz import character_count, is_correct_output
from .models import Submission

logger = logging.getLogger(__name__)


def ranked_submissions() -> List[RankedEntry]:
    """Valid submissions: fewest characters, then fastest solve, then earliest."""
    return rank_by(Submission.objects.filter(is_valid=True), key=Submission.ranking_key)


def create_submission(
    *,
    category: int,
    team_number: int,
    code: str,
    output: str = "",
    started_at: Optional[float] = None,
    language: str = "javascript",
) -> Submission:
    """
    started_at: unix timestamp of when the team opened the challenge.
    The submission starts out invalid; golf.tasks.validate_submission checks it.
    """
    solve_time = None
    now = timezone.now()
    if started_at is not None:
        solve_time = max(0, int(now.timestamp() - float(started_at)))

    sub = Submission.objects.create(
        category=category,
        team_number=team_number,
        language=language,
        code=code.strip(),
        output=output,
        character_count=character_count(code),
        solve_time_seconds=solve_time,
        created_at=now,
    )
    logger.info("submission %s from %s chars=%s", sub.id, sub.team_label, sub.character_count)
    return sub


def validate(sub: Submission) -> bool:
    sub.is_valid = is_correct_output(sub.output)
    sub.validated_at = timezone.now()
    sub.save(update_fields=["is_valid", "validated_at"])
    logger.info("submission %s validated valid=%s", sub.id, sub.is_valid)
    return sub.is_valid
