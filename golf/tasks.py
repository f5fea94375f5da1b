# golf/tasks.py
from __future__ import annotations

from datetime import timedelta

from celery import shared_task
from django.utils import timezone

from .models import Submission
from .services import validate


@shared_task
def validate_submission(submission_id: int) -> dict:
    try:
        sub = Submission.objects.get(pk=submission_id)
    except Submission.DoesNotExist:
        return {"submission": submission_id, "skipped": "not found"}

    return {"submission": submission_id, "valid": validate(sub)}


@shared_task
def validate_pending_submissions(min_age_seconds: int = 60) -> dict:
    """
    Sweep for submissions whose validation task never ran (broker down, worker
    restart). Only rows older than min_age_seconds, so fresh ones are left to
    their own task.
    """
    cutoff = timezone.now() - timedelta(seconds=min_age_seconds)
    result = {"checked": 0, "valid": 0}

    qs = Submission.objects.filter(validated_at__isnull=True, created_at__lte=cutoff).order_by("id")[:200]
    for sub in qs:
        result["checked"] += 1
        if validate(sub):
            result["valid"] += 1

    return result
