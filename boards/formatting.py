# boards/formatting.py
from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Optional

from django.utils import timezone
from django.utils.formats import number_format

from .ranking import ScoringPolicy

NOT_AVAILABLE = "N/A"

RANK_ICONS = {1: "🥇", 2: "🥈", 3: "🥉"}


def _plain(value: Decimal) -> str:
    # 12.0 -> "12", 12.50 -> "12.5"
    return f"{value.normalize():f}"


def format_time(seconds: Optional[float]) -> str:
    """
    65 -> "1:05", 45 -> "45s", -65 -> "-1:05", None -> "N/A"
    """
    if seconds is None:
        return NOT_AVAILABLE
    sign = "-" if seconds < 0 else ""
    # str() first so 72.3 splits into 1 and 12.3, not 12.299999999999997
    minutes, secs = divmod(abs(Decimal(str(seconds))), 60)
    minutes = int(minutes)
    text = _plain(secs)
    if minutes > 0:
        if secs < 10:
            text = "0" + text
        return f"{sign}{minutes}:{text}"
    return f"{sign}{text}s"


def format_points(value: float) -> str:
    """Grouping separators of the active locale, e.g. 1234567 -> "1,234,567"."""
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    return number_format(value, force_grouping=True)


def format_score(value: Optional[float], policy: ScoringPolicy) -> str:
    if policy.is_time:
        return format_time(value)
    if value is None:
        return NOT_AVAILABLE
    return format_points(value)


def format_relative(ts: datetime, now: Optional[datetime] = None) -> str:
    now = now or timezone.now()
    diff_mins = int((now - ts).total_seconds() // 60)

    if diff_mins < 1:
        return "Just now"
    if diff_mins < 60:
        return f"{diff_mins}m ago"

    diff_hours = diff_mins // 60
    if diff_hours < 24:
        return f"{diff_hours}h ago"

    return f"{diff_hours // 24}d ago"


def rank_icon(rank: int) -> str:
    return RANK_ICONS.get(rank, str(rank))
