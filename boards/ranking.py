# boards/ranking.py
"""
Leaderboard ranking.

rank_entries() is a pure function: it takes the entries of one leaderboard and
the board's ScoringPolicy and returns them in rank order (rank 1 first).

- primary key: score, descending for higher-is-better, ascending for lower-is-better
- tie-break: created_at ascending (earliest submission wins)
- last resort: entry id, so two rows that agree on both still order the same way
"""
from __future__ import annotations

import math
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Callable, Dict, Iterable, List, Optional, Tuple

HIGHER_IS_BETTER = "higher-is-better"
LOWER_IS_BETTER = "lower-is-better"

LABEL_POINTS = "points"
LABEL_TIME = "time"

# scoring_type -> (direction, label)
SCORING_TYPES: Dict[str, Tuple[str, str]] = {
    "points_high": (HIGHER_IS_BETTER, LABEL_POINTS),
    "points_low": (LOWER_IS_BETTER, LABEL_POINTS),
    "time_fast": (LOWER_IS_BETTER, LABEL_TIME),
    "time_slow": (HIGHER_IS_BETTER, LABEL_TIME),
}


@dataclass(frozen=True)
class ScoringPolicy:
    direction: str
    label: str = LABEL_POINTS

    def __post_init__(self):
        if self.direction not in (HIGHER_IS_BETTER, LOWER_IS_BETTER):
            raise ValueError(f"unknown direction: {self.direction!r}")

    @classmethod
    def from_scoring_type(cls, scoring_type: str) -> "ScoringPolicy":
        try:
            direction, label = SCORING_TYPES[scoring_type]
        except KeyError:
            raise ValueError(f"unknown scoring type: {scoring_type!r}") from None
        return cls(direction=direction, label=label)

    @property
    def is_time(self) -> bool:
        return self.label == LABEL_TIME


@dataclass(frozen=True)
class ScoreEntry:
    id: Any
    team_name: str
    score: float
    created_at: datetime
    metadata: Dict[str, Any] = field(default_factory=dict, compare=False, hash=False)


@dataclass(frozen=True)
class RankedEntry:
    rank: int
    entry: Any
    display_score: str = ""


def is_valid_score(value: Any) -> bool:
    """Finite int/float, bools excluded. Checked by callers before ranking."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value)


def _sort_key(policy: ScoringPolicy) -> Callable[[ScoreEntry], tuple]:
    sign = -1 if policy.direction == HIGHER_IS_BETTER else 1

    def key(e: ScoreEntry) -> tuple:
        return (sign * e.score, e.created_at, str(e.id))

    return key


def order_entries(entries: Iterable[ScoreEntry], policy: ScoringPolicy) -> List[ScoreEntry]:
    return sorted(entries, key=_sort_key(policy))


def rank_entries(
    entries: Iterable[ScoreEntry],
    policy: ScoringPolicy,
    formatter: Optional[Callable[[float, ScoringPolicy], str]] = None,
) -> List[RankedEntry]:
    """
    Return RankedEntry rows, rank 1 first. An empty input gives an empty list.

    formatter(score, policy) fills display_score; defaults to boards.formatting.format_score.
    """
    if formatter is None:
        from .formatting import format_score

        formatter = format_score

    ordered = order_entries(entries, policy)
    return [
        RankedEntry(rank=i, entry=e, display_score=formatter(e.score, policy))
        for i, e in enumerate(ordered, start=1)
    ]


def rank_by(items: Iterable[Any], key: Callable[[Any], tuple]) -> List[RankedEntry]:
    """Generic variant: rank arbitrary rows by a caller-supplied ascending key."""
    return [RankedEntry(rank=i, entry=x) for i, x in enumerate(sorted(items, key=key), start=1)]
