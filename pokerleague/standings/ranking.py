"""Rank assignment and display ordering for standings."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import replace
from typing import Any, Optional

from pokerleague.core.constants import (
    DEFAULT_SORT_DIRECTION,
    DEFAULT_SORT_FIELD,
    RANK_EPSILON,
    SORT_DESC,
    STREAK_WIN,
)

from .models import PlayerSeasonStats, StandingsEntry

STREAK_SORT_FIELD = "current_streak"


def assign_ranks(players: Iterable[PlayerSeasonStats]) -> list[StandingsEntry]:
    """Return entries ordered by points with dense ranks.

    Players whose points differ by less than ``RANK_EPSILON`` share a rank and
    the next distinct total gets the following rank, so no rank is skipped.
    Equal totals keep their input order.
    """
    ordered = sorted(
        (StandingsEntry.from_stats(p) for p in players),
        key=lambda e: e.points,
        reverse=True,
    )

    ranked: list[StandingsEntry] = []
    previous: Optional[StandingsEntry] = None
    for entry in ordered:
        if previous is None:
            rank = 1
        elif abs(entry.points - previous.points) < RANK_EPSILON:
            rank = previous.rank
        else:
            rank = previous.rank + 1
        previous = replace(entry, rank=rank)
        ranked.append(previous)
    return ranked


def _sort_value(entry: StandingsEntry, field: str) -> Any:
    if field == STREAK_SORT_FIELD:
        # Win streaks above no streak above loss streaks.
        if entry.streak_type == STREAK_WIN:
            return entry.current_streak
        return -entry.current_streak
    value = getattr(entry, field)
    if isinstance(value, str):
        return value.lower()
    return value


def sort_standings(
    entries: Iterable[StandingsEntry],
    field: str = DEFAULT_SORT_FIELD,
    direction: str = DEFAULT_SORT_DIRECTION,
) -> list[StandingsEntry]:
    """Order entries by any field for display without touching their ranks.

    Strings compare case-insensitively. Missing values come first ascending
    and last descending. The sort is stable.
    """
    entries = list(entries)
    descending = direction == SORT_DESC

    present = [e for e in entries if _sort_value(e, field) is not None]
    missing = [e for e in entries if _sort_value(e, field) is None]
    present.sort(key=lambda e: _sort_value(e, field), reverse=descending)
    return present + missing if descending else missing + present


def rank_standings(
    players: Iterable[PlayerSeasonStats],
    field: str = DEFAULT_SORT_FIELD,
    direction: str = DEFAULT_SORT_DIRECTION,
) -> list[StandingsEntry]:
    """Assign ranks by points, then apply the requested display order."""
    return sort_standings(assign_ranks(players), field, direction)
