"""Standings for a set of games, from raw records to the display table."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any, Optional

from pokerleague.core.constants import (
    DEFAULT_SORT_DIRECTION,
    DEFAULT_SORT_FIELD,
    SIDE_BET_COST,
    TIE_SPLIT_POSITION,
)

from .accumulator import accumulate
from .labels import label_standings
from .models import GameRecord, StandingsEntry
from .ranking import rank_standings


def calculate_standings(  # noqa: PLR0913
    games: Iterable[GameRecord],
    roster: Optional[Mapping[str, Mapping[str, Any]]] = None,
    sort_field: str = DEFAULT_SORT_FIELD,
    sort_direction: str = DEFAULT_SORT_DIRECTION,
    game_type: Optional[str] = None,
    tie_split: str = TIE_SPLIT_POSITION,
    side_bet_cost: float = SIDE_BET_COST,
) -> list[StandingsEntry]:
    """Calculate the ranked standings table for ``games``.

    Everything is recomputed from the given games on every call.
    """
    stats = accumulate(
        games, game_type=game_type, tie_split=tie_split, side_bet_cost=side_bet_cost
    )
    entries = label_standings(stats.values(), roster)
    return rank_standings(entries, sort_field, sort_direction)
