"""Current win/loss streak detection."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Optional

from pokerleague.core.constants import STREAK_LOSS, STREAK_WIN

from .models import GameParticipation


def calculate_streak(
    history: Sequence[GameParticipation],
) -> tuple[int, Optional[str]]:
    """Return the current streak length and type for one player.

    ``history`` must be that player's games in chronological order. The most
    recent game sets the streak type and the streak extends backwards until
    the first game with a different outcome.
    """
    if not history:
        return 0, None

    last_won = history[-1].is_win
    streak_type = STREAK_WIN if last_won else STREAK_LOSS
    current_streak = 0
    for game in reversed(history):
        if game.is_win != last_won:
            break
        current_streak += 1
    return current_streak, streak_type
