"""Checks applied to a game before it is recorded.

Standings computation never rejects data; these checks let the recording
layer report problems such as a best hand winner who did not take part.
"""

from __future__ import annotations

import math
from typing import Any

from pokerleague.core.constants import GAME_STATUS_SCHEDULED

from .models import PlayerResult


def _is_number(value: Any) -> bool:
    if isinstance(value, bool):
        return False
    if isinstance(value, int):
        return True
    return isinstance(value, float) and math.isfinite(value)


def _validate_result(
    result: dict[str, Any], index: int, is_scheduled: bool
) -> list[str]:
    errors = []
    row = index + 1

    if not str(result.get("userId") or "").strip():
        errors.append(f"Player selection is required for position {row}")

    if not is_scheduled:
        position = result.get("position")
        if not _is_number(position) or position < 1:
            errors.append(f"Valid position is required for player {row}")
        if not _is_number(result.get("winnings")):
            errors.append(f"Winnings must be a number for player {row}")

    rebuys = result.get("rebuys")
    if not _is_number(rebuys) or rebuys < 0:
        errors.append(f"Rebuys must be a non-negative number for player {row}")

    return errors


def validate_game_data(data: dict[str, Any]) -> list[str]:
    """Return a list of human readable problems with a game submission."""
    errors = []

    if not data.get("date"):
        errors.append("Game date is required")

    results = data.get("results")
    if not isinstance(results, list) or not results:
        errors.append("At least one player result is required")
        return errors

    results = [r if isinstance(r, dict) else {} for r in results]

    player_ids = [str(r.get("userId")) for r in results if r.get("userId")]
    if len(player_ids) != len(set(player_ids)):
        errors.append("Duplicate players are not allowed")

    is_scheduled = data.get("status") == GAME_STATUS_SCHEDULED
    for index, result in enumerate(results):
        errors.extend(_validate_result(result, index, is_scheduled))

    parsed = [PlayerResult.from_dict(r) for r in results]
    participants = sum(1 for p in parsed if p.best_hand_participant)
    winners = sum(1 for p in parsed if p.best_hand_winner)
    if winners > participants:
        errors.append("Best hand winners must also be participants")
    for index, result in enumerate(parsed):
        if result.best_hand_winner and not result.best_hand_participant:
            errors.append(
                f"Player {index + 1} won best hand but is not marked as participant"
            )

    return errors
