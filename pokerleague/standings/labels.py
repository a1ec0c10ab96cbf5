"""Attach player display names to computed standings."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from dataclasses import replace
from typing import Any, Optional

from pokerleague.core.constants import (
    PLACEHOLDER_ID_SUFFIX_LENGTH,
    UNKNOWN_PLAYER_NAME,
)

from .models import PlayerSeasonStats, StandingsEntry

logger = logging.getLogger(__name__)


def display_name(user: Mapping[str, Any]) -> str:
    """Return the name shown for a user in the standings.

    Uses "first last" when available, then ``displayName``, then ``email``.
    """
    full_name = f"{user.get('firstName') or ''} {user.get('lastName') or ''}".strip()
    return (
        full_name
        or user.get("displayName")
        or user.get("email")
        or UNKNOWN_PLAYER_NAME
    )


def placeholder_name(user_id: str) -> str:
    """Name for a player whose user record no longer exists."""
    return f"Unknown User ({user_id[-PLACEHOLDER_ID_SUFFIX_LENGTH:]}) (Removed)"


def label_standings(
    players: Iterable[PlayerSeasonStats],
    roster: Optional[Mapping[str, Mapping[str, Any]]] = None,
) -> list[StandingsEntry]:
    """Convert player stats into standings entries labelled from ``roster``.

    The roster only affects labels. Players missing from it are kept and
    flagged as placeholders. Without a roster players are labelled by id.
    """
    entries = []
    for stats in players:
        entry = StandingsEntry.from_stats(stats)
        if roster is None:
            entries.append(replace(entry, player=entry.user_id))
            continue

        user = roster.get(entry.user_id)
        if user is None:
            logger.warning(f"User {entry.user_id} not found in group roster")
            entry = replace(
                entry, player=placeholder_name(entry.user_id), is_placeholder=True
            )
        else:
            entry = replace(entry, player=display_name(user), is_placeholder=False)
        entries.append(entry)
    return entries
