"""Best hand side bet accounting."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from pokerleague.core.constants import SIDE_BET_COST

from .models import PlayerResult


@dataclass(frozen=True)
class SideBetOutcome:
    """The best hand pot of one game and what each winner takes from it."""

    participants: int
    winners: int
    pot: float
    per_winner_share: float


def side_bet_outcome(
    results: Sequence[PlayerResult], cost: float = SIDE_BET_COST
) -> SideBetOutcome:
    """Compute the best hand pot for a game.

    Every participant pays ``cost`` into the pot, which is split evenly among
    the winners. With no winners the pot is paid out to nobody. Winners are
    not required to be participants.
    """
    participants = sum(1 for r in results if r.best_hand_participant)
    winners = sum(1 for r in results if r.best_hand_winner)
    pot = participants * cost
    share = pot / winners if winners > 0 else 0.0
    return SideBetOutcome(
        participants=participants, winners=winners, pot=pot, per_winner_share=share
    )
