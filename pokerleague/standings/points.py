"""Per-game points for finishing positions."""

from __future__ import annotations

from collections.abc import Sequence

from pokerleague.core.constants import TIE_SPLIT_BLOCK, TIE_SPLIT_POSITION

from .models import PlayerResult


def calculate_points(
    results: Sequence[PlayerResult],
    player: PlayerResult,
    tie_split: str = TIE_SPLIT_POSITION,
    is_cash: bool = False,
) -> float:
    """Return the points ``player`` earned in a game with ``results``.

    A finish scores one point per player finished ahead of. Players sharing a
    position split the points for that position equally. With
    ``tie_split="block"`` the tied players are treated as occupying the block
    of positions starting at theirs and split the points of the whole block.
    Cash games award no points.
    """
    if is_cash:
        return 0.0

    total_players = len(results)
    position = player.position
    tied = sum(1 for r in results if r.position == position)

    if tied <= 1:
        return float(total_players - position)

    if tie_split == TIE_SPLIT_BLOCK:
        block = sum(max(0, total_players - (position + i)) for i in range(tied))
        return block / tied

    return (total_players - position) / tied
