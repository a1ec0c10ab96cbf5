"""Fold completed games into per-player season statistics."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Optional

from pokerleague.core.constants import SIDE_BET_COST, TIE_SPLIT_POSITION

from .models import GameParticipation, GameRecord, PlayerSeasonStats
from .points import calculate_points
from .side_bets import side_bet_outcome
from .streaks import calculate_streak

logger = logging.getLogger(__name__)


def completed_games_in_order(
    games: Iterable[GameRecord], game_type: Optional[str] = None
) -> list[GameRecord]:
    """Return completed games, optionally of one type, oldest first."""
    completed = [
        game
        for game in games
        if game.is_completed and (game_type is None or game.game_type == game_type)
    ]
    completed.sort(key=lambda game: game.played_at())
    return completed


def _process_single_game(
    stats: dict[str, PlayerSeasonStats],
    histories: dict[str, list[GameParticipation]],
    game: GameRecord,
    tie_split: str,
    side_bet_cost: float,
) -> None:
    """Add one game's results to the running totals of its players."""
    results = game.results
    total_players = len(results)
    outcome = side_bet_outcome(results, side_bet_cost)

    for result in results:
        user_id = result.user_id
        if not user_id:
            logger.warning(f"Skipping result without userId in game {game.id}")
            continue

        s = stats.get(user_id)
        if s is None:
            s = stats[user_id] = PlayerSeasonStats(user_id=user_id)
            histories[user_id] = []

        s.games += 1
        s.points += calculate_points(results, result, tie_split, game.is_cash)
        s.winnings += result.winnings
        s.total_buyins += game.buyin

        is_win = result.winnings > 0 if game.is_cash else result.position == 1
        if is_win:
            s.wins += 1
        histories[user_id].append(
            GameParticipation(
                played_at=game.played_at(),
                position=result.position,
                total_players=total_players,
                is_win=is_win,
                counts_position=not game.is_cash and result.position > 0,
            )
        )

        if result.rebuys > 0:
            s.rebuys += result.rebuys
            s.total_buyins += result.rebuys * game.buyin

        if result.best_hand_participant:
            s.best_hand_participation_count += 1
            s.best_hand_costs += side_bet_cost
            s.total_buyins += side_bet_cost

        if result.best_hand_winner:
            s.best_hand_win_count += 1
            s.best_hand_winnings += outcome.per_winner_share
            s.winnings += outcome.per_winner_share


def _calculate_derived_stats(
    stats: dict[str, PlayerSeasonStats],
    histories: dict[str, list[GameParticipation]],
) -> None:
    """Calculate win rate, average position, net winnings and streaks."""
    for user_id, s in stats.items():
        history = histories[user_id]
        s.win_rate = (s.wins / s.games * 100) if s.games > 0 else 0.0
        positions = [p.position for p in history if p.counts_position]
        s.avg_position = sum(positions) / len(positions) if positions else 0.0
        s.net_winnings = s.winnings - s.total_buyins
        s.current_streak, s.streak_type = calculate_streak(history)


def accumulate(
    games: Iterable[GameRecord],
    game_type: Optional[str] = None,
    tie_split: str = TIE_SPLIT_POSITION,
    side_bet_cost: float = SIDE_BET_COST,
) -> dict[str, PlayerSeasonStats]:
    """Compute season statistics for every player who played a completed game.

    Scheduled games are ignored even when the caller already filtered them.
    Players appear in the order of their first game.
    """
    stats: dict[str, PlayerSeasonStats] = {}
    histories: dict[str, list[GameParticipation]] = {}

    for game in completed_games_in_order(games, game_type):
        _process_single_game(stats, histories, game, tie_split, side_bet_cost)

    _calculate_derived_stats(stats, histories)
    return stats
