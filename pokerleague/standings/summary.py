"""A single player's results across every group they play in."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import asdict, dataclass
from typing import Any, Optional

from pokerleague.core.constants import (
    GAME_TYPE_CASH,
    SIDE_BET_COST,
    TIE_SPLIT_POSITION,
    UNKNOWN_GROUP_NAME,
)

from .accumulator import completed_games_in_order
from .models import GameParticipation, GameRecord, game_timestamp
from .points import calculate_points
from .side_bets import side_bet_outcome
from .streaks import calculate_streak


@dataclass
class UserGame:
    """One game from the point of view of a single player."""

    game_id: str
    group_id: Optional[str]
    group_name: str
    date: Any
    time: Optional[str]
    game_type: str
    buyin: float
    total_players: int
    position: int
    winnings: float
    rebuys: int
    points: float
    is_win: bool
    best_hand_participant: bool
    best_hand_winner: bool
    best_hand_share: float

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass
class UserSummary:
    """Combined statistics for one player over a list of games."""

    games: int = 0
    wins: int = 0
    win_rate: float = 0.0
    avg_position: float = 0.0
    total_winnings: float = 0.0
    total_costs: float = 0.0
    profit_loss: float = 0.0
    best_hand_participations: int = 0
    best_hand_wins: int = 0
    best_hand_winnings: float = 0.0
    best_hand_costs: float = 0.0
    current_streak: int = 0
    streak_type: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def collect_user_games(
    games: Iterable[GameRecord],
    user_id: str,
    group_names: Optional[Mapping[str, str]] = None,
    tie_split: str = TIE_SPLIT_POSITION,
    side_bet_cost: float = SIDE_BET_COST,
) -> list[UserGame]:
    """List the completed games ``user_id`` played in, newest first."""
    group_names = group_names or {}
    user_games = []
    for game in completed_games_in_order(games):
        result = next((r for r in game.results if r.user_id == user_id), None)
        if result is None:
            continue

        outcome = side_bet_outcome(game.results, side_bet_cost)
        user_games.append(
            UserGame(
                game_id=game.id,
                group_id=game.group_id,
                group_name=group_names.get(game.group_id or "", UNKNOWN_GROUP_NAME),
                date=game.date,
                time=game.time,
                game_type=game.game_type,
                buyin=game.buyin,
                total_players=len(game.results),
                position=result.position,
                winnings=result.winnings,
                rebuys=result.rebuys,
                points=calculate_points(
                    game.results, result, tie_split, game.is_cash
                ),
                is_win=(
                    result.winnings > 0 if game.is_cash else result.position == 1
                ),
                best_hand_participant=result.best_hand_participant,
                best_hand_winner=result.best_hand_winner,
                best_hand_share=(
                    outcome.per_winner_share if result.best_hand_winner else 0.0
                ),
            )
        )

    user_games.reverse()
    return user_games


def summarize_user_games(
    user_games: Iterable[UserGame], side_bet_cost: float = SIDE_BET_COST
) -> UserSummary:
    """Combine a player's games into totals, rounding rates to one decimal.

    ``user_games`` is expected newest first, as returned by
    ``collect_user_games``.
    """
    user_games = list(user_games)
    summary = UserSummary(games=len(user_games))
    if not user_games:
        return summary

    prize_winnings = buyins = 0.0
    positions = []
    for game in user_games:
        prize_winnings += game.winnings
        buyins += game.buyin + game.rebuys * game.buyin
        if game.is_win:
            summary.wins += 1
        if game.game_type != GAME_TYPE_CASH and game.position > 0:
            positions.append(game.position)
        if game.best_hand_participant:
            summary.best_hand_participations += 1
            summary.best_hand_costs += side_bet_cost
        if game.best_hand_winner:
            summary.best_hand_wins += 1
            summary.best_hand_winnings += game.best_hand_share

    summary.win_rate = round(summary.wins / summary.games * 100, 1)
    summary.avg_position = (
        round(sum(positions) / len(positions), 1) if positions else 0.0
    )
    summary.total_winnings = prize_winnings + summary.best_hand_winnings
    summary.total_costs = buyins + summary.best_hand_costs
    summary.profit_loss = summary.total_winnings - summary.total_costs

    history = [
        GameParticipation(
            played_at=game_timestamp(g.date, g.time),
            position=g.position,
            total_players=g.total_players,
            is_win=g.is_win,
        )
        for g in reversed(user_games)
    ]
    summary.current_streak, summary.streak_type = calculate_streak(history)
    return summary
