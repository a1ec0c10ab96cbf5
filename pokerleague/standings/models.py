"""Data models for league games and standings."""

from __future__ import annotations

import datetime
import math
from dataclasses import asdict, dataclass, field, fields
from typing import Any, Optional, TypedDict

from pokerleague.core.constants import (
    BEST_HAND_SIDE_BET_ID,
    BEST_HAND_SIDE_BET_NAME,
    DEFAULT_BUYIN,
    GAME_STATUS_COMPLETED,
    GAME_TYPE_CASH,
    GAME_TYPE_TOURNAMENT,
)
from pokerleague.core.types import FirestoreDocument


class SideBetEntry(TypedDict, total=False):
    """One side bet as stored in the newer ``sideBets`` list of a result."""

    sideBetId: str
    name: str
    participated: bool
    won: bool


class PlayerResultDocument(TypedDict, total=False):
    """A single player's result inside a game document."""

    userId: str
    position: int
    winnings: float
    rebuys: int
    tied: bool
    bestHandParticipant: bool
    bestHandWinner: bool
    sideBets: list[SideBetEntry]
    rsvpStatus: str


class GameDocument(FirestoreDocument, total=False):
    """A game document in Firestore."""

    groupId: str
    date: Any
    time: str
    gameNumber: int
    status: str
    buyin: float
    gameType: str
    results: list[PlayerResultDocument]


def _as_number(value: Any, default: float = 0) -> float:
    """Coerce a stored value to a number, falling back to ``default``."""
    if value is None or isinstance(value, bool):
        return default
    try:
        result = float(value)
    except (TypeError, ValueError, OverflowError):
        return default
    if not math.isfinite(result):
        return default
    return result


def _as_int(value: Any, default: int = 0) -> int:
    return int(_as_number(value, default))


def _as_text(value: Any) -> Optional[str]:
    return value if isinstance(value, str) and value else None


def game_timestamp(date: Any, time: Optional[str] = None) -> datetime.datetime:
    """Return a game's UTC start as a naive datetime for ordering.

    ``date`` may be a ``YYYY-MM-DD`` string, a date, or a datetime (whose own
    time wins over ``time``). A missing time means midnight; an unreadable
    date sorts first.
    """
    if isinstance(date, datetime.datetime):
        return date.replace(tzinfo=None)
    if isinstance(date, datetime.date):
        base = datetime.datetime.combine(date, datetime.time())
    elif isinstance(date, str) and date:
        try:
            base = datetime.datetime.fromisoformat(date[:10])
        except ValueError:
            return datetime.datetime.min
    else:
        return datetime.datetime.min

    if isinstance(time, str) and time:
        try:
            hour, minute = (int(part) for part in time.split(":")[:2])
            base = base.replace(hour=hour, minute=minute)
        except ValueError:
            pass
    return base


def _find_best_hand_side_bet(side_bets: Any) -> Optional[dict[str, Any]]:
    """Return the best hand entry from a ``sideBets`` list, if any."""
    if not isinstance(side_bets, list):
        return None
    for side_bet in side_bets:
        if not isinstance(side_bet, dict):
            continue
        name = side_bet.get("name") or ""
        if (
            BEST_HAND_SIDE_BET_NAME in name.lower()
            or side_bet.get("sideBetId") == BEST_HAND_SIDE_BET_ID
        ):
            return side_bet
    return None


@dataclass
class PlayerResult:
    """One player's outcome in a single game."""

    user_id: str
    position: int = 0
    winnings: float = 0.0
    rebuys: int = 0
    best_hand_participant: bool = False
    best_hand_winner: bool = False
    rsvp_status: Optional[str] = None

    @classmethod
    def from_dict(cls, data: PlayerResultDocument | dict[str, Any]) -> PlayerResult:
        """Build a result from its Firestore representation.

        The legacy ``bestHandParticipant``/``bestHandWinner`` flags take
        precedence; otherwise the best hand entry of ``sideBets`` is used.
        """
        participant = winner = False
        if "bestHandParticipant" in data or "bestHandWinner" in data:
            participant = bool(data.get("bestHandParticipant"))
            winner = bool(data.get("bestHandWinner"))
        else:
            side_bet = _find_best_hand_side_bet(data.get("sideBets"))
            if side_bet:
                participant = bool(side_bet.get("participated"))
                winner = bool(side_bet.get("won"))

        return cls(
            user_id=str(data.get("userId") or ""),
            position=_as_int(data.get("position")),
            winnings=_as_number(data.get("winnings")),
            rebuys=_as_int(data.get("rebuys")),
            best_hand_participant=participant,
            best_hand_winner=winner,
            rsvp_status=data.get("rsvpStatus"),
        )


@dataclass
class GameRecord:
    """A scheduled or completed game with its per-player results."""

    id: str
    group_id: Optional[str] = None
    date: Any = None
    time: Optional[str] = None
    status: str = GAME_STATUS_COMPLETED
    buyin: float = DEFAULT_BUYIN
    game_type: str = GAME_TYPE_TOURNAMENT
    results: list[PlayerResult] = field(default_factory=list)

    @property
    def is_completed(self) -> bool:
        return self.status == GAME_STATUS_COMPLETED

    @property
    def is_cash(self) -> bool:
        return self.game_type == GAME_TYPE_CASH

    def played_at(self) -> datetime.datetime:
        return game_timestamp(self.date, self.time)

    @classmethod
    def from_dict(
        cls,
        data: GameDocument | dict[str, Any],
        game_id: Optional[str] = None,
        default_buyin: float = DEFAULT_BUYIN,
    ) -> GameRecord:
        """Build a game from its Firestore representation.

        Documents written before games had a status are treated as completed.
        A zero or missing buy-in falls back to ``default_buyin``.
        """
        results = data.get("results")
        if not isinstance(results, list):
            results = []
        return cls(
            id=game_id or str(data.get("id") or ""),
            group_id=data.get("groupId"),
            date=data.get("date"),
            time=_as_text(data.get("time")),
            status=data.get("status") or GAME_STATUS_COMPLETED,
            buyin=_as_number(data.get("buyin")) or default_buyin,
            game_type=data.get("gameType") or GAME_TYPE_TOURNAMENT,
            results=[
                PlayerResult.from_dict(result)
                for result in results
                if isinstance(result, dict)
            ],
        )


@dataclass(frozen=True)
class GameParticipation:
    """A player's outcome in one game, kept only while accumulating."""

    played_at: datetime.datetime
    position: int
    total_players: int
    is_win: bool
    counts_position: bool = True


@dataclass
class PlayerSeasonStats:
    """Accumulated and derived statistics for one player."""

    user_id: str
    games: int = 0
    points: float = 0.0
    winnings: float = 0.0
    total_buyins: float = 0.0
    wins: int = 0
    rebuys: int = 0
    best_hand_win_count: int = 0
    best_hand_participation_count: int = 0
    best_hand_winnings: float = 0.0
    best_hand_costs: float = 0.0
    win_rate: float = 0.0
    avg_position: float = 0.0
    net_winnings: float = 0.0
    current_streak: int = 0
    streak_type: Optional[str] = None


@dataclass
class StandingsEntry(PlayerSeasonStats):
    """A row of the standings table as handed to the display layer."""

    rank: int = 0
    player: str = ""
    is_placeholder: bool = False

    @classmethod
    def from_stats(cls, stats: PlayerSeasonStats) -> StandingsEntry:
        if isinstance(stats, StandingsEntry):
            return stats
        return cls(**asdict(stats))

    @classmethod
    def field_names(cls) -> set[str]:
        return {f.name for f in fields(cls)}

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)
