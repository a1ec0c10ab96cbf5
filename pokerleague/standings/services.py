"""Service layer for fetching league data and computing standings."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Optional, cast

from google.cloud.firestore import FieldFilter

from pokerleague.core.constants import (
    DEFAULT_BUYIN,
    DEFAULT_SORT_DIRECTION,
    DEFAULT_SORT_FIELD,
    GAMES_COLLECTION,
    GROUPS_COLLECTION,
    SIDE_BET_COST,
    TIE_SPLIT_POSITION,
    UNKNOWN_GROUP_NAME,
    USERS_COLLECTION,
)
from pokerleague.errors import NotFoundError

from .leaderboard import calculate_standings
from .models import GameRecord, StandingsEntry
from .summary import collect_user_games, summarize_user_games

if TYPE_CHECKING:
    from google.cloud.firestore_v1.base_document import DocumentSnapshot
    from google.cloud.firestore_v1.client import Client


class StandingsService:
    """Service class for standings and player statistics."""

    @staticmethod
    def get_group(db: Client, group_id: str) -> dict[str, Any]:
        """Fetch a group by its ID, raising ``NotFoundError`` if missing."""
        group_doc = cast(
            "DocumentSnapshot",
            db.collection(GROUPS_COLLECTION).document(group_id).get(),
        )
        if not group_doc.exists:
            raise NotFoundError("Group not found.")
        data = group_doc.to_dict() or {}
        data["id"] = group_id
        return data

    @staticmethod
    def get_group_games(
        db: Client, group_id: str, default_buyin: float = DEFAULT_BUYIN
    ) -> list[GameRecord]:
        """Fetch every game recorded for a group, scheduled ones included."""
        query = db.collection(GAMES_COLLECTION).where(
            filter=FieldFilter("groupId", "==", group_id)
        )
        return [
            GameRecord.from_dict(doc.to_dict() or {}, doc.id, default_buyin)
            for doc in query.stream()
        ]

    @staticmethod
    def get_group_roster(
        db: Client, group_data: dict[str, Any]
    ) -> dict[str, dict[str, Any]]:
        """Map user IDs to user data for every member of a group.

        Members may be stored as user references under ``members`` or as plain
        IDs under ``member_ids``.
        """
        snapshots = []
        seen: set[str] = set()
        for member in group_data.get("members") or []:
            if isinstance(member, str):
                member = db.collection(USERS_COLLECTION).document(member)
            if member.id not in seen:
                seen.add(member.id)
                snapshots.append(member.get())
        for user_id in group_data.get("member_ids") or []:
            if user_id not in seen:
                seen.add(user_id)
                snapshots.append(
                    db.collection(USERS_COLLECTION).document(user_id).get()
                )

        roster = {}
        for snapshot in snapshots:
            if not snapshot.exists:
                continue
            data = snapshot.to_dict()
            if data is None:
                continue
            data["id"] = snapshot.id
            roster[snapshot.id] = data
        return roster

    @staticmethod
    def get_group_standings(  # noqa: PLR0913
        db: Client,
        group_id: str,
        sort_field: str = DEFAULT_SORT_FIELD,
        sort_direction: str = DEFAULT_SORT_DIRECTION,
        game_type: Optional[str] = None,
        tie_split: str = TIE_SPLIT_POSITION,
        side_bet_cost: float = SIDE_BET_COST,
        default_buyin: float = DEFAULT_BUYIN,
    ) -> list[StandingsEntry]:
        """Calculate the standings table for a group."""
        group_data = StandingsService.get_group(db, group_id)
        games = StandingsService.get_group_games(db, group_id, default_buyin)
        roster = StandingsService.get_group_roster(db, group_data)
        return calculate_standings(
            games,
            roster,
            sort_field=sort_field,
            sort_direction=sort_direction,
            game_type=game_type,
            tie_split=tie_split,
            side_bet_cost=side_bet_cost,
        )

    @staticmethod
    def get_user_groups(db: Client, user_id: str) -> list[dict[str, Any]]:
        """Fetch all groups the user is a member of."""
        query = db.collection(GROUPS_COLLECTION).where(
            filter=FieldFilter("member_ids", "array_contains", user_id)
        )
        groups = []
        for doc in query.stream():
            data = doc.to_dict() or {}
            data["id"] = doc.id
            groups.append(data)
        return groups

    @staticmethod
    def get_user_summary(
        db: Client,
        user_id: str,
        tie_split: str = TIE_SPLIT_POSITION,
        side_bet_cost: float = SIDE_BET_COST,
        default_buyin: float = DEFAULT_BUYIN,
    ) -> dict[str, Any]:
        """Combine a user's results across all of their groups."""
        groups = StandingsService.get_user_groups(db, user_id)
        group_names = {
            group["id"]: group.get("name") or UNKNOWN_GROUP_NAME for group in groups
        }

        games: list[GameRecord] = []
        for group in groups:
            games.extend(
                StandingsService.get_group_games(db, group["id"], default_buyin)
            )

        user_games = collect_user_games(
            games,
            user_id,
            group_names,
            tie_split=tie_split,
            side_bet_cost=side_bet_cost,
        )
        summary = summarize_user_games(user_games, side_bet_cost)
        return {
            "user_id": user_id,
            "summary": summary.to_dict(),
            "games": [game.to_dict() for game in user_games],
        }
