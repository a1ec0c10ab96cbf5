"""Routes for the standings blueprint."""

from firebase_admin import firestore
from flask import current_app, jsonify, request

from pokerleague.core.constants import (
    DEFAULT_SORT_DIRECTION,
    DEFAULT_SORT_FIELD,
    GAME_TYPES,
    SORT_DIRECTIONS,
)
from pokerleague.errors import ValidationError

from . import bp
from .models import StandingsEntry
from .services import StandingsService
from .validation import validate_game_data


def _scoring_options():
    """Read the league scoring settings from the app config."""
    return {
        "tie_split": current_app.config["TIE_SPLIT_MODE"],
        "side_bet_cost": current_app.config["SIDE_BET_COST"],
        "default_buyin": current_app.config["DEFAULT_BUYIN"],
    }


def _parse_sort_args():
    sort_field = request.args.get("sort", DEFAULT_SORT_FIELD)
    sort_direction = request.args.get("direction", DEFAULT_SORT_DIRECTION).lower()
    game_type = request.args.get("game_type") or None

    if sort_field not in StandingsEntry.field_names():
        raise ValidationError(f"Cannot sort standings by '{sort_field}'.")
    if sort_direction not in SORT_DIRECTIONS:
        raise ValidationError(f"Invalid sort direction '{sort_direction}'.")
    if game_type is not None and game_type not in GAME_TYPES:
        raise ValidationError(f"Unknown game type '{game_type}'.")
    return sort_field, sort_direction, game_type


@bp.route("/groups/<string:group_id>/standings", methods=["GET"])
def group_standings(group_id):
    """Return the ranked standings table for a group."""
    sort_field, sort_direction, game_type = _parse_sort_args()
    db = firestore.client()
    standings = StandingsService.get_group_standings(
        db,
        group_id,
        sort_field=sort_field,
        sort_direction=sort_direction,
        game_type=game_type,
        **_scoring_options(),
    )
    current_app.logger.info(
        f"Computed standings for group {group_id} ({len(standings)} players)"
    )
    return jsonify(
        {
            "group_id": group_id,
            "sort": {"field": sort_field, "direction": sort_direction},
            "game_type": game_type,
            "standings": [entry.to_dict() for entry in standings],
        }
    )


@bp.route("/users/<string:user_id>/summary", methods=["GET"])
def user_summary(user_id):
    """Return a user's combined results across all of their groups."""
    db = firestore.client()
    summary = StandingsService.get_user_summary(db, user_id, **_scoring_options())
    return jsonify(summary)


@bp.route("/games/validate", methods=["POST"])
def validate_game():
    """Check a game submission without recording it."""
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object.")
    errors = validate_game_data(data)
    return jsonify({"valid": not errors, "errors": errors})
