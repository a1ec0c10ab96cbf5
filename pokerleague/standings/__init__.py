"""The standings blueprint."""

from flask import Blueprint

bp = Blueprint("standings", __name__)

from . import routes  # noqa: E402

__all__ = ["routes"]
