"""Core module for the pokerleague application."""

from .types import FirestoreDocument

__all__ = ["FirestoreDocument"]
