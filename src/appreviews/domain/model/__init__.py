"""Domain model for tracked applications and their reviews."""

from __future__ import annotations

from .app import TrackedApp
from .review import RECENT_REVIEW_WINDOW, Review

__all__ = ["RECENT_REVIEW_WINDOW", "Review", "TrackedApp"]
