"""Domain port definitions for adapters."""

from __future__ import annotations

from .persistence import AppRepository, ReviewRepository

__all__ = ["AppRepository", "ReviewRepository"]
