"""JSON snapshot persistence for reviews and tracked applications."""

from __future__ import annotations

from .apps import JsonAppRepository
from .documents import KeyedLock, SnapshotDocument
from .reviews import JsonReviewRepository, ensure_safe_app_id

__all__ = [
    "JsonAppRepository",
    "JsonReviewRepository",
    "KeyedLock",
    "SnapshotDocument",
    "ensure_safe_app_id",
]
