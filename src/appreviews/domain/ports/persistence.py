"""Ports for reading and persisting reviews and tracked applications."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from datetime import datetime

    from appreviews.domain.model import Review, TrackedApp


@runtime_checkable
class ReviewRepository(Protocol):
    """Capability shared by the local store and the remote (read-only) source.

    Read-only implementations still provide ``merge`` and raise
    ``ReadOnlyViolation`` from it, so callers can treat both uniformly.
    """

    def find_since(self, app_id: str, since: datetime) -> list[Review]: ...

    def merge(self, *reviews: Review) -> None: ...


@runtime_checkable
class AppRepository(Protocol):
    """Durable registry of tracked applications."""

    def list_all(self) -> list[TrackedApp]: ...

    def register(self, app: TrackedApp) -> None: ...


__all__ = ["AppRepository", "ReviewRepository"]
