"""Utilities for constraining fetches and reads to a trailing time window."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Protocol

from appreviews.domain.model.review import RECENT_REVIEW_WINDOW


class Clock(Protocol):
    def __call__(self) -> datetime: ...


def utcnow() -> datetime:
    return datetime.now(UTC)


@dataclass(frozen=True)
class TimeWindow:
    """A window of ``lookback`` ending at the clock's current instant."""

    lookback: timedelta

    def __post_init__(self) -> None:
        if self.lookback < timedelta(0):
            raise ValueError("Lookback duration must be non-negative")

    def resolve(self, *, clock: Clock = utcnow) -> tuple[datetime, datetime]:
        """Resolve the window into concrete UTC timestamps; naive clocks are taken as UTC."""

        anchor = clock()
        if anchor.tzinfo is None:
            anchor = anchor.replace(tzinfo=UTC)
        anchor = anchor.astimezone(UTC)
        return anchor - self.lookback, anchor


RECENT_WINDOW = TimeWindow(lookback=RECENT_REVIEW_WINDOW)


def recent_since(*, clock: Clock = utcnow) -> datetime:
    """Return the inclusive lower bound of the recency window, anchored at ``clock()``.

    The orchestrator and the read path both go through here so the fetched and
    the served windows cannot drift apart.
    """

    start, _ = RECENT_WINDOW.resolve(clock=clock)
    return start


__all__ = ["RECENT_WINDOW", "Clock", "TimeWindow", "recent_since", "utcnow"]
