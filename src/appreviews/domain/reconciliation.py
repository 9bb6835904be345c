"""Reconcile remote reviews into local storage for every tracked application."""

from __future__ import annotations

from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

from appreviews.domain.time_windows import Clock, recent_since, utcnow

if TYPE_CHECKING:
    from appreviews.domain.ports import AppRepository, ReviewRepository

log = getLogger(__name__)


@dataclass(slots=True)
class ReconcileResult:
    """Outcome of one reconciliation sweep."""

    apps: int = 0
    fetched: int = 0
    stored: int = 0
    failures: dict[str, str] = field(default_factory=dict[str, str])

    @property
    def succeeded(self) -> int:
        return self.apps - len(self.failures)


@dataclass(slots=True)
class ReviewReconciler:
    """Pull recent reviews from ``remote`` and merge them into ``local`` per app.

    Only a failure to list the tracked applications aborts the sweep. Fetch and
    merge failures are logged per application and the sweep moves on; the next
    scheduled run retries them naturally.
    """

    apps: AppRepository
    remote: ReviewRepository
    local: ReviewRepository
    clock: Clock = utcnow

    def __call__(self) -> ReconcileResult:
        return self.reconcile()

    def reconcile(self) -> ReconcileResult:
        tracked = self.apps.list_all()
        result = ReconcileResult(apps=len(tracked))

        for app in tracked:
            since = recent_since(clock=self.clock)
            try:
                reviews = self.remote.find_since(app.id, since)
            except Exception as exc:  # noqa: BLE001
                log.exception("Error fetching reviews for app %s", app.id)
                result.failures[app.id] = f"fetch: {exc}"
                continue

            result.fetched += len(reviews)
            if not reviews:
                continue

            try:
                self.local.merge(*reviews)
            except Exception as exc:  # noqa: BLE001
                log.exception("Error saving %s reviews for app %s", len(reviews), app.id)
                result.failures[app.id] = f"merge: {exc}"
                continue

            result.stored += len(reviews)

        log.info(
            "Finished review reconciliation: apps=%s, fetched=%s, stored=%s, failed=%s",
            result.apps,
            result.fetched,
            result.stored,
            len(result.failures),
        )
        return result


__all__ = ["ReconcileResult", "ReviewReconciler"]
