"""Application services for registering apps and reading their recent reviews."""

from __future__ import annotations

from collections.abc import Callable
from logging import getLogger
from typing import TYPE_CHECKING

from appreviews.domain.model import TrackedApp
from appreviews.domain.time_windows import Clock, recent_since, utcnow

if TYPE_CHECKING:
    from appreviews.domain.model import Review
    from appreviews.domain.ports import AppRepository, ReviewRepository

log = getLogger(__name__)

Reconcile = Callable[[], object]


def register_app(
    app_id: str,
    *,
    apps: AppRepository,
    reconcile: Reconcile | None = None,
) -> TrackedApp:
    """Persist a tracked application and trigger a best-effort reconciliation.

    Validation and registry failures propagate. A failing reconciliation does not:
    the application is registered either way and the scheduler will pick it up.
    """

    app = TrackedApp(app_id)
    apps.register(app)
    log.info("Registered app %s", app.id)

    if reconcile is not None:
        try:
            reconcile()
        except Exception:  # noqa: BLE001
            log.exception("Reconciliation after registering app %s failed", app.id)

    return app


def find_recent_reviews(
    app_id: str,
    *,
    reviews: ReviewRepository,
    clock: Clock = utcnow,
) -> list[Review]:
    """Return the locally stored reviews of ``app_id`` inside the recency window."""

    return list(reviews.find_since(app_id, recent_since(clock=clock)))


__all__ = ["find_recent_reviews", "register_app"]
