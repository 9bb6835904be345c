"""File-backed review store: one snapshot document per tracked application."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from appreviews.domain.errors import DomainValidationError

from .documents import KeyedLock, SnapshotDocument
from .records import REVIEW_RECORDS, ReviewRecord

if TYPE_CHECKING:
    from datetime import datetime

    from appreviews.config.storage import StorageConfig
    from appreviews.domain.model import Review

log = getLogger(__name__)

_UNSAFE_ID_PARTS = ("/", "\\", "\x00")


def ensure_safe_app_id(app_id: str) -> str:
    """Reject identifiers that cannot be used as part of a file name."""

    if not app_id or not app_id.strip():
        raise DomainValidationError("app id is required")
    if app_id in {".", ".."} or any(part in app_id for part in _UNSAFE_ID_PARTS):
        raise DomainValidationError(f"app id {app_id!r} is not a valid storage key")
    return app_id


class JsonReviewRepository:
    """Local review store with upsert-by-id merges.

    Every ``merge`` rewrites the full per-application document while holding that
    application's lock, so concurrent merges for one app never lose updates.
    Data volume per application is bounded only by what fits in memory.
    """

    def __init__(self, storage: StorageConfig, *, locks: KeyedLock | None = None) -> None:
        self._storage = storage
        self._locks = locks or KeyedLock()

    def find_since(self, app_id: str, since: datetime) -> list[Review]:
        records = self._document(app_id).load()
        return [record.to_domain() for record in records if record.submitted_at >= since]

    def merge(self, *reviews: Review) -> None:
        if not reviews:
            return

        app_id = reviews[0].app_id
        if any(review.app_id != app_id for review in reviews):
            raise DomainValidationError("merge batches must contain reviews of a single app")

        document = self._document(app_id)
        with self._locks.hold(app_id):
            by_id: dict[str, ReviewRecord] = {record.id: record for record in document.load()}
            inserted = 0
            for review in reviews:
                if review.id not in by_id:
                    inserted += 1
                by_id[review.id] = ReviewRecord.from_domain(review)

            merged = sorted(by_id.values(), key=lambda record: (record.submitted_at, record.id))
            document.save(merged)

        log.debug(
            "Merged %s reviews for app %s (%s new, %s total)",
            len(reviews),
            app_id,
            inserted,
            len(merged),
        )

    def _document(self, app_id: str) -> SnapshotDocument[ReviewRecord]:
        path = self._storage.reviews_path(ensure_safe_app_id(app_id), ensure=False)
        return SnapshotDocument(path, REVIEW_RECORDS)
