"""File-backed registry of tracked applications."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from appreviews.domain.errors import DomainValidationError
from appreviews.domain.model import TrackedApp

from .documents import KeyedLock, SnapshotDocument
from .records import APP_RECORDS, AppRecord
from .reviews import ensure_safe_app_id

if TYPE_CHECKING:
    from appreviews.config.storage import StorageConfig

log = getLogger(__name__)

_REGISTRY_KEY = "__apps__"


class JsonAppRepository:
    """Registry stored as a single ``apps.json`` snapshot, upserted by id."""

    def __init__(self, storage: StorageConfig, *, locks: KeyedLock | None = None) -> None:
        self._document = SnapshotDocument(storage.apps_path(ensure=False), APP_RECORDS)
        self._locks = locks or KeyedLock()

    def list_all(self) -> list[TrackedApp]:
        apps: list[TrackedApp] = []
        for record in self._document.load():
            try:
                apps.append(TrackedApp(record.id))
            except DomainValidationError:
                log.warning("Ignoring registry entry with invalid id %r", record.id)
        return apps

    def register(self, app: TrackedApp) -> None:
        ensure_safe_app_id(app.id)
        with self._locks.hold(_REGISTRY_KEY):
            by_id = {record.id: record for record in self._document.load()}
            by_id[app.id] = AppRecord.from_domain(app)
            self._document.save(sorted(by_id.values(), key=lambda record: record.id))
