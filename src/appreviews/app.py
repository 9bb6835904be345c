"""Application orchestration entry points."""

from __future__ import annotations

from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING

from appreviews.adapters.appstore import AppStoreReviewFetcher
from appreviews.adapters.json_store import JsonAppRepository, JsonReviewRepository, KeyedLock
from appreviews.config import get_appstore_config, get_storage_config, get_sync_config
from appreviews.domain.data_integration import find_recent_reviews, register_app
from appreviews.domain.reconciliation import ReconcileResult, ReviewReconciler
from appreviews.domain.time_windows import Clock, utcnow
from appreviews.scheduler import ReconcileScheduler

if TYPE_CHECKING:
    from appreviews.config import AppStoreConfig, StorageConfig, SyncConfig
    from appreviews.domain.model import Review, TrackedApp
    from appreviews.domain.ports import AppRepository, ReviewRepository


log = getLogger(__name__)


@dataclass(slots=True)
class ReviewServices:
    """Wired collaborators shared by the CLI and the HTTP API."""

    apps: AppRepository
    local_reviews: ReviewRepository
    remote_reviews: ReviewRepository
    reconciler: ReviewReconciler
    scheduler: ReconcileScheduler
    clock: Clock = utcnow

    def reconcile(self) -> ReconcileResult:
        return self.reconciler.reconcile()

    def register_app(self, app_id: str) -> TrackedApp:
        return register_app(app_id, apps=self.apps, reconcile=self.reconcile)

    def recent_reviews(self, app_id: str) -> list[Review]:
        return find_recent_reviews(app_id, reviews=self.local_reviews, clock=self.clock)


def build_services(
    *,
    storage: StorageConfig | None = None,
    appstore: AppStoreConfig | None = None,
    sync: SyncConfig | None = None,
    apps: AppRepository | None = None,
    local_reviews: ReviewRepository | None = None,
    remote_reviews: ReviewRepository | None = None,
    clock: Clock = utcnow,
) -> ReviewServices:
    """Assemble the default adapters, honouring any explicitly supplied ones."""

    storage_config = storage or get_storage_config()
    sync_config = sync or get_sync_config()
    if apps is None or local_reviews is None:
        data_dir = storage_config.ensure_data_dir()
        log.info("Using data directory %s", data_dir)

    locks = KeyedLock()
    effective_apps = apps or JsonAppRepository(storage_config, locks=locks)
    effective_local = local_reviews or JsonReviewRepository(storage_config, locks=locks)
    effective_remote = remote_reviews or AppStoreReviewFetcher(
        config=appstore or get_appstore_config(),
        clock=clock,
    )

    reconciler = ReviewReconciler(
        apps=effective_apps,
        remote=effective_remote,
        local=effective_local,
        clock=clock,
    )
    scheduler = ReconcileScheduler(
        reconciler.reconcile,
        interval_seconds=sync_config.interval_seconds,
    )

    return ReviewServices(
        apps=effective_apps,
        local_reviews=effective_local,
        remote_reviews=effective_remote,
        reconciler=reconciler,
        scheduler=scheduler,
        clock=clock,
    )


def sync_reviews(services: ReviewServices | None = None) -> ReconcileResult:
    """Run one reconciliation sweep using the configured adapters."""

    effective = services or build_services()
    log.info("Starting review reconciliation")
    return effective.reconcile()
