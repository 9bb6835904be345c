from __future__ import annotations

import json
import stat
from concurrent.futures import ThreadPoolExecutor
from datetime import timedelta
from typing import TYPE_CHECKING

import pytest

from appreviews.adapters.json_store import JsonAppRepository, JsonReviewRepository, KeyedLock
from appreviews.domain.errors import DomainValidationError, PersistenceError
from appreviews.domain.model import TrackedApp
from tests.helpers.reviews import NOW, make_review

if TYPE_CHECKING:
    from appreviews.config.storage import StorageConfig

APP_ID = "595068606"
SINCE = NOW - timedelta(hours=48)


def test_find_since_on_missing_document_is_empty(storage: StorageConfig) -> None:
    repository = JsonReviewRepository(storage)

    assert repository.find_since(APP_ID, SINCE) == []


def test_merge_writes_pretty_printed_snapshot(storage: StorageConfig) -> None:
    repository = JsonReviewRepository(storage)
    review = make_review("r1", app_id=APP_ID)

    repository.merge(review)

    path = storage.reviews_path(APP_ID)
    text = path.read_text()
    assert text.startswith("[\n  {")
    [record] = json.loads(text)
    assert record == {
        "id": "r1",
        "app_id": APP_ID,
        "author": "reviewer",
        "content": "Works well",
        "score": 4,
        "submitted_at": "2025-03-10T11:00:00Z",
        "retrieved_at": "2025-03-10T12:00:00Z",
    }
    assert repository.find_since(APP_ID, SINCE) == [review]


def test_merge_is_idempotent(storage: StorageConfig) -> None:
    repository = JsonReviewRepository(storage)
    reviews = (make_review("r1"), make_review("r2", age=timedelta(hours=2)))

    repository.merge(*reviews)
    first = storage.reviews_path(APP_ID).read_bytes()
    repository.merge(*reviews)

    assert storage.reviews_path(APP_ID).read_bytes() == first
    assert len(repository.find_since(APP_ID, SINCE)) == 2


def test_merge_replaces_review_with_same_id(storage: StorageConfig) -> None:
    repository = JsonReviewRepository(storage)
    repository.merge(make_review("r1", score=3), make_review("r2", score=1))

    repository.merge(make_review("r1", score=5, content="Fixed now"))

    stored = {review.id: review for review in repository.find_since(APP_ID, SINCE)}
    assert set(stored) == {"r1", "r2"}
    assert stored["r1"].score == 5
    assert stored["r1"].content == "Fixed now"
    assert stored["r2"].score == 1


def test_merge_orders_records_by_submission_then_id(storage: StorageConfig) -> None:
    repository = JsonReviewRepository(storage)

    repository.merge(
        make_review("b", age=timedelta(hours=1)),
        make_review("c", age=timedelta(hours=3)),
        make_review("a", age=timedelta(hours=1)),
    )

    records = json.loads(storage.reviews_path(APP_ID).read_text())
    assert [record["id"] for record in records] == ["c", "a", "b"]


def test_merge_without_reviews_writes_nothing(storage: StorageConfig) -> None:
    JsonReviewRepository(storage).merge()

    assert not storage.reviews_path(APP_ID, ensure=False).exists()


def test_merge_rejects_mixed_app_batches(storage: StorageConfig) -> None:
    repository = JsonReviewRepository(storage)

    with pytest.raises(DomainValidationError, match="single app"):
        repository.merge(make_review("r1", app_id="1"), make_review("r2", app_id="2"))

    assert not storage.reviews_path("1", ensure=False).exists()


def test_find_since_bound_is_inclusive(storage: StorageConfig) -> None:
    repository = JsonReviewRepository(storage)
    repository.merge(
        make_review("edge", submitted_at=SINCE),
        make_review("stale", submitted_at=SINCE - timedelta(seconds=1)),
    )

    assert [review.id for review in repository.find_since(APP_ID, SINCE)] == ["edge"]


def test_corrupt_document_is_never_overwritten(storage: StorageConfig) -> None:
    repository = JsonReviewRepository(storage)
    path = storage.reviews_path(APP_ID)
    path.write_text("{not json")

    with pytest.raises(PersistenceError):
        repository.merge(make_review("r1"))
    with pytest.raises(PersistenceError):
        repository.find_since(APP_ID, SINCE)

    assert path.read_text() == "{not json"


def test_merge_leaves_no_temporary_files(storage: StorageConfig) -> None:
    repository = JsonReviewRepository(storage)

    repository.merge(make_review("r1"))
    repository.merge(make_review("r2"))

    assert [path.name for path in storage.ensure_data_dir().iterdir()] == [
        f"{APP_ID}_reviews.json"
    ]


def test_snapshots_are_world_readable(storage: StorageConfig) -> None:
    JsonReviewRepository(storage).merge(make_review("r1"))
    JsonAppRepository(storage).register(TrackedApp(APP_ID))

    for path in (storage.reviews_path(APP_ID), storage.apps_path()):
        assert stat.S_IMODE(path.stat().st_mode) == 0o644


@pytest.mark.parametrize("app_id", ["", "..", "a/b", "a\\b"])
def test_unsafe_app_ids_are_rejected(storage: StorageConfig, app_id: str) -> None:
    repository = JsonReviewRepository(storage)

    with pytest.raises(DomainValidationError):
        repository.find_since(app_id, SINCE)


def test_concurrent_merges_for_one_app_do_not_lose_updates(storage: StorageConfig) -> None:
    locks = KeyedLock()
    writers = [JsonReviewRepository(storage, locks=locks) for _ in range(4)]

    def merge(index: int) -> None:
        writers[index % len(writers)].merge(make_review(f"r{index:02d}"))

    with ThreadPoolExecutor(max_workers=8) as pool:
        list(pool.map(merge, range(24)))

    stored = JsonReviewRepository(storage).find_since(APP_ID, SINCE)
    assert len(stored) == 24


def test_concurrent_merges_for_different_apps_stay_partitioned(storage: StorageConfig) -> None:
    repository = JsonReviewRepository(storage)
    app_ids = [str(1000 + index) for index in range(6)]

    def merge(app_id: str) -> None:
        repository.merge(*(make_review(f"r{n}", app_id=app_id) for n in range(5)))

    with ThreadPoolExecutor(max_workers=6) as pool:
        list(pool.map(merge, app_ids))

    for app_id in app_ids:
        stored = repository.find_since(app_id, SINCE)
        assert {review.app_id for review in stored} == {app_id}
        assert len(stored) == 5


def test_keyed_lock_reuses_lock_per_key() -> None:
    locks = KeyedLock()

    assert locks.lock_for("a") is locks.lock_for("a")
    assert locks.lock_for("a") is not locks.lock_for("b")


def test_registry_upserts_and_lists_sorted(storage: StorageConfig) -> None:
    registry = JsonAppRepository(storage)

    registry.register(TrackedApp("2"))
    registry.register(TrackedApp("1"))
    registry.register(TrackedApp("2"))

    assert registry.list_all() == [TrackedApp("1"), TrackedApp("2")]
    assert json.loads(storage.apps_path().read_text()) == [{"id": "1"}, {"id": "2"}]


def test_registry_missing_document_is_empty(storage: StorageConfig) -> None:
    assert JsonAppRepository(storage).list_all() == []


def test_registry_skips_blank_ids(storage: StorageConfig, caplog: pytest.LogCaptureFixture) -> None:
    storage.apps_path().write_text(json.dumps([{"id": ""}, {"id": "7"}]))

    assert JsonAppRepository(storage).list_all() == [TrackedApp("7")]
    assert "invalid id" in caplog.text


def test_registry_corrupt_document_raises(storage: StorageConfig) -> None:
    path = storage.apps_path()
    path.write_text('{"apps": ')
    registry = JsonAppRepository(storage)

    with pytest.raises(PersistenceError):
        registry.list_all()
    with pytest.raises(PersistenceError):
        registry.register(TrackedApp("1"))

    assert path.read_text() == '{"apps": '


def test_registry_rejects_unsafe_ids(storage: StorageConfig) -> None:
    with pytest.raises(DomainValidationError):
        JsonAppRepository(storage).register(TrackedApp("../etc"))
