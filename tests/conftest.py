from __future__ import annotations

import json
from pathlib import Path

import pytest

from appreviews.config.storage import StorageConfig

DATA_DIR = Path(__file__).resolve().parent / "data"


@pytest.fixture(scope="session")
def feed_payload() -> dict[str, object]:
    path = DATA_DIR / "appstore_customer_reviews.json"
    with path.open() as handle:
        return json.load(handle)


@pytest.fixture
def storage(tmp_path: Path) -> StorageConfig:
    return StorageConfig(data_dir=tmp_path / "data")


@pytest.fixture(autouse=True)
def _isolate_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in (
        "APPREVIEWS_DATA_DIR",
        "APPREVIEWS_SYNC_INTERVAL_SECONDS",
        "APPREVIEWS_HOST",
        "APPREVIEWS_PORT",
        "APPREVIEWS_CORS_ORIGINS",
        "APPSTORE_COUNTRY",
        "APPSTORE_TIMEOUT_SECONDS",
        "APPSTORE_BASE_URL",
    ):
        monkeypatch.delenv(name, raising=False)
