"""Data storage configuration helpers."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Final

DEFAULT_DATA_DIR: Final[str] = "data"
APPS_FILENAME: Final[str] = "apps.json"
REVIEWS_FILENAME_SUFFIX: Final[str] = "_reviews.json"


@dataclass(frozen=True, slots=True)
class StorageConfig:
    data_dir: Path
    apps_filename: str = APPS_FILENAME
    reviews_filename_suffix: str = REVIEWS_FILENAME_SUFFIX

    def resolve_data_dir(self) -> Path:
        return self.data_dir.expanduser().resolve()

    def ensure_data_dir(self) -> Path:
        data_dir = self.resolve_data_dir()
        data_dir.mkdir(parents=True, exist_ok=True)
        return data_dir

    def apps_path(self, *, ensure: bool = True) -> Path:
        base = self.ensure_data_dir() if ensure else self.resolve_data_dir()
        return base / self.apps_filename

    def reviews_path(self, app_id: str, *, ensure: bool = True) -> Path:
        base = self.ensure_data_dir() if ensure else self.resolve_data_dir()
        return base / f"{app_id}{self.reviews_filename_suffix}"


def get_storage_config() -> StorageConfig:
    env_dir = os.getenv("APPREVIEWS_DATA_DIR")
    data_dir = Path(env_dir) if env_dir and env_dir.strip() else Path(DEFAULT_DATA_DIR)
    return StorageConfig(data_dir=data_dir)
