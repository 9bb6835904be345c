"""Synchronization defaults for the reconciliation scheduler."""

from __future__ import annotations

from dataclasses import dataclass

from .env import optional_env_number

DEFAULT_SYNC_INTERVAL_SECONDS = 60.0


@dataclass(frozen=True, slots=True)
class SyncConfig:
    interval_seconds: float = DEFAULT_SYNC_INTERVAL_SECONDS


def get_sync_config() -> SyncConfig:
    return SyncConfig(
        interval_seconds=optional_env_number(
            "APPREVIEWS_SYNC_INTERVAL_SECONDS",
            DEFAULT_SYNC_INTERVAL_SECONDS,
            parse=float,
            minimum=1.0,
        )
    )
