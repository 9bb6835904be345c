"""Application configuration helpers."""

from __future__ import annotations

from .appstore import AppStoreConfig, get_appstore_config
from .errors import ConfigurationError
from .http_resilience import ResilienceConfig
from .logging import configure_logging
from .server import ServerConfig, get_server_config
from .storage import StorageConfig, get_storage_config
from .sync import SyncConfig, get_sync_config

__all__ = [
    "AppStoreConfig",
    "ConfigurationError",
    "ResilienceConfig",
    "ServerConfig",
    "StorageConfig",
    "SyncConfig",
    "configure_logging",
    "get_appstore_config",
    "get_server_config",
    "get_storage_config",
    "get_sync_config",
]
