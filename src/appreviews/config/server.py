"""HTTP server configuration values."""

from __future__ import annotations

from dataclasses import dataclass, field

from .env import optional_env_number, optional_env_var

DEFAULT_HOST = "0.0.0.0"  # noqa: S104
DEFAULT_PORT = 8080


@dataclass(frozen=True, slots=True)
class ServerConfig:
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    cors_origins: tuple[str, ...] = field(default_factory=lambda: ("*",))


def get_server_config() -> ServerConfig:
    origins = optional_env_var("APPREVIEWS_CORS_ORIGINS", "*")
    return ServerConfig(
        host=optional_env_var("APPREVIEWS_HOST", DEFAULT_HOST),
        port=optional_env_number("APPREVIEWS_PORT", DEFAULT_PORT, parse=int, minimum=1),
        cors_origins=tuple(origin.strip() for origin in origins.split(",") if origin.strip()),
    )
