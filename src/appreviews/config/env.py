"""Environment variable loaders for configuration."""

from __future__ import annotations

import os

from .errors import ConfigurationError


def optional_env_var(name: str, default: str) -> str:
    """Return an environment variable, falling back to ``default`` when unset or blank."""

    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    return value.strip()


def optional_env_number[TNumber: (int, float)](
    name: str,
    default: TNumber,
    *,
    parse: type[TNumber],
    minimum: TNumber | None = None,
) -> TNumber:
    """Parse a numeric environment variable, raising ``ConfigurationError`` on bad input."""

    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = parse(raw.strip())
    except ValueError as exc:
        raise ConfigurationError(f"Invalid value for {name}: {raw!r}") from exc
    if minimum is not None and value < minimum:
        raise ConfigurationError(f"{name} must be at least {minimum}, got {value}")
    return value
