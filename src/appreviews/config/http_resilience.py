"""Configuration types for bounded HTTP clients."""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

import httpx

if TYPE_CHECKING:
    from collections.abc import Mapping

ResponseHook = Callable[[httpx.Response], Awaitable[None] | None]


@dataclass(slots=True, frozen=True)
class ResilienceConfig:
    """Timeout, default headers and response hooks for one upstream.

    There is no retry policy: a failed request surfaces immediately and the next
    scheduled reconciliation fetches again.
    """

    name: str
    base_url: str | None = None
    timeout_seconds: float = 30.0
    response_hooks: tuple[ResponseHook, ...] = field(default_factory=tuple)
    default_headers: Mapping[str, str] | None = None
