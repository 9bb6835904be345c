"""HTTP client for the App Store customer-review RSS feed."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

import httpx
from pydantic import ValidationError

from appreviews.adapters.http_resilience import ResilientClient
from appreviews.config.appstore import AppStoreConfig
from appreviews.domain.errors import FetchError, ReadOnlyViolation
from appreviews.domain.time_windows import Clock, utcnow

from .schema import FeedResponse
from .translator import parse_reviews

if TYPE_CHECKING:
    from collections.abc import Callable
    from datetime import datetime

    from appreviews.config.http_resilience import ResilienceConfig
    from appreviews.domain.model import Review

log = getLogger(__name__)


def _default_client_factory(config: ResilienceConfig) -> ResilientClient:
    return ResilientClient(config)


@dataclass(slots=True)
class AppStoreReviewFetcher:
    """Read-only review source backed by the first page of the App Store feed.

    Each call issues exactly one bounded GET; failures raise ``FetchError`` and
    are never retried here.
    """

    config: AppStoreConfig = field(default_factory=AppStoreConfig)
    client_factory: Callable[[ResilienceConfig], ResilientClient] = field(
        default=_default_client_factory
    )
    clock: Clock = utcnow

    def find_since(self, app_id: str, since: datetime) -> list[Review]:
        return asyncio.run(self.find_since_async(app_id, since))

    def merge(self, *reviews: Review) -> None:
        raise ReadOnlyViolation(
            f"App Store review feed is read-only; refusing to save {len(reviews)} reviews"
        )

    async def find_since_async(self, app_id: str, since: datetime) -> list[Review]:
        response = await self._perform_request(app_id)
        if not response.feed.entry:
            log.debug("App Store feed for app %s has no entries", app_id)
            return []

        reviews = parse_reviews(
            response.feed.entry,
            app_id=app_id,
            since=since,
            clock=self.clock,
            id_prefix=self.config.review_id_prefix,
        )
        log.debug(
            "Fetched %s entries for app %s, kept %s since %s",
            len(response.feed.entry),
            app_id,
            len(reviews),
            since.isoformat(),
        )
        return reviews

    async def _perform_request(self, app_id: str) -> FeedResponse:
        path = self.config.feed_path(app_id)
        try:
            async with self.client_factory(self.config.resilience) as client:
                response = await client.get(path)
        except httpx.HTTPError as exc:
            raise FetchError(
                f"Failed to fetch App Store feed for app {app_id}: {exc}", app_id=app_id
            ) from exc

        if response.status_code != httpx.codes.OK:
            raise FetchError(
                f"App Store feed for app {app_id} returned status {response.status_code}",
                app_id=app_id,
                status_code=response.status_code,
            )

        try:
            return FeedResponse.model_validate_json(response.content)
        except ValidationError as exc:
            raise FetchError(
                f"Unexpected App Store feed payload for app {app_id}", app_id=app_id
            ) from exc


if TYPE_CHECKING:
    from appreviews.domain.ports import ReviewRepository

    _fetcher_check: ReviewRepository = AppStoreReviewFetcher()
