"""App Store customer-review feed configuration values."""

from __future__ import annotations

from dataclasses import dataclass, field
from urllib.parse import quote

from .env import optional_env_number, optional_env_var
from .http_resilience import ResilienceConfig

APPSTORE_BASE_URL = "https://itunes.apple.com"
APPSTORE_TIMEOUT_SECONDS = 30.0
DEFAULT_APPSTORE_COUNTRY = "us"
REVIEW_ID_PREFIX = "https://itunes.apple.com/us/reviews/"


def _default_resilience() -> ResilienceConfig:
    return ResilienceConfig(
        name="appstore",
        base_url=APPSTORE_BASE_URL,
        timeout_seconds=APPSTORE_TIMEOUT_SECONDS,
        default_headers={"Accept": "application/json"},
    )


@dataclass(frozen=True, slots=True)
class AppStoreConfig:
    """Holds the App Store feed location and HTTP limits."""

    country: str = DEFAULT_APPSTORE_COUNTRY
    review_id_prefix: str = REVIEW_ID_PREFIX
    resilience: ResilienceConfig = field(default_factory=_default_resilience)

    def feed_path(self, app_id: str) -> str:
        app_segment = quote(app_id, safe="")
        return (
            f"/{self.country}/rss/customerreviews/id={app_segment}"
            "/sortBy=mostRecent/page=1/json"
        )


def get_appstore_config() -> AppStoreConfig:
    timeout = optional_env_number(
        "APPSTORE_TIMEOUT_SECONDS",
        APPSTORE_TIMEOUT_SECONDS,
        parse=float,
        minimum=0.1,
    )
    resilience = _default_resilience()
    return AppStoreConfig(
        country=optional_env_var("APPSTORE_COUNTRY", DEFAULT_APPSTORE_COUNTRY).lower(),
        resilience=ResilienceConfig(
            name=resilience.name,
            base_url=optional_env_var("APPSTORE_BASE_URL", APPSTORE_BASE_URL),
            timeout_seconds=timeout,
            default_headers=resilience.default_headers,
        ),
    )
