"""Public interface for the App Store review feed adapter."""

from __future__ import annotations

from .client import AppStoreReviewFetcher
from .schema import EntryPayload, FeedResponse
from .translator import parse_review, parse_reviews

__all__ = [
    "AppStoreReviewFetcher",
    "EntryPayload",
    "FeedResponse",
    "parse_review",
    "parse_reviews",
]
