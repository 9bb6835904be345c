"""Translate App Store feed entries into domain reviews."""

from __future__ import annotations

from datetime import UTC, datetime
from logging import getLogger
from typing import TYPE_CHECKING

from pydantic import ValidationError

from appreviews.config.appstore import REVIEW_ID_PREFIX
from appreviews.domain.model import Review
from appreviews.domain.time_windows import Clock, utcnow

from .schema import EntryPayload

if TYPE_CHECKING:
    from collections.abc import Iterable

    from .schema import RawEntry

log = getLogger(__name__)


def parse_score(label: str) -> int | None:
    try:
        return int(label.strip())
    except ValueError:
        return None


def parse_rfc3339(label: str) -> datetime | None:
    """Parse an RFC 3339 timestamp; values without a UTC offset are rejected."""

    value = label.strip()
    if not value:
        return None
    if value.endswith(("Z", "z")):
        value = value[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(value)
    except ValueError:
        return None
    if parsed.tzinfo is None:
        return None
    return parsed.astimezone(UTC)


def strip_review_id(raw_id: str, prefix: str = REVIEW_ID_PREFIX) -> str:
    return raw_id.removeprefix(prefix)


def parse_review(
    entry: RawEntry | EntryPayload,
    *,
    app_id: str,
    clock: Clock = utcnow,
    id_prefix: str = REVIEW_ID_PREFIX,
) -> Review | None:
    """Return a review for ``entry``, or ``None`` when the entry is malformed.

    Entries whose rating or update timestamp do not parse are dropped, as are
    entries without an id. ``retrieved_at`` is taken from ``clock`` per entry.
    """

    try:
        payload = entry if isinstance(entry, EntryPayload) else EntryPayload.model_validate(entry)
    except ValidationError:
        log.debug("Skipping malformed feed entry for app %s", app_id)
        return None

    score = parse_score(payload.rating.label)
    if score is None:
        log.debug("Skipping entry %r for app %s: unparsable rating", payload.id.label, app_id)
        return None

    submitted_at = parse_rfc3339(payload.updated.label)
    if submitted_at is None:
        log.debug("Skipping entry %r for app %s: unparsable timestamp", payload.id.label, app_id)
        return None

    review_id = strip_review_id(payload.id.label, id_prefix)
    if not review_id:
        log.debug("Skipping entry without id for app %s", app_id)
        return None

    return Review(
        id=review_id,
        app_id=app_id,
        author=payload.author.name.label,
        content=payload.content.label,
        score=score,
        submitted_at=submitted_at,
        retrieved_at=clock(),
    )


def parse_reviews(
    entries: Iterable[RawEntry],
    *,
    app_id: str,
    since: datetime | None = None,
    clock: Clock = utcnow,
    id_prefix: str = REVIEW_ID_PREFIX,
) -> list[Review]:
    """Parse feed entries, keeping those submitted at or after ``since``."""

    reviews: list[Review] = []
    for entry in entries:
        review = parse_review(entry, app_id=app_id, clock=clock, id_prefix=id_prefix)
        if review is None:
            continue
        if since is not None and not review.is_since(since):
            continue
        reviews.append(review)
    return reviews


__all__ = ["parse_review", "parse_reviews", "parse_rfc3339", "parse_score", "strip_review_id"]
