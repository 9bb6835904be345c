from __future__ import annotations

from dataclasses import FrozenInstanceError
from datetime import timedelta

import pytest

from appreviews.domain.errors import DomainValidationError
from appreviews.domain.model import RECENT_REVIEW_WINDOW, TrackedApp
from tests.helpers.reviews import NOW, make_review


@pytest.mark.parametrize("app_id", ["", "   "])
def test_tracked_app_requires_identifier(app_id: str) -> None:
    with pytest.raises(DomainValidationError, match="app id is required"):
        TrackedApp(app_id)


def test_tracked_app_strips_whitespace() -> None:
    assert TrackedApp(" 595068606 ").id == "595068606"


def test_tracked_app_is_immutable() -> None:
    app = TrackedApp("595068606")

    with pytest.raises(FrozenInstanceError):
        app.id = "other"  # type: ignore[misc]


def test_review_requires_identifier() -> None:
    with pytest.raises(DomainValidationError, match="review id"):
        make_review("")


def test_review_rejects_naive_timestamps() -> None:
    naive = NOW.replace(tzinfo=None)

    with pytest.raises(DomainValidationError, match="timezone"):
        make_review(submitted_at=naive)


def test_review_identity_is_scoped_to_app() -> None:
    first = make_review("r1", app_id="1")
    second = make_review("r1", app_id="2")

    assert first.key == ("1", "r1")
    assert first.key != second.key


def test_review_since_bound_is_inclusive() -> None:
    since = NOW - RECENT_REVIEW_WINDOW
    on_bound = make_review(submitted_at=since)
    just_before = make_review(submitted_at=since - timedelta(microseconds=1))

    assert on_bound.is_since(since)
    assert not just_before.is_since(since)
