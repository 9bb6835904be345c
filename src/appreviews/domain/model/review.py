"""Review value object and the recency window."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta
from typing import TYPE_CHECKING, Final

from appreviews.domain.errors import DomainValidationError

if TYPE_CHECKING:
    from datetime import datetime

RECENT_REVIEW_WINDOW: Final[timedelta] = timedelta(hours=48)
"""How far back both the remote fetch and the local read path look."""


@dataclass(frozen=True, slots=True)
class Review:
    """A single customer review of one tracked application.

    Identity is ``(app_id, id)``; ``id`` is only unique within one application's
    review set. ``submitted_at`` comes from the remote source and ``retrieved_at``
    is stamped locally when the review was parsed.
    """

    id: str
    app_id: str
    author: str
    content: str
    score: int
    submitted_at: datetime
    retrieved_at: datetime

    def __post_init__(self) -> None:
        if not self.id:
            raise DomainValidationError("review id is required")
        if not self.app_id:
            raise DomainValidationError("review app id is required")
        for name in ("submitted_at", "retrieved_at"):
            if getattr(self, name).tzinfo is None:
                raise DomainValidationError(f"review {name} must include timezone information")

    @property
    def key(self) -> tuple[str, str]:
        return (self.app_id, self.id)

    def is_since(self, since: datetime) -> bool:
        """Return whether the review falls inside ``[since, ...)``; the bound is inclusive."""

        return self.submitted_at >= since
