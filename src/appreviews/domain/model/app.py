"""Tracked application entity."""

from __future__ import annotations

from dataclasses import dataclass

from appreviews.domain.errors import DomainValidationError


@dataclass(frozen=True, slots=True)
class TrackedApp:
    """An application identifier registered for periodic review reconciliation."""

    id: str

    def __post_init__(self) -> None:
        if not isinstance(self.id, str) or not self.id.strip():
            raise DomainValidationError("app id is required")
        if self.id != self.id.strip():
            object.__setattr__(self, "id", self.id.strip())
