"""Error taxonomy shared by the domain and its adapters."""

from __future__ import annotations


class DomainValidationError(ValueError):
    """Raised when a domain value fails validation (e.g. an empty identifier)."""


class FetchError(RuntimeError):
    """Raised when the remote review source cannot deliver a usable payload."""

    def __init__(self, message: str, *, app_id: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.app_id = app_id
        self.status_code = status_code


class PersistenceError(RuntimeError):
    """Raised when local storage cannot be read, parsed or written.

    A missing document is not an error (it reads as empty); a corrupt one is.
    """

    def __init__(self, message: str, *, path: str | None = None) -> None:
        super().__init__(message)
        self.path = path


class ReadOnlyViolation(RuntimeError):
    """Raised when a write is attempted against a read-only review source."""


__all__ = ["DomainValidationError", "FetchError", "PersistenceError", "ReadOnlyViolation"]
