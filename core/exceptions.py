"""Common exception classes for the core package.

All exceptions inherit from :class:`PromptHeroError`, allowing callers to catch
a single base class while still distinguishing individual error categories.

Validation and lookup errors describe caller misuse and are raised to the
caller. Persistence and transport errors are raised only inside the storage
and HTTP helpers; the stores and the catalog absorb them with a logged
diagnostic and fall back to in-memory or sample data.

Updates:
  v0.2.0 - 2026-10-09 - Add transport errors for the remote favorites API.
  v0.1.0 - 2026-09-24 - Created module with validation and persistence errors.
"""

from __future__ import annotations


class PromptHeroError(Exception):
    """Base exception for PromptHero client failures."""


class ValidationError(PromptHeroError):
    """Raised when a collection name or other user input is rejected."""


class DuplicateNameError(ValidationError):
    """Raised when a collection with the same name already exists."""


class NotFoundError(PromptHeroError):
    """Raised when a mutation references an unknown collection."""


class PersistenceError(PromptHeroError):
    """Raised when the local key/value store cannot be read or written."""


class TransportError(PromptHeroError):
    """Raised when a remote request fails or returns an unusable payload."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


__all__ = [
    "DuplicateNameError",
    "NotFoundError",
    "PersistenceError",
    "PromptHeroError",
    "TransportError",
    "ValidationError",
]
