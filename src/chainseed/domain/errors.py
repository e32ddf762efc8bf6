"""Fatal error types raised across the seeding engine boundary.

Item-level failures are never raised; they are reported through
``Failed`` results and collected in the stage outcome.
"""

from __future__ import annotations


class SeedError(RuntimeError):
    """Base class for errors that abort a seeding run."""


class RecordSourceError(SeedError):
    """Raised when a record source cannot be read or parsed."""


class RegistryError(SeedError):
    """Raised when a registry read (listing, connectivity check) fails."""


class SeedCancelledError(SeedError):
    """Raised when cancellation is observed during a registry call."""

    def __init__(self, message: str = "Seeding run was cancelled") -> None:
        super().__init__(message)
