from __future__ import annotations


class SeedError(Exception):
    """Base error raised when the widget seed cannot be completed."""


class PreconditionMissing(SeedError):
    """A row the seed depends on (admin user, device type) does not exist."""

    def __init__(self, prerequisite: str, remedy: str) -> None:
        self.prerequisite = prerequisite
        self.remedy = remedy
        super().__init__(f"{prerequisite} not found. Please {remedy}.")


class SeedDatabaseError(SeedError):
    """The database rejected a statement; the whole seed was rolled back."""
