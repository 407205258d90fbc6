"""SQLite adapter - entry storage."""

from .repository import EntryRepository

__all__ = ["EntryRepository"]
