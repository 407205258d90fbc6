"""
SQLite Repository - Lexicon entry storage and candidate filtering.

Features:
- Async operations via aiosqlite
- Entries stored as validated JSON, one row per entry
- Kind, tag (AND) and first-letter filters
- Stable insertion order for ranking candidates
"""

from __future__ import annotations

import json
import logging
from collections.abc import Sequence
from pathlib import Path
from typing import Any

import aiosqlite

from lexicon.config.errors import (
    EntryValidationError,
    ErrorCode,
    InvalidLetterError,
    StorageError,
)
from lexicon.domains.entries import Entry, EntryKind, parse_entry
from lexicon.domains.search.extractors import primary_text

logger = logging.getLogger(__name__)

__all__ = ["EntryRepository"]


class EntryRepository:
    """
    SQLite repository for lexicon entries.

    Example:
        >>> from lexicon.domains.entries import EntryKind, Word
        >>> repo = EntryRepository("data/lexicon.db")
        >>> await repo.initialize()
        >>> entry_id = await repo.insert_entry(Word(name="serendipity"))
        >>> candidates = await repo.list_entries(kind=EntryKind.WORD, tags=["luck"])
    """

    def __init__(self, db_path: str | Path) -> None:
        """
        Initialize repository.

        Args:
            db_path: Path to SQLite database file
        """
        self.db_path = Path(db_path)
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self._connection: aiosqlite.Connection | None = None

    async def _get_connection(self) -> aiosqlite.Connection:
        """Get or create database connection."""
        if self._connection is None:
            try:
                self._connection = await aiosqlite.connect(str(self.db_path))
            except aiosqlite.Error as e:
                raise StorageError(
                    f"Cannot open database: {self.db_path}",
                    details={"error": str(e)},
                ) from e
            self._connection.row_factory = aiosqlite.Row
        return self._connection

    async def initialize(self) -> None:
        """Initialize database schema."""
        conn = await self._get_connection()

        await conn.executescript("""
            -- Entries table; data holds the entry JSON without its id
            CREATE TABLE IF NOT EXISTS entries (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                kind TEXT NOT NULL,
                slug TEXT NOT NULL DEFAULT '',
                sort_key TEXT NOT NULL DEFAULT '',
                data TEXT NOT NULL,
                created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
                updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
            );

            CREATE TABLE IF NOT EXISTS entry_tags (
                entry_id INTEGER NOT NULL,
                tag TEXT NOT NULL,
                PRIMARY KEY (entry_id, tag),
                FOREIGN KEY (entry_id) REFERENCES entries(id) ON DELETE CASCADE
            );

            -- Indexes
            CREATE UNIQUE INDEX IF NOT EXISTS idx_entries_slug ON entries(slug) WHERE slug != '';
            CREATE INDEX IF NOT EXISTS idx_entries_kind_sort ON entries(kind, sort_key);
            CREATE INDEX IF NOT EXISTS idx_entry_tags_tag ON entry_tags(tag);
        """)

        await conn.commit()
        logger.info("Database initialized: %s", self.db_path)

    async def insert_entry(self, entry: Entry) -> int:
        """
        Insert an entry and its tags.

        Returns:
            Entry ID

        Raises:
            StorageError: On constraint violations (e.g. duplicate slug)
        """
        conn = await self._get_connection()

        try:
            cursor = await conn.execute(
                """
                INSERT INTO entries (kind, slug, sort_key, data)
                VALUES (?, ?, ?, ?)
                """,
                (
                    entry.kind,
                    entry.slug,
                    (primary_text(entry) or "").casefold(),
                    entry.model_dump_json(exclude={"id"}),
                ),
            )
            entry_id = cursor.lastrowid
            await conn.executemany(
                "INSERT INTO entry_tags (entry_id, tag) VALUES (?, ?)",
                [(entry_id, tag) for tag in entry.tags],
            )
            await conn.commit()
        except aiosqlite.Error as e:
            await conn.rollback()
            raise StorageError(
                "Failed to insert entry",
                details={"slug": entry.slug, "error": str(e)},
                code=ErrorCode.STORAGE_WRITE_FAILED,
            ) from e

        logger.debug("Inserted %s entry id=%d", entry.kind, entry_id)
        return entry_id

    async def get_entry(self, entry_id: int) -> Entry | None:
        """Get entry by ID."""
        conn = await self._get_connection()

        try:
            cursor = await conn.execute(
                "SELECT id, data FROM entries WHERE id = ?", (entry_id,)
            )
            row = await cursor.fetchone()
        except aiosqlite.Error as e:
            raise StorageError(
                f"Failed to read entry {entry_id}",
                details={"error": str(e)},
                code=ErrorCode.STORAGE_READ_FAILED,
            ) from e

        if row:
            return self._row_to_entry(row)
        return None

    async def list_entries(
        self,
        kind: EntryKind | None = None,
        tags: Sequence[str] | None = None,
        letter: str | None = None,
    ) -> list[Entry]:
        """
        List entries passing every filter, in insertion order.

        Args:
            kind: Only entries of this kind
            tags: Entry must carry all of these tags
            letter: Primary text starts with this letter (A-Z)

        Returns:
            Full candidate set (no pagination)
        """
        conn = await self._get_connection()

        clauses: list[str] = []
        params: list[Any] = []

        if kind:
            clauses.append("kind = ?")
            params.append(EntryKind(kind).value)

        wanted = list(dict.fromkeys(t.strip() for t in tags or [] if t.strip()))
        if wanted:
            placeholders = ", ".join("?" for _ in wanted)
            clauses.append(
                f"""id IN (
                    SELECT entry_id FROM entry_tags
                    WHERE tag IN ({placeholders})
                    GROUP BY entry_id
                    HAVING COUNT(DISTINCT tag) = ?
                )"""
            )
            params.extend(wanted)
            params.append(len(wanted))

        if letter is not None:
            letter = letter.upper()
            if len(letter) != 1 or not "A" <= letter <= "Z":
                raise InvalidLetterError(
                    "Letter must be a single letter A-Z", details={"letter": letter}
                )
            clauses.append("sort_key LIKE ?")
            params.append(f"{letter.lower()}%")

        sql = "SELECT id, data FROM entries"
        if clauses:
            sql += " WHERE " + " AND ".join(clauses)
        sql += " ORDER BY id"

        try:
            cursor = await conn.execute(sql, params)
            rows = await cursor.fetchall()
        except aiosqlite.Error as e:
            raise StorageError(
                "Failed to list entries",
                details={"error": str(e)},
                code=ErrorCode.STORAGE_READ_FAILED,
            ) from e

        return [self._row_to_entry(row) for row in rows]

    async def count(self) -> int:
        """Get total entry count."""
        conn = await self._get_connection()
        try:
            cursor = await conn.execute("SELECT COUNT(*) FROM entries")
            row = await cursor.fetchone()
        except aiosqlite.Error as e:
            raise StorageError(
                "Failed to count entries",
                details={"error": str(e)},
                code=ErrorCode.STORAGE_READ_FAILED,
            ) from e
        return row[0] if row else 0

    async def close(self) -> None:
        """Close database connection."""
        if self._connection:
            await self._connection.close()
            self._connection = None

    @staticmethod
    def _row_to_entry(row: aiosqlite.Row) -> Entry:
        """Rebuild an entry; a row that no longer parses is a storage fault."""
        try:
            data = json.loads(row["data"])
            data["id"] = row["id"]
            return parse_entry(data)
        except (json.JSONDecodeError, TypeError, EntryValidationError) as e:
            raise StorageError(
                f"Stored entry {row['id']} is corrupt",
                details={"id": row["id"], "error": str(e)},
                code=ErrorCode.STORAGE_READ_FAILED,
            ) from e
