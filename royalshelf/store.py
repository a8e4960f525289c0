"""
Memorized books: a durable collection keyed by title
"""

from __future__ import annotations

import sqlite3
import threading
from abc import ABC, abstractmethod
from contextlib import contextmanager
from datetime import datetime, timezone
from pathlib import Path
from typing import Callable, Iterator, List, Optional, Union

from loguru import logger

from royalshelf.errors import DuplicateTitle, InvalidInput, NotFound, StoreUnavailable
from royalshelf.models import Book, MemorizedEntry


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class MemorizedMedium(ABC):
    """
    Durable backing for the memorized store.

    Implementations raise StoreUnavailable when the medium cannot be
    reached and DuplicateTitle when add() hits an existing title.
    """

    @abstractmethod
    def get(self, title: str) -> Optional[MemorizedEntry]:
        ...

    @abstractmethod
    def add(self, entry: MemorizedEntry) -> None:
        ...

    @abstractmethod
    def all(self) -> List[MemorizedEntry]:
        ...

    @abstractmethod
    def delete(self, title: str) -> int:
        """Delete the entry with this title and return the number removed."""


SCHEMA_SQL = """
CREATE TABLE IF NOT EXISTS memorized_books (
    title TEXT PRIMARY KEY,
    link TEXT NOT NULL,
    memorized_at REAL NOT NULL
)
"""


class SQLiteMedium(MemorizedMedium):
    """SQLite table of memorized books, one connection per operation."""

    def __init__(self, db_path: Union[str, Path], busy_timeout: float = 10.0):
        self.db_path = str(db_path)
        self.busy_timeout = busy_timeout
        self._initialized = False
        self._init_lock = threading.Lock()

    @contextmanager
    def _connection(self) -> Iterator[sqlite3.Connection]:
        try:
            conn = sqlite3.connect(
                self.db_path,
                timeout=self.busy_timeout,
                check_same_thread=False
            )
        except sqlite3.Error as e:
            raise StoreUnavailable(f"cannot open {self.db_path}: {e}") from e
        try:
            yield conn
            conn.commit()
        except Exception:
            conn.rollback()
            raise
        finally:
            conn.close()

    def _ensure_schema(self) -> None:
        if self._initialized:
            return
        with self._init_lock:
            if self._initialized:
                return
            with self._connection() as conn:
                conn.execute(SCHEMA_SQL)
            self._initialized = True

    @contextmanager
    def _session(self) -> Iterator[sqlite3.Connection]:
        try:
            self._ensure_schema()
            with self._connection() as conn:
                yield conn
        except sqlite3.IntegrityError:
            raise
        except sqlite3.Error as e:
            logger.error(f"Memorized store unavailable: {e}")
            raise StoreUnavailable(f"memorized store unavailable: {e}") from e

    @staticmethod
    def _row_to_entry(row) -> MemorizedEntry:
        title, link, memorized_at = row
        return MemorizedEntry(
            title=title,
            link=link,
            memorized_at=datetime.fromtimestamp(memorized_at, tz=timezone.utc)
        )

    def get(self, title: str) -> Optional[MemorizedEntry]:
        with self._session() as conn:
            row = conn.execute(
                "SELECT title, link, memorized_at FROM memorized_books WHERE title = ?",
                (title,)
            ).fetchone()
        return self._row_to_entry(row) if row else None

    def add(self, entry: MemorizedEntry) -> None:
        try:
            with self._session() as conn:
                conn.execute(
                    "INSERT INTO memorized_books (title, link, memorized_at) VALUES (?, ?, ?)",
                    (entry.title, entry.link, entry.memorized_at.timestamp())
                )
        except sqlite3.IntegrityError as e:
            raise DuplicateTitle(entry.title) from e

    def all(self) -> List[MemorizedEntry]:
        with self._session() as conn:
            rows = conn.execute(
                "SELECT title, link, memorized_at FROM memorized_books "
                "ORDER BY memorized_at DESC, title ASC"
            ).fetchall()
        return [self._row_to_entry(row) for row in rows]

    def delete(self, title: str) -> int:
        with self._session() as conn:
            cursor = conn.execute("DELETE FROM memorized_books WHERE title = ?", (title,))
            return cursor.rowcount


class MemorizedStore:
    """
    Uniqueness-enforcing front for a MemorizedMedium.

    This is the only write path to the medium. Check-then-insert runs under
    a store-scoped mutex, so two concurrent memorize calls for one title
    never both succeed.
    """

    def __init__(
        self,
        medium: MemorizedMedium,
        clock: Callable[[], datetime] = _utc_now
    ):
        self._medium = medium
        self._clock = clock
        self._lock = threading.Lock()

    def insert_if_absent(self, book: Book) -> MemorizedEntry:
        """
        Memorize a book stamped with the current time.

        Raises:
            InvalidInput: title or link is empty
            DuplicateTitle: a book with this title is already memorized
            StoreUnavailable: the medium cannot be reached
        """
        if not book.title.strip() or not book.link.strip():
            raise InvalidInput("book title and link cannot be empty")

        with self._lock:
            if self._medium.get(book.title) is not None:
                raise DuplicateTitle(book.title)
            entry = MemorizedEntry(
                title=book.title,
                link=book.link,
                memorized_at=self._clock()
            )
            self._medium.add(entry)

        logger.info(f"Memorized book: {book.title}")
        return entry

    def list_by_recency(self) -> List[Book]:
        """Memorized books, most recently memorized first."""
        entries = sorted(self._medium.all(), key=lambda e: e.title)
        entries.sort(key=lambda e: e.memorized_at, reverse=True)
        return [entry.to_book() for entry in entries]

    def remove_by_title(self, title: str) -> None:
        if not title.strip():
            raise InvalidInput("book title cannot be empty")

        with self._lock:
            removed = self._medium.delete(title)
        if removed == 0:
            raise NotFound(title)
        logger.info(f"Removed memorized book: {title}")
