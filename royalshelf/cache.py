"""In-process snapshot of the current popular listing.

The snapshot is populated lazily on first read and replaced wholesale on
refresh. It lives only in memory and resets when the process restarts.
"""

from __future__ import annotations

from typing import List, Optional, Protocol

from loguru import logger

from royalshelf.errors import FetchFailure
from royalshelf.locks import ReadWriteLock
from royalshelf.models import Book
from royalshelf.sources import POPULAR_LIMIT


class PopularFetcher(Protocol):
    def fetch_popular(self) -> List[Book]: ...


class PopularCache:
    def __init__(self, source: PopularFetcher, limit: int = POPULAR_LIMIT):
        self._source = source
        self._limit = int(limit)
        self._lock = ReadWriteLock()
        self._books: List[Book] = []
        # Count of finished fetch attempts. A caller that sees it move while
        # waiting for the write lock adopts that attempt's outcome.
        self._completed = 0
        self._last_error: Optional[FetchFailure] = None

    def get_or_populate(self) -> List[Book]:
        seen = self._completed

        with self._lock.read():
            if self._books:
                return list(self._books)

        with self._lock.write():
            if self._books:
                return list(self._books)
            if self._completed != seen:
                if self._last_error is not None:
                    raise self._last_error
                return []
            self._books = self._fetch()
            return list(self._books)

    def refresh(self) -> List[Book]:
        with self._lock.write():
            fresh = self._fetch()
            self._books = fresh
            return list(self._books)

    def search_cached(self, query: str) -> List[Book]:
        needle = query.lower()
        with self._lock.read():
            if not needle:
                return list(self._books)
            return [book for book in self._books if needle in book.title.lower()]

    def _fetch(self) -> List[Book]:
        """Run one fetch attempt. Caller must hold the write lock."""
        try:
            books = list(self._source.fetch_popular())
        except FetchFailure as e:
            self._last_error = e
            logger.warning(f"Popular fetch failed: {e}")
            raise
        except Exception as e:
            failure = FetchFailure(f"Popular fetch failed: {e}")
            self._last_error = failure
            logger.exception(f"Popular fetch raised unexpectedly: {e}")
            raise failure from e
        finally:
            self._completed += 1
        self._last_error = None
        if len(books) > self._limit:
            books = books[: self._limit]
        logger.info(f"Fetched {len(books)} popular books")
        return books
