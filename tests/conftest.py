"""
pytest configuration and shared fixtures.

The record source and the memorized store's medium are replaced by
in-memory fakes that honour the same contracts as the real ones.
"""

import threading
from datetime import datetime, timedelta, timezone
from typing import Dict, List, Optional

import pytest

from royalshelf.cache import PopularCache
from royalshelf.errors import DuplicateTitle, FetchFailure, StoreUnavailable
from royalshelf.models import Book, MemorizedEntry
from royalshelf.service import CatalogService
from royalshelf.sources import RecordSource
from royalshelf.store import MemorizedMedium, MemorizedStore


class FakeSource(RecordSource):
    """Record source returning canned books and counting calls."""

    def __init__(self, popular: Optional[List[Book]] = None, search: Optional[List[Book]] = None):
        self.popular = list(popular or [])
        self.search = list(search or [])
        self.popular_error: Optional[FetchFailure] = None
        self.search_error: Optional[FetchFailure] = None
        self.popular_calls = 0
        self.search_queries: List[str] = []
        # When set, fetch_popular blocks until the gate opens.
        self.gate: Optional[threading.Event] = None
        self._calls_lock = threading.Lock()

    def fetch_popular(self) -> List[Book]:
        with self._calls_lock:
            self.popular_calls += 1
        if self.gate is not None:
            self.gate.wait(timeout=5)
        if self.popular_error is not None:
            raise self.popular_error
        return list(self.popular)

    def fetch_search(self, query: str) -> List[Book]:
        self.search_queries.append(query)
        if self.search_error is not None:
            raise self.search_error
        return list(self.search)


class InMemoryMedium(MemorizedMedium):
    """Dict-backed medium that can be switched offline."""

    def __init__(self):
        self.entries: Dict[str, MemorizedEntry] = {}
        self.available = True

    def _check(self) -> None:
        if not self.available:
            raise StoreUnavailable("medium offline")

    def get(self, title: str) -> Optional[MemorizedEntry]:
        self._check()
        return self.entries.get(title)

    def add(self, entry: MemorizedEntry) -> None:
        self._check()
        if entry.title in self.entries:
            raise DuplicateTitle(entry.title)
        self.entries[entry.title] = entry

    def all(self) -> List[MemorizedEntry]:
        self._check()
        return list(self.entries.values())

    def delete(self, title: str) -> int:
        self._check()
        return 1 if self.entries.pop(title, None) is not None else 0


class TickingClock:
    """Clock advancing one second per call."""

    def __init__(self, start: Optional[datetime] = None):
        self.now = start or datetime(2024, 1, 1, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        self.now += timedelta(seconds=1)
        return self.now


def make_books(count: int, prefix: str = "Title") -> List[Book]:
    return [Book(title=f"{prefix} {i}", link=f"link{i}") for i in range(1, count + 1)]


@pytest.fixture
def source() -> FakeSource:
    return FakeSource(popular=[Book("Title 1", "link1"), Book("Title 2", "link2")])


@pytest.fixture
def cache(source: FakeSource) -> PopularCache:
    return PopularCache(source)


@pytest.fixture
def medium() -> InMemoryMedium:
    return InMemoryMedium()


@pytest.fixture
def clock() -> TickingClock:
    return TickingClock()


@pytest.fixture
def store(medium: InMemoryMedium, clock: TickingClock) -> MemorizedStore:
    return MemorizedStore(medium, clock=clock)


@pytest.fixture
def catalog(source: FakeSource, cache: PopularCache, store: MemorizedStore) -> CatalogService:
    return CatalogService(source=source, cache=cache, store=store)
