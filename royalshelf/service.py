"""
Catalog service: wires the record source, popular cache and memorized store
"""

from typing import List

from loguru import logger

from royalshelf.cache import PopularCache
from royalshelf.errors import CatalogError, FetchFailure
from royalshelf.models import Book, MemorizedEntry
from royalshelf.sources import RecordSource
from royalshelf.store import MemorizedStore


class CatalogService:
    """Answers the catalog operations exposed over HTTP"""

    def __init__(self, source: RecordSource, cache: PopularCache, store: MemorizedStore):
        self.source = source
        self.cache = cache
        self.store = store

    def warm_up(self) -> bool:
        """Pre-fetch the popular listing; a failure only logs a warning."""
        try:
            books = self.cache.get_or_populate()
        except FetchFailure as e:
            logger.warning(f"Failed to pre-fetch popular books: {e}")
            return False
        logger.info(f"Pre-fetched {len(books)} popular books")
        return True

    def show_popular(self) -> List[Book]:
        return self.cache.get_or_populate()

    def refresh_popular(self) -> List[Book]:
        return self.cache.refresh()

    def filter_popular(self, query: str) -> List[Book]:
        return self.cache.search_cached(query)

    def search(self, query: str) -> List[Book]:
        """Live search on the site. Results are never cached."""
        if not query.strip():
            return []
        return self.source.fetch_search(query)

    def memorize(self, book: Book) -> MemorizedEntry:
        try:
            return self.store.insert_if_absent(book)
        except CatalogError as e:
            logger.warning(f"Failed to memorize book '{book.title}': {e}")
            raise

    def list_memorized(self) -> List[Book]:
        return self.store.list_by_recency()

    def forget(self, title: str) -> None:
        try:
            self.store.remove_by_title(title)
        except CatalogError as e:
            logger.warning(f"Failed to remove memorized book '{title}': {e}")
            raise
