"""
Record sources: turn Royal Road listing pages into Book records
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import List, Optional

import requests
from bs4 import BeautifulSoup
from loguru import logger

from royalshelf.errors import FetchFailure
from royalshelf.models import Book
from royalshelf.utils import absolute_link, build_http_session

POPULAR_LIMIT = 10
SEARCH_LIMIT = 15

DEFAULT_BASE_URL = "https://www.royalroad.com"
DEFAULT_USER_AGENT = "Mozilla/5.0 (compatible; RoyalShelfBot/1.0)"


class RecordSource(ABC):
    """Fetch capability consumed by the catalog core."""

    @abstractmethod
    def fetch_popular(self) -> List[Book]:
        """At most 10 popular books, in listing order."""

    @abstractmethod
    def fetch_search(self, query: str) -> List[Book]:
        """At most 15 books matching a free-text query."""


def parse_popular(html: str, base_url: str, limit: int = POPULAR_LIMIT) -> List[Book]:
    """Extract books from an active-popular listing page."""
    soup = BeautifulSoup(html, "html.parser")
    books: List[Book] = []

    for item in soup.select(".fiction-list-item"):
        title_elem = item.select_one(".fiction-title")
        link_elem = item.select_one(".fiction-title a")
        title = title_elem.get_text(strip=True) if title_elem else ""
        link = (link_elem.get("href") or "").strip() if link_elem else ""
        if title and link:
            books.append(Book(title=title, link=absolute_link(base_url, link)))
        if len(books) >= limit:
            break

    return books


def parse_search(html: str, base_url: str, limit: int = SEARCH_LIMIT) -> List[Book]:
    """Extract books from a search results page (one per h2 heading link)."""
    soup = BeautifulSoup(html, "html.parser")
    books: List[Book] = []

    for heading in soup.find_all("h2"):
        anchor = heading.find("a")
        if anchor is None:
            continue
        title = anchor.get_text(strip=True)
        link = (anchor.get("href") or "").strip()
        if title and link:
            books.append(Book(title=title, link=absolute_link(base_url, link)))
        if len(books) >= limit:
            break

    return books


class RoyalRoadSource(RecordSource):
    """Scrapes Royal Road over HTTP."""

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = 10.0,
        user_agent: str = DEFAULT_USER_AGENT,
        session: Optional[requests.Session] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or build_http_session(user_agent)

    @property
    def popular_url(self) -> str:
        return f"{self.base_url}/fictions/active-popular"

    @property
    def search_url(self) -> str:
        return f"{self.base_url}/fictions/search"

    def _get(self, url: str, params: Optional[dict] = None) -> str:
        try:
            response = self.session.get(url, params=params, timeout=self.timeout)
            response.raise_for_status()
        except requests.HTTPError as e:
            status = e.response.status_code if e.response is not None else "?"
            logger.warning(f"Fetch of {url} returned HTTP {status}")
            raise FetchFailure(f"HTTP {status} from {url}") from e
        except requests.RequestException as e:
            logger.warning(f"Fetch of {url} failed: {e}")
            raise FetchFailure(f"failed to visit {url}: {e}") from e
        return response.text

    def fetch_popular(self) -> List[Book]:
        html = self._get(self.popular_url)
        return parse_popular(html, self.base_url)

    def fetch_search(self, query: str) -> List[Book]:
        if not query.strip():
            return []
        html = self._get(self.search_url, params={"title": query})
        books = parse_search(html, self.base_url)
        logger.debug(f"Search for {query!r} found {len(books)} books")
        return books
