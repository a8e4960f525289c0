"""Utility functions for the Royal Shelf application."""

from __future__ import annotations

from urllib.parse import urljoin

import requests
from requests.adapters import HTTPAdapter


def build_http_session(user_agent: str, pool_size: int = 10) -> requests.Session:
    """Requests session with connection pooling and no transport retries."""
    session = requests.Session()
    adapter = HTTPAdapter(pool_connections=pool_size, pool_maxsize=pool_size, max_retries=0)
    session.mount("https://", adapter)
    session.mount("http://", adapter)
    session.headers.update({
        "User-Agent": user_agent,
        "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
    })
    return session


def absolute_link(base_url: str, link: str) -> str:
    """Make a scraped href absolute against the site root"""
    if link.startswith("http"):
        return link
    return urljoin(base_url.rstrip("/") + "/", link.lstrip("/"))
