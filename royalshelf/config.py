"""
Configuration and service wiring for the Royal Shelf application
"""

import os
import sys
from functools import lru_cache

from loguru import logger

from royalshelf.cache import PopularCache
from royalshelf.service import CatalogService
from royalshelf.sources import DEFAULT_BASE_URL, DEFAULT_USER_AGENT, RoyalRoadSource
from royalshelf.store import MemorizedStore, SQLiteMedium


class Config:
    """Application configuration"""

    # API settings
    TITLE = "Royal Shelf"
    DESCRIPTION = "Popular Royal Road fiction, live search and memorized books"
    VERSION = "1.0.0"
    DOCS_URL = "/docs"
    REDOC_URL = "/redoc"

    # CORS settings
    ALLOW_ORIGINS = ["*"]
    ALLOW_CREDENTIALS = True
    ALLOW_METHODS = ["*"]
    ALLOW_HEADERS = ["*"]

    # Server settings
    HOST = os.getenv("HOST", "0.0.0.0")
    PORT = int(os.getenv("PORT", "8090"))
    RELOAD = False

    # Catalog settings
    BASE_URL = os.getenv("ROYALSHELF_BASE_URL", DEFAULT_BASE_URL)
    DB_PATH = os.getenv("ROYALSHELF_DB_PATH", "royalshelf.db")
    HTTP_TIMEOUT = float(os.getenv("ROYALSHELF_HTTP_TIMEOUT", "10"))
    USER_AGENT = os.getenv("ROYALSHELF_USER_AGENT", DEFAULT_USER_AGENT)
    LOG_LEVEL = os.getenv("ROYALSHELF_LOG_LEVEL", "INFO")


def setup_logging(level: str = Config.LOG_LEVEL) -> None:
    """Replace loguru's default sink with one at the configured level"""
    logger.remove()
    logger.add(
        sys.stderr,
        level=level,
        format=(
            "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
            "<level>{level: <8}</level> | "
            "<cyan>{name}</cyan>:<cyan>{function}</cyan> - <level>{message}</level>"
        ),
    )


def get_catalog() -> CatalogService:
    """Get the process-wide catalog service instance"""
    return _get_cached_catalog()


@lru_cache(maxsize=1)
def _get_cached_catalog() -> CatalogService:
    """Build one catalog per process.

    The popular cache and the store's mutex only protect callers that share
    the same instance, so every request must go through this one.
    """
    source = RoyalRoadSource(
        base_url=Config.BASE_URL,
        timeout=Config.HTTP_TIMEOUT,
        user_agent=Config.USER_AGENT,
    )
    return CatalogService(
        source=source,
        cache=PopularCache(source),
        store=MemorizedStore(SQLiteMedium(Config.DB_PATH)),
    )
