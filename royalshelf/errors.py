"""
Error taxonomy for the Royal Shelf catalog core
"""


class CatalogError(Exception):
    """Base class for every failure the catalog core reports"""

    status_code = 500


class FetchFailure(CatalogError):
    """Record source unreachable or returned an unusable response"""

    status_code = 502


class InvalidInput(CatalogError):
    """Empty title or link presented to the store"""

    status_code = 400


class DuplicateTitle(CatalogError):
    """A memorized entry with this title already exists"""

    status_code = 409

    def __init__(self, title: str):
        super().__init__(f"book '{title}' is already memorized")
        self.title = title


class NotFound(CatalogError):
    """No memorized entry has this title"""

    status_code = 404

    def __init__(self, title: str):
        super().__init__(f"book '{title}' not found in memorized collection")
        self.title = title


class StoreUnavailable(CatalogError):
    """The durable medium behind the memorized store cannot be reached"""

    status_code = 503
