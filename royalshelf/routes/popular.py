"""
Popular listing routes for the Royal Shelf application
"""

from fastapi import APIRouter, Depends, Query
from starlette.concurrency import run_in_threadpool

from royalshelf.config import get_catalog
from royalshelf.models import BookListResponse, BookModel, SearchResponse, to_book_list
from royalshelf.service import CatalogService

router = APIRouter(prefix="/popular", tags=["Popular"])


@router.get("", response_model=BookListResponse)
async def get_popular_books(catalog: CatalogService = Depends(get_catalog)):
    """
    Get the current popular books

    The listing is fetched on first use and then served from memory.
    """
    # Populate blocks on network I/O; run in threadpool.
    books = await run_in_threadpool(catalog.show_popular)
    return to_book_list(books)


@router.post("/refresh", response_model=BookListResponse)
async def refresh_popular_books(catalog: CatalogService = Depends(get_catalog)):
    """
    Re-fetch the popular listing from the site

    On failure the previous listing is kept.
    """
    books = await run_in_threadpool(catalog.refresh_popular)
    return to_book_list(books)


@router.get("/search", response_model=SearchResponse)
async def filter_popular_books(
    q: str = Query("", description="Case-insensitive title fragment"),
    catalog: CatalogService = Depends(get_catalog)
):
    """
    Filter the cached popular books by title

    - **q**: Title fragment; empty returns the whole listing
    """
    # Waits behind an in-flight refresh; keep it off the event loop.
    books = await run_in_threadpool(catalog.filter_popular, q)
    return SearchResponse(
        query=q,
        total_results=len(books),
        results=[BookModel.from_book(book) for book in books]
    )
