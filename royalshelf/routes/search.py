"""
Live site search routes for the Royal Shelf application
"""

from fastapi import APIRouter, Depends, Query
from starlette.concurrency import run_in_threadpool

from royalshelf.config import get_catalog
from royalshelf.models import BookModel, SearchResponse
from royalshelf.service import CatalogService

router = APIRouter()


@router.get("/search", response_model=SearchResponse, tags=["Search"])
async def search_books(
    query: str = Query("", description="Title to search for on the site"),
    catalog: CatalogService = Depends(get_catalog)
):
    """
    Search the site for books by title

    - **query**: Free-text title query; blank returns no results
    """
    results = await run_in_threadpool(catalog.search, query)

    return SearchResponse(
        query=query,
        total_results=len(results),
        results=[BookModel.from_book(book) for book in results]
    )
