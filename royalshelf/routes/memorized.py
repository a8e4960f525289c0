"""
Memorized book routes for the Royal Shelf application
"""

from fastapi import APIRouter, Depends, Query, status
from starlette.concurrency import run_in_threadpool

from royalshelf.config import get_catalog
from royalshelf.models import Book, BookListResponse, MemorizeRequest, MessageResponse, to_book_list
from royalshelf.service import CatalogService

router = APIRouter(prefix="/memorized", tags=["Memorized"])


@router.get("", response_model=BookListResponse)
async def list_memorized_books(catalog: CatalogService = Depends(get_catalog)):
    """List memorized books, newest first"""
    books = await run_in_threadpool(catalog.list_memorized)
    return to_book_list(books)


@router.post("", response_model=MessageResponse, status_code=status.HTTP_201_CREATED)
async def memorize_book(
    payload: MemorizeRequest,
    catalog: CatalogService = Depends(get_catalog)
):
    """
    Memorize a book

    Fails with 409 if a book with the same title is already memorized.
    """
    book = Book(title=payload.title, link=payload.link)
    await run_in_threadpool(catalog.memorize, book)
    return MessageResponse(message="Book memorized", title=book.title)


@router.delete("", response_model=MessageResponse)
async def forget_book(
    title: str = Query(..., description="Exact title of the memorized book"),
    catalog: CatalogService = Depends(get_catalog)
):
    """Remove a memorized book by title"""
    await run_in_threadpool(catalog.forget, title)
    return MessageResponse(message="Book removed", title=title)
