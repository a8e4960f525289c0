"""
Domain records and Pydantic models for the Royal Shelf application
"""

from dataclasses import dataclass
from datetime import datetime
from typing import List

from pydantic import BaseModel, Field


@dataclass(frozen=True)
class Book:
    """A single title/link pair taken from a listing"""
    title: str
    link: str


@dataclass(frozen=True)
class MemorizedEntry:
    """A book pinned into durable storage"""
    title: str
    link: str
    memorized_at: datetime

    def to_book(self) -> Book:
        return Book(title=self.title, link=self.link)


class BookModel(BaseModel):
    """Model for a book in list views"""
    title: str
    link: str

    @classmethod
    def from_book(cls, book: Book) -> "BookModel":
        return cls(title=book.title, link=book.link)


class BookListResponse(BaseModel):
    """Model for popular and memorized listings"""
    total: int
    books: List[BookModel]


class SearchResponse(BaseModel):
    """Model for search response"""
    query: str
    total_results: int
    results: List[BookModel]


class MemorizeRequest(BaseModel):
    """Model for a memorize request body"""
    title: str = Field(..., description="Title of the book to memorize")
    link: str = Field(..., description="Link to the book page")


class MessageResponse(BaseModel):
    """Model for simple acknowledgements"""
    message: str
    title: str


class ErrorResponse(BaseModel):
    """Model for error responses"""
    detail: str
    error_type: str


def to_book_list(books: List[Book]) -> BookListResponse:
    """Wrap domain books in a list response"""
    return BookListResponse(
        total=len(books),
        books=[BookModel.from_book(book) for book in books]
    )
