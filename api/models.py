"""
API models and schemas for the FastAPI application.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from books.models import Book


class BookRequest(BaseModel):
    """Request body for creating or updating a book."""
    name: str = Field(..., description="Name of the book")
    isbn: str = Field(..., description="ISBN of the book")
    author: str = Field(..., description="Author of the book")
    pages: int = Field(..., description="Number of pages")

    def to_book(self, book_id: Optional[str] = None) -> Book:
        """Build a Book entity carrying every field of the request."""
        return Book(id=book_id, **self.model_dump())


class BookCreatedResponse(BaseModel):
    """Response model for a created book."""
    message: str = Field("Book created successfully", description="Outcome message")
    book: Book = Field(..., description="The created book, including its id")


class BookUpdatedResponse(BaseModel):
    """Response model for an updated book."""
    message: str = Field("Book Updated successfully", description="Outcome message")
    book: Book = Field(..., description="The book after the update")


class BookListResponse(BaseModel):
    """Response model for the list of all books."""
    total_books: int = Field(..., serialization_alias="totalBooks", description="Total number of books")
    books: List[Book] = Field(..., description="List of books")


class ErrorResponse(BaseModel):
    """Error response model."""
    error: str = Field(..., description="Error message")
    detail: Optional[str] = Field(None, description="Additional error details")
    status_code: int = Field(..., description="HTTP status code")


class HealthResponse(BaseModel):
    """Health check response model."""
    status: str = Field(..., description="Service status")
    timestamp: datetime = Field(..., description="Current timestamp")
    version: str = Field(..., description="API version")
    database_status: str = Field(..., description="Database connection status")
