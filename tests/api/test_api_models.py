"""
Tests for the API request and response envelopes.
"""

from api.models import BookRequest, BookCreatedResponse, BookUpdatedResponse, BookListResponse
from books.models import Book


def test_request_builds_book(book_payload):
    """A request becomes a Book with the given id."""
    request = BookRequest(**book_payload)

    assert request.to_book().id is None
    book = request.to_book("5f1d7f5c9b1e8a3c4d2e6f70")
    assert book.id == "5f1d7f5c9b1e8a3c4d2e6f70"
    assert book.name == "Book 1"
    assert book.pages == 200


def test_list_response_uses_total_books_key(sample_book):
    """The count is serialized as totalBooks."""
    response = BookListResponse(total_books=1, books=[sample_book])

    data = response.model_dump(by_alias=True)
    assert data["totalBooks"] == 1
    assert data["books"][0]["name"] == "Book1"


def test_messages():
    """Create and update envelopes carry their fixed messages."""
    book = Book(id="abc", name="Book1", isbn="ISBN1", author="Author1", pages=200)

    assert BookCreatedResponse(book=book).message == "Book created successfully"
    assert BookUpdatedResponse(book=book).message == "Book Updated successfully"
