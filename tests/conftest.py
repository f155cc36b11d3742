"""
Pytest configuration and shared fixtures.
"""

from typing import Dict, List, Optional
from unittest.mock import AsyncMock, Mock, patch

import pytest
from bson import ObjectId

from books.models import Book
from books.repository import BookRepository


class InMemoryBookRepository:
    """Dict-backed stand-in for BookRepository used by the API tests."""

    def __init__(self):
        self.documents: Dict[str, dict] = {}

    def seed(self, book: Book) -> Book:
        book.id = str(ObjectId())
        self.documents[book.id] = book.model_dump(exclude={"id"})
        return book

    async def find_one(self, book_id: str) -> Optional[Book]:
        document = self.documents.get(book_id)
        if document is None:
            return None
        return Book(id=book_id, **document)

    async def find_all(self) -> List[Book]:
        return [Book(id=book_id, **document) for book_id, document in self.documents.items()]

    async def save(self, book: Book) -> Book:
        if book.id is None:
            book.id = str(ObjectId())
        elif not ObjectId.is_valid(book.id):
            raise ValueError(f"Invalid book id '{book.id}'")
        self.documents[book.id] = book.model_dump(exclude={"id"})
        return book

    async def delete(self, book_id: str) -> bool:
        return self.documents.pop(book_id, None) is not None

    async def health_check(self) -> dict:
        return {"status": "healthy", "books_count": len(self.documents)}


@pytest.fixture
def sample_book():
    """Create an unsaved sample book."""
    return Book(name="Book1", isbn="ISBN1", author="Author1", pages=200)


@pytest.fixture
def book_payload():
    """Request body for creating a book."""
    return {
        "name": "Book 1",
        "isbn": "QWER1234",
        "author": "Author 1",
        "pages": 200
    }


@pytest.fixture
def memory_repository():
    """Install an in-memory repository as the API's active repository."""
    repository = InMemoryBookRepository()
    with patch('api.main.book_repository', repository):
        yield repository


@pytest.fixture
def mock_collection():
    """Create a mock Motor collection."""
    collection = AsyncMock()
    cursor = Mock()
    cursor.to_list = AsyncMock(return_value=[])
    collection.find = Mock(return_value=cursor)
    return collection


@pytest.fixture
def book_repository(mock_collection):
    """Create a BookRepository wired to a mock collection."""
    repository = BookRepository(
        connection_url="mongodb://localhost:27017",
        database_name="test_bookstore",
        collection_name="book"
    )
    repository.database = AsyncMock()
    repository.collection = mock_collection
    return repository
