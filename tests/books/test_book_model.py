"""
Unit tests for the Book model.
"""

import pytest
from pydantic import ValidationError

from books.models import Book


class TestBook:
    """Test cases for Book model."""

    def test_new_book_has_no_id(self):
        book = Book(name="Book1", isbn="ISBN1", author="Author1", pages=200)

        assert book.id is None
        assert book.pages == 200

    def test_id_can_be_assigned(self, sample_book):
        sample_book.id = "5f1d7f5c9b1e8a3c4d2e6f70"
        assert sample_book.id == "5f1d7f5c9b1e8a3c4d2e6f70"

    def test_missing_fields_are_rejected(self):
        with pytest.raises(ValidationError) as exc_info:
            Book(name="Book1", isbn="ISBN1")

        missing = {error["loc"][0] for error in exc_info.value.errors()}
        assert missing == {"author", "pages"}

    def test_pages_must_be_integer(self):
        with pytest.raises(ValidationError):
            Book(name="Book1", isbn="ISBN1", author="Author1", pages="lots")
