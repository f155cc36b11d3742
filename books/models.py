"""
Pydantic model for the Book entity.
"""

from typing import Optional

from pydantic import BaseModel, Field


class Book(BaseModel):
    """
    Book record persisted in the document store.
    The id is assigned by the repository on first save.
    """
    id: Optional[str] = Field(None, description="Unique book identifier")
    name: str = Field(..., description="Name of the book")
    isbn: str = Field(..., description="ISBN of the book")
    author: str = Field(..., description="Author of the book")
    pages: int = Field(..., description="Number of pages")

    model_config = {
        "json_schema_extra": {
            "example": {
                "id": "5f1d7f5c9b1e8a3c4d2e6f70",
                "name": "Book 1",
                "isbn": "QWER1234",
                "author": "Author 1",
                "pages": 200
            }
        }
    }
