"""
MongoDB repository for Book records.
Handles connection and the find/save/delete operations.
"""

from typing import Any, Dict, List, Optional

import structlog
from bson import ObjectId
from bson.errors import InvalidId
from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorCollection, AsyncIOMotorDatabase
from pymongo.errors import ConnectionFailure

from .models import Book

logger = structlog.get_logger(__name__)


def _object_id(book_id: str) -> Optional[ObjectId]:
    """Parse a book id, returning None when it is not a valid ObjectId."""
    try:
        return ObjectId(book_id)
    except (InvalidId, TypeError):
        return None


def _to_document(book: Book) -> Dict[str, Any]:
    return book.model_dump(exclude={"id"})


def _from_document(document: Dict[str, Any]) -> Book:
    document["id"] = str(document.pop("_id"))
    return Book(**document)


class BookRepository:
    """
    Async repository for Book documents.
    Lookups by unknown or malformed ids yield absence rather than errors.
    """

    def __init__(self, connection_url: str, database_name: str, collection_name: str = "book"):
        """
        Initialize the repository.

        Args:
            connection_url: MongoDB connection URL
            database_name: Name of the database
            collection_name: Name of the collection holding books
        """
        self.connection_url = connection_url
        self.database_name = database_name
        self.collection_name = collection_name
        self.client: Optional[AsyncIOMotorClient] = None
        self.database: Optional[AsyncIOMotorDatabase] = None
        self.collection: Optional[AsyncIOMotorCollection] = None

    async def connect(self) -> None:
        """Establish connection to MongoDB."""
        try:
            self.client = AsyncIOMotorClient(self.connection_url)
            self.database = self.client[self.database_name]
            self.collection = self.database[self.collection_name]

            await self.client.admin.command('ping')
            logger.info("Successfully connected to MongoDB",
                        database=self.database_name,
                        collection=self.collection_name)

        except ConnectionFailure as e:
            logger.error("Failed to connect to MongoDB", error=str(e))
            raise

    async def disconnect(self) -> None:
        """Close MongoDB connection."""
        if self.client:
            self.client.close()
            logger.info("Disconnected from MongoDB")

    async def find_one(self, book_id: str) -> Optional[Book]:
        """
        Retrieve a book by id.

        Args:
            book_id: Hex string of the book's ObjectId

        Returns:
            Book instance or None if not found
        """
        object_id = _object_id(book_id)
        if object_id is None:
            logger.debug("Ignoring malformed book id", book_id=book_id)
            return None

        try:
            document = await self.collection.find_one({"_id": object_id})
            if document:
                return _from_document(document)
            return None

        except Exception as e:
            logger.error("Failed to retrieve book", book_id=book_id, error=str(e))
            raise

    async def find_all(self) -> List[Book]:
        """Retrieve every persisted book."""
        try:
            cursor = self.collection.find({})
            documents = await cursor.to_list(length=None)
            books = [_from_document(document) for document in documents]

            logger.debug("Retrieved all books", count=len(books))
            return books

        except Exception as e:
            logger.error("Failed to retrieve books", error=str(e))
            raise

    async def save(self, book: Book) -> Book:
        """
        Insert a new book or replace an existing one.

        A book without an id is inserted and the generated id is assigned
        to it. A book with an id replaces the stored document (upsert).

        Args:
            book: Book instance to persist

        Returns:
            The same book, carrying its id
        """
        document = _to_document(book)

        try:
            if book.id is None:
                result = await self.collection.insert_one(document)
                book.id = str(result.inserted_id)
                logger.debug("Successfully inserted book", book_id=book.id, book_name=book.name)
                return book

            object_id = _object_id(book.id)
            if object_id is None:
                raise ValueError(f"Invalid book id '{book.id}'")

            await self.collection.replace_one({"_id": object_id}, document, upsert=True)
            logger.debug("Successfully saved book", book_id=book.id, book_name=book.name)
            return book

        except ValueError:
            raise
        except Exception as e:
            logger.error("Failed to save book", book_id=book.id, book_name=book.name, error=str(e))
            raise

    async def delete(self, book_id: str) -> bool:
        """
        Delete a book by id.

        Args:
            book_id: Hex string of the book's ObjectId

        Returns:
            bool: True if deleted, False if not found
        """
        object_id = _object_id(book_id)
        if object_id is None:
            logger.warning("Book not found for deletion", book_id=book_id)
            return False

        try:
            result = await self.collection.delete_one({"_id": object_id})

            if result.deleted_count > 0:
                logger.debug("Successfully deleted book", book_id=book_id)
                return True

            logger.warning("Book not found for deletion", book_id=book_id)
            return False

        except Exception as e:
            logger.error("Failed to delete book", book_id=book_id, error=str(e))
            raise

    async def count(self) -> int:
        """Get total number of books in the collection."""
        try:
            return await self.collection.count_documents({})
        except Exception as e:
            logger.error("Failed to get books count", error=str(e))
            raise

    async def health_check(self) -> Dict[str, Any]:
        """
        Perform database health check.

        Returns:
            Dictionary with health status
        """
        try:
            await self.database.command("ping")
            books_count = await self.count()

            return {
                "status": "healthy",
                "books_count": books_count
            }
        except Exception as e:
            logger.error("Database health check failed", error=str(e))
            return {
                "status": "unhealthy",
                "error": str(e)
            }
