"""
FastAPI main application for the Book API.
"""

from contextlib import asynccontextmanager
from datetime import datetime
from typing import Optional

import structlog
from fastapi import FastAPI, HTTPException, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response
from starlette.exceptions import HTTPException as StarletteHTTPException

from api.config import config as api_config
from api.models import (
    BookRequest, BookCreatedResponse, BookUpdatedResponse, BookListResponse,
    ErrorResponse, HealthResponse
)
from books.models import Book
from books.repository import BookRepository
from utilities.config import config
from utilities.logger import setup_logging

logger = structlog.get_logger(__name__)

# Global repository, set during the application lifespan
book_repository: Optional[BookRepository] = None


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    global book_repository

    setup_logging(
        log_level=config.log_level,
        log_format=config.log_format,
        log_file=config.get_log_file_path(),
        debug=config.debug
    )
    logger.info("Starting Book API", port=api_config.port)

    repository = BookRepository(
        connection_url=config.mongodb_url,
        database_name=config.mongodb_database,
        collection_name=config.mongodb_collection
    )
    try:
        await repository.connect()
    except Exception as e:
        logger.error("Failed to connect to database", error=str(e))
        raise
    book_repository = repository

    yield

    logger.info("Shutting down Book API")
    await repository.disconnect()
    book_repository = None


app = FastAPI(
    title=api_config.api_title,
    description=api_config.api_description,
    version=api_config.api_version,
    lifespan=lifespan
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=api_config.cors_origins,
    allow_credentials=api_config.cors_allow_credentials,
    allow_methods=api_config.cors_allow_methods,
    allow_headers=api_config.cors_allow_headers,
)


# Exception handlers
@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request, exc: StarletteHTTPException):
    """Handle HTTP exceptions."""
    return JSONResponse(
        status_code=exc.status_code,
        content=ErrorResponse(
            error=exc.detail,
            status_code=exc.status_code
        ).model_dump(),
        headers=exc.headers
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request, exc: RequestValidationError):
    """Report malformed request bodies as bad requests."""
    logger.warning("Rejected malformed request", path=request.url.path, errors=len(exc.errors()))
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=ErrorResponse(
            error="Invalid request body",
            detail=str(exc.errors()),
            status_code=status.HTTP_400_BAD_REQUEST
        ).model_dump()
    )


@app.exception_handler(Exception)
async def general_exception_handler(request, exc: Exception):
    """Handle general exceptions."""
    logger.error("Unhandled exception", error=str(exc), path=request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=ErrorResponse(
            error="Internal server error",
            detail=str(exc) if api_config.debug else None,
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR
        ).model_dump()
    )


def get_repository() -> BookRepository:
    """Return the active repository or fail with a server error."""
    if book_repository is None:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Database service not available"
        )
    return book_repository


def _not_found(book_id: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail=f"Book with ID '{book_id}' not found"
    )


# Health check endpoint
@app.get("/health", response_model=HealthResponse, tags=["Health"])
async def health_check():
    """Health check endpoint."""
    db_status = "unavailable"
    if book_repository is not None:
        health_info = await book_repository.health_check()
        db_status = health_info.get("status", "unknown")

    return HealthResponse(
        status="healthy" if db_status == "healthy" else "degraded",
        timestamp=datetime.utcnow(),
        version=api_config.api_version,
        database_status=db_status
    )


# Books endpoints
@app.get("/book", response_model=BookListResponse, tags=["Books"])
async def get_books():
    """Get every book along with the total count."""
    repository = get_repository()
    try:
        books = await repository.find_all()
        result = BookListResponse(total_books=len(books), books=books)
        return JSONResponse(content=result.model_dump(by_alias=True))

    except Exception as e:
        logger.error("Failed to get books", error=str(e))
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to retrieve books"
        )


@app.get("/book/{book_id}", response_model=Book, tags=["Books"])
async def get_book(book_id: str):
    """
    Get a single book by ID.

    - **book_id**: Book identifier (MongoDB ObjectId)
    """
    repository = get_repository()
    try:
        book = await repository.find_one(book_id)
        if book is None:
            raise _not_found(book_id)

        return JSONResponse(content=book.model_dump())

    except HTTPException:
        raise
    except Exception as e:
        logger.error("Failed to get book", book_id=book_id, error=str(e))
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to retrieve book"
        )


@app.post("/book", response_model=BookCreatedResponse, tags=["Books"])
async def create_book(payload: BookRequest):
    """Create a book; the response carries the generated id."""
    repository = get_repository()
    try:
        book = await repository.save(payload.to_book())
        logger.info("Book created", book_id=book.id)

        return JSONResponse(content=BookCreatedResponse(book=book).model_dump())

    except Exception as e:
        logger.error("Failed to create book", error=str(e))
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to create book"
        )


@app.put("/book/{book_id}", response_model=BookUpdatedResponse, tags=["Books"])
async def update_book(book_id: str, payload: BookRequest):
    """Replace every field of an existing book except its id."""
    repository = get_repository()
    try:
        if await repository.find_one(book_id) is None:
            raise _not_found(book_id)

        book = await repository.save(payload.to_book(book_id))
        logger.info("Book updated", book_id=book_id)

        return JSONResponse(content=BookUpdatedResponse(book=book).model_dump())

    except HTTPException:
        raise
    except Exception as e:
        logger.error("Failed to update book", book_id=book_id, error=str(e))
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to update book"
        )


@app.delete("/book/{book_id}", status_code=status.HTTP_204_NO_CONTENT, tags=["Books"])
async def delete_book(book_id: str):
    """Delete a book by ID."""
    repository = get_repository()
    try:
        if not await repository.delete(book_id):
            raise _not_found(book_id)

        logger.info("Book deleted", book_id=book_id)
        return Response(status_code=status.HTTP_204_NO_CONTENT)

    except HTTPException:
        raise
    except Exception as e:
        logger.error("Failed to delete book", book_id=book_id, error=str(e))
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to delete book"
        )


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "api.main:app",
        host=api_config.host,
        port=api_config.port,
        reload=api_config.debug,
        log_level=api_config.log_level.lower()
    )
