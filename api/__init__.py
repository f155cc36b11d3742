"""
FastAPI REST API for Book records.

Exposes create, read, update, delete and list endpoints under /book.
"""
