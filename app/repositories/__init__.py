"""Repository layer for the URL shortener application.

This module provides the record store and the storage exceptions that
abstract how URL records are persisted.
"""

from app.repositories.base import (
    JSONDocumentStore,
    RepositoryError,
    DuplicateEntityError,
    StorageReadError,
    StorageWriteError,
)
from app.repositories.url_repository import URLRepository, SweepResult

__all__ = [
    # Base classes and exceptions
    "JSONDocumentStore",
    "RepositoryError",
    "DuplicateEntityError",
    "StorageReadError",
    "StorageWriteError",

    # Concrete repositories
    "URLRepository",
    "SweepResult",
]
