"""Service layer for the URL shortener application.

This package contains service classes implementing the business logic of the application.
Services orchestrate interactions between repositories and provide domain-specific operations.
"""

from app.services.shortener import ShortenedURLService
from app.services.cleanup import CleanupService

__all__ = ["ShortenedURLService", "CleanupService"]
