"""API dependencies for FastAPI.

This module provides dependency injection functions for FastAPI endpoints
to access the record store and service instances.
"""

from fastapi import Depends, Request

from app.repositories.url_repository import URLRepository
from app.services.shortener import ShortenedURLService


def get_url_repository(request: Request) -> URLRepository:
    """Get the application's record store, created at startup."""
    return request.app.state.url_repository


def get_shortener_service(
    url_repo: URLRepository = Depends(get_url_repository),
) -> ShortenedURLService:
    """Get an instance of the URL shortening service."""
    return ShortenedURLService(url_repository=url_repo)
