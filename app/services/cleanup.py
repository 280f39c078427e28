"""Cleanup service for the URL shortener application.

This module contains the CleanupService class which implements the expiry
sweep: removing every record older than the expiration window.
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

from app.core.config import settings
from app.repositories.base import RepositoryError
from app.repositories.url_repository import URLRepository
from app.services.exceptions import ExpiredURLCleanupError

logger = logging.getLogger(__name__)


class CleanupService:
    """
    Service for cleanup operations in the URL shortener.

    Each sweep is a full scan of the store; fine for the small record
    volumes this service keeps.
    """

    def __init__(self, url_repository: URLRepository, expiration_window: Optional[timedelta] = None):
        """
        Initialize the cleanup service.

        Args:
            url_repository: Repository for URL data access
            expiration_window: Age at which records are removed, defaults to settings
        """
        self.url_repository = url_repository
        self.expiration_window = expiration_window or settings.EXPIRATION_WINDOW

    async def cleanup_expired_urls(self, now: Optional[datetime] = None) -> Dict[str, Any]:
        """
        Remove every record whose age has reached the expiration window.

        Args:
            now: Reference instant, defaults to the current UTC time

        Returns:
            Dict with statistics about the cleanup operation

        Raises:
            ExpiredURLCleanupError: If cleanup fails
        """
        start_time = datetime.now(timezone.utc)
        try:
            result = await self.url_repository.delete_expired_urls(
                self.expiration_window, now=now or start_time
            )
        except RepositoryError as e:
            logger.error(f"Error during expired URL cleanup: {e}", exc_info=True)
            raise ExpiredURLCleanupError(f"Failed to cleanup expired URLs: {e}") from e

        execution_time = (datetime.now(timezone.utc) - start_time).total_seconds()
        if result.deleted:
            logger.info(f"Removed {result.deleted} expired URLs in {execution_time:.3f}s")
        else:
            logger.debug(f"No expired URLs among {result.processed}")

        return {
            "processed": result.processed,
            "deleted": result.deleted,
            "remaining": result.processed - result.deleted,
            "execution_time": execution_time,
        }
