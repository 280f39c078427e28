"""URL shortening service for the URL shortener application.

This module contains the ShortenedURLService class which implements business logic
for URL shortening, retrieval, and deletion.
"""

import logging
import secrets
from typing import Any, List

from pydantic import AnyUrl, TypeAdapter, ValidationError

from app.core.config import settings
from app.models.url import URLRecord
from app.repositories.base import DuplicateEntityError
from app.repositories.url_repository import URLRepository
from app.services.exceptions import (
    InvalidURLError,
    MissingLinkError,
    ShortCodeGenerationError,
    URLNotFoundError,
)

logger = logging.getLogger(__name__)

_url_adapter = TypeAdapter(AnyUrl)


class ShortenedURLService:
    """
    Service for URL shortening business logic.

    This service handles URL shortening operations including id generation,
    URL creation, retrieval, and validation. Storage failures raised by the
    repository are not caught here.
    """

    def __init__(self, url_repository: URLRepository):
        """
        Initialize the URL shortening service.

        Args:
            url_repository: Repository for URL data access
        """
        self.url_repository = url_repository

    async def create_short_url(self, link: Any) -> URLRecord:
        """
        Create a shortened URL.

        Args:
            link: The original URL to shorten, stored exactly as given

        Returns:
            URLRecord: The created record

        Raises:
            MissingLinkError: If no link was given
            InvalidURLError: If the link is not an absolute URL
            ShortCodeGenerationError: If a unique id cannot be generated
            RepositoryError: If the record cannot be persisted
        """
        if not link:
            raise MissingLinkError("Missing link")
        if not self._is_valid_url(link):
            raise InvalidURLError("Invalid URL")

        # Ids are random, a clash with a stored record just means drawing again
        for _ in range(settings.URL_ID_MAX_ATTEMPTS):
            record = URLRecord.create(self._generate_short_code(), link)
            try:
                created = await self.url_repository.append(record)
            except DuplicateEntityError:
                logger.warning(f"Generated id {record.id} already in use, retrying")
                continue
            logger.info(f"Created short URL {created.id} for {created.link}")
            return created

        raise ShortCodeGenerationError(
            f"Failed to generate a unique id after {settings.URL_ID_MAX_ATTEMPTS} attempts"
        )

    async def get_urls_list(self) -> List[URLRecord]:
        """Return every stored record in insertion order."""
        return await self.url_repository.load_all()

    async def get_url_by_code(self, url_id: str) -> URLRecord:
        """
        Retrieve a URL by its id.

        Raises:
            URLNotFoundError: If no URL with this id exists
        """
        url = await self.url_repository.get_by_id(url_id)
        if url is None:
            raise URLNotFoundError("URL not found")
        return url

    async def delete_url(self, url_id: str) -> None:
        """
        Delete a URL by its id.

        Raises:
            URLNotFoundError: If no URL with this id exists
        """
        if not await self.url_repository.remove_by_id(url_id):
            raise URLNotFoundError("URL not found")
        logger.info(f"Deleted short URL {url_id}")

    def _generate_short_code(self) -> str:
        chars = settings.URL_ID_CHARS
        return "".join(secrets.choice(chars) for _ in range(settings.URL_ID_LENGTH))

    def _is_valid_url(self, url: Any) -> bool:
        """
        Check that ``url`` is a syntactically valid absolute URL.

        Any scheme is accepted; reachability is not checked.
        """
        if not isinstance(url, str):
            return False
        try:
            _url_adapter.validate_python(url)
        except ValidationError:
            return False
        return True
