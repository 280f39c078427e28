"""URL Repository for the URL shortener application.

This module provides the URLRepository class, the record store for shortened
URLs. All records live in one JSON document that is reloaded for every
operation and rewritten in full after every mutation.
"""

import asyncio
import logging
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Any, Dict, List, NamedTuple, Optional, Union

from pydantic import ValidationError

from app.models.url import URLRecord
from app.repositories.base import DuplicateEntityError, JSONDocumentStore, StorageReadError

logger = logging.getLogger(__name__)


def _empty_document() -> Dict[str, Any]:
    return {"urls": []}


class SweepResult(NamedTuple):
    processed: int
    deleted: int


class URLRepository:
    """
    Repository for URL records.

    Every read-modify-write cycle runs under a single asyncio lock owned by
    the instance, so the request handlers and the expiry sweeper must share
    one repository to stay serialized. File I/O runs in a worker thread.
    """

    def __init__(self, path: Union[str, Path]):
        """
        Initialize the repository.

        Args:
            path: Location of the JSON document holding the records
        """
        self._document = JSONDocumentStore(path, default_factory=_empty_document)
        self._lock = asyncio.Lock()

    @property
    def path(self) -> Path:
        return self._document.path

    # Blocking helpers, always called with the lock held and off the event loop

    def _load_sync(self) -> List[URLRecord]:
        if not self._document.exists():
            logger.info(f"Record store {self.path} not found, creating an empty one")
            self._document.write(_empty_document())
            return []

        data = self._document.read()
        raw_urls = data.get("urls", [])
        if not isinstance(raw_urls, list):
            raise StorageReadError(self.path, "'urls' is not a list")
        try:
            return [URLRecord.model_validate(item) for item in raw_urls]
        except ValidationError as e:
            raise StorageReadError(self.path, e) from e

    def _save_sync(self, records: List[URLRecord]) -> None:
        self._document.write({"urls": [record.to_document() for record in records]})

    async def _load(self) -> List[URLRecord]:
        return await asyncio.to_thread(self._load_sync)

    async def _save(self, records: List[URLRecord]) -> None:
        await asyncio.to_thread(self._save_sync, records)

    # Public API

    async def initialize(self) -> int:
        """
        Load the store once, creating the document if it is missing.

        Returns:
            Number of records currently stored

        Raises:
            StorageReadError: If the existing document cannot be read
            StorageWriteError: If a missing document cannot be created
        """
        async with self._lock:
            records = await self._load()
        logger.info(f"Record store {self.path} ready with {len(records)} URLs")
        return len(records)

    async def load_all(self) -> List[URLRecord]:
        """
        Read all records in store order.

        Raises:
            StorageReadError: If the document cannot be read
            StorageWriteError: If a missing document cannot be created
        """
        async with self._lock:
            return await self._load()

    async def save_all(self, records: List[URLRecord]) -> None:
        """
        Overwrite the stored records.

        Raises:
            StorageWriteError: If the document cannot be written
        """
        async with self._lock:
            await self._save(list(records))

    async def get_by_id(self, url_id: str) -> Optional[URLRecord]:
        """
        Find a record by its id.

        Returns:
            The URLRecord if found, None otherwise
        """
        async with self._lock:
            records = await self._load()
        for record in records:
            if record.id == url_id:
                return record
        return None

    async def append(self, record: URLRecord) -> URLRecord:
        """
        Add one record and persist.

        Raises:
            DuplicateEntityError: If a record with the same id is stored
            RepositoryError: On storage errors
        """
        async with self._lock:
            records = await self._load()
            if any(existing.id == record.id for existing in records):
                raise DuplicateEntityError("id", record.id)
            records.append(record)
            await self._save(records)
        logger.debug(f"Stored URL {record.id} -> {record.link}")
        return record

    async def remove_by_id(self, url_id: str) -> bool:
        """
        Remove the record with the given id, persisting only if one was removed.

        Returns:
            True if a record was removed, False otherwise
        """
        async with self._lock:
            records = await self._load()
            kept = [record for record in records if record.id != url_id]
            if len(kept) == len(records):
                return False
            await self._save(kept)
        logger.debug(f"Removed URL {url_id}")
        return True

    async def delete_expired_urls(
        self,
        window: timedelta,
        now: Optional[datetime] = None
    ) -> SweepResult:
        """
        Remove every record at least ``window`` old.

        Records with an unparseable ``addedAt`` are removed as well. The
        document is rewritten only when something was removed.

        Args:
            window: Expiration window
            now: Reference instant, defaults to the current UTC time

        Returns:
            SweepResult with the number of records scanned and deleted
        """
        now = now or datetime.now(timezone.utc)
        async with self._lock:
            records = await self._load()
            kept = [record for record in records if not record.is_expired(window, now)]
            deleted = len(records) - len(kept)
            if deleted:
                await self._save(kept)
        return SweepResult(processed=len(records), deleted=deleted)
