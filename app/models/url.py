"""URL shortener data models.

This module defines the URLRecord model stored in the JSON record store.
"""
import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field

logger = logging.getLogger(__name__)


def format_timestamp(moment: datetime) -> str:
    """Render a UTC instant as ISO-8601 with millisecond precision and a Z suffix."""
    moment = moment.astimezone(timezone.utc)
    return moment.strftime("%Y-%m-%dT%H:%M:%S.") + f"{moment.microsecond // 1000:03d}Z"


def parse_timestamp(value: Any) -> Optional[datetime]:
    """Parse a stored ``addedAt`` value.

    Naive timestamps are taken to be UTC. Returns None when the value
    cannot be parsed.
    """
    if not isinstance(value, str) or not value.strip():
        return None
    text = value.strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    try:
        moment = datetime.fromisoformat(text)
    except ValueError:
        return None
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return moment


class URLRecord(BaseModel):
    """
    A stored short-URL entry.

    ``added_at`` is kept as the raw value found in storage, whatever its
    JSON type, so a record with a damaged or missing timestamp can still be
    loaded, listed and swept. It is written back exactly as it was read.
    """

    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(description="Short opaque identifier used in the redirect path")
    link: str = Field(description="The original (long) URL to redirect to")
    added_at: Any = Field(
        default=None,
        alias="addedAt",
        description="Creation instant (UTC, ISO-8601)"
    )

    @classmethod
    def create(cls, url_id: str, link: str, now: Optional[datetime] = None) -> "URLRecord":
        """Build a new record stamped with the current UTC time."""
        now = now or datetime.now(timezone.utc)
        return cls(id=url_id, link=link, added_at=format_timestamp(now))

    @property
    def added_at_datetime(self) -> Optional[datetime]:
        return parse_timestamp(self.added_at)

    def age(self, now: Optional[datetime] = None) -> Optional[timedelta]:
        """Time elapsed since creation, or None if ``addedAt`` is unparseable."""
        added = self.added_at_datetime
        if added is None:
            return None
        return (now or datetime.now(timezone.utc)) - added

    def is_expired(self, window: timedelta, now: Optional[datetime] = None) -> bool:
        """Check if the record is due for removal.

        A record whose timestamp cannot be parsed has no meaningful age and
        is treated as expired.

        Returns:
            bool: True if ``now - addedAt >= window`` or the age is unknown
        """
        age = self.age(now)
        if age is None:
            logger.warning(f"Record '{self.id}' has malformed addedAt {self.added_at!r}; treating as expired")
            return True
        return age >= window

    def to_document(self) -> dict:
        """Serialize in the persisted ``{id, link, addedAt}`` layout."""
        return self.model_dump(by_alias=True, exclude_unset=True)
