"""Test utilities for URL shortener tests."""

import json
import random
import string
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional

from app.models.url import format_timestamp


def random_string(length: int = 10) -> str:
    """Generate a random alphanumeric string."""
    return ''.join(random.choice(string.ascii_letters + string.digits) for _ in range(length))


def random_url() -> str:
    """Generate a random URL for testing."""
    domain = f"{random_string(8)}.com"
    path = random_string(12)
    return f"https://{domain}/{path}"


def hours_ago(hours: float) -> str:
    """ISO timestamp for ``hours`` before now."""
    return format_timestamp(datetime.now(timezone.utc) - timedelta(hours=hours))


def create_test_url_data(
    url_id: Optional[str] = None,
    link: Optional[str] = None,
    added_at: Optional[str] = None,
) -> Dict[str, Any]:
    """Create a record dict in the persisted layout."""
    return {
        "id": url_id or random_string(8),
        "link": link or random_url(),
        "addedAt": added_at if added_at is not None else hours_ago(0),
    }


def write_store(path: Path, urls: List[Dict[str, Any]]) -> None:
    """Write records straight to the store file."""
    path.write_text(json.dumps({"urls": urls}), encoding="utf-8")


def read_store(path: Path) -> Dict[str, Any]:
    return json.loads(path.read_text(encoding="utf-8"))
