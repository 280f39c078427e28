"""
Data models for the URL shortener application.

This module exports the record model persisted by the record store.
"""

from app.models.url import URLRecord, format_timestamp, parse_timestamp

__all__ = [
    "URLRecord",
    "format_timestamp",
    "parse_timestamp",
]
