"""API request and response schemas.

This module contains Pydantic models for API request validation
and response serialization.
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class URLCreateRequest(BaseModel):
    """Request schema for creating a shortened URL.

    ``link`` is optional here so that a missing link is reported by the
    service as a missing-link error rather than a generic validation error.
    """
    model_config = ConfigDict(extra="ignore")

    link: Optional[str] = None


class URLResponse(BaseModel):
    """Response schema for a stored URL record."""
    model_config = ConfigDict(populate_by_name=True, from_attributes=True)

    id: str
    link: str
    added_at: Any = Field(default=None, alias="addedAt")


class ServiceInfoResponse(BaseModel):
    """Response schema for the capability listing."""
    message: str
    endpoints: Dict[str, str]


class ErrorResponse(BaseModel):
    """Response schema for errors."""
    detail: str
    errors: Optional[List[Dict[str, Any]]] = None
