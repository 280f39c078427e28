"""Service capability listing."""

from fastapi import APIRouter, status

from app.api import schemas
from app.core.config import settings

router = APIRouter(tags=["index"])

ENDPOINTS = {
    "GET /urls": "Get all URLs",
    "POST /urls": "Create a new short URL",
    "DELETE /urls/:id": "Delete a URL by ID",
    "GET /:id": "Redirect to original URL",
}


@router.get(
    "/",
    response_model=schemas.ServiceInfoResponse,
    status_code=status.HTTP_200_OK,
    summary="List the available endpoints"
)
async def service_info():
    """Static description of the API; touches no state."""
    return schemas.ServiceInfoResponse(message=settings.APP_NAME, endpoints=ENDPOINTS)
