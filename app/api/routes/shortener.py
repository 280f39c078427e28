"""URL management endpoints: list, create and delete short URLs."""

from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Path, Response, status

from app.api import schemas
from app.api.dependencies import get_shortener_service
from app.models.url import URLRecord
from app.services.shortener import ShortenedURLService
from app.services.exceptions import (
    URLNotFoundError,
    URLValidationError,
    URLCreationError,
)

router = APIRouter(tags=["shortener"])


def _to_response(url: URLRecord) -> schemas.URLResponse:
    return schemas.URLResponse(id=url.id, link=url.link, added_at=url.added_at)


@router.get(
    "/urls",
    response_model=List[schemas.URLResponse]
)
async def list_urls(
    shortener_service: ShortenedURLService = Depends(get_shortener_service)
):
    """List every stored URL in insertion order."""
    urls = await shortener_service.get_urls_list()
    return [_to_response(url) for url in urls]


@router.post(
    "/urls",
    response_model=schemas.URLResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"model": schemas.ErrorResponse, "description": "Missing or invalid link"}
    }
)
async def create_short_url(
    url_data: Optional[schemas.URLCreateRequest] = None,
    shortener_service: ShortenedURLService = Depends(get_shortener_service)
):
    """Shorten a link; responds with the created record."""
    link = url_data.link if url_data is not None else None
    try:
        url = await shortener_service.create_short_url(link)
    except URLValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except URLCreationError as e:
        raise HTTPException(status_code=500, detail=str(e))
    return _to_response(url)


@router.delete(
    "/urls/{url_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses={
        404: {"model": schemas.ErrorResponse, "description": "URL not found"}
    }
)
async def delete_url(
    url_id: str = Path(..., description="The short id of the URL"),
    shortener_service: ShortenedURLService = Depends(get_shortener_service)
):
    """Delete a URL by id; responds with an empty body."""
    try:
        await shortener_service.delete_url(url_id)
    except URLNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return Response(status_code=status.HTTP_204_NO_CONTENT)
