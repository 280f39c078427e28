"""URL redirection endpoint."""

from fastapi import APIRouter, Depends, HTTPException, Path, status
from starlette.responses import RedirectResponse

from app.api import schemas
from app.api.dependencies import get_shortener_service
from app.services.exceptions import URLNotFoundError
from app.services.shortener import ShortenedURLService

# Create router with tags
router = APIRouter(tags=["redirect"])


@router.get(
    "/{url_id}",
    response_class=RedirectResponse,
    status_code=status.HTTP_302_FOUND,
    responses={
        404: {"model": schemas.ErrorResponse, "description": "URL not found"}
    }
)
async def redirect_to_original_url(
    url_id: str = Path(..., description="The short id of the URL"),
    shortener_service: ShortenedURLService = Depends(get_shortener_service)
):
    """Redirect to the original URL."""
    try:
        url = await shortener_service.get_url_by_code(url_id)
    except URLNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))

    return RedirectResponse(url=url.link, status_code=status.HTTP_302_FOUND)
