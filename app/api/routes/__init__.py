"""Routes package initialization.

This module exports the route collection for the application.
"""

from fastapi import APIRouter

from app.api.routes import index, shortener, redirect

# Create root router
api_router = APIRouter()

api_router.include_router(index.router)
api_router.include_router(shortener.router)

# Redirect routes go last: /{url_id} would otherwise shadow the others
api_router.include_router(redirect.router)

__all__ = ["api_router"]
