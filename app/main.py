"""Main application module.

This module initializes the FastAPI application, includes routes,
and configures middleware, exception handlers and the expiry scheduler.
"""

import time

from fastapi import FastAPI, HTTPException, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from app.api import api_router
from app.core.config import settings
from app.core.logging import setup_logging
from app.middleware.logging import LoggingMiddleware
from app.repositories.base import RepositoryError
from app.repositories.url_repository import URLRepository
from app.scheduler.scheduler import scheduler_service

# Setup logging
logger = setup_logging()

# Create FastAPI app
app = FastAPI(
    title=settings.APP_NAME,
    description=settings.APP_DESCRIPTION,
    version=settings.APP_VERSION,
    docs_url="/docs" if settings.DEBUG else None,
    redoc_url="/redoc" if settings.DEBUG else None,
    openapi_url="/openapi.json" if settings.DEBUG else None,
)

if settings.REQUEST_LOGGING_ENABLED:
    app.add_middleware(LoggingMiddleware)

# Include API router
app.include_router(api_router)


# Add exception handlers
@app.exception_handler(HTTPException)
async def http_exception_handler(request, exc):
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.detail}
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Malformed request bodies are client errors like a bad link."""
    logger.warning(f"Request validation error: {exc}")
    return JSONResponse(
        status_code=400,
        content={"detail": "Validation error", "errors": jsonable_encoder(exc.errors())}
    )


@app.exception_handler(RepositoryError)
async def repository_exception_handler(request: Request, exc: RepositoryError):
    """Storage failures fail the request, not the process."""
    logger.opt(exception=exc).error(
        f"Storage error in {request.method} {request.url.path}: {exc}"
    )
    return JSONResponse(
        status_code=500,
        content={
            "detail": "Storage error",
            "message": str(exc) if settings.DEBUG else "The record store is unavailable"
        }
    )


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Global exception handler to catch and log all unhandled exceptions."""
    error_id = f"error-{time.time()}"
    logger.opt(exception=exc).error(
        f"Unhandled exception in {request.method} {request.url.path} ({error_id})"
    )
    return JSONResponse(
        status_code=500,
        content={
            "detail": "Internal server error occurred",
            "error_id": error_id,
            "message": str(exc) if settings.DEBUG else "Internal server error"
        }
    )


# Add startup and shutdown event handlers
@app.on_event("startup")
async def startup_event():
    """Open the record store and start the expiry sweeper."""
    logger.info(f"Starting {settings.APP_NAME} v{settings.APP_VERSION}")
    logger.info(f"Environment: {settings.ENVIRONMENT.value}")

    url_repository = URLRepository(settings.STORE_PATH)
    try:
        await url_repository.initialize()
    except RepositoryError as e:
        logger.critical(f"Record store could not be opened: {e}")
        raise
    app.state.url_repository = url_repository

    if settings.CLEANUP_ENABLED:
        logger.info(
            f"Expiring URLs after {settings.EXPIRATION_HOURS:g}h, "
            f"sweeping every {settings.CLEANUP_INTERVAL_MINUTES:g}min"
        )
        scheduler_service.start(url_repository)
    else:
        logger.info("Expiry sweeper is disabled in settings")


@app.on_event("shutdown")
async def shutdown_event():
    """Run cleanup tasks."""
    logger.info(f"Shutting down {settings.APP_NAME}")
    scheduler_service.shutdown()
