"""Test fixtures for the URL shortener application."""

import os

# Must be set before the application modules build their settings
os.environ["ENVIRONMENT"] = "testing"
os.environ["LOG_FILE_ENABLED"] = "false"
os.environ["LOG_LEVEL"] = "WARNING"

from pathlib import Path
from typing import Generator

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from app.core.config import settings
from app.main import app as main_app
from app.repositories.url_repository import URLRepository
from app.services.cleanup import CleanupService
from app.services.shortener import ShortenedURLService


@pytest.fixture
def store_path(tmp_path, monkeypatch) -> Path:
    """Point the application at a fresh record store file."""
    path = tmp_path / "db.json"
    monkeypatch.setattr(settings, "STORE_PATH", path)
    return path


@pytest.fixture
def url_repository(store_path) -> URLRepository:
    """Return a repository on the test store."""
    return URLRepository(store_path)


@pytest.fixture
def shortener_service(url_repository) -> ShortenedURLService:
    return ShortenedURLService(url_repository=url_repository)


@pytest.fixture
def cleanup_service(url_repository) -> CleanupService:
    return CleanupService(url_repository=url_repository)


@pytest.fixture
def test_app(store_path, monkeypatch) -> FastAPI:
    """Application with the background sweeper switched off."""
    monkeypatch.setattr(settings, "CLEANUP_ENABLED", False)
    return main_app


@pytest.fixture
def client(test_app) -> Generator[TestClient, None, None]:
    """Return FastAPI TestClient instance."""
    with TestClient(test_app) as test_client:
        yield test_client
