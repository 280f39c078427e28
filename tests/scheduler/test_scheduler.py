"""Tests for the expiry scheduler."""

import asyncio

import pytest

from app.core.config import settings
from app.scheduler.scheduler import (
    CLEANUP_JOB_ID,
    STARTUP_CLEANUP_JOB_ID,
    SchedulerService,
    cleanup_expired_urls_job,
)
from tests.utils import create_test_url_data, hours_ago, read_store, write_store


@pytest.mark.asyncio
async def test_cleanup_job_returns_stats(url_repository, store_path):
    write_store(store_path, [create_test_url_data(added_at=hours_ago(4))])

    result = await cleanup_expired_urls_job(url_repository)

    assert result["deleted"] == 1
    assert read_store(store_path) == {"urls": []}


@pytest.mark.asyncio
async def test_cleanup_job_reports_errors_instead_of_raising(url_repository, store_path):
    store_path.write_text("not json", encoding="utf-8")

    result = await cleanup_expired_urls_job(url_repository)

    assert result["status"] == "error"
    assert "Failed to cleanup expired URLs" in result["error"]


@pytest.mark.asyncio
async def test_scheduler_sweeps_on_startup(url_repository, store_path, monkeypatch):
    monkeypatch.setattr(settings, "CLEANUP_START_ON_STARTUP", True)
    fresh = create_test_url_data(url_id="fresh001", added_at=hours_ago(1))
    write_store(store_path, [create_test_url_data(url_id="stale001", added_at=hours_ago(4)), fresh])
    service = SchedulerService()

    service.start(url_repository)
    try:
        status = service.get_status()
        assert status["running"] is True
        assert [job["id"] for job in status["jobs"]] == [CLEANUP_JOB_ID]
        assert CLEANUP_JOB_ID in {job["job_id"] for job in status["scheduler_jobs_status"]}

        for _ in range(100):
            if read_store(store_path)["urls"] == [fresh]:
                break
            await asyncio.sleep(0.02)
        assert read_store(store_path)["urls"] == [fresh]
    finally:
        service.shutdown()

    assert service.get_status()["running"] is False


@pytest.mark.asyncio
async def test_scheduler_without_startup_sweep(url_repository, store_path, monkeypatch):
    monkeypatch.setattr(settings, "CLEANUP_START_ON_STARTUP", False)
    service = SchedulerService()

    service.start(url_repository)
    try:
        job_ids = {job["job_id"] for job in service.get_status()["scheduler_jobs_status"]}
        assert job_ids == {CLEANUP_JOB_ID}
        assert STARTUP_CLEANUP_JOB_ID not in job_ids
    finally:
        service.shutdown()


def test_shutdown_when_not_running_is_noop():
    service = SchedulerService()

    service.shutdown()

    assert service.get_status() == {"running": False, "jobs": [], "scheduler_jobs_status": []}
