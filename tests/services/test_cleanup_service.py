"""Tests for the expiry sweep."""

from datetime import timedelta

import pytest

from app.services.cleanup import CleanupService
from app.services.exceptions import ExpiredURLCleanupError
from tests.utils import create_test_url_data, hours_ago, read_store, write_store

MISSING = object()


@pytest.mark.service
class TestCleanupService:

    @pytest.mark.asyncio
    async def test_cleanup_removes_only_expired(self, cleanup_service, store_path):
        fresh = create_test_url_data(url_id="fresh001", added_at=hours_ago(2))
        write_store(store_path, [
            create_test_url_data(url_id="stale001", added_at=hours_ago(3.5)),
            fresh,
            create_test_url_data(url_id="stale002", added_at=hours_ago(48)),
        ])

        stats = await cleanup_service.cleanup_expired_urls()

        assert stats["processed"] == 3
        assert stats["deleted"] == 2
        assert stats["remaining"] == 1
        assert stats["execution_time"] >= 0
        # Survivors are left exactly as they were
        assert read_store(store_path) == {"urls": [fresh]}

    @pytest.mark.asyncio
    async def test_cleanup_drops_malformed_timestamps(self, cleanup_service, store_path):
        write_store(store_path, [
            create_test_url_data(url_id="broken01", added_at="not-a-timestamp"),
            create_test_url_data(url_id="fresh001"),
        ])

        stats = await cleanup_service.cleanup_expired_urls()

        assert stats["deleted"] == 1
        assert [item["id"] for item in read_store(store_path)["urls"]] == ["fresh001"]

    @pytest.mark.asyncio
    @pytest.mark.parametrize("added_at", [12345, None, MISSING], ids=["number", "null", "missing"])
    async def test_cleanup_drops_non_string_timestamps(self, cleanup_service, store_path, added_at):
        broken = {"id": "broken01", "link": "https://example.com/broken"}
        if added_at is not MISSING:
            broken["addedAt"] = added_at
        write_store(store_path, [broken, create_test_url_data(url_id="fresh001")])

        stats = await cleanup_service.cleanup_expired_urls()

        assert stats["processed"] == 2
        assert stats["deleted"] == 1
        assert [item["id"] for item in read_store(store_path)["urls"]] == ["fresh001"]

    @pytest.mark.asyncio
    async def test_cleanup_on_empty_store(self, cleanup_service, store_path):
        stats = await cleanup_service.cleanup_expired_urls()

        assert stats["processed"] == 0
        assert stats["deleted"] == 0
        assert read_store(store_path) == {"urls": []}

    @pytest.mark.asyncio
    async def test_custom_expiration_window(self, url_repository, store_path):
        write_store(store_path, [
            create_test_url_data(url_id="tenmins1", added_at=hours_ago(10 / 60)),
            create_test_url_data(url_id="twomins1", added_at=hours_ago(2 / 60)),
        ])
        service = CleanupService(url_repository, expiration_window=timedelta(minutes=5))

        stats = await service.cleanup_expired_urls()

        assert stats["deleted"] == 1
        assert [item["id"] for item in read_store(store_path)["urls"]] == ["twomins1"]

    @pytest.mark.asyncio
    async def test_cleanup_wraps_storage_errors(self, cleanup_service, store_path):
        store_path.write_text("][", encoding="utf-8")

        with pytest.raises(ExpiredURLCleanupError):
            await cleanup_service.cleanup_expired_urls()
