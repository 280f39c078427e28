"""Tests for record store error handling."""

import json
from unittest.mock import patch

import pytest

from app.models.url import URLRecord
from app.repositories.base import JSONDocumentStore, StorageReadError, StorageWriteError
from tests.utils import create_test_url_data, random_url, read_store, write_store


@pytest.mark.repository
class TestStorageErrorHandling:
    """Tests for error handling in the record store."""

    @pytest.mark.asyncio
    async def test_corrupt_document(self, url_repository, store_path):
        store_path.write_text("{not json", encoding="utf-8")

        with pytest.raises(StorageReadError) as excinfo:
            await url_repository.load_all()

        assert str(store_path) in str(excinfo.value)

    @pytest.mark.asyncio
    @pytest.mark.parametrize("document", [[], {"urls": "nope"}, {"urls": [{"id": "x1"}]}])
    async def test_unexpected_document_shape(self, url_repository, store_path, document):
        store_path.write_text(json.dumps(document), encoding="utf-8")

        with pytest.raises(StorageReadError):
            await url_repository.load_all()

    @pytest.mark.asyncio
    async def test_write_failure_leaves_store_intact(self, url_repository, store_path):
        original = [create_test_url_data(url_id="original")]
        write_store(store_path, original)

        with patch("app.repositories.base.os.replace", side_effect=OSError("disk full")):
            with pytest.raises(StorageWriteError) as excinfo:
                await url_repository.append(URLRecord.create("newrecor", random_url()))

        assert "disk full" in str(excinfo.value)
        assert read_store(store_path) == {"urls": original}
        # No temporary files left behind
        assert [p.name for p in store_path.parent.iterdir()] == [store_path.name]

    def test_document_store_missing_file_returns_default(self, tmp_path):
        store = JSONDocumentStore(tmp_path / "absent.json", default_factory=lambda: {"urls": []})

        assert store.read() == {"urls": []}
        assert not store.exists()

    def test_document_store_creates_parent_directories(self, tmp_path):
        store = JSONDocumentStore(tmp_path / "nested" / "dir" / "db.json", default_factory=dict)

        store.write({"urls": []})

        assert store.read() == {"urls": []}
