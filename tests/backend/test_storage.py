"""Tests for the blob store client."""

from __future__ import annotations

import json

import pytest

from promptpix.backend import BackendAPIError, BackendClient


@pytest.fixture
def storage(app_config, make_http_client):
    return BackendClient(app_config.backend, make_http_client()).storage


class TestStorageClient:
    """Tests for StorageClient."""

    @pytest.mark.asyncio
    async def test_list_buckets(self, storage):
        buckets = await storage.list_buckets()

        assert [bucket.id for bucket in buckets] == ["images"]
        assert buckets[0].public is True

    @pytest.mark.asyncio
    async def test_upload_sends_headers(self, storage, fake_backend):
        result = await storage.upload("images", "u1/a.png", b"data", "image/png", upsert=True, cache_control="3600")

        request = fake_backend.requests[-1]
        assert result["Key"] == "images/u1/a.png"
        assert request.headers["content-type"] == "image/png"
        assert request.headers["x-upsert"] == "true"
        assert request.headers["cache-control"] == "max-age=3600"
        assert fake_backend.objects["images"]["u1/a.png"] == b"data"

    @pytest.mark.asyncio
    async def test_upload_without_upsert_conflicts(self, storage):
        await storage.upload("images", "u1/a.png", b"one", "image/png")

        with pytest.raises(BackendAPIError) as exc_info:
            await storage.upload("images", "u1/a.png", b"two", "image/png")

        assert exc_info.value.status_code == 409

    @pytest.mark.asyncio
    async def test_list_missing_bucket(self, storage):
        with pytest.raises(BackendAPIError) as exc_info:
            await storage.list("nope")

        assert exc_info.value.message == "Bucket not found"

    @pytest.mark.asyncio
    async def test_remove(self, storage, fake_backend):
        await storage.upload("images", "u1/test.png", b"x", "image/png")

        removed = await storage.remove("images", ["u1/test.png"])

        assert removed == [{"name": "u1/test.png"}]
        assert fake_backend.objects["images"] == {}

    @pytest.mark.asyncio
    async def test_create_bucket_body(self, storage, fake_backend):
        await storage.create_bucket("avatars", public=True, allowed_mime_types=["image/png"], file_size_limit=1024)

        body = json.loads(fake_backend.requests[-1].content)
        assert body == {
            "id": "avatars",
            "name": "avatars",
            "public": True,
            "allowed_mime_types": ["image/png"],
            "file_size_limit": 1024,
        }

    def test_public_url_is_pure(self, storage, fake_backend):
        url = storage.get_public_url("images", "u1/123-abc.png")

        assert url == "https://test.supabase.co/storage/v1/object/public/images/u1/123-abc.png"
        assert fake_backend.requests == []
