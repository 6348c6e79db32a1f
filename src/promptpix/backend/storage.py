"""Blob store client: buckets, objects and public URLs."""

from __future__ import annotations

from typing import Any
from urllib.parse import quote

from pydantic import BaseModel, ConfigDict

from .http import BackendHTTP


class Bucket(BaseModel):
    """A storage bucket as listed by the backend."""

    model_config = ConfigDict(extra="ignore")

    id: str
    name: str
    public: bool = False
    owner: str | None = None
    file_size_limit: int | None = None
    allowed_mime_types: list[str] | None = None
    created_at: str | None = None
    updated_at: str | None = None


class StorageClient:
    """Thin client over the storage HTTP API."""

    def __init__(self, http: BackendHTTP):
        self._http = http

    @property
    def base_url(self) -> str:
        return self._http.settings.storage_url

    async def list_buckets(self) -> list[Bucket]:
        response = await self._http.request("GET", f"{self.base_url}/bucket")
        return [Bucket.model_validate(item) for item in response.json() or []]

    async def create_bucket(
        self,
        bucket_id: str,
        public: bool = True,
        allowed_mime_types: list[str] | None = None,
        file_size_limit: int | None = None,
    ) -> dict[str, Any]:
        """Create a bucket. Administrative path only."""
        body: dict[str, Any] = {"id": bucket_id, "name": bucket_id, "public": public}
        if allowed_mime_types is not None:
            body["allowed_mime_types"] = allowed_mime_types
        if file_size_limit is not None:
            body["file_size_limit"] = file_size_limit
        response = await self._http.request("POST", f"{self.base_url}/bucket", json=body)
        return response.json()

    async def list(self, bucket_id: str, prefix: str = "", limit: int = 100) -> list[dict[str, Any]]:
        """List objects under `prefix` in a bucket."""
        body = {
            "prefix": prefix,
            "limit": limit,
            "offset": 0,
            "sortBy": {"column": "name", "order": "asc"},
        }
        response = await self._http.request(
            "POST", f"{self.base_url}/object/list/{bucket_id}", json=body
        )
        return response.json() or []

    async def upload(
        self,
        bucket_id: str,
        path: str,
        data: bytes,
        content_type: str,
        upsert: bool = False,
        cache_control: str | None = None,
    ) -> dict[str, Any]:
        """Upload raw bytes under `path`.

        Returns:
            The backend's upload record (contains `Key`).
        """
        headers = {
            "Content-Type": content_type,
            "x-upsert": "true" if upsert else "false",
        }
        if cache_control:
            headers["Cache-Control"] = f"max-age={cache_control}"

        response = await self._http.request(
            "POST",
            f"{self.base_url}/object/{bucket_id}/{quote(path)}",
            content=data,
            headers=headers,
        )
        return response.json() if response.content else {}

    async def remove(self, bucket_id: str, paths: list[str]) -> list[dict[str, Any]]:
        response = await self._http.request(
            "DELETE", f"{self.base_url}/object/{bucket_id}", json={"prefixes": paths}
        )
        return response.json() if response.content else []

    def get_public_url(self, bucket_id: str, path: str) -> str:
        """Public retrieval URL; no request is made."""
        return f"{self.base_url}/object/public/{bucket_id}/{quote(path)}"
