"""Storage preflight for the write path, and the bucket diagnostic flow."""

from __future__ import annotations

import io
import logging
from dataclasses import dataclass, field

from PIL import Image

from ..backend import BackendAPIError, Bucket
from ..constants import BUCKET_ALLOWED_MIME_TYPES, BUCKET_FILE_SIZE_LIMIT, UPLOAD_CONTENT_TYPE
from .base import ContextService
from .results import AuthRequired, Failure, Result, StorageUnavailable, Success

_logger = logging.getLogger("services")


@dataclass
class StorageReport:
    """Outcome of a storage check."""

    buckets: list[Bucket] = field(default_factory=list)
    bucket_found: bool = False
    accessible: bool = False
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.bucket_found and self.accessible and self.error is None

    @property
    def bucket_missing(self) -> bool:
        return self.error is not None and "not found" in self.error


def render_test_png() -> bytes:
    """A 1x1 fully transparent PNG."""
    image = Image.new("RGBA", (1, 1), (0, 0, 0, 0))
    output = io.BytesIO()
    image.save(output, format="PNG")
    return output.getvalue()


class StorageDiagnostics(ContextService):
    """Checks the image bucket; can create it administratively."""

    async def preflight(self) -> Result[list[Bucket]]:
        """Verify the bucket exists and can be listed. Never creates it."""
        try:
            buckets = await self.backend.storage.list_buckets()
        except BackendAPIError as e:
            _logger.error(f"Storage access error: {e}")
            return StorageUnavailable(f"Storage access error: {e.message}")

        failure = await self._verify_bucket(buckets)
        if failure is not None:
            return failure
        return Success(buckets)

    async def _verify_bucket(self, buckets: list[Bucket]) -> StorageUnavailable | None:
        bucket_id = self.ctx.bucket_id

        if not buckets:
            return StorageUnavailable("No storage buckets available")

        if not any(bucket.id == bucket_id for bucket in buckets):
            _logger.error(f"Storage bucket '{bucket_id}' not found")
            return StorageUnavailable(f"Storage bucket '{bucket_id}' not found", {"bucket": bucket_id})

        try:
            await self.backend.storage.list(bucket_id)
        except BackendAPIError as e:
            _logger.error(f"Cannot access storage bucket: {e}")
            return StorageUnavailable(f"Cannot access storage bucket: {e.message}", {"bucket": bucket_id})

        return None

    async def check(self) -> StorageReport:
        """Inspect storage and report what is available."""
        report = StorageReport()
        try:
            report.buckets = await self.backend.storage.list_buckets()
        except BackendAPIError as e:
            report.error = f"Storage access error: {e.message}"
            return report

        report.bucket_found = any(bucket.id == self.ctx.bucket_id for bucket in report.buckets)
        failure = await self._verify_bucket(report.buckets)
        if failure is not None:
            report.error = failure.error
            return report

        report.accessible = True
        return report

    async def create_bucket(self) -> StorageReport:
        """Create the public image bucket, then re-check."""
        bucket_id = self.ctx.bucket_id
        _logger.info(f"Creating bucket {bucket_id}")
        try:
            await self.backend.storage.create_bucket(
                bucket_id,
                public=True,
                allowed_mime_types=list(BUCKET_ALLOWED_MIME_TYPES),
                file_size_limit=BUCKET_FILE_SIZE_LIMIT,
            )
        except BackendAPIError as e:
            _logger.error(f"Bucket creation error: {e}")
            return StorageReport(error=f"Failed to create bucket: {e.message}")
        return await self.check()

    async def test_access(self) -> Result[str]:
        """Upload then delete a tiny PNG under the user's folder."""
        user = self.user
        if user is None:
            return AuthRequired("Must be logged in to test bucket access")

        bucket_id = self.ctx.bucket_id
        test_path = f"{user.id}/test.png"
        storage = self.backend.storage

        try:
            await storage.upload(bucket_id, test_path, render_test_png(), UPLOAD_CONTENT_TYPE, upsert=True)
            await storage.remove(bucket_id, [test_path])
        except BackendAPIError as e:
            _logger.error(f"Bucket test error: {e}")
            return Failure(f"Failed to test bucket access: {e.message}")

        return Success("Successfully tested bucket access (write and delete)")
