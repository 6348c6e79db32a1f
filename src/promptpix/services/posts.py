"""Post creation: generated image to stored blob to published post row.

Steps run strictly in order, each depending on the previous one:

    profile ensure -> storage preflight -> decode -> upload -> public URL -> insert

The first failing step ends the workflow and its failure is returned,
typed by stage. Nothing is compensated: an image uploaded before a failed
insert stays in the bucket (logged as orphaned).
"""

from __future__ import annotations

import logging
import secrets
import string
import time

from ..backend import BackendAPIError
from ..constants import UPLOAD_CACHE_CONTROL, UPLOAD_CONTENT_TYPE
from ..models import GenerationOptions, Post
from ..providers.image import decode_image_payload
from ..session import AppContext
from .base import ContextService
from .generation import ImageGenerationService
from .profiles import ProfileService
from .results import (
    AuthRequired,
    DecodeFailure,
    Failure,
    PersistFailure,
    Result,
    Success,
    UploadFailure,
)
from .storage_check import StorageDiagnostics

_logger = logging.getLogger("services")

POST_WITH_PROFILE = "*, profile:profiles!posts_user_id_fkey(*)"

_BASE36 = string.digits + string.ascii_lowercase


def build_object_key(user_id: str, now_ms: int | None = None, suffix: str | None = None) -> str:
    """`<user_id>/<epoch ms>-<random base36>.png`, unique per call."""
    if now_ms is None:
        now_ms = int(time.time() * 1000)
    if suffix is None:
        suffix = "".join(secrets.choice(_BASE36) for _ in range(6))
    return f"{user_id}/{now_ms}-{suffix}.png"


def normalize_caption(caption: str | None) -> str | None:
    """Trimmed caption, or None when blank."""
    if caption is None:
        return None
    return caption.strip() or None


class PostCreationService(ContextService):
    """Turns a generated image into a persisted, publicly viewable post."""

    def __init__(
        self,
        ctx: AppContext,
        generation: ImageGenerationService | None = None,
        profiles: ProfileService | None = None,
        storage: StorageDiagnostics | None = None,
    ):
        super().__init__(ctx)
        self.generation = generation or ImageGenerationService(ctx)
        self.profiles = profiles or ProfileService(ctx)
        self.storage = storage or StorageDiagnostics(ctx)

    async def save_image_post(
        self,
        image_payload: str,
        prompt: str,
        caption: str | None = None,
    ) -> Result[Post]:
        """Store a generated image and publish it as a post.

        Args:
            image_payload: Base64 PNG, optionally as a data URL.
            prompt: Prompt the image was generated from.
            caption: Optional caption; blank becomes None.

        Returns:
            Success with the post (profile embedded), or the failure of
            the first step that failed.
        """
        user = self.user
        if user is None:
            return AuthRequired("User not authenticated")

        # 1. Profile ensure
        profile_result = await self.profiles.ensure_profile()
        if isinstance(profile_result, Failure):
            return profile_result

        # 2. Storage preflight
        storage_result = await self.storage.preflight()
        if isinstance(storage_result, Failure):
            return storage_result

        # 3. Decode
        try:
            image_bytes = decode_image_payload(image_payload)
        except ValueError as e:
            _logger.error(f"Base64 conversion error: {e}")
            return DecodeFailure("Failed to convert image data", {"reason": str(e)})
        if not image_bytes:
            _logger.error("Base64 conversion error: empty image payload")
            return DecodeFailure("Failed to convert image data", {"reason": "empty image payload"})

        # 4. Upload
        bucket_id = self.ctx.bucket_id
        object_key = build_object_key(user.id)
        _logger.info(
            f"Uploading image | bucket:{bucket_id} | key:{object_key} | "
            f"content_type:{UPLOAD_CONTENT_TYPE} | size:{len(image_bytes)}"
        )
        try:
            upload_data = await self.backend.storage.upload(
                bucket_id,
                object_key,
                image_bytes,
                UPLOAD_CONTENT_TYPE,
                upsert=True,
                cache_control=UPLOAD_CACHE_CONTROL,
            )
        except BackendAPIError as e:
            _logger.error(f"Upload error: {e}")
            return UploadFailure(f"Failed to upload image: {e.message}", {"key": object_key})

        if not upload_data:
            return UploadFailure("Upload succeeded but no data returned", {"key": object_key})

        # 5. Public URL
        public_url = self.backend.storage.get_public_url(bucket_id, object_key)
        _logger.info(f"Generated public URL: {public_url}")

        # 6. Insert
        row = {
            "user_id": user.id,
            "image_url": public_url,
            "prompt": prompt.strip(),
            "caption": normalize_caption(caption),
        }
        try:
            response = await self.backend.table("posts").insert(row).select(POST_WITH_PROFILE).single().execute()
        except BackendAPIError as e:
            _logger.error(f"Database error: {e} | orphaned object left in storage: {bucket_id}/{object_key}")
            return PersistFailure(
                f"Failed to save post to database: {e.message}",
                {"orphaned_object": f"{bucket_id}/{object_key}"},
            )

        post = Post.model_validate(response.data)
        _logger.info(f"Post saved successfully: {post.id}")
        return Success(post)

    async def generate_and_save(
        self,
        prompt: str,
        options: GenerationOptions,
        caption: str | None = None,
    ) -> Result[Post]:
        """Generate an image, then store and publish it.

        A generation failure returns before any storage or database write.
        """
        _logger.info(
            f"Starting image generation process | size:{options.size} | "
            f"quality:{options.quality} | style:{options.style} | prompt:{prompt[:200]}"
        )
        generated = await self.generation.generate_base64(prompt, options)
        if isinstance(generated, Failure):
            return generated

        return await self.save_image_post(generated.value, prompt, caption)
