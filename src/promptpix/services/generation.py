"""Image generation service - provider errors mapped to tagged results."""

from __future__ import annotations

import logging

from ..models import GenerationOptions
from ..providers.image import (
    ImageGenerationError,
    MissingAPIKeyError,
    decode_image_payload,
    to_data_url,
)
from .base import ContextService
from .results import (
    AuthRequired,
    ConfigurationError,
    Failure,
    GenerationFailure,
    Result,
    Success,
)

_logger = logging.getLogger("ai_calls")


class ImageGenerationService(ContextService):
    """Generate images for the signed-in user.

    Returns either the image or exactly one failure, never both.
    """

    async def generate_base64(self, prompt: str, options: GenerationOptions) -> Result[str]:
        """Generate an image and return the base64 PNG payload."""
        if self.user is None:
            return AuthRequired("User not authenticated")

        try:
            b64_image = await self.ctx.image_provider.generate_base64(prompt, options)
        except MissingAPIKeyError as e:
            return ConfigurationError(e.reason, {"env_var": e.env_var})
        except ImageGenerationError as e:
            _logger.error(f"Generation error | status:{e.status_code} | {e.reason} | prompt:{prompt[:200]}")
            return GenerationFailure(e.reason, {"status_code": e.status_code})
        except ValueError as e:
            return Failure(str(e))

        return Success(b64_image)

    async def generate(self, prompt: str, options: GenerationOptions) -> Result[bytes]:
        """Generate an image and return raw PNG bytes."""
        result = await self.generate_base64(prompt, options)
        if isinstance(result, Failure):
            return result
        try:
            image_bytes = decode_image_payload(result.value)
        except ValueError as e:
            return GenerationFailure(str(e))
        if not image_bytes:
            return GenerationFailure("Image generation returned an empty image")
        return Success(image_bytes)

    async def preview(self, prompt: str, options: GenerationOptions) -> Result[str]:
        """Generate an image for preview as a data URL; nothing is stored."""
        result = await self.generate_base64(prompt, options)
        if isinstance(result, Failure):
            return result
        return Success(to_data_url(result.value))
