"""Image generation provider for the OpenAI images API."""

from __future__ import annotations

import base64
import binascii
import logging
import time
from typing import Any, Awaitable, Callable, NoReturn

import httpx
from openai import APIError, APIStatusError, AsyncOpenAI

from ..constants import SUPPORTED_SIZES
from ..models import GenerationOptions
from .config import AppConfig, ImageProviderConfig, load_app_config

_logger = logging.getLogger("ai_calls")

# Type for AI event callback
AIEventCallback = Callable[[dict[str, Any]], Awaitable[None]] | None

INVALID_RESPONSE_MESSAGE = "Invalid response format from image generation API"


class ImageGenerationError(Exception):
    """The image API rejected the request or answered in an unexpected shape."""

    def __init__(self, reason: str, status_code: int | None = None):
        super().__init__(reason)
        self.reason = reason
        self.status_code = status_code


class MissingAPIKeyError(ImageGenerationError):
    """No API key is configured for the image API."""

    def __init__(self, env_var: str | None):
        super().__init__(f"OpenAI API key is not configured ({env_var or 'api_key'})")
        self.env_var = env_var


def to_data_url(b64_image: str) -> str:
    """Wrap a base64 PNG payload as a data URL."""
    return f"data:image/png;base64,{b64_image}"


def decode_image_payload(payload: str) -> bytes:
    """Decode a base64 payload, with or without a data URL prefix.

    Raises:
        ValueError: If the payload is not valid base64.
    """
    if payload.startswith("data:"):
        header, _, payload = payload.partition(",")
        if ";base64" not in header:
            raise ValueError("Data URL is not base64 encoded")
    try:
        return base64.b64decode(payload, validate=True)
    except binascii.Error as e:
        raise ValueError(f"Malformed base64 image data: {e}") from e


class ImageProvider:
    """Text-to-image client.

    One HTTP attempt per call, no retry. Quality and style are accepted
    for the UI but not sent: dall-e-3 generation here only takes the size.

    Usage:
        provider = ImageProvider(config)
        b64_png = await provider.generate_base64(
            "A red balloon",
            GenerationOptions(size="1024x1024"),
        )
        await provider.close()
    """

    def __init__(
        self,
        config: AppConfig | ImageProviderConfig | None = None,
        http_client: httpx.AsyncClient | None = None,
        event_callback: AIEventCallback = None,
    ):
        """Initialize image provider.

        Args:
            config: App or provider configuration. If None, loads the default.
            http_client: Shared HTTP client. When None, one is created lazily
                and owned by this provider.
            event_callback: Optional callback for AI events (for progress tracking).
        """
        if config is None:
            config = load_app_config()
        if isinstance(config, AppConfig):
            config = config.image_provider
        self.config: ImageProviderConfig = config
        self._http_client = http_client
        self._owns_client = http_client is None
        self._event_callback = event_callback
        self._total_calls = 0

    async def _emit_event(self, event: dict[str, Any]) -> None:
        """Emit an AI event if callback is set."""
        if self._event_callback:
            await self._event_callback(event)

    async def _get_http_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if self._http_client is None:
            self._http_client = httpx.AsyncClient(timeout=self.config.timeout)
        return self._http_client

    async def close(self) -> None:
        """Close HTTP client if this provider created it."""
        if self._http_client and self._owns_client:
            await self._http_client.aclose()
            self._http_client = None

    @staticmethod
    def validate_request(prompt: str, options: GenerationOptions) -> str:
        """Check prompt and size; returns the trimmed prompt."""
        trimmed = prompt.strip() if prompt else ""
        if not trimmed:
            raise ValueError("Prompt must not be empty")
        if options.size not in SUPPORTED_SIZES:
            raise ValueError(
                f"Unsupported image size: {options.size} "
                f"(supported: {', '.join(sorted(SUPPORTED_SIZES))})"
            )
        return trimmed

    def build_request_body(self, prompt: str, options: GenerationOptions) -> dict[str, Any]:
        return {
            "model": self.config.model,
            "prompt": prompt,
            "n": 1,
            "response_format": "b64_json",
            "size": options.size,
        }

    async def generate_base64(self, prompt: str, options: GenerationOptions) -> str:
        """Generate an image and return its base64 PNG payload.

        Args:
            prompt: Text description of the image; sent trimmed.
            options: Size, quality and style.

        Returns:
            Base64-encoded PNG.

        Raises:
            ValueError: Empty prompt or unsupported size.
            MissingAPIKeyError: No API key configured.
            ImageGenerationError: Non-2xx response or unexpected payload.
        """
        prompt = self.validate_request(prompt, options)

        api_key = self.config.get_api_key()
        if not api_key:
            _logger.error("OpenAI API key is not configured")
            raise MissingAPIKeyError(self.config.api_key_env)

        _logger.info(
            f"IMAGE_CALL | model:{self.config.model} | size:{options.size} | "
            f"quality:{options.quality} | style:{options.style} | prompt:{prompt[:200]}"
        )
        await self._emit_event({
            "type": "image_call",
            "model": self.config.model,
            "prompt_preview": prompt[:200],
            "size": options.size,
        })

        start_time = time.time()
        client = AsyncOpenAI(
            api_key=api_key,
            base_url=self.config.base_url,
            max_retries=0,
            timeout=self.config.timeout,
            http_client=await self._get_http_client(),
        )
        try:
            response = await client.images.generate(**self.build_request_body(prompt, options))
        except APIStatusError as e:
            await self._fail(self._error_reason(e), e.status_code)
        except APIError as e:
            await self._fail(f"Request to image generation API failed: {e}")

        data = getattr(response, "data", None) or []
        b64_image = getattr(data[0], "b64_json", None) if data else None
        if not b64_image or not isinstance(b64_image, str):
            await self._fail(INVALID_RESPONSE_MESSAGE)

        duration = time.time() - start_time
        self._total_calls += 1
        _logger.info(f"IMAGE_RESPONSE | duration:{duration:.2f}s | bytes_b64:{len(b64_image)}")
        await self._emit_event({
            "type": "image_response",
            "model": self.config.model,
            "duration_seconds": duration,
            "total_calls": self._total_calls,
        })
        return b64_image

    async def generate(self, prompt: str, options: GenerationOptions) -> bytes:
        """Generate an image and return raw PNG bytes."""
        b64_image = await self.generate_base64(prompt, options)
        try:
            return decode_image_payload(b64_image)
        except ValueError as e:
            raise ImageGenerationError(str(e)) from e

    @staticmethod
    def _error_reason(error: APIStatusError) -> str:
        """Upstream error message, or the HTTP status when there is none."""
        body = error.body
        if isinstance(body, dict) and body.get("message"):
            return str(body["message"])
        response = error.response
        return f"API error: {response.status_code} {response.reason_phrase}".strip()

    async def _fail(self, reason: str, status_code: int | None = None) -> NoReturn:
        _logger.warning(f"IMAGE_ERROR | status:{status_code} | {reason}")
        await self._emit_event({
            "type": "image_error",
            "model": self.config.model,
            "error": reason[:50],
        })
        raise ImageGenerationError(reason, status_code)
