"""Configuration and the image generation provider."""

from .config import AppConfig, BackendSettings, ImageProviderConfig, load_app_config
from .image import (
    ImageGenerationError,
    ImageProvider,
    MissingAPIKeyError,
    decode_image_payload,
    to_data_url,
)

__all__ = [
    "AppConfig",
    "BackendSettings",
    "ImageProviderConfig",
    "load_app_config",
    "ImageProvider",
    "ImageGenerationError",
    "MissingAPIKeyError",
    "decode_image_payload",
    "to_data_url",
]
