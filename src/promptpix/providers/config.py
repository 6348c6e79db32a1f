"""Application configuration loading and validation."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from ..constants import BUCKET_ID

# Load .env file
load_dotenv()


class BackendSettings(BaseSettings):
    """Backend-as-a-service connection settings.

    Read from SUPABASE_URL and SUPABASE_ANON_KEY.
    """

    model_config = SettingsConfigDict(env_prefix="SUPABASE_", extra="ignore")

    url: str = ""
    anon_key: str = ""

    def is_configured(self) -> bool:
        """Check if both settings are present."""
        return bool(self.url and self.anon_key)

    @property
    def rest_url(self) -> str:
        return f"{self.url.rstrip('/')}/rest/v1"

    @property
    def auth_url(self) -> str:
        return f"{self.url.rstrip('/')}/auth/v1"

    @property
    def storage_url(self) -> str:
        return f"{self.url.rstrip('/')}/storage/v1"


class ImageProviderConfig(BaseModel):
    """Configuration for the image generation API."""

    model: str = "dall-e-3"
    base_url: str = "https://api.openai.com/v1"
    api_key: str | None = None
    api_key_env: str | None = "OPENAI_API_KEY"
    timeout: float | None = None

    def get_api_key(self) -> str | None:
        """Get API key from config or environment."""
        if self.api_key:
            return self.api_key
        if self.api_key_env:
            return os.getenv(self.api_key_env) or None
        return None


class AppConfig(BaseModel):
    """Full application configuration."""

    backend: BackendSettings = Field(default_factory=BackendSettings)
    image_provider: ImageProviderConfig = Field(default_factory=ImageProviderConfig)
    bucket_id: str = BUCKET_ID


def default_config_path() -> Path:
    """Default YAML location: config/promptpix.yaml under the working directory."""
    return Path.cwd() / "config" / "promptpix.yaml"


def load_app_config(config_path: Path | None = None) -> AppConfig:
    """Load configuration from YAML file, falling back to environment only."""
    if config_path is None:
        config_path = default_config_path()

    if not config_path.exists():
        # Environment-only configuration
        return AppConfig()

    with open(config_path, encoding="utf-8") as f:
        data: dict[str, Any] = yaml.safe_load(f) or {}

    backend_data = data.pop("backend", None) or {}
    return AppConfig(backend=BackendSettings(**backend_data), **data)
