"""Pure validation functions for CLI arguments."""

from __future__ import annotations

from ...constants import ImageQuality, ImageSize, ImageStyle
from ...models import GenerationOptions
from ...services.results import Failure, Result, Success

MIN_PASSWORD_LENGTH = 6


def validate_prompt(prompt: str) -> Result[str]:
    """Validate an image prompt is not blank.

    Args:
        prompt: Raw prompt text

    Returns:
        Result containing the trimmed prompt or failure
    """
    prompt = prompt.strip()
    if not prompt:
        return Failure("Prompt must not be empty")
    return Success(prompt)


def validate_generation_options(size: str, quality: str, style: str) -> Result[GenerationOptions]:
    """Validate size, quality and style choices.

    Returns:
        Result containing GenerationOptions or failure
    """
    valid_sizes = [s.value for s in ImageSize]
    if size not in valid_sizes:
        return Failure(f"Invalid size: {size}", {"valid_sizes": valid_sizes})

    valid_qualities = [q.value for q in ImageQuality]
    if quality not in valid_qualities:
        return Failure(f"Invalid quality: {quality}", {"valid_qualities": valid_qualities})

    valid_styles = [s.value for s in ImageStyle]
    if style not in valid_styles:
        return Failure(f"Invalid style: {style}", {"valid_styles": valid_styles})

    return Success(GenerationOptions(
        size=ImageSize(size),
        quality=ImageQuality(quality),
        style=ImageStyle(style),
    ))


def validate_credentials(email: str, password: str) -> Result[tuple[str, str]]:
    """Validate an email/password pair before sending it to the backend."""
    email = email.strip()
    if "@" not in email or email.startswith("@") or email.endswith("@"):
        return Failure(f"Invalid email address: {email}")
    if len(password) < MIN_PASSWORD_LENGTH:
        return Failure(
            f"Password too short (minimum {MIN_PASSWORD_LENGTH} characters)",
            {"min_length": MIN_PASSWORD_LENGTH},
        )
    return Success((email, password))
