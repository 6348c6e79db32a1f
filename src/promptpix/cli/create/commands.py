"""Create CLI commands - thin wrappers orchestrating params, validation, display, and services."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer

from ...constants import ImageQuality, ImageSize, ImageStyle
from ...models import GenerationOptions
from ...services import ImageGenerationService, PostCreationService
from ...services.results import Failure
from ...session import AppContext
from ...utils import generate_filename
from ..core.console import console
from ..core.context import run_in_context
from ..core.validators import validate_generation_options, validate_prompt
from .display import (
    show_create_error,
    show_generate_config,
    show_post_created,
    show_preview_result,
    show_tips,
)
from .params import GenerateParams


def _validate(params: GenerateParams) -> tuple[str, GenerationOptions]:
    prompt = validate_prompt(params.prompt)
    if isinstance(prompt, Failure):
        show_create_error(console, prompt)
        raise typer.Exit(1)

    options = validate_generation_options(params.size, params.quality, params.style)
    if isinstance(options, Failure):
        show_create_error(console, options)
        raise typer.Exit(1)

    return prompt.value, options.value


def generate(
    prompt: str = typer.Argument(..., help="What to draw"),
    size: str = typer.Option(ImageSize.SQUARE.value, "--size", help="1024x1024, 1792x1024 or 1024x1792"),
    quality: str = typer.Option(ImageQuality.STANDARD.value, "--quality", "-q", help="standard or hd"),
    style: str = typer.Option(ImageStyle.VIVID.value, "--style", help="vivid or natural"),
    save: bool = typer.Option(False, "--save", "-s", help="Save the image to a file"),
    output_dir: Optional[Path] = typer.Option(None, "--output", "-o", help="Directory for --save"),
) -> None:
    """Generate an image preview without posting it."""
    params = GenerateParams.from_cli(prompt, size, quality, style, save=save, output_dir=output_dir)
    final_prompt, options = _validate(params)
    show_generate_config(console, final_prompt, options)

    async def _generate(ctx: AppContext) -> None:
        with console.status("Generating image..."):
            result = await ImageGenerationService(ctx).generate(final_prompt, options)
        if isinstance(result, Failure):
            show_create_error(console, result)
            raise typer.Exit(1)

        saved_to = None
        if params.save:
            params.output_dir.mkdir(parents=True, exist_ok=True)
            saved_to = params.output_dir / generate_filename(final_prompt, extension="png")
            saved_to.write_bytes(result.value)
        show_preview_result(console, len(result.value), saved_to)

    run_in_context(_generate, require_user=True)


def create(
    prompt: str = typer.Argument(..., help="What to draw"),
    caption: Optional[str] = typer.Option(None, "--caption", "-c", help="Caption for the post"),
    size: str = typer.Option(ImageSize.SQUARE.value, "--size", help="1024x1024, 1792x1024 or 1024x1792"),
    quality: str = typer.Option(ImageQuality.STANDARD.value, "--quality", "-q", help="standard or hd"),
    style: str = typer.Option(ImageStyle.VIVID.value, "--style", help="vivid or natural"),
) -> None:
    """Generate an image and publish it as a post."""
    params = GenerateParams.from_cli(prompt, size, quality, style, caption=caption)
    final_prompt, options = _validate(params)
    show_generate_config(console, final_prompt, options, params.caption)

    async def _create(ctx: AppContext) -> None:
        with console.status("Generating and posting..."):
            result = await PostCreationService(ctx).generate_and_save(final_prompt, options, params.caption)
        if isinstance(result, Failure):
            show_create_error(console, result)
            raise typer.Exit(1)
        show_post_created(console, result.value)

    run_in_context(_create, require_user=True)


def tips() -> None:
    """Show prompt writing tips and suggestions."""
    show_tips(console)
