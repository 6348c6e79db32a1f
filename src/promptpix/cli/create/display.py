"""Display functions for create commands - pure functions for Rich output."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.panel import Panel

from ...constants import PROMPT_SUGGESTIONS, PROMPT_TIPS
from ...models import GenerationOptions, Post
from ...services.results import Failure


def show_generate_config(console: Console, prompt: str, options: GenerationOptions, caption: Optional[str] = None) -> None:
    """Display generation configuration panel."""
    caption_info = f"\nCaption: [green]{caption}[/green]" if caption else ""
    console.print(Panel(
        f"Prompt: [cyan]{prompt}[/cyan]\n"
        f"Size: [yellow]{options.size}[/yellow]\n"
        f"Quality: [yellow]{options.quality}[/yellow]\n"
        f"Style: [yellow]{options.style}[/yellow]"
        f"{caption_info}",
        title="Image Generation",
    ))


def show_preview_result(console: Console, size_bytes: int, saved_to: Optional[Path] = None) -> None:
    saved_info = f"\n[bold]Saved:[/] {saved_to}" if saved_to else "\n[dim]Use --save to keep it, or 'promptpix create' to post it.[/dim]"
    console.print(Panel(
        f"[bold green]Image generated![/bold green]\n\n"
        f"[bold]Size:[/] {size_bytes:,} bytes"
        f"{saved_info}",
        title="Preview",
        border_style="green",
    ))


def show_post_created(console: Console, post: Post) -> None:
    """Display the published post."""
    author = post.profile.username if post.profile else post.user_id
    caption_info = f"\n[bold]Caption:[/] {post.caption}" if post.caption else ""
    console.print(Panel(
        f"[bold green]Posted![/bold green]\n\n"
        f"[bold]Post ID:[/] {post.id}\n"
        f"[bold]Author:[/] {author}\n"
        f"[bold]Prompt:[/] {post.prompt}"
        f"{caption_info}\n"
        f"[bold]Image:[/] {post.image_url}",
        title="Complete",
        border_style="green",
    ))


def show_create_error(console: Console, failure: Failure) -> None:
    """Display a failed workflow with the stage it stopped at."""
    console.print(f"\n[red]Error ({failure.stage}): {failure.error}[/red]")
    if failure.details:
        for key, value in failure.details.items():
            console.print(f"  [dim]{key}:[/dim] [yellow]{value}[/yellow]")


def show_tips(console: Console) -> None:
    tips = "\n".join(f"  • {tip}" for tip in PROMPT_TIPS)
    suggestions = "\n".join(f"  • {suggestion}" for suggestion in PROMPT_SUGGESTIONS)
    console.print(Panel(
        f"[bold]Tips for better results[/bold]\n{tips}\n\n"
        f"[bold]Try one of these[/bold]\n{suggestions}",
        title="Prompt Tips",
    ))
