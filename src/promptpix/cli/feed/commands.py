"""Feed CLI commands - home, news, profiles, likes, comments and downloads."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import httpx
import typer

from ...constants import NEWS_FEED_LIMIT
from ...services import CommentService, FeedService, LikeService
from ...services.results import Failure
from ...session import AppContext
from ...utils import download_image, generate_filename
from ..core.console import console, print_error, print_info, print_warning
from ..core.context import run_in_context
from .display import (
    show_comment_saved,
    show_comments,
    show_download_result,
    show_home,
    show_like_state,
    show_nav,
    show_posts_table,
    show_profile,
)


def home() -> None:
    """Show your profile, stats and recent creations."""

    async def _home(ctx: AppContext) -> None:
        result = await FeedService(ctx).home()
        if isinstance(result, Failure):
            print_error(result.error, result.details)
            raise typer.Exit(1)
        show_nav(console, "home")
        show_home(console, result.value)

    run_in_context(_home, require_user=True)


def news(
    limit: int = typer.Option(NEWS_FEED_LIMIT, "--limit", "-n", min=1, help="Number of posts"),
) -> None:
    """Show the newest posts from everyone."""

    async def _news(ctx: AppContext) -> None:
        posts = await FeedService(ctx).news_feed(limit, with_like_status=ctx.user is not None)
        show_nav(console, "news")
        show_posts_table(console, posts, "News Feed")

    run_in_context(_news)


def profile(
    user_id: Optional[str] = typer.Argument(None, help="User ID (default: you)"),
) -> None:
    """Show a profile and all of its posts."""

    async def _profile(ctx: AppContext) -> None:
        feed = FeedService(ctx)
        result = await feed.get_profile(user_id)
        if isinstance(result, Failure):
            print_error(result.error, result.details)
            raise typer.Exit(1)
        posts = await feed.profile_feed(result.value.id, with_like_status=True)
        show_nav(console, "profile")
        show_profile(console, result.value)
        show_posts_table(console, posts, "Posts")

    run_in_context(_profile, require_user=user_id is None)


def _set_like(post_id: str, liked: bool) -> None:
    async def _toggle(ctx: AppContext) -> None:
        likes = LikeService(ctx)
        currently_liked = await likes.check_like_status(post_id)
        if currently_liked == liked:
            print_info("Already liked" if liked else "Not liked")
            return
        result = await likes.toggle(post_id, currently_liked)
        if isinstance(result, Failure):
            print_error(result.error, result.details)
            raise typer.Exit(1)
        show_like_state(console, post_id, result.value)

    run_in_context(_toggle, require_user=True)


def like(post_id: str = typer.Argument(..., help="Post ID")) -> None:
    """Like a post."""
    _set_like(post_id, True)


def unlike(post_id: str = typer.Argument(..., help="Post ID")) -> None:
    """Remove your like from a post."""
    _set_like(post_id, False)


def comments(post_id: str = typer.Argument(..., help="Post ID")) -> None:
    """List the comments of a post, oldest first."""

    async def _comments(ctx: AppContext) -> None:
        show_comments(console, await CommentService(ctx).fetch(post_id))

    run_in_context(_comments)


def comment(
    post_id: str = typer.Argument(..., help="Post ID"),
    content: str = typer.Argument(..., help="Comment text"),
) -> None:
    """Comment on a post."""

    async def _comment(ctx: AppContext) -> None:
        result = await CommentService(ctx).add(post_id, content)
        if isinstance(result, Failure):
            print_error(result.error, result.details)
            raise typer.Exit(1)
        show_comment_saved(console, result.value, "added")

    run_in_context(_comment, require_user=True)


def edit_comment(
    comment_id: str = typer.Argument(..., help="Comment ID"),
    content: str = typer.Argument(..., help="New comment text"),
) -> None:
    """Edit one of your comments."""

    async def _edit(ctx: AppContext) -> None:
        result = await CommentService(ctx).update(comment_id, content)
        if isinstance(result, Failure):
            print_error(result.error, result.details)
            raise typer.Exit(1)
        show_comment_saved(console, result.value, "updated")

    run_in_context(_edit, require_user=True)


def delete_comment(comment_id: str = typer.Argument(..., help="Comment ID")) -> None:
    """Delete one of your comments."""

    async def _delete(ctx: AppContext) -> None:
        result = await CommentService(ctx).delete(comment_id)
        if isinstance(result, Failure):
            print_error(result.error, result.details)
            raise typer.Exit(1)
        if result.value == 0:
            print_warning(f"No comment of yours with ID {comment_id}")
            raise typer.Exit(1)
        console.print(f"[green]Comment deleted[/green] [dim]({comment_id})[/dim]")

    run_in_context(_delete, require_user=True)


def download(
    post_id: str = typer.Argument(..., help="Post ID"),
    output_dir: Path = typer.Option(Path("."), "--output", "-o", help="Directory to save into"),
) -> None:
    """Download a post's image."""

    async def _download(ctx: AppContext) -> None:
        result = await FeedService(ctx).get_post(post_id)
        if isinstance(result, Failure):
            print_error(result.error, result.details)
            raise typer.Exit(1)

        post = result.value
        destination = output_dir / generate_filename(post.prompt, extension="png")
        try:
            await download_image(post.image_url, destination, http_client=ctx.http_client)
        except httpx.HTTPError as e:
            print_error(f"Download failed: {e}")
            raise typer.Exit(1)
        show_download_result(console, destination)

    run_in_context(_download)
