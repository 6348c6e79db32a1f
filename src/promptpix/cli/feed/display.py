"""Display functions for feed commands - pure functions for Rich output."""

from __future__ import annotations

from datetime import datetime
from pathlib import Path

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from ...models import Comment, HomeDashboard, Post, Profile
from ..core.navigation import render_nav


def _format_date(value: datetime | None) -> str:
    if value is None:
        return ""
    return value.strftime("%Y-%m-%d %H:%M")


def _truncate(text: str | None, width: int = 40) -> str:
    if not text:
        return ""
    return text if len(text) <= width else text[: width - 3] + "..."


def show_nav(console: Console, active_route: str) -> None:
    console.print(render_nav(active_route))
    console.print()


def show_posts_table(console: Console, posts: list[Post], title: str) -> None:
    """Display a table of posts, newest first."""
    if not posts:
        console.print("[yellow]No posts yet.[/yellow]")
        return

    table = Table(title=title)
    table.add_column("ID", style="dim")
    table.add_column("Author", style="cyan")
    table.add_column("Prompt", style="white")
    table.add_column("Caption", style="white")
    table.add_column("Likes", style="magenta", justify="right")
    table.add_column("Comments", style="yellow", justify="right")
    table.add_column("Created", style="dim")

    for post in posts:
        likes = str(post.likes_count)
        if post.user_has_liked:
            likes = f"♥ {likes}"
        table.add_row(
            post.id,
            post.profile.username if post.profile else "",
            _truncate(post.prompt),
            _truncate(post.caption, 30),
            likes,
            str(post.comments_count),
            _format_date(post.created_at),
        )

    console.print(table)


def show_profile(console: Console, profile: Profile) -> None:
    console.print(Panel(
        f"[bold]{profile.username}[/bold]\n"
        f"{profile.bio or '[dim]No bio[/dim]'}\n\n"
        f"[dim]Avatar:[/dim] {profile.avatar_or_placeholder()}",
        title="Profile",
    ))


def show_home(console: Console, dashboard: HomeDashboard) -> None:
    """Display the profile card, stats and recent creations."""
    show_profile(console, dashboard.profile)

    stats = dashboard.stats
    table = Table(show_header=False, box=None)
    table.add_column("Stat", style="dim")
    table.add_column("Value", style="bold")
    table.add_row("Posts", str(stats.total_posts))
    table.add_row("Likes", str(stats.total_likes))
    table.add_row("Comments", str(stats.total_comments))
    table.add_row("This week", str(stats.recent_posts))
    console.print(Panel(table, title="Stats"))

    show_posts_table(console, dashboard.posts, "Recent Creations")


def show_comments(console: Console, comments: list[Comment]) -> None:
    if not comments:
        console.print("[dim]No comments yet.[/dim]")
        return

    table = Table(title="Comments")
    table.add_column("ID", style="dim")
    table.add_column("Author", style="cyan")
    table.add_column("Comment", style="white")
    table.add_column("Created", style="dim")

    for comment in comments:
        edited = " [dim](edited)[/dim]" if comment.updated_at != comment.created_at else ""
        table.add_row(
            comment.id,
            comment.profile.username if comment.profile else "",
            f"{comment.content}{edited}",
            _format_date(comment.created_at),
        )

    console.print(table)


def show_comment_saved(console: Console, comment: Comment, action: str) -> None:
    console.print(f"[green]Comment {action}[/green] [dim]({comment.id})[/dim]: {comment.content}")


def show_like_state(console: Console, post_id: str, liked: bool) -> None:
    if liked:
        console.print(f"[magenta]♥ Liked[/magenta] [dim]{post_id}[/dim]")
    else:
        console.print(f"[dim]♡ Unliked {post_id}[/dim]")


def show_download_result(console: Console, path: Path) -> None:
    console.print(f"[green]Image saved to[/green] {path}")
