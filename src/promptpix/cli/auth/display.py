"""Display functions for auth commands - pure functions for Rich output."""

from __future__ import annotations

from rich.console import Console
from rich.panel import Panel

from ...backend import AuthUser


def show_signed_in(console: Console, user: AuthUser) -> None:
    console.print(Panel(
        f"[bold green]Signed in[/bold green]\n\n"
        f"[bold]Email:[/] {user.email or '-'}\n"
        f"[bold]User ID:[/] [dim]{user.id}[/dim]",
        border_style="green",
    ))


def show_confirmation_required(console: Console, email: str) -> None:
    console.print(Panel(
        f"Account created for [cyan]{email}[/cyan].\n"
        "Check your inbox to confirm the address, then run [bold]promptpix login[/bold].",
        title="Confirm your email",
        border_style="yellow",
    ))


def show_whoami(console: Console, user: AuthUser | None) -> None:
    if user is None:
        console.print("[yellow]Not logged in.[/yellow]")
        return
    console.print(f"[cyan]{user.email or user.id}[/cyan] [dim]({user.id})[/dim]")
