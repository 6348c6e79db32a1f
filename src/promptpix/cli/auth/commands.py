"""Auth CLI commands - sign in, sign up, sign out and session info."""

from __future__ import annotations

import typer

from ...backend import BackendAPIError
from ...services.results import Failure
from ...session import AppContext
from ..core.console import console, print_error, print_success
from ..core.context import run_in_context
from ..core.validators import validate_credentials
from .display import show_confirmation_required, show_signed_in, show_whoami


def login(
    email: str = typer.Option(..., "--email", "-e", prompt=True, help="Account email"),
    password: str = typer.Option(..., "--password", "-p", prompt=True, hide_input=True, help="Account password"),
) -> None:
    """Sign in with email and password."""
    validation = validate_credentials(email, password)
    if isinstance(validation, Failure):
        print_error(validation.error, validation.details)
        raise typer.Exit(1)
    email, password = validation.value

    async def _login(ctx: AppContext) -> None:
        try:
            await ctx.backend.auth.sign_in_with_password(email, password)
        except BackendAPIError as e:
            print_error(f"Sign in failed: {e.message}")
            raise typer.Exit(1)
        show_signed_in(console, ctx.user)

    run_in_context(_login)


def signup(
    email: str = typer.Option(..., "--email", "-e", prompt=True, help="Account email"),
    password: str = typer.Option(
        ..., "--password", "-p", prompt=True, hide_input=True, confirmation_prompt=True, help="Account password"
    ),
) -> None:
    """Create an account."""
    validation = validate_credentials(email, password)
    if isinstance(validation, Failure):
        print_error(validation.error, validation.details)
        raise typer.Exit(1)
    email, password = validation.value

    async def _signup(ctx: AppContext) -> None:
        try:
            session = await ctx.backend.auth.sign_up(email, password)
        except BackendAPIError as e:
            print_error(f"Sign up failed: {e.message}")
            raise typer.Exit(1)
        if session is None:
            show_confirmation_required(console, email)
        else:
            show_signed_in(console, session.user)

    run_in_context(_signup)


def logout() -> None:
    """Sign out and forget the stored session."""

    async def _logout(ctx: AppContext) -> None:
        if ctx.user is None:
            console.print("[yellow]Not logged in.[/yellow]")
            return
        try:
            await ctx.backend.auth.sign_out()
        except BackendAPIError as e:
            # Local session is cleared regardless
            print_error(f"Sign out request failed: {e.message}")
        print_success("Signed out")

    run_in_context(_logout)


def whoami() -> None:
    """Show the signed-in user."""

    async def _whoami(ctx: AppContext) -> None:
        show_whoami(console, ctx.user)

    run_in_context(_whoami)
