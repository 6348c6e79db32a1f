"""Runs a command body inside a fully initialized AppContext."""

from __future__ import annotations

import asyncio
from typing import Awaitable, Callable, TypeVar

import typer

from ...providers.config import load_app_config
from ...session import AppContext, SessionStore
from .console import print_error, print_info
from .paths import get_session_path

T = TypeVar("T")


def build_context() -> AppContext:
    """Context from the default config, persisting the session on disk.

    Raises:
        ValueError: If backend settings are missing.
    """
    return AppContext(load_app_config(), store=SessionStore(get_session_path()))


def show_login_hint() -> None:
    print_error("You are not logged in")
    print_info("Run 'promptpix login' first")


def run_in_context(
    handler: Callable[[AppContext], Awaitable[T]],
    require_user: bool = False,
) -> T:
    """Build the context, restore the session and run `handler`.

    Exits with status 1 when configuration is missing, or when
    `require_user` is set and no session resolves.
    """

    async def _run() -> T:
        try:
            ctx = build_context()
        except ValueError as e:
            print_error(str(e))
            raise typer.Exit(1)

        async with ctx:
            if require_user and ctx.user is None:
                show_login_hint()
                raise typer.Exit(1)
            return await handler(ctx)

    return asyncio.run(_run())
