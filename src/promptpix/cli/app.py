"""Typer app configuration and logging setup."""

from __future__ import annotations

import asyncio
import logging
import sys
import warnings

import typer
from dotenv import load_dotenv

from .core.paths import get_logs_dir

# Load environment variables from .env file
load_dotenv()

# httpx cleanup after asyncio.run() closes the loop
warnings.filterwarnings("ignore", message=".*Event loop is closed.*")

if sys.platform == "win32":
    asyncio.set_event_loop_policy(asyncio.WindowsSelectorEventLoopPolicy())

# Create Typer app
app = typer.Typer(
    name="promptpix",
    help="Generate images from prompts and share them",
    add_completion=False,
)


def register_commands() -> None:
    """Register all commands from feature modules."""
    # Import and register auth commands
    from .auth.commands import login, logout, signup, whoami

    app.command(name="login")(login)
    app.command(name="signup")(signup)
    app.command(name="logout")(logout)
    app.command(name="whoami")(whoami)

    # Import and register feed commands
    from .feed.commands import (
        comment,
        comments,
        delete_comment,
        download,
        edit_comment,
        home,
        like,
        news,
        profile,
        unlike,
    )

    app.command(name="home")(home)
    app.command(name="news")(news)
    app.command(name="profile")(profile)
    app.command(name="like")(like)
    app.command(name="unlike")(unlike)
    app.command(name="comments")(comments)
    app.command(name="comment")(comment)
    app.command(name="edit-comment")(edit_comment)
    app.command(name="delete-comment")(delete_comment)
    app.command(name="download")(download)

    # Import and register create commands
    from .create.commands import create, generate, tips

    app.command(name="generate")(generate)
    app.command(name="create")(create)
    app.command(name="tips")(tips)

    # Import and register storage commands
    from .storage.commands import storage_check, storage_create, storage_test

    app.command(name="storage-check")(storage_check)
    app.command(name="storage-create")(storage_create)
    app.command(name="storage-test")(storage_test)


def _file_logger(name: str, filename: str) -> None:
    log_dir = get_logs_dir()
    log_dir.mkdir(parents=True, exist_ok=True)

    logger = logging.getLogger(name)
    logger.setLevel(logging.DEBUG)
    logger.propagate = False
    logger.handlers = []  # Clear any existing handlers
    file_handler = logging.FileHandler(log_dir / filename, encoding="utf-8")
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(
        logging.Formatter("%(asctime)s | %(levelname)s | %(name)s | %(message)s")
    )
    logger.addHandler(file_handler)


def setup_logging() -> None:
    """Configure logging for CLI.

    - Suppresses console output from libraries
    - Sets up file logging for image API calls, backend API calls and services
    """
    # Remove any default console handlers from root logger
    root_logger = logging.getLogger()
    root_logger.handlers = []
    root_logger.setLevel(logging.CRITICAL)  # Suppress root logger output

    # Suppress loggers that might print to console
    for logger_name in ["httpx", "httpcore", "asyncio"]:
        logger = logging.getLogger(logger_name)
        logger.setLevel(logging.WARNING)
        logger.propagate = False

    _file_logger("ai_calls", "ai_calls.log")
    _file_logger("backend_api", "backend_api.log")
    _file_logger("services", "services.log")


# Initialize logging on module import
setup_logging()

# Register all commands
register_commands()


def main() -> None:
    """CLI entry point."""
    app()
