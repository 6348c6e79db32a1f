"""Path utilities for CLI - pure functions for path manipulation."""

from __future__ import annotations

import os
from pathlib import Path

HOME_ENV_VAR = "PROMPTPIX_HOME"


def get_home_dir(env: dict[str, str] | None = None) -> Path:
    """Get the per-user state directory.

    Args:
        env: Environment mapping (defaults to os.environ)

    Returns:
        $PROMPTPIX_HOME when set, else ~/.promptpix
    """
    if env is None:
        env = dict(os.environ)
    override = env.get(HOME_ENV_VAR)
    if override:
        return Path(override)
    return Path.home() / ".promptpix"


def get_session_path(home_dir: Path | None = None) -> Path:
    """Get the file the auth session is persisted in."""
    if home_dir is None:
        home_dir = get_home_dir()
    return home_dir / "session.json"


def get_logs_dir(base_dir: Path | None = None) -> Path:
    """Get the logs directory.

    Args:
        base_dir: Base directory (defaults to cwd)
    """
    if base_dir is None:
        base_dir = Path.cwd()
    return base_dir / "logs"
