"""Core utilities for CLI - console, paths, validators and context runner."""

from .console import console, print_error, print_info, print_success, print_warning
from .context import build_context, run_in_context, show_login_hint
from .navigation import NAV_ITEMS, nav_icon, render_nav
from .paths import get_home_dir, get_logs_dir, get_session_path
from .validators import validate_credentials, validate_generation_options, validate_prompt

__all__ = [
    # Console
    "console",
    "print_error",
    "print_info",
    "print_success",
    "print_warning",
    # Context
    "build_context",
    "run_in_context",
    "show_login_hint",
    # Navigation
    "NAV_ITEMS",
    "nav_icon",
    "render_nav",
    # Paths
    "get_home_dir",
    "get_logs_dir",
    "get_session_path",
    # Validators
    "validate_credentials",
    "validate_generation_options",
    "validate_prompt",
]
