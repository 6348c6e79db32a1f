"""Command line interface - feature-based, one package per screen.

- core/: Shared utilities (console, paths, navigation, validators, context)
- auth/: Sign in, sign up, sign out
- feed/: Home dashboard, news feed, profiles, likes, comments, downloads
- create/: Image generation and posting
- storage/: Storage bucket diagnostics

Usage:
    python -m promptpix.cli --help
    python -m promptpix.cli login
    python -m promptpix.cli create "A red balloon over the sea"
"""

from .app import app, main

__all__ = ["app", "main"]
