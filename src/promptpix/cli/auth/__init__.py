"""Auth feature - login, signup, logout and whoami commands."""

from .commands import login, logout, signup, whoami

__all__ = ["login", "logout", "signup", "whoami"]
