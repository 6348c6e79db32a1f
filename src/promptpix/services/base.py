"""Base class for services bound to an application context."""

from __future__ import annotations

from ..backend import AuthUser, BackendClient
from ..session import AppContext


class ContextService:
    """Service reading the current user from the context on every call.

    Services keep no per-user state, so one instance stays valid across
    sign-in and sign-out.
    """

    def __init__(self, ctx: AppContext):
        self.ctx = ctx

    @property
    def user(self) -> AuthUser | None:
        return self.ctx.user

    @property
    def backend(self) -> BackendClient:
        return self.ctx.backend
