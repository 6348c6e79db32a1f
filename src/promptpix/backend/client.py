"""Facade bundling the auth, relational store and storage clients."""

from __future__ import annotations

import httpx

from ..providers.config import BackendSettings
from .auth import AuthClient
from .database import TableQuery
from .http import BackendHTTP
from .storage import StorageClient


class BackendClient:
    """One backend connection sharing a single HTTP client and session.

    Usage:
        backend = BackendClient(settings, http_client)
        await backend.auth.sign_in_with_password(email, password)
        rows = (await backend.table("posts").select("*").execute()).data
    """

    def __init__(self, settings: BackendSettings, http_client: httpx.AsyncClient):
        self.settings = settings
        self.http = BackendHTTP(settings, http_client)
        self.auth = AuthClient(self.http)
        self.storage = StorageClient(self.http)

    def table(self, name: str) -> TableQuery:
        """Start a query against `name`."""
        return TableQuery(self.http, name)
