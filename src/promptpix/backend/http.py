"""Shared HTTP plumbing for the backend-as-a-service clients."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from ..providers.config import BackendSettings

_api_logger = logging.getLogger("backend_api")

# Single-row responses from the relational store
PGRST_OBJECT_MEDIA_TYPE = "application/vnd.pgrst.object+json"

# Returned by the relational store when a single-row request matches zero rows
NO_ROWS_CODE = "PGRST116"


class BackendAPIError(Exception):
    """Error reported by the backend (auth, relational store or storage)."""

    def __init__(
        self,
        message: str,
        code: str | None = None,
        status_code: int | None = None,
        details: str | None = None,
        hint: str | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.status_code = status_code
        self.details = details
        self.hint = hint

    @property
    def is_not_found(self) -> bool:
        """True when a single-row lookup matched no row."""
        return self.code == NO_ROWS_CODE

    @classmethod
    def from_response(cls, response: httpx.Response) -> "BackendAPIError":
        """Build an error from a failed response.

        The three services use different error bodies:
        - relational store: {code, message, details, hint}
        - storage: {statusCode, error, message}
        - auth: {error, error_description} or {code, msg, error_code}
        """
        try:
            body = response.json()
        except ValueError:
            body = None

        if not isinstance(body, dict):
            return cls(
                f"HTTP {response.status_code} {response.reason_phrase}".strip(),
                status_code=response.status_code,
            )

        message = (
            body.get("message")
            or body.get("msg")
            or body.get("error_description")
            or body.get("error")
            or f"HTTP {response.status_code}"
        )
        code = body.get("code") or body.get("error_code") or body.get("error")
        return cls(
            str(message),
            code=str(code) if code is not None else None,
            status_code=response.status_code,
            details=body.get("details"),
            hint=body.get("hint"),
        )


class BackendHTTP:
    """Authenticated request helper shared by auth, database and storage.

    Every request carries the anon key as `apikey`, and a bearer token:
    the signed-in user's access token when there is one, else the anon key.
    """

    def __init__(self, settings: BackendSettings, http_client: httpx.AsyncClient):
        self.settings = settings
        self.client = http_client
        self.access_token: str | None = None
        self._api_call_count = 0

    def auth_headers(self) -> dict[str, str]:
        token = self.access_token or self.settings.anon_key
        return {
            "apikey": self.settings.anon_key,
            "Authorization": f"Bearer {token}",
        }

    async def request(
        self,
        method: str,
        url: str,
        *,
        params: Any = None,
        json: Any = None,
        content: bytes | None = None,
        headers: dict[str, str] | None = None,
    ) -> httpx.Response:
        """Send a request and raise BackendAPIError on a non-2xx response."""
        self._api_call_count += 1
        call_number = self._api_call_count
        request_headers = self.auth_headers()
        if headers:
            request_headers.update(headers)

        _api_logger.info(f"API CALL #{call_number} | {method} {url} | params: {params}")

        try:
            response = await self.client.request(
                method,
                url,
                params=params,
                json=json,
                content=content,
                headers=request_headers,
            )
        except httpx.HTTPError as e:
            _api_logger.error(f"API CALL #{call_number} | NETWORK ERROR | {e}")
            raise BackendAPIError(f"Network error: {e}", code="network_error") from e

        if response.is_error:
            error = BackendAPIError.from_response(response)
            _api_logger.error(
                f"API CALL #{call_number} | ERROR {response.status_code} | "
                f"code: {error.code} | {error.message}"
            )
            raise error

        _api_logger.info(f"API CALL #{call_number} | SUCCESS {response.status_code}")
        return response
