"""Identity provider client with session state and change notifications."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable

from pydantic import BaseModel, ConfigDict

from .http import BackendHTTP

_api_logger = logging.getLogger("backend_api")


class AuthEvent(str, Enum):
    """Session changes reported to subscribers."""

    INITIAL_SESSION = "INITIAL_SESSION"
    SIGNED_IN = "SIGNED_IN"
    SIGNED_OUT = "SIGNED_OUT"
    TOKEN_REFRESHED = "TOKEN_REFRESHED"


class AuthUser(BaseModel):
    """Identity as returned by the auth service."""

    model_config = ConfigDict(extra="ignore")

    id: str
    email: str | None = None


class Session(BaseModel):
    """Tokens for a signed-in identity."""

    model_config = ConfigDict(extra="ignore")

    access_token: str
    refresh_token: str
    token_type: str = "bearer"
    expires_in: int | None = None
    expires_at: int | None = None
    user: AuthUser

    def model_post_init(self, __context: Any) -> None:
        if self.expires_at is None and self.expires_in is not None:
            self.expires_at = int(time.time()) + self.expires_in

    def is_expired(self, now: float | None = None) -> bool:
        if self.expires_at is None:
            return False
        return (now if now is not None else time.time()) >= self.expires_at


AuthCallback = Callable[[AuthEvent, "Session | None"], None]


@dataclass(eq=False)
class Subscription:
    """Handle returned by on_auth_state_change."""

    callback: AuthCallback
    _client: "AuthClient"

    def unsubscribe(self) -> None:
        self._client._remove_subscription(self)


class AuthClient:
    """Email/password auth against the identity provider.

    Holds the current session and keeps the shared request helper's bearer
    token in sync with it.
    """

    def __init__(self, http: BackendHTTP):
        self._http = http
        self._session: Session | None = None
        self._subscriptions: list[Subscription] = []

    @property
    def base_url(self) -> str:
        return self._http.settings.auth_url

    @property
    def session(self) -> Session | None:
        return self._session

    @property
    def user(self) -> AuthUser | None:
        return self._session.user if self._session else None

    # --- Subscriptions ---

    def on_auth_state_change(self, callback: AuthCallback) -> Subscription:
        subscription = Subscription(callback=callback, _client=self)
        self._subscriptions.append(subscription)
        return subscription

    def _remove_subscription(self, subscription: Subscription) -> None:
        if subscription in self._subscriptions:
            self._subscriptions.remove(subscription)

    def _set_session(self, session: Session | None, event: AuthEvent) -> None:
        self._session = session
        self._http.access_token = session.access_token if session else None
        _api_logger.info(f"AUTH | {event.value} | user: {session.user.id if session else None}")
        for subscription in list(self._subscriptions):
            subscription.callback(event, session)

    # --- Operations ---

    def set_session(self, session: Session | None) -> None:
        """Adopt a previously persisted session without a network call."""
        self._set_session(session, AuthEvent.INITIAL_SESSION)

    async def sign_in_with_password(self, email: str, password: str) -> Session:
        response = await self._http.request(
            "POST",
            f"{self.base_url}/token",
            params={"grant_type": "password"},
            json={"email": email, "password": password},
        )
        session = Session.model_validate(response.json())
        self._set_session(session, AuthEvent.SIGNED_IN)
        return session

    async def sign_up(self, email: str, password: str) -> Session | None:
        """Register an identity.

        Returns:
            The new session, or None when the backend requires email
            confirmation before the first sign-in.
        """
        response = await self._http.request(
            "POST",
            f"{self.base_url}/signup",
            json={"email": email, "password": password},
        )
        data = response.json()
        if not data.get("access_token"):
            return None
        session = Session.model_validate(data)
        self._set_session(session, AuthEvent.SIGNED_IN)
        return session

    async def refresh_session(self) -> Session:
        if self._session is None:
            raise ValueError("No session to refresh")
        response = await self._http.request(
            "POST",
            f"{self.base_url}/token",
            params={"grant_type": "refresh_token"},
            json={"refresh_token": self._session.refresh_token},
        )
        session = Session.model_validate(response.json())
        self._set_session(session, AuthEvent.TOKEN_REFRESHED)
        return session

    async def get_user(self) -> AuthUser:
        response = await self._http.request("GET", f"{self.base_url}/user")
        return AuthUser.model_validate(response.json())

    async def sign_out(self) -> None:
        """Revoke the session on the backend and clear it locally."""
        if self._session is None:
            return
        try:
            await self._http.request("POST", f"{self.base_url}/logout")
        finally:
            self._set_session(None, AuthEvent.SIGNED_OUT)
