"""Application context: backend connection and auth session lifecycle.

The context is created once per process (or per test) and passed
explicitly to the services that need the signed-in user.

Usage:
    async with AppContext(config, store=SessionStore(path)) as ctx:
        if ctx.user is None:
            await ctx.backend.auth.sign_in_with_password(email, password)
        feed = await FeedService(ctx).news_feed()
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

import httpx
from pydantic import ValidationError

from .backend import AuthEvent, AuthUser, BackendAPIError, BackendClient, Session, Subscription
from .providers.config import AppConfig, load_app_config
from .providers.image import ImageProvider

_logger = logging.getLogger("backend_api")


class SessionStore:
    """Persists the auth session as JSON between CLI invocations."""

    def __init__(self, path: Path):
        self.path = path

    def load(self) -> Session | None:
        if not self.path.exists():
            return None
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
            return Session.model_validate(data)
        except (ValueError, ValidationError) as e:
            _logger.warning(f"Ignoring unreadable session file {self.path}: {e}")
            return None

    def save(self, session: Session) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(session.model_dump_json(indent=2), encoding="utf-8")

    def clear(self) -> None:
        if self.path.exists():
            self.path.unlink()


class AppContext:
    """Explicit replacement for ambient auth state.

    Lifecycle:
        init()      restore the persisted session and subscribe to changes
        teardown()  unsubscribe and close the shared HTTP client
    """

    def __init__(
        self,
        config: AppConfig | None = None,
        store: SessionStore | None = None,
        http_client: httpx.AsyncClient | None = None,
    ):
        """Initialize the context.

        Args:
            config: Application config. If None, loads the default.
            store: Where to persist the session. None keeps it in memory only.
            http_client: Shared HTTP client; created and owned here when None.

        Raises:
            ValueError: If the backend URL or anon key is missing.
        """
        self.config = config or load_app_config()
        settings = self.config.backend
        missing = []
        if not settings.url:
            missing.append("SUPABASE_URL")
        if not settings.anon_key:
            missing.append("SUPABASE_ANON_KEY")
        if missing:
            raise ValueError(
                f"Missing required environment variables: {', '.join(missing)}\n"
                "Please add them to your .env file."
            )

        self.store = store
        self._owns_client = http_client is None
        self.http_client = http_client or httpx.AsyncClient(timeout=self.config.image_provider.timeout)
        self.backend = BackendClient(settings, self.http_client)
        self.image_provider = ImageProvider(self.config, http_client=self.http_client)
        self._subscription: Subscription | None = None
        self._initialized = False

    async def __aenter__(self) -> "AppContext":
        await self.init()
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.teardown()

    @property
    def session(self) -> Session | None:
        return self.backend.auth.session

    @property
    def user(self) -> AuthUser | None:
        return self.backend.auth.user

    @property
    def bucket_id(self) -> str:
        return self.config.bucket_id

    async def init(self) -> "AppContext":
        """Subscribe to session changes, then resolve the persisted session."""
        if self._initialized:
            return self
        self._initialized = True
        self._subscription = self.backend.auth.on_auth_state_change(self._on_auth_change)

        session = self.store.load() if self.store else None
        if session is None:
            return self

        self.backend.auth.set_session(session)
        if session.is_expired():
            try:
                await self.backend.auth.refresh_session()
            except BackendAPIError as e:
                _logger.warning(f"Session refresh failed, signing out locally: {e}")
                self.backend.auth.set_session(None)
        return self

    async def teardown(self) -> None:
        if self._subscription is not None:
            self._subscription.unsubscribe()
            self._subscription = None
        if self._owns_client:
            await self.http_client.aclose()
        self._initialized = False

    def _on_auth_change(self, event: AuthEvent, session: Session | None) -> None:
        if self.store is None:
            return
        if session is None:
            self.store.clear()
        else:
            self.store.save(session)
