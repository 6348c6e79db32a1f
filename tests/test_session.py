"""Tests for SessionStore and the AppContext lifecycle."""

from __future__ import annotations

import time

import pytest

from promptpix.backend import AuthUser, Session
from promptpix.providers.config import AppConfig, BackendSettings
from promptpix.session import AppContext, SessionStore


def make_session(expires_at: int | None = None, refresh_token: str = "refresh-unknown") -> Session:
    return Session(
        access_token="access-old",
        refresh_token=refresh_token,
        expires_at=expires_at,
        user=AuthUser(id="u1", email="alice@example.com"),
    )


class TestSessionStore:
    """Tests for SessionStore."""

    def test_save_and_load(self, session_store):
        session = make_session(expires_at=int(time.time()) + 3600)

        session_store.save(session)

        assert session_store.load() == session

    def test_missing_file(self, session_store):
        assert session_store.load() is None

    def test_corrupt_file_ignored(self, session_store):
        session_store.path.write_text("{not json", encoding="utf-8")

        assert session_store.load() is None

    def test_clear(self, session_store):
        session_store.save(make_session())

        session_store.clear()

        assert not session_store.path.exists()


class TestAppContext:
    """Tests for AppContext."""

    def test_missing_settings_listed(self):
        config = AppConfig(backend=BackendSettings(url="", anon_key=""))

        with pytest.raises(ValueError) as exc_info:
            AppContext(config)

        assert "SUPABASE_URL" in str(exc_info.value)
        assert "SUPABASE_ANON_KEY" in str(exc_info.value)

    @pytest.mark.asyncio
    async def test_sign_in_persists_session(self, user_ctx, session_store):
        stored = session_store.load()

        assert stored is not None
        assert stored.user.email == "alice@example.com"

    @pytest.mark.asyncio
    async def test_sign_out_clears_store(self, user_ctx, session_store):
        await user_ctx.backend.auth.sign_out()

        assert session_store.load() is None
        assert user_ctx.user is None

    @pytest.mark.asyncio
    async def test_restores_valid_session(self, app_config, session_store, make_http_client):
        session_store.save(make_session(expires_at=int(time.time()) + 3600))

        async with AppContext(app_config, store=session_store, http_client=make_http_client()) as ctx:
            assert ctx.user.id == "u1"
            assert ctx.backend.http.access_token == "access-old"

    @pytest.mark.asyncio
    async def test_refreshes_expired_session(self, app_config, session_store, make_http_client, fake_backend):
        user = fake_backend.add_user("alice@example.com")
        login = fake_backend._issue_session(user)
        expired = Session.model_validate({**login, "expires_in": None, "expires_at": int(time.time()) - 10})
        session_store.save(expired)

        async with AppContext(app_config, store=session_store, http_client=make_http_client()) as ctx:
            assert ctx.user.email == "alice@example.com"
            assert ctx.session.access_token != login["access_token"]

        assert session_store.load().access_token != login["access_token"]

    @pytest.mark.asyncio
    async def test_failed_refresh_signs_out_locally(self, app_config, session_store, make_http_client):
        session_store.save(make_session(expires_at=int(time.time()) - 10))

        async with AppContext(app_config, store=session_store, http_client=make_http_client()) as ctx:
            assert ctx.user is None

        assert session_store.load() is None

    @pytest.mark.asyncio
    async def test_teardown_unsubscribes(self, app_config, session_store, make_http_client, fake_backend):
        fake_backend.add_user("alice@example.com")
        ctx = AppContext(app_config, store=session_store, http_client=make_http_client())
        await ctx.init()
        await ctx.teardown()

        await ctx.backend.auth.sign_in_with_password("alice@example.com", "secret123")

        assert session_store.load() is None

    @pytest.mark.asyncio
    async def test_shared_client_not_closed(self, app_config, make_http_client):
        client = make_http_client()

        async with AppContext(app_config, http_client=client):
            pass

        assert not client.is_closed
        await client.aclose()
