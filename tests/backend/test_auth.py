"""Tests for the auth client and its session notifications."""

from __future__ import annotations

import pytest

from promptpix.backend import AuthEvent, BackendAPIError, BackendClient, Session


@pytest.fixture
def auth(app_config, make_http_client):
    return BackendClient(app_config.backend, make_http_client()).auth


class TestAuthClient:
    """Tests for AuthClient operations."""

    @pytest.mark.asyncio
    async def test_sign_in_sets_session_and_token(self, auth, fake_backend):
        fake_backend.add_user("alice@example.com", "secret123")

        session = await auth.sign_in_with_password("alice@example.com", "secret123")

        assert auth.user.email == "alice@example.com"
        assert auth._http.access_token == session.access_token
        assert session.expires_at is not None

    @pytest.mark.asyncio
    async def test_bad_credentials(self, auth, fake_backend):
        fake_backend.add_user("alice@example.com", "secret123")

        with pytest.raises(BackendAPIError) as exc_info:
            await auth.sign_in_with_password("alice@example.com", "wrong-password")

        assert exc_info.value.message == "Invalid login credentials"
        assert auth.session is None

    @pytest.mark.asyncio
    async def test_sign_up_returns_session(self, auth):
        session = await auth.sign_up("bob@example.com", "secret123")

        assert session is not None
        assert auth.user.email == "bob@example.com"

    @pytest.mark.asyncio
    async def test_sign_up_pending_confirmation(self, auth, fake_backend):
        fake_backend.confirm_email = True

        session = await auth.sign_up("bob@example.com", "secret123")

        assert session is None
        assert auth.session is None

    @pytest.mark.asyncio
    async def test_refresh_replaces_tokens(self, auth, fake_backend):
        fake_backend.add_user("alice@example.com", "secret123")
        first = await auth.sign_in_with_password("alice@example.com", "secret123")

        second = await auth.refresh_session()

        assert second.access_token != first.access_token
        assert auth.session == second

    @pytest.mark.asyncio
    async def test_get_user_uses_access_token(self, auth, fake_backend):
        fake_backend.add_user("alice@example.com", "secret123")
        await auth.sign_in_with_password("alice@example.com", "secret123")

        user = await auth.get_user()

        assert user.email == "alice@example.com"

    @pytest.mark.asyncio
    async def test_sign_out_clears_session_even_on_error(self, auth, fake_backend):
        fake_backend.add_user("alice@example.com", "secret123")
        await auth.sign_in_with_password("alice@example.com", "secret123")
        fake_backend.fail("POST", "/auth/v1/logout", 500, {"msg": "boom"})

        with pytest.raises(BackendAPIError):
            await auth.sign_out()

        assert auth.session is None
        assert auth._http.access_token is None


class TestSubscriptions:
    """Tests for on_auth_state_change."""

    @pytest.mark.asyncio
    async def test_events_in_order(self, auth, fake_backend):
        events: list[AuthEvent] = []
        auth.on_auth_state_change(lambda event, session: events.append(event))
        fake_backend.add_user("alice@example.com", "secret123")

        await auth.sign_in_with_password("alice@example.com", "secret123")
        await auth.refresh_session()
        await auth.sign_out()

        assert events == [AuthEvent.SIGNED_IN, AuthEvent.TOKEN_REFRESHED, AuthEvent.SIGNED_OUT]

    def test_unsubscribe_stops_notifications(self, auth):
        events: list[AuthEvent] = []
        subscription = auth.on_auth_state_change(lambda event, session: events.append(event))

        subscription.unsubscribe()
        auth.set_session(None)

        assert events == []


class TestSession:
    """Tests for Session expiry."""

    def test_expires_at_from_expires_in(self):
        session = Session(access_token="a", refresh_token="r", expires_in=60, user={"id": "u1"})

        assert not session.is_expired()
        assert session.is_expired(now=session.expires_at)

    def test_no_expiry_never_expires(self):
        session = Session(access_token="a", refresh_token="r", user={"id": "u1"})

        assert not session.is_expired(now=10**12)
