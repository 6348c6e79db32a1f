"""Shared test fixtures and configuration.

Provides an in-memory stand-in for the backend-as-a-service (auth,
relational store, storage) and the OpenAI images endpoint, served through
httpx.MockTransport so the real clients run unmodified.
"""

from __future__ import annotations

import base64
import json
import re
import uuid
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Any, AsyncIterator

import httpx
import pytest
import pytest_asyncio

from promptpix.backend.http import PGRST_OBJECT_MEDIA_TYPE
from promptpix.providers.config import AppConfig, BackendSettings, ImageProviderConfig
from promptpix.services.storage_check import render_test_png
from promptpix.session import AppContext, SessionStore

BACKEND_URL = "https://test.supabase.co"
BACKEND_HOST = "test.supabase.co"
ANON_KEY = "anon-key"

_EMBED_RE = re.compile(r"(?:(\w+):)?(\w+)(?:!\w+)?\(\*\)")


def _as_filter_text(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if value is None:
        return "null"
    return str(value)


def _json_response(status: int, body: Any) -> httpx.Response:
    return httpx.Response(status, json=body)


class FakeSupabase:
    """Just enough of PostgREST, storage and GoTrue for the clients under test.

    Rows get an id and timestamps on insert; a one-second fake clock keeps
    created_at strictly increasing. Like and comment counters on posts are
    maintained like the backend triggers do.
    """

    TIMESTAMPED = {"profiles", "posts", "comments"}

    def __init__(self) -> None:
        self.tables: dict[str, list[dict[str, Any]]] = {
            "profiles": [],
            "posts": [],
            "likes": [],
            "comments": [],
        }
        self.buckets: list[dict[str, Any]] = [{"id": "images", "name": "images", "public": True}]
        self.objects: dict[str, dict[str, bytes]] = {"images": {}}
        self.users: dict[str, dict[str, Any]] = {}
        self.tokens: dict[str, dict[str, Any]] = {}
        self.refresh_tokens: dict[str, dict[str, Any]] = {}
        self.requests: list[httpx.Request] = []
        self.failures: list[tuple[str, str, int, Any]] = []
        self.confirm_email = False
        self.image_b64 = base64.b64encode(render_test_png()).decode()
        self.image_response: tuple[int, Any] | None = None
        self._clock = datetime.now(timezone.utc) - timedelta(hours=1)

    # --- Test helpers ---

    def fail(self, method: str, path_prefix: str, status: int, body: Any) -> None:
        """Answer matching requests with an error instead of handling them."""
        self.failures.append((method, path_prefix, status, body))

    def add_user(self, email: str, password: str = "secret123") -> dict[str, Any]:
        user = {"id": str(uuid.uuid4()), "email": email, "password": password}
        self.users[email] = user
        return user

    def seed(self, table: str, **row: Any) -> dict[str, Any]:
        """Insert a row directly, skipping constraint checks."""
        return self._insert(table, row)

    def rows(self, table: str, **criteria: Any) -> list[dict[str, Any]]:
        return [
            row for row in self.tables[table]
            if all(row.get(key) == value for key, value in criteria.items())
        ]

    @property
    def writes(self) -> list[httpx.Request]:
        """Mutating requests sent to the relational store or storage."""
        return [
            request for request in self.requests
            if request.url.host == BACKEND_HOST
            and request.method in ("POST", "PATCH", "DELETE")
            and not request.url.path.startswith("/auth/")
            and "/object/list/" not in request.url.path
        ]

    def requests_to(self, path_prefix: str, method: str | None = None) -> list[httpx.Request]:
        return [
            request for request in self.requests
            if request.url.path.startswith(path_prefix)
            and (method is None or request.method == method)
        ]

    # --- Transport ---

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path

        for method, prefix, status, body in self.failures:
            if request.method == method and path.startswith(prefix):
                return _json_response(status, body)

        if request.url.host == "api.openai.com":
            return self._openai(request)
        if path.startswith("/rest/v1/"):
            return self._rest(request, path[len("/rest/v1/"):])
        if path.startswith("/storage/v1/"):
            return self._storage(request, path[len("/storage/v1/"):])
        if path.startswith("/auth/v1/"):
            return self._auth(request, path[len("/auth/v1/"):])
        return _json_response(404, {"message": "Not found"})

    # --- OpenAI ---

    def _openai(self, request: httpx.Request) -> httpx.Response:
        if self.image_response is not None:
            status, body = self.image_response
            return _json_response(status, body)
        return _json_response(200, {"created": 1, "data": [{"b64_json": self.image_b64}]})

    # --- Relational store ---

    def _tick(self) -> str:
        self._clock += timedelta(seconds=1)
        return self._clock.isoformat()

    def _insert(self, table: str, row: dict[str, Any]) -> dict[str, Any]:
        row.setdefault("id", str(uuid.uuid4()))
        row.setdefault("created_at", self._tick())
        if table in self.TIMESTAMPED:
            row.setdefault("updated_at", row["created_at"])
        if table == "posts":
            row.setdefault("caption", None)
            row.setdefault("likes_count", 0)
            row.setdefault("comments_count", 0)
        self.tables.setdefault(table, []).append(row)
        self._bump_counter(table, row, 1)
        return row

    def _bump_counter(self, table: str, row: dict[str, Any], delta: int) -> None:
        column = {"likes": "likes_count", "comments": "comments_count"}.get(table)
        if column is None:
            return
        for post in self.tables["posts"]:
            if post["id"] == row.get("post_id"):
                post[column] += delta

    def _violation(self, table: str, row: dict[str, Any]) -> httpx.Response | None:
        if table == "likes" and self.rows("likes", user_id=row.get("user_id"), post_id=row.get("post_id")):
            return _json_response(409, {
                "code": "23505",
                "message": 'duplicate key value violates unique constraint "likes_user_id_post_id_key"',
                "details": None,
                "hint": None,
            })
        if table == "profiles" and self.rows("profiles", id=row.get("id")):
            return _json_response(409, {
                "code": "23505",
                "message": 'duplicate key value violates unique constraint "profiles_pkey"',
                "details": None,
                "hint": None,
            })
        if table == "posts" and not self.rows("profiles", id=row.get("user_id")):
            return _json_response(409, {
                "code": "23503",
                "message": 'insert or update on table "posts" violates foreign key constraint "posts_user_id_fkey"',
                "details": None,
                "hint": None,
            })
        return None

    @staticmethod
    def _matches(row: dict[str, Any], filters: list[tuple[str, str]]) -> bool:
        for column, expression in filters:
            operator, _, operand = expression.partition(".")
            actual = _as_filter_text(row.get(column))
            if operator == "eq" and actual != operand:
                return False
            if operator == "in":
                values = [v.strip().strip('"') for v in operand.strip("()").split(",")]
                if actual not in values:
                    return False
        return True

    def _project(self, row: dict[str, Any], select: str | None) -> dict[str, Any]:
        if select is None or select == "*":
            return dict(row)
        out: dict[str, Any] = {}
        for part in select.split(","):
            embed = _EMBED_RE.fullmatch(part)
            if embed:
                alias = embed.group(1) or embed.group(2)
                related = self.rows(embed.group(2), id=row.get("user_id"))
                out[alias] = dict(related[0]) if related else None
            elif part == "*":
                out.update(row)
            else:
                out[part] = row.get(part)
        return out

    def _rest(self, request: httpx.Request, table: str) -> httpx.Response:
        rows = self.tables.setdefault(table, [])
        select: str | None = None
        order: list[str] = []
        limit: int | None = None
        filters: list[tuple[str, str]] = []
        for key, value in request.url.params.multi_items():
            if key == "select":
                select = value
            elif key == "order":
                order = value.split(",")
            elif key == "limit":
                limit = int(value)
            else:
                filters.append((key, value))
        single = request.headers.get("accept") == PGRST_OBJECT_MEDIA_TYPE

        if request.method == "GET":
            result = [row for row in rows if self._matches(row, filters)]
            for spec in reversed(order):
                column, _, direction = spec.partition(".")
                result.sort(key=lambda r: str(r.get(column) or ""), reverse=direction == "desc")
            if limit is not None:
                result = result[:limit]
        elif request.method == "POST":
            body = json.loads(request.content)
            result = []
            for row in body if isinstance(body, list) else [body]:
                violation = self._violation(table, row)
                if violation is not None:
                    return violation
                result.append(self._insert(table, dict(row)))
        elif request.method == "PATCH":
            values = json.loads(request.content)
            result = [row for row in rows if self._matches(row, filters)]
            for row in result:
                row.update(values)
                if table in self.TIMESTAMPED:
                    row["updated_at"] = self._tick()
        elif request.method == "DELETE":
            result = [row for row in rows if self._matches(row, filters)]
            self.tables[table] = [row for row in rows if not self._matches(row, filters)]
            for row in result:
                self._bump_counter(table, row, -1)
        else:
            return _json_response(405, {"message": "Method not allowed"})

        projected = [self._project(row, select) for row in result]
        status = 201 if request.method == "POST" else 200
        if single:
            if len(projected) != 1:
                return _json_response(406, {
                    "code": "PGRST116",
                    "message": "JSON object requested, multiple (or no) rows returned",
                    "details": f"The result contains {len(projected)} rows",
                    "hint": None,
                })
            return _json_response(status, projected[0])
        return _json_response(status, projected)

    # --- Storage ---

    def _bucket_missing(self) -> httpx.Response:
        return _json_response(404, {"statusCode": "404", "error": "Bucket not found", "message": "Bucket not found"})

    def _storage(self, request: httpx.Request, path: str) -> httpx.Response:
        if path == "bucket":
            if request.method == "GET":
                return _json_response(200, self.buckets)
            body = json.loads(request.content)
            if any(bucket["id"] == body["id"] for bucket in self.buckets):
                return _json_response(409, {
                    "statusCode": "409",
                    "error": "Duplicate",
                    "message": "The resource already exists",
                })
            self.buckets.append(body)
            self.objects[body["id"]] = {}
            return _json_response(200, {"name": body["id"]})

        if path.startswith("object/list/"):
            bucket_id = path[len("object/list/"):]
            if bucket_id not in self.objects:
                return self._bucket_missing()
            prefix = json.loads(request.content).get("prefix", "")
            return _json_response(200, [
                {"name": name} for name in sorted(self.objects[bucket_id]) if name.startswith(prefix)
            ])

        if path.startswith("object/public/"):
            bucket_id, _, key = path[len("object/public/"):].partition("/")
            data = self.objects.get(bucket_id, {}).get(key)
            if data is None:
                return _json_response(400, {"statusCode": "404", "error": "not_found", "message": "Object not found"})
            return httpx.Response(200, content=data, headers={"Content-Type": "image/png"})

        if path.startswith("object/"):
            rest = path[len("object/"):]
            if request.method == "DELETE":
                if rest not in self.objects:
                    return self._bucket_missing()
                removed = []
                for key in json.loads(request.content)["prefixes"]:
                    if self.objects[rest].pop(key, None) is not None:
                        removed.append({"name": key})
                return _json_response(200, removed)

            bucket_id, _, key = rest.partition("/")
            if bucket_id not in self.objects:
                return self._bucket_missing()
            if key in self.objects[bucket_id] and request.headers.get("x-upsert") != "true":
                return _json_response(409, {
                    "statusCode": "409",
                    "error": "Duplicate",
                    "message": "The resource already exists",
                })
            self.objects[bucket_id][key] = request.content
            return _json_response(200, {"Key": f"{bucket_id}/{key}", "Id": str(uuid.uuid4())})

        return _json_response(404, {"statusCode": "404", "error": "not_found", "message": "Not found"})

    # --- Auth ---

    def _issue_session(self, user: dict[str, Any]) -> dict[str, Any]:
        access_token = f"access-{uuid.uuid4()}"
        refresh_token = f"refresh-{uuid.uuid4()}"
        self.tokens[access_token] = user
        self.refresh_tokens[refresh_token] = user
        return {
            "access_token": access_token,
            "refresh_token": refresh_token,
            "token_type": "bearer",
            "expires_in": 3600,
            "user": {"id": user["id"], "email": user["email"]},
        }

    def _auth(self, request: httpx.Request, path: str) -> httpx.Response:
        invalid_grant = {"error": "invalid_grant", "error_description": "Invalid login credentials"}

        if path == "token":
            body = json.loads(request.content)
            grant_type = request.url.params.get("grant_type")
            if grant_type == "password":
                user = self.users.get(body.get("email"))
                if user is None or user["password"] != body.get("password"):
                    return _json_response(400, invalid_grant)
                return _json_response(200, self._issue_session(user))
            if grant_type == "refresh_token":
                user = self.refresh_tokens.pop(body.get("refresh_token"), None)
                if user is None:
                    return _json_response(400, {
                        "error": "invalid_grant",
                        "error_description": "Invalid Refresh Token: Refresh Token Not Found",
                    })
                return _json_response(200, self._issue_session(user))
            return _json_response(400, {"error": "unsupported_grant_type"})

        if path == "signup":
            body = json.loads(request.content)
            if body["email"] in self.users:
                return _json_response(422, {
                    "code": 422,
                    "error_code": "user_already_exists",
                    "msg": "User already registered",
                })
            user = self.add_user(body["email"], body["password"])
            if self.confirm_email:
                return _json_response(200, {"id": user["id"], "email": user["email"]})
            return _json_response(200, self._issue_session(user))

        if path == "logout":
            token = request.headers.get("authorization", "").removeprefix("Bearer ")
            self.tokens.pop(token, None)
            return httpx.Response(204)

        if path == "user":
            token = request.headers.get("authorization", "").removeprefix("Bearer ")
            user = self.tokens.get(token)
            if user is None:
                return _json_response(401, {"code": 401, "error_code": "bad_jwt", "msg": "invalid JWT"})
            return _json_response(200, {"id": user["id"], "email": user["email"]})

        return _json_response(404, {"message": "Not found"})


# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture
def fake_backend() -> FakeSupabase:
    return FakeSupabase()


@pytest.fixture
def app_config() -> AppConfig:
    """Config pointing at the fake backend with a test API key."""
    return AppConfig(
        backend=BackendSettings(url=BACKEND_URL, anon_key=ANON_KEY),
        image_provider=ImageProviderConfig(api_key="sk-test"),
    )


@pytest.fixture
def session_store(tmp_path: Path) -> SessionStore:
    return SessionStore(tmp_path / "session.json")


@pytest.fixture
def make_http_client(fake_backend: FakeSupabase):
    """Factory for HTTP clients routed to the fake backend."""

    def _make() -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(fake_backend.handler))

    return _make


@pytest_asyncio.fixture
async def ctx(app_config: AppConfig, session_store: SessionStore, make_http_client) -> AsyncIterator[AppContext]:
    """Initialized context with no signed-in user."""
    client = make_http_client()
    context = AppContext(app_config, store=session_store, http_client=client)
    await context.init()
    yield context
    await context.teardown()
    await client.aclose()


@pytest_asyncio.fixture
async def user_ctx(ctx: AppContext, fake_backend: FakeSupabase) -> AppContext:
    """Context signed in as alice@example.com (no profile row yet)."""
    fake_backend.add_user("alice@example.com", "secret123")
    await ctx.backend.auth.sign_in_with_password("alice@example.com", "secret123")
    return ctx
