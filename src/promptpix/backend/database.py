"""Query builder for the relational store (PostgREST dialect).

Usage:
    rows = await backend.table("posts") \\
        .select("*, profile:profiles(*)") \\
        .eq("user_id", user_id) \\
        .order("created_at", desc=True) \\
        .limit(6) \\
        .execute()

    post = await backend.table("posts").insert(row).select("*").single().execute()
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from .http import PGRST_OBJECT_MEDIA_TYPE, BackendHTTP


@dataclass(frozen=True)
class QueryResponse:
    """Rows returned by a query.

    `data` is a dict for single-row queries, a list otherwise.
    """

    data: Any
    count: int


def _format_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if value is None:
        return "null"
    return str(value)


def _quote(value: Any) -> str:
    text = _format_value(value).replace("\\", "\\\\").replace('"', '\\"')
    return f'"{text}"'


class TableQuery:
    """A single request against one table, built by chaining."""

    def __init__(self, http: BackendHTTP, table: str):
        self._http = http
        self._table = table
        self._method = "GET"
        self._columns: str | None = None
        self._body: Any = None
        self._filters: list[tuple[str, str]] = []
        self._order: list[str] = []
        self._limit: int | None = None
        self._single = False

    @property
    def url(self) -> str:
        return f"{self._http.settings.rest_url}/{self._table}"

    # --- Operations ---

    def select(self, columns: str = "*") -> "TableQuery":
        """Columns to return; embedded relations use `alias:table(*)`."""
        self._columns = "".join(columns.split())
        return self

    def insert(self, row: dict[str, Any] | list[dict[str, Any]]) -> "TableQuery":
        self._method = "POST"
        self._body = row
        return self

    def update(self, values: dict[str, Any]) -> "TableQuery":
        self._method = "PATCH"
        self._body = values
        return self

    def delete(self) -> "TableQuery":
        self._method = "DELETE"
        return self

    # --- Filters and modifiers ---

    def eq(self, column: str, value: Any) -> "TableQuery":
        self._filters.append((column, f"eq.{_format_value(value)}"))
        return self

    def in_(self, column: str, values: list[Any]) -> "TableQuery":
        joined = ",".join(_quote(v) for v in values)
        self._filters.append((column, f"in.({joined})"))
        return self

    def match(self, criteria: dict[str, Any]) -> "TableQuery":
        """Equality filter on every key of `criteria`."""
        for column, value in criteria.items():
            self.eq(column, value)
        return self

    def order(self, column: str, desc: bool = False) -> "TableQuery":
        self._order.append(f"{column}.{'desc' if desc else 'asc'}")
        return self

    def limit(self, count: int) -> "TableQuery":
        self._limit = count
        return self

    def single(self) -> "TableQuery":
        """Expect exactly one row; zero rows fail with code PGRST116."""
        self._single = True
        return self

    # --- Execution ---

    def build_params(self) -> list[tuple[str, str]]:
        params: list[tuple[str, str]] = []
        if self._columns is not None:
            params.append(("select", self._columns))
        params.extend(self._filters)
        if self._order:
            params.append(("order", ",".join(self._order)))
        if self._limit is not None:
            params.append(("limit", str(self._limit)))
        return params

    def build_headers(self) -> dict[str, str]:
        headers: dict[str, str] = {}
        if self._single:
            headers["Accept"] = PGRST_OBJECT_MEDIA_TYPE
        if self._method != "GET":
            headers["Prefer"] = "return=representation"
        return headers

    async def execute(self) -> QueryResponse:
        """Send the request; raises BackendAPIError on failure."""
        response = await self._http.request(
            self._method,
            self.url,
            params=self.build_params(),
            json=self._body,
            headers=self.build_headers(),
        )

        if not response.content:
            return QueryResponse(data=None if self._single else [], count=0)

        data = response.json()
        if isinstance(data, list):
            return QueryResponse(data=data, count=len(data))
        return QueryResponse(data=data, count=1)
