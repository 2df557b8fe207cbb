"""Supabase implementation of the generic entity repository."""

from collections.abc import Callable
from dataclasses import dataclass
from typing import TypeVar

import httpx
from postgrest.exceptions import APIError
from supabase import Client

from wallpaper_admin.domain.errors import StoreError
from wallpaper_admin.domain.pagination import Cursor, PageQuery, SortDirection
from wallpaper_admin.services.store import EntityRepository

T = TypeVar("T")


@dataclass
class SupabaseEntityRepository(EntityRepository[T]):
    """Supabase-backed repository for one table.

    Pages are ordered by the sort field with the row id as a tie-breaker, and
    continuation uses keyset filtering on that pair. NULL sort values are
    pinned to the front in both directions so the keyset filter can step
    from the NULL block into the valued rows.
    """

    client: Client
    table: str
    parse: Callable[[dict[str, object]], T]

    def query(self, page_query: PageQuery) -> list[T]:
        """Return one page of rows matching the query."""
        builder = self.client.table(self.table).select("*")
        for column, value in page_query.filters.items():
            builder = builder.eq(column, value)
        text_range = page_query.text_range
        if text_range is not None:
            builder = builder.ilike(text_range.field, _prefix_pattern(text_range.lower))
        for column, values in page_query.array_contains.items():
            builder = builder.contains(column, values)
        if page_query.cursor is not None:
            builder = builder.or_(_keyset_filter(page_query, page_query.cursor))
        desc = page_query.sort_direction is SortDirection.DESC
        builder = builder.order(page_query.sort_field, desc=desc, nullsfirst=True)
        if page_query.sort_field != "id":
            builder = builder.order("id", desc=desc)
        response = self._execute(builder.limit(page_query.page_size))
        return [self.parse(row) for row in response.data or []]

    def get(self, entity_id: str) -> T | None:
        """Return a row by id, if present."""
        response = self._execute(
            self.client.table(self.table).select("*").eq("id", entity_id).limit(1)
        )
        if not response.data:
            return None
        return self.parse(response.data[0])

    def get_many(self, entity_ids: list[str]) -> list[T]:
        """Return the rows that exist among the given ids."""
        if not entity_ids:
            return []
        response = self._execute(
            self.client.table(self.table).select("*").in_("id", entity_ids)
        )
        return [self.parse(row) for row in response.data or []]

    def create(self, payload: dict[str, object]) -> T:
        """Insert a row and return it."""
        response = self._execute(self.client.table(self.table).insert(payload))
        if not response.data:
            raise StoreError(f"Failed to create row in {self.table}")
        return self.parse(response.data[0])

    def update(self, entity_id: str, payload: dict[str, object]) -> T | None:
        """Update a row and return it, or None when no row matched."""
        response = self._execute(
            self.client.table(self.table).update(payload).eq("id", entity_id)
        )
        if not response.data:
            return None
        return self.parse(response.data[0])

    def delete(self, entity_id: str) -> bool:
        """Delete a row; return whether one was removed."""
        response = self._execute(
            self.client.table(self.table).delete().eq("id", entity_id)
        )
        return bool(response.data)

    def count(self, filters: dict[str, object]) -> int:
        """Return the exact number of rows matching equality filters."""
        builder = self.client.table(self.table).select("id", count="exact")
        for column, value in filters.items():
            builder = builder.eq(column, value)
        response = self._execute(builder.limit(1))
        return int(response.count or 0)

    def _execute(self, builder):  # type: ignore[no-untyped-def]
        try:
            return builder.execute()
        except (APIError, httpx.HTTPError) as exc:
            raise StoreError(f"Supabase request on {self.table} failed: {exc}") from exc


def _keyset_filter(page_query: PageQuery, cursor: Cursor) -> str:
    """PostgREST ``or`` filter selecting rows strictly after the cursor."""
    op = "lt" if page_query.sort_direction is SortDirection.DESC else "gt"
    after_id = f"id.{op}.{_quote(cursor.id)}"
    if page_query.sort_field == "id":
        return after_id
    column = page_query.sort_field
    if cursor.sort_value is None:
        return f"and({column}.is.null,{after_id}),{column}.not.is.null"
    value = _quote(cursor.sort_value)
    return f"{column}.{op}.{value},and({column}.eq.{value},{after_id})"


def _prefix_pattern(prefix: str) -> str:
    """Case-insensitive LIKE pattern matching values that start with ``prefix``."""
    escaped = prefix.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"{escaped}%"


def _quote(value: object) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    escaped = str(value).replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'
