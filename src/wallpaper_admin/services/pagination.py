"""Cursor-paginated list and prefix search over one entity kind."""

import logging
from dataclasses import dataclass, field, replace
from typing import Generic, TypeVar

from wallpaper_admin.domain.errors import InvalidCursorError, StoreError
from wallpaper_admin.domain.notifications import Notices
from wallpaper_admin.domain.pagination import (
    Cursor,
    EntityKind,
    Page,
    PageQuery,
    SortDirection,
    active_filters,
    cursor_value,
)
from wallpaper_admin.services.cache import PageCache, list_key
from wallpaper_admin.services.search import prefix_range
from wallpaper_admin.services.store import EntityRepository

T = TypeVar("T")

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class _ListRequest:
    """Parameters of the last list call, replayed by load_more/refresh."""

    term: str
    filters: dict[str, object]
    sort_field: str
    sort_direction: SortDirection
    page_size: int
    contains: dict[str, list[str]]

    def cache_params(self) -> dict[str, object]:
        return {
            "filters": self.filters,
            "search": self.term,
            "is_search_mode": bool(self.term),
            "contains": self.contains,
            "sort": [self.sort_field, self.sort_direction.value],
            "page_size": self.page_size,
        }


@dataclass
class CollectionAccessor(Generic[T]):
    """Accumulates pages of one entity kind for a list view.

    ``has_more`` is true when the last page came back full. That is a
    heuristic: the real end of data shows up only as a short or empty page.
    """

    kind: EntityKind
    repository: EntityRepository[T]
    page_cache: PageCache
    notices: Notices = field(default_factory=Notices)
    items: list[T] = field(default_factory=list)
    cursor: Cursor | None = None
    has_more: bool = True
    _fingerprint: str | None = field(default=None, repr=False)
    _last_request: _ListRequest | None = field(default=None, repr=False)

    def fetch_page(  # noqa: PLR0913
        self,
        is_first_page: bool = True,
        filters: dict[str, object] | None = None,
        sort_field: str | None = None,
        sort_direction: SortDirection | str | None = None,
        page_size: int | None = None,
        cursor: Cursor | None = None,
        *,
        contains: dict[str, list[str]] | None = None,
        use_cache: bool = True,
    ) -> Page[T] | None:
        """Fetch the first page, or the page after ``cursor``/the stored cursor."""
        request = self._request(
            "", filters, sort_field, sort_direction, page_size, contains
        )
        return self._run(request, is_first_page, cursor, use_cache=use_cache)

    def search(  # noqa: PLR0913
        self,
        term: str | None,
        filters: dict[str, object] | None = None,
        sort_field: str | None = None,
        sort_direction: SortDirection | str | None = None,
        page_size: int | None = None,
        cursor: Cursor | None = None,
        *,
        use_cache: bool = True,
    ) -> Page[T] | None:
        """Prefix-search the kind's search field; blank terms list normally."""
        cleaned = (term or "").strip()
        if not cleaned:
            return self.fetch_page(
                is_first_page=cursor is None,
                filters=filters,
                sort_field=sort_field,
                sort_direction=sort_direction,
                page_size=page_size,
                cursor=cursor,
                use_cache=use_cache,
            )
        request = self._request(
            cleaned, filters, sort_field, sort_direction, page_size, None
        )
        return self._run(request, cursor is None, cursor, use_cache=use_cache)

    def load_more(self) -> Page[T] | None:
        """Continue the last browse or search from the stored cursor."""
        if self._last_request is None or not self.has_more:
            return None
        return self._run(self._last_request, False, None, use_cache=True)

    def refresh(self) -> Page[T] | None:
        """Re-run the first page of the last request, skipping the cache."""
        request = self._last_request or self._request("", None, None, None, None, None)
        return self._run(request, True, None, use_cache=False)

    def reset_pagination(self) -> None:
        """Forget the cursor so the next call starts from the first page."""
        self.cursor = None
        self.has_more = True

    def _request(  # noqa: PLR0913
        self,
        term: str,
        filters: dict[str, object] | None,
        sort_field: str | None,
        sort_direction: SortDirection | str | None,
        page_size: int | None,
        contains: dict[str, list[str]] | None,
    ) -> _ListRequest:
        resolved_size = page_size if page_size is not None else self.kind.page_size
        if resolved_size < 1:
            raise ValueError("page_size must be at least 1")
        return _ListRequest(
            term=term,
            filters=active_filters(filters),
            sort_field=sort_field or self.kind.sort_field,
            sort_direction=SortDirection(sort_direction or self.kind.sort_direction),
            page_size=resolved_size,
            contains=dict(contains or {}),
        )

    def _run(
        self,
        request: _ListRequest,
        is_first_page: bool,
        cursor: Cursor | None,
        *,
        use_cache: bool,
    ) -> Page[T] | None:
        base_query = PageQuery(
            sort_field=request.sort_field,
            sort_direction=request.sort_direction,
            page_size=request.page_size,
            filters=request.filters,
            text_range=prefix_range(self.kind.search_field, request.term),
            array_contains=request.contains,
        )
        fingerprint = base_query.fingerprint(self.kind.name)
        if cursor is not None:
            if cursor.fingerprint != fingerprint:
                raise InvalidCursorError("Cursor belongs to a different query")
            is_first_page = False
        elif not is_first_page:
            if fingerprint != self._fingerprint or self.cursor is None:
                is_first_page = True
            else:
                cursor = self.cursor

        cache_key = None
        if is_first_page:
            cache_key = list_key(self.kind.name, request.cache_params())
            cached = self.page_cache.get_page(cache_key) if use_cache else None
            if cached is not None:
                self._apply(cached, True, fingerprint, request)
                self._notify_if_empty(request, cached, True)
                return cached

        query = replace(base_query, cursor=None if is_first_page else cursor)
        try:
            items = self.repository.query(query)
        except StoreError:
            logger.exception("Failed to load %s", self.kind.name)
            self.notices.error(
                f"Failed to load {self.kind.label}. Please try again later."
            )
            return None

        page: Page[T] = Page(
            items=items,
            cursor=_cursor_after(items, request.sort_field, fingerprint),
            has_more=len(items) == request.page_size,
        )
        if cache_key is not None:
            self.page_cache.set_page(cache_key, page)
        self._apply(page, is_first_page, fingerprint, request)
        self._notify_if_empty(request, page, is_first_page)
        return page

    def _notify_if_empty(
        self, request: _ListRequest, page: Page[T], is_first_page: bool
    ) -> None:
        if request.term and is_first_page and not page.items:
            self.notices.notify(
                "No results found",
                f'No {self.kind.label} matching "{request.term}" were found.',
            )

    def _apply(
        self,
        page: Page[T],
        is_first_page: bool,
        fingerprint: str,
        request: _ListRequest,
    ) -> None:
        if is_first_page:
            self.items = list(page.items)
            self.cursor = page.cursor
        elif page.items:
            self.items.extend(page.items)
            self.cursor = page.cursor
        self.has_more = page.has_more
        self._fingerprint = fingerprint
        self._last_request = request


def _cursor_after(items: list, sort_field: str, fingerprint: str) -> Cursor | None:
    if not items:
        return None
    last = items[-1]
    return Cursor(
        sort_field=sort_field,
        sort_value=cursor_value(getattr(last, sort_field, None)),
        id=str(last.id),
        fingerprint=fingerprint,
    )
