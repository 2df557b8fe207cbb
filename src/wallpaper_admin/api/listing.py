"""Helpers shared by the list and mutation endpoints."""

from fastapi import HTTPException, status
from fastapi.encoders import jsonable_encoder

from wallpaper_admin.domain.notifications import Notices
from wallpaper_admin.domain.pagination import Cursor, Page, SortDirection
from wallpaper_admin.services.entities import EntityService


def decode_cursor(token: str | None) -> Cursor | None:
    """Decode a cursor query parameter; blank means the first page."""
    if not token:
        return None
    return Cursor.decode(token)


def store_failure(notices: Notices) -> HTTPException:
    """Error raised when the store failed and notices explain why."""
    return HTTPException(
        status_code=status.HTTP_502_BAD_GATEWAY,
        detail={"notices": notices.as_payload()},
    )


def page_payload(page: Page, notices: Notices) -> dict[str, object]:
    return {
        "items": jsonable_encoder(page.items),
        "cursor": page.cursor.encode() if page.cursor else None,
        "has_more": page.has_more,
        "notices": notices.as_payload(),
    }


def item_payload(item: object, notices: Notices) -> dict[str, object]:
    return {"item": jsonable_encoder(item), "notices": notices.as_payload()}


def list_entities(  # noqa: PLR0913
    service: EntityService,
    *,
    q: str | None,
    cursor: str | None,
    filters: dict[str, object] | None = None,
    sort_direction: SortDirection | None = None,
    limit: int | None = None,
    refresh: bool = False,
) -> dict[str, object]:
    """Run one list or prefix-search request and shape the response."""
    notices = Notices()
    accessor = service.accessor(notices)
    page = accessor.search(
        q,
        filters=filters,
        sort_direction=sort_direction,
        page_size=limit,
        cursor=decode_cursor(cursor),
        use_cache=not refresh,
    )
    if page is None:
        raise store_failure(notices)
    return page_payload(page, notices)
