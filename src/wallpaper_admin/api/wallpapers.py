"""Wallpaper browsing, moderation and editing endpoints."""

from fastapi import APIRouter, Depends, Query, status

from wallpaper_admin.api.auth import get_container
from wallpaper_admin.api.listing import (
    decode_cursor,
    item_payload,
    list_entities,
    page_payload,
    store_failure,
)
from wallpaper_admin.api.schemas import (
    BulkStatusRequest,
    StatusChange,
    WallpaperEdit,
    WallpaperForm,
)
from wallpaper_admin.containers import AppContainer
from wallpaper_admin.domain.notifications import Notices
from wallpaper_admin.domain.pagination import SortDirection
from wallpaper_admin.domain.wallpapers import WallpaperStatus

router = APIRouter(prefix="/wallpapers", tags=["wallpapers"])


@router.get("")
async def list_wallpapers(  # noqa: PLR0913
    q: str | None = None,
    status_filter: WallpaperStatus | None = Query(default=None, alias="status"),
    category: str | None = None,
    cursor: str | None = None,
    sort_direction: SortDirection | None = None,
    limit: int | None = Query(default=None, ge=1, le=100),
    refresh: bool = False,
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """List wallpapers newest first, optionally prefix-searching by name."""
    return list_entities(
        container.wallpaper_service,
        q=q,
        cursor=cursor,
        filters={
            "status": status_filter.value if status_filter else None,
            "category": category,
        },
        sort_direction=sort_direction,
        limit=limit,
        refresh=refresh,
    )


@router.get("/tags/{term}")
async def wallpapers_by_tag(
    term: str,
    status_filter: WallpaperStatus | None = Query(default=None, alias="status"),
    cursor: str | None = None,
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """List wallpapers whose search index contains a term."""
    service = container.wallpaper_service
    notices = Notices()
    page = service.search_by_tag(
        service.accessor(notices),
        term,
        filters={"status": status_filter.value if status_filter else None},
        cursor=decode_cursor(cursor),
    )
    if page is None:
        raise store_failure(notices)
    return page_payload(page, notices)


@router.post("/bulk-status")
async def bulk_status(
    body: BulkStatusRequest,
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Set the status of several wallpapers; partial failures are reported."""
    notices = Notices()
    result = await container.wallpaper_service.bulk_set_status(
        body.ids, body.status, notices
    )
    return {
        "status": result.status.value,
        "updated": result.updated,
        "failed": result.failed,
        "notices": notices.as_payload(),
    }


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_wallpaper(
    body: WallpaperForm,
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    notices = Notices()
    created = container.wallpaper_service.create(
        body.model_dump(mode="json"), notices
    )
    if created is None:
        raise store_failure(notices)
    return item_payload(created, notices)


@router.get("/{wallpaper_id}")
async def get_wallpaper(
    wallpaper_id: str,
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    notices = Notices()
    wallpaper = container.wallpaper_service.get(wallpaper_id, notices)
    if wallpaper is None:
        raise store_failure(notices)
    return item_payload(wallpaper, notices)


@router.patch("/{wallpaper_id}")
async def edit_wallpaper(
    wallpaper_id: str,
    body: WallpaperEdit,
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Save edited name, description, tags or category."""
    notices = Notices()
    updated = container.wallpaper_service.edit(
        wallpaper_id,
        body.model_dump(mode="json", exclude_unset=True, exclude_none=True),
        notices,
    )
    if updated is None:
        raise store_failure(notices)
    return item_payload(updated, notices)


@router.post("/{wallpaper_id}/status")
async def set_wallpaper_status(
    wallpaper_id: str,
    body: StatusChange,
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Approve, reject or hide one wallpaper."""
    notices = Notices()
    updated = container.wallpaper_service.set_status(
        wallpaper_id, body.status, notices
    )
    if updated is None:
        raise store_failure(notices)
    return item_payload(updated, notices)


@router.delete("/{wallpaper_id}")
async def delete_wallpaper(
    wallpaper_id: str,
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    notices = Notices()
    if not container.wallpaper_service.delete(wallpaper_id, notices):
        raise store_failure(notices)
    return {"deleted": wallpaper_id, "notices": notices.as_payload()}
