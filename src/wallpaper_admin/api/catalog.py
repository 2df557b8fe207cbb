"""Category and collection endpoints."""

from fastapi import APIRouter, Depends, Query, status
from fastapi.encoders import jsonable_encoder

from wallpaper_admin.api.auth import get_container, require_admin_session
from wallpaper_admin.api.listing import item_payload, list_entities, store_failure
from wallpaper_admin.api.schemas import (
    CategoryEdit,
    CategoryForm,
    CollectionEdit,
    CollectionForm,
    WallpaperIdsRequest,
)
from wallpaper_admin.containers import AppContainer
from wallpaper_admin.domain.notifications import Notices
from wallpaper_admin.domain.users import SessionState

categories_router = APIRouter(prefix="/categories", tags=["categories"])
collections_router = APIRouter(prefix="/collections", tags=["collections"])


@categories_router.get("")
async def list_categories(
    q: str | None = None,
    cursor: str | None = None,
    limit: int | None = Query(default=None, ge=1, le=100),
    refresh: bool = False,
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """List categories alphabetically, optionally prefix-searching by name."""
    return list_entities(
        container.category_service,
        q=q,
        cursor=cursor,
        limit=limit,
        refresh=refresh,
    )


@categories_router.post("", status_code=status.HTTP_201_CREATED)
async def create_category(
    body: CategoryForm,
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    notices = Notices()
    created = container.category_service.create(body.model_dump(), notices)
    if created is None:
        raise store_failure(notices)
    return item_payload(created, notices)


@categories_router.patch("/{category_id}")
async def update_category(
    category_id: str,
    body: CategoryEdit,
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    notices = Notices()
    updated = container.category_service.update(
        category_id, body.model_dump(exclude_unset=True, exclude_none=True), notices
    )
    if updated is None:
        raise store_failure(notices)
    return item_payload(updated, notices)


@categories_router.delete("/{category_id}")
async def delete_category(
    category_id: str,
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    notices = Notices()
    if not container.category_service.delete(category_id, notices):
        raise store_failure(notices)
    return {"deleted": category_id, "notices": notices.as_payload()}


@collections_router.get("")
async def list_collections(
    q: str | None = None,
    cursor: str | None = None,
    limit: int | None = Query(default=None, ge=1, le=100),
    refresh: bool = False,
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """List collections newest first, optionally prefix-searching by name."""
    return list_entities(
        container.collection_service,
        q=q,
        cursor=cursor,
        limit=limit,
        refresh=refresh,
    )


@collections_router.post("", status_code=status.HTTP_201_CREATED)
async def create_collection(
    body: CollectionForm,
    session: SessionState = Depends(require_admin_session),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Create an empty collection owned by the acting administrator."""
    notices = Notices()
    fields = body.model_dump()
    if session.identity is not None:
        fields["created_by"] = session.identity.id
    created = container.collection_service.create(fields, notices)
    if created is None:
        raise store_failure(notices)
    return item_payload(created, notices)


@collections_router.get("/{collection_id}")
async def get_collection(
    collection_id: str,
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Return a collection with the wallpapers it still references."""
    notices = Notices()
    detail = container.collection_service.get_detail(collection_id, notices)
    if detail is None:
        raise store_failure(notices)
    return {
        "item": jsonable_encoder(detail.collection),
        "wallpapers": jsonable_encoder(detail.wallpapers),
        "missing_ids": detail.missing_ids,
        "notices": notices.as_payload(),
    }


@collections_router.patch("/{collection_id}")
async def update_collection(
    collection_id: str,
    body: CollectionEdit,
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    notices = Notices()
    updated = container.collection_service.update(
        collection_id,
        body.model_dump(exclude_unset=True, exclude_none=True),
        notices,
    )
    if updated is None:
        raise store_failure(notices)
    return item_payload(updated, notices)


@collections_router.delete("/{collection_id}")
async def delete_collection(
    collection_id: str,
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    notices = Notices()
    if not container.collection_service.delete(collection_id, notices):
        raise store_failure(notices)
    return {"deleted": collection_id, "notices": notices.as_payload()}


@collections_router.post("/{collection_id}/wallpapers")
async def add_collection_wallpapers(
    collection_id: str,
    body: WallpaperIdsRequest,
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    notices = Notices()
    updated = container.collection_service.add_wallpapers(
        collection_id, body.ids, notices
    )
    if updated is None:
        raise store_failure(notices)
    return item_payload(updated, notices)


@collections_router.delete("/{collection_id}/wallpapers")
async def remove_collection_wallpapers(
    collection_id: str,
    body: WallpaperIdsRequest,
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    notices = Notices()
    updated = container.collection_service.remove_wallpapers(
        collection_id, body.ids, notices
    )
    if updated is None:
        raise store_failure(notices)
    return item_payload(updated, notices)
