"""User listing, profile and role management endpoints."""

from fastapi import APIRouter, Depends, Query

from wallpaper_admin.api.auth import get_container
from wallpaper_admin.api.listing import (
    decode_cursor,
    item_payload,
    list_entities,
    page_payload,
    store_failure,
)
from wallpaper_admin.api.schemas import ProfileEdit, RoleChange
from wallpaper_admin.containers import AppContainer
from wallpaper_admin.domain.notifications import Notices
from wallpaper_admin.domain.users import Role

router = APIRouter(prefix="/users", tags=["users"])


@router.get("")
async def list_users(  # noqa: PLR0913
    q: str | None = None,
    role: Role | None = None,
    cursor: str | None = None,
    limit: int | None = Query(default=None, ge=1, le=100),
    refresh: bool = False,
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """List users by display name, optionally filtered by role."""
    return list_entities(
        container.user_service,
        q=q,
        cursor=cursor,
        filters={"role": role.value if role else None},
        limit=limit,
        refresh=refresh,
    )


@router.get("/{user_id}")
async def get_user(
    user_id: str,
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    notices = Notices()
    user = container.user_service.get(user_id, notices)
    if user is None:
        raise store_failure(notices)
    return item_payload(user, notices)


@router.patch("/{user_id}")
async def update_profile(
    user_id: str,
    body: ProfileEdit,
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Edit a user's display name, username, bio or photo."""
    notices = Notices()
    updated = container.user_service.update_profile(
        user_id, body.model_dump(exclude_unset=True, exclude_none=True), notices
    )
    if updated is None:
        raise store_failure(notices)
    return item_payload(updated, notices)


@router.get("/{user_id}/wallpapers")
async def user_wallpapers(
    user_id: str,
    cursor: str | None = None,
    refresh: bool = False,
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """List the wallpapers a user uploaded."""
    service = container.wallpaper_service
    notices = Notices()
    page = service.uploaded_by_user(
        service.accessor(notices),
        user_id,
        cursor=decode_cursor(cursor),
        use_cache=not refresh,
    )
    if page is None:
        raise store_failure(notices)
    return page_payload(page, notices)


@router.patch("/{user_id}/role")
async def change_role(
    user_id: str,
    body: RoleChange,
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    notices = Notices()
    updated = container.user_service.set_role(user_id, body.role, notices)
    if updated is None:
        raise store_failure(notices)
    return item_payload(updated, notices)


@router.delete("/{user_id}")
async def delete_user(
    user_id: str,
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    notices = Notices()
    if not container.user_service.delete(user_id, notices):
        raise store_failure(notices)
    return {"deleted": user_id, "notices": notices.as_payload()}
