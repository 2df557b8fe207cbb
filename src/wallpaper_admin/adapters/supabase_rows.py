"""Parsing of Supabase rows into domain models."""

from datetime import UTC, datetime

from wallpaper_admin.domain.catalog import Category, Collection
from wallpaper_admin.domain.users import Role, UserProfile
from wallpaper_admin.domain.wallpapers import Wallpaper, WallpaperStatus


def parse_wallpaper(row: dict[str, object]) -> Wallpaper:
    """Parse a wallpapers row into a domain model."""
    return Wallpaper(
        id=str(row["id"]),
        name=str(row.get("name") or ""),
        created_at=_parse_datetime(row.get("created_at")),
        status=_parse_status(row.get("status")),
        image=str(row.get("image") or ""),
        thumbnail=str(row.get("thumbnail") or ""),
        preview=str(row.get("preview") or ""),
        blur_hash=str(row.get("blur_hash") or ""),
        downloads=int(row.get("downloads") or 0),
        likes=int(row.get("likes") or 0),
        views=int(row.get("views") or 0),
        size=int(row.get("size") or 0),
        resolution=str(row.get("resolution") or ""),
        aspect_ratio=float(row.get("aspect_ratio") or 0.0),
        orientation=str(row.get("orientation") or ""),
        category=str(row.get("category") or ""),
        collections=_parse_strings(row.get("collections")),
        tags=_parse_strings(row.get("tags")),
        colors=_parse_strings(row.get("colors")),
        author=str(row.get("author") or ""),
        author_image=str(row.get("author_image") or ""),
        uploaded_by=str(row.get("uploaded_by") or ""),
        description=str(row.get("description") or ""),
        is_premium=bool(row.get("is_premium")),
        is_ai_generated=bool(row.get("is_ai_generated")),
        license=str(row.get("license") or ""),
        hash=str(row.get("hash") or row["id"]),
        search_tags=_parse_strings(row.get("search_tags")),
    )


def parse_category(row: dict[str, object]) -> Category:
    """Parse a categories row into a domain model."""
    return Category(
        id=str(row["id"]),
        name=str(row.get("name") or ""),
        created_at=_parse_datetime(row.get("created_at")),
        description=str(row.get("description") or ""),
        wallpaper_count=int(row.get("wallpaper_count") or 0),
    )


def parse_collection(row: dict[str, object]) -> Collection:
    """Parse a collections row into a domain model."""
    return Collection(
        id=str(row["id"]),
        name=str(row.get("name") or ""),
        created_at=_parse_datetime(row.get("created_at")),
        description=str(row.get("description") or ""),
        cover_image=str(row.get("cover_image") or ""),
        tags=_parse_strings(row.get("tags")),
        type=str(row.get("type") or "manual"),
        wallpaper_ids=_parse_strings(row.get("wallpaper_ids")),
        created_by=str(row.get("created_by") or ""),
    )


def parse_user_profile(row: dict[str, object]) -> UserProfile:
    """Parse a users row into a domain model."""
    raw_role = row.get("role")
    return UserProfile(
        id=str(row["id"]),
        created_at=_parse_datetime(row.get("created_at")),
        display_name=_optional_str(row.get("display_name")),
        email=str(row.get("email") or ""),
        photo_url=str(row.get("photo_url") or ""),
        username=str(row.get("username") or ""),
        bio=str(row.get("bio") or ""),
        role=Role(raw_role) if raw_role in {role.value for role in Role} else None,
    )


def _parse_datetime(value: object) -> datetime:
    if isinstance(value, datetime):
        return value
    if isinstance(value, str) and value:
        return datetime.fromisoformat(value)
    return datetime.now(tz=UTC)


def _parse_status(value: object) -> WallpaperStatus:
    if value in {status.value for status in WallpaperStatus}:
        return WallpaperStatus(value)
    return WallpaperStatus.PENDING


def _parse_strings(value: object) -> list[str]:
    if isinstance(value, list):
        return [str(item) for item in value]
    return []


def _optional_str(value: object) -> str | None:
    # Sort columns keep NULL so cursors can point into the NULL block.
    return None if value is None else str(value)
