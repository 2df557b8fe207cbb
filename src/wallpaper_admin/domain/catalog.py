"""Domain models for categories and curated collections."""

from dataclasses import dataclass, field
from datetime import datetime

from wallpaper_admin.domain.wallpapers import Wallpaper


@dataclass(frozen=True)
class Category:
    """A wallpaper category."""

    id: str
    name: str
    created_at: datetime
    description: str = ""
    wallpaper_count: int = 0


@dataclass(frozen=True)
class Collection:
    """A curated collection referencing wallpapers by id."""

    id: str
    name: str
    created_at: datetime
    description: str = ""
    cover_image: str = ""
    tags: list[str] = field(default_factory=list)
    type: str = "manual"
    wallpaper_ids: list[str] = field(default_factory=list)
    created_by: str = ""


@dataclass(frozen=True)
class CollectionDetail:
    """A collection with its referenced wallpapers resolved.

    References are weak: ids whose wallpaper no longer exists are listed in
    ``missing_ids`` and left out of ``wallpapers``.
    """

    collection: Collection
    wallpapers: list[Wallpaper]
    missing_ids: list[str]
