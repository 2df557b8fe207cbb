"""Pydantic request bodies for the admin API."""

from typing import Annotated, Literal

from pydantic import BaseModel, Field, StringConstraints

from wallpaper_admin.domain.users import Role
from wallpaper_admin.domain.wallpapers import WallpaperStatus

Tag = Annotated[
    str, StringConstraints(strip_whitespace=True, min_length=1, max_length=40)
]
Name = Annotated[
    str, StringConstraints(strip_whitespace=True, min_length=1, max_length=100)
]


class WallpaperForm(BaseModel):
    """Metadata for a wallpaper whose files are already stored."""

    name: Name
    image: str
    thumbnail: str = ""
    preview: str = ""
    blur_hash: str = ""
    category: str = ""
    tags: list[Tag] = Field(default_factory=list, max_length=30)
    colors: list[str] = Field(default_factory=list)
    author: str = ""
    author_image: str = ""
    uploaded_by: str = ""
    description: str = Field(default="", max_length=1000)
    resolution: str = ""
    aspect_ratio: float = 0.0
    orientation: str = ""
    size: int = Field(default=0, ge=0)
    is_premium: bool = False
    is_ai_generated: bool = False
    license: str = ""
    status: WallpaperStatus = WallpaperStatus.PENDING


class WallpaperEdit(BaseModel):
    """Editable display fields of a wallpaper; unset fields are left alone."""

    name: Name | None = None
    description: str | None = Field(default=None, max_length=1000)
    tags: list[Tag] | None = Field(default=None, max_length=30)
    category: str | None = None


class StatusChange(BaseModel):
    status: WallpaperStatus


class BulkStatusRequest(BaseModel):
    """Status change applied to several wallpapers."""

    ids: list[str] = Field(min_length=1)
    status: WallpaperStatus


class CategoryForm(BaseModel):
    """Create payload for a category."""

    name: Name
    description: str = Field(default="", max_length=1000)


class CategoryEdit(BaseModel):
    name: Name | None = None
    description: str | None = Field(default=None, max_length=1000)


CollectionType = Literal["manual", "auto"]


class CollectionForm(BaseModel):
    """Create payload for a collection."""

    name: Name
    description: str = Field(default="", max_length=1000)
    cover_image: str = ""
    tags: list[Tag] = Field(default_factory=list, max_length=30)
    type: CollectionType = "manual"


class CollectionEdit(BaseModel):
    """Collection fields to change; unset fields are left alone."""

    name: Name | None = None
    description: str | None = Field(default=None, max_length=1000)
    cover_image: str | None = None
    tags: list[Tag] | None = Field(default=None, max_length=30)
    type: CollectionType | None = None


class WallpaperIdsRequest(BaseModel):
    ids: list[str] = Field(min_length=1)


class RoleChange(BaseModel):
    role: Role


class ProfileEdit(BaseModel):
    """Editable profile fields of a user."""

    display_name: Name | None = None
    username: str | None = Field(default=None, max_length=50)
    bio: str | None = Field(default=None, max_length=1000)
    photo_url: str | None = None
