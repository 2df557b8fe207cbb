"""Wallpaper domain models."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import StrEnum


class WallpaperStatus(StrEnum):
    """Moderation status of a wallpaper."""

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"
    HIDDEN = "hidden"


@dataclass(frozen=True)
class Wallpaper:
    """A user-submitted wallpaper."""

    id: str
    name: str
    created_at: datetime
    status: WallpaperStatus = WallpaperStatus.PENDING
    image: str = ""
    thumbnail: str = ""
    preview: str = ""
    blur_hash: str = ""
    downloads: int = 0
    likes: int = 0
    views: int = 0
    size: int = 0
    resolution: str = ""
    aspect_ratio: float = 0.0
    orientation: str = ""
    category: str = ""
    collections: list[str] = field(default_factory=list)
    tags: list[str] = field(default_factory=list)
    colors: list[str] = field(default_factory=list)
    author: str = ""
    author_image: str = ""
    uploaded_by: str = ""
    description: str = ""
    is_premium: bool = False
    is_ai_generated: bool = False
    license: str = ""
    hash: str = ""
    search_tags: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class BulkStatusResult:
    """Outcome of a best-effort bulk status change."""

    status: WallpaperStatus
    updated: list[str]
    failed: list[str]

    @property
    def ok(self) -> bool:
        """Return True when every write succeeded."""
        return not self.failed


@dataclass(frozen=True)
class DashboardOverview:
    """Moderation summary shown on the dashboard landing page."""

    recent_wallpapers: list[Wallpaper]
    pending_count: int
    approved_count: int
    rejected_count: int

    @property
    def total_count(self) -> int:
        return self.pending_count + self.approved_count + self.rejected_count
