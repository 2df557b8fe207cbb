"""Dashboard overview for moderators."""

import logging
from dataclasses import dataclass

from wallpaper_admin.domain.errors import StoreError
from wallpaper_admin.domain.kinds import WALLPAPERS
from wallpaper_admin.domain.notifications import Notices
from wallpaper_admin.domain.pagination import PageQuery
from wallpaper_admin.domain.wallpapers import (
    DashboardOverview,
    Wallpaper,
    WallpaperStatus,
)
from wallpaper_admin.services.cache import PageCache
from wallpaper_admin.services.store import EntityRepository

logger = logging.getLogger(__name__)

RECENT_WALLPAPERS = 5

# Lives under the wallpapers prefix so wallpaper writes invalidate it.
OVERVIEW_CACHE_KEY = f"{WALLPAPERS.name}:dashboard:overview"


@dataclass
class DashboardService:
    """Service for the dashboard landing page."""

    wallpaper_repository: EntityRepository[Wallpaper]
    page_cache: PageCache

    def overview(
        self, notices: Notices, refresh: bool = False
    ) -> DashboardOverview | None:
        """Return recent uploads and per-status counts."""
        if not refresh:
            cached = self.page_cache.get_value(OVERVIEW_CACHE_KEY)
            if isinstance(cached, DashboardOverview):
                return cached
        try:
            recent = self.wallpaper_repository.query(
                PageQuery(
                    sort_field=WALLPAPERS.sort_field,
                    sort_direction=WALLPAPERS.sort_direction,
                    page_size=RECENT_WALLPAPERS,
                )
            )
            counts = {
                status: self.wallpaper_repository.count({"status": status.value})
                for status in (
                    WallpaperStatus.PENDING,
                    WallpaperStatus.APPROVED,
                    WallpaperStatus.REJECTED,
                )
            }
        except StoreError:
            logger.exception("Failed to load dashboard overview")
            notices.error("Failed to load dashboard data")
            return None
        overview = DashboardOverview(
            recent_wallpapers=recent,
            pending_count=counts[WallpaperStatus.PENDING],
            approved_count=counts[WallpaperStatus.APPROVED],
            rejected_count=counts[WallpaperStatus.REJECTED],
        )
        self.page_cache.set_value(OVERVIEW_CACHE_KEY, overview)
        return overview
