"""Tests for the dashboard overview."""

from wallpaper_admin.domain.notifications import Notices
from wallpaper_admin.domain.wallpapers import WallpaperStatus
from wallpaper_admin.services.cache import PageCache
from wallpaper_admin.services.dashboard import DashboardService
from wallpaper_admin.services.wallpapers import WallpaperService
from tests.conftest import InMemoryEntityRepository


def _service(
    wallpaper_service: WallpaperService, page_cache: PageCache
) -> tuple[DashboardService, InMemoryEntityRepository]:
    repository = wallpaper_service.repository
    assert isinstance(repository, InMemoryEntityRepository)
    return DashboardService(repository, page_cache), repository


def test_overview_counts_and_recent(
    wallpaper_service: WallpaperService, page_cache: PageCache
) -> None:
    service, repository = _service(wallpaper_service, page_cache)
    for index in range(4):
        repository.add(name=f"Pending {index}", status="pending")
    for index in range(3):
        repository.add(name=f"Approved {index}", status="approved")
    repository.add(name="Rejected", status="rejected")
    repository.add(name="Hidden", status="hidden")

    overview = service.overview(Notices())

    assert overview is not None
    assert overview.pending_count == 4
    assert overview.approved_count == 3
    assert overview.rejected_count == 1
    assert overview.total_count == 8
    assert [item.name for item in overview.recent_wallpapers] == [
        "Hidden",
        "Rejected",
        "Approved 2",
        "Approved 1",
        "Approved 0",
    ]


def test_overview_is_cached_until_wallpapers_change(
    wallpaper_service: WallpaperService, page_cache: PageCache
) -> None:
    service, repository = _service(wallpaper_service, page_cache)
    wallpaper = repository.add(name="Waiting")

    first = service.overview(Notices())
    assert first is not None
    assert first.pending_count == 1

    repository.add(name="Unseen")
    assert service.overview(Notices()) == first

    wallpaper_service.set_status(wallpaper.id, WallpaperStatus.APPROVED, Notices())
    after_write = service.overview(Notices())
    assert after_write is not None
    assert after_write.pending_count == 1
    assert after_write.approved_count == 1

    refreshed = service.overview(Notices(), refresh=True)
    assert refreshed == after_write


def test_overview_store_failure(
    wallpaper_service: WallpaperService, page_cache: PageCache
) -> None:
    service, repository = _service(wallpaper_service, page_cache)
    repository.fail_reads = True
    notices = Notices()

    assert service.overview(notices) is None
    assert notices.items[0].description == "Failed to load dashboard data"
