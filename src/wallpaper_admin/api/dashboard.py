"""Dashboard landing page endpoint."""

from fastapi import APIRouter, Depends
from fastapi.encoders import jsonable_encoder

from wallpaper_admin.api.auth import get_container
from wallpaper_admin.api.listing import store_failure
from wallpaper_admin.containers import AppContainer
from wallpaper_admin.domain.notifications import Notices

router = APIRouter(prefix="/dashboard", tags=["dashboard"])


@router.get("")
async def dashboard(
    refresh: bool = False,
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Return recent uploads and moderation counts."""
    notices = Notices()
    overview = container.dashboard_service.overview(notices, refresh=refresh)
    if overview is None:
        raise store_failure(notices)
    return {
        "recent_wallpapers": jsonable_encoder(overview.recent_wallpapers),
        "pending_count": overview.pending_count,
        "approved_count": overview.approved_count,
        "rejected_count": overview.rejected_count,
        "total_count": overview.total_count,
        "notices": notices.as_payload(),
    }
