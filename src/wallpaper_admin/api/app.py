"""FastAPI application factory."""

import logging

from fastapi import Depends, FastAPI, Request, status
from fastapi.responses import JSONResponse

from wallpaper_admin.api.auth import require_admin_session
from wallpaper_admin.api.auth import router as auth_router
from wallpaper_admin.api.catalog import categories_router, collections_router
from wallpaper_admin.api.dashboard import router as dashboard_router
from wallpaper_admin.api.users import router as users_router
from wallpaper_admin.api.wallpapers import router as wallpapers_router
from wallpaper_admin.app_logging import configure_logging
from wallpaper_admin.containers import AppContainer
from wallpaper_admin.domain.errors import EntityNotFoundError, InvalidCursorError


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)

    app = FastAPI(title="Wallpaper admin")
    app.state.container = container

    admin_only = [Depends(require_admin_session)]
    app.include_router(auth_router)
    app.include_router(dashboard_router, dependencies=admin_only)
    app.include_router(wallpapers_router, dependencies=admin_only)
    app.include_router(categories_router, dependencies=admin_only)
    app.include_router(collections_router, dependencies=admin_only)
    app.include_router(users_router, dependencies=admin_only)

    @app.exception_handler(EntityNotFoundError)
    async def not_found(
        _request: Request, exc: EntityNotFoundError
    ) -> JSONResponse:
        logger.info("Not found: %s %s", exc.kind, exc.entity_id)
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND,
            content={"detail": f"{exc.kind.capitalize()} not found"},
        )

    @app.exception_handler(InvalidCursorError)
    async def invalid_cursor(
        _request: Request, exc: InvalidCursorError
    ) -> JSONResponse:
        logger.warning("Rejected cursor: %s", exc)
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"detail": "Invalid cursor"},
        )

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    return app
