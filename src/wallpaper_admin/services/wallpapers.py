"""Wallpaper moderation and management."""

import asyncio
import logging
from dataclasses import asdict, dataclass

from wallpaper_admin.domain.errors import EntityNotFoundError, StoreError
from wallpaper_admin.domain.kinds import WALLPAPERS
from wallpaper_admin.domain.notifications import Notices
from wallpaper_admin.domain.pagination import Cursor, Page
from wallpaper_admin.domain.wallpapers import (
    BulkStatusResult,
    Wallpaper,
    WallpaperStatus,
)
from wallpaper_admin.services.entities import EntityService
from wallpaper_admin.services.pagination import CollectionAccessor
from wallpaper_admin.services.search import (
    SEARCH_TAG_SOURCES,
    generate_searchable_tags,
)

logger = logging.getLogger(__name__)


@dataclass
class WallpaperService(EntityService[Wallpaper]):
    """Service for browsing, editing and moderating wallpapers."""

    kind = WALLPAPERS
    noun = "wallpaper"

    def set_status(
        self, wallpaper_id: str, status: WallpaperStatus, notices: Notices
    ) -> Wallpaper | None:
        """Change the moderation status of one wallpaper."""
        return self._update(
            wallpaper_id,
            {"status": status.value},
            notices,
            title="Status updated",
            description=f"Wallpaper status changed to {status.value}",
        )

    def edit(
        self, wallpaper_id: str, fields: dict[str, object], notices: Notices
    ) -> Wallpaper | None:
        """Save edited display fields (name, description, tags)."""
        return self._update(
            wallpaper_id,
            fields,
            notices,
            title="Changes saved",
            description="Wallpaper details updated successfully",
        )

    async def bulk_set_status(
        self, wallpaper_ids: list[str], status: WallpaperStatus, notices: Notices
    ) -> BulkStatusResult:
        """Set the status of many wallpapers with independent writes.

        Writes run concurrently and are not atomic: whatever succeeded stays
        written, failures keep their previous status.
        """
        unique_ids = list(dict.fromkeys(wallpaper_ids))
        results = await asyncio.gather(
            *(
                asyncio.to_thread(
                    self.repository.update, wallpaper_id, {"status": status.value}
                )
                for wallpaper_id in unique_ids
            ),
            return_exceptions=True,
        )
        updated: list[str] = []
        failed: list[str] = []
        for wallpaper_id, result in zip(unique_ids, results, strict=True):
            if isinstance(result, StoreError):
                logger.error(
                    "Failed to set wallpaper %s to %s",
                    wallpaper_id,
                    status.value,
                    exc_info=result,
                )
                failed.append(wallpaper_id)
            elif isinstance(result, BaseException):
                raise result
            elif result is None:
                logger.warning("Wallpaper %s not found", wallpaper_id)
                failed.append(wallpaper_id)
            else:
                updated.append(wallpaper_id)

        if updated:
            self.page_cache.invalidate(self.kind.name)
        if failed:
            notices.error(
                f"Failed to set {len(failed)} of {len(unique_ids)} wallpapers "
                f"to {status.value}"
            )
        elif updated:
            notices.notify(
                f"Wallpapers {status.value}",
                f"{len(updated)} wallpapers have been {status.value}",
            )
        return BulkStatusResult(status=status, updated=updated, failed=failed)

    def search_by_tag(
        self,
        accessor: CollectionAccessor[Wallpaper],
        tag: str | None,
        filters: dict[str, object] | None = None,
        cursor: Cursor | None = None,
    ) -> Page[Wallpaper] | None:
        """List wallpapers whose search index contains ``tag``."""
        cleaned = (tag or "").strip().lower()
        contains = {"search_tags": [cleaned]} if cleaned else None
        return accessor.fetch_page(
            is_first_page=cursor is None,
            filters=filters,
            cursor=cursor,
            contains=contains,
        )

    def uploaded_by_user(
        self,
        accessor: CollectionAccessor[Wallpaper],
        user_id: str,
        cursor: Cursor | None = None,
        *,
        use_cache: bool = True,
    ) -> Page[Wallpaper] | None:
        """List the wallpapers a user uploaded, newest first."""
        return accessor.fetch_page(
            is_first_page=cursor is None,
            filters={"uploaded_by": user_id},
            cursor=cursor,
            use_cache=use_cache,
        )

    def _create_payload(self, payload: dict[str, object]) -> dict[str, object]:
        payload.setdefault("status", WallpaperStatus.PENDING.value)
        payload["search_tags"] = generate_searchable_tags(payload)
        return payload

    def _update_payload(
        self, entity_id: str, payload: dict[str, object]
    ) -> dict[str, object]:
        if SEARCH_TAG_SOURCES.isdisjoint(payload):
            return payload
        current = self.repository.get(entity_id)
        if current is None:
            raise EntityNotFoundError(self.noun, entity_id)
        merged = {**asdict(current), **payload}
        return {**payload, "search_tags": generate_searchable_tags(merged)}
