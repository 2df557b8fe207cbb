"""Category and collection management."""

import logging
from dataclasses import dataclass

from wallpaper_admin.domain.catalog import Category, Collection, CollectionDetail
from wallpaper_admin.domain.errors import StoreError
from wallpaper_admin.domain.kinds import CATEGORIES, COLLECTIONS
from wallpaper_admin.domain.notifications import Notices
from wallpaper_admin.domain.wallpapers import Wallpaper
from wallpaper_admin.services.entities import EntityService
from wallpaper_admin.services.store import EntityRepository

logger = logging.getLogger(__name__)


@dataclass
class CategoryService(EntityService[Category]):
    """Service for wallpaper categories."""

    kind = CATEGORIES
    noun = "category"

    def _create_payload(self, payload: dict[str, object]) -> dict[str, object]:
        payload.setdefault("description", "")
        payload.setdefault("wallpaper_count", 0)
        return payload


@dataclass
class CollectionService(EntityService[Collection]):
    """Service for curated collections.

    Collections hold wallpaper ids as weak references: deleting a wallpaper
    leaves its id in place and readers skip ids that no longer resolve.
    """

    kind = COLLECTIONS
    noun = "collection"

    wallpaper_repository: EntityRepository[Wallpaper]

    def get_detail(
        self, collection_id: str, notices: Notices
    ) -> CollectionDetail | None:
        """Return a collection with the wallpapers it still points at."""
        collection = self.get(collection_id, notices)
        if collection is None:
            return None
        try:
            found = self.wallpaper_repository.get_many(collection.wallpaper_ids)
        except StoreError:
            logger.exception(
                "Failed to load wallpapers for collection %s", collection_id
            )
            notices.error("Failed to load collection wallpapers")
            return None
        by_id = {wallpaper.id: wallpaper for wallpaper in found}
        wallpapers = [
            by_id[wallpaper_id]
            for wallpaper_id in collection.wallpaper_ids
            if wallpaper_id in by_id
        ]
        missing = [
            wallpaper_id
            for wallpaper_id in collection.wallpaper_ids
            if wallpaper_id not in by_id
        ]
        if missing:
            logger.info(
                "Collection %s references %d missing wallpapers",
                collection_id,
                len(missing),
            )
        return CollectionDetail(
            collection=collection, wallpapers=wallpapers, missing_ids=missing
        )

    def add_wallpapers(
        self, collection_id: str, wallpaper_ids: list[str], notices: Notices
    ) -> Collection | None:
        """Append wallpaper ids not already in the collection."""
        collection = self.get(collection_id, notices)
        if collection is None:
            return None
        merged = list(dict.fromkeys([*collection.wallpaper_ids, *wallpaper_ids]))
        return self._update(
            collection_id,
            {"wallpaper_ids": merged},
            notices,
            title="Success",
            description=f"Added {len(merged) - len(collection.wallpaper_ids)} "
            "wallpapers to the collection",
        )

    def remove_wallpapers(
        self, collection_id: str, wallpaper_ids: list[str], notices: Notices
    ) -> Collection | None:
        """Drop the given wallpaper ids from the collection."""
        collection = self.get(collection_id, notices)
        if collection is None:
            return None
        removing = set(wallpaper_ids)
        remaining = [
            wallpaper_id
            for wallpaper_id in collection.wallpaper_ids
            if wallpaper_id not in removing
        ]
        return self._update(
            collection_id,
            {"wallpaper_ids": remaining},
            notices,
            title="Success",
            description=f"Removed {len(collection.wallpaper_ids) - len(remaining)} "
            "wallpapers from the collection",
        )

    def _create_payload(self, payload: dict[str, object]) -> dict[str, object]:
        payload.setdefault("description", "")
        payload.setdefault("wallpaper_ids", [])
        payload.setdefault("type", "manual")
        return payload
