"""Generic CRUD service shared by every entity kind."""

import logging
from dataclasses import dataclass
from typing import ClassVar, Generic, TypeVar

from wallpaper_admin.domain.errors import EntityNotFoundError, StoreError
from wallpaper_admin.domain.notifications import Notices
from wallpaper_admin.domain.pagination import EntityKind
from wallpaper_admin.services.cache import PageCache
from wallpaper_admin.services.pagination import CollectionAccessor
from wallpaper_admin.services.store import EntityRepository

T = TypeVar("T")

logger = logging.getLogger(__name__)

_STORE_STAMPED_FIELDS = ("id", "created_at")


@dataclass
class EntityService(Generic[T]):
    """Create, read, update and delete records of one kind.

    Store failures are logged and reported through ``notices``; the caller
    gets ``None`` (or ``False``) back and keeps whatever state it had.
    Unknown ids raise ``EntityNotFoundError``.
    """

    kind: ClassVar[EntityKind]
    noun: ClassVar[str]

    repository: EntityRepository[T]
    page_cache: PageCache

    def accessor(self, notices: Notices | None = None) -> CollectionAccessor[T]:
        """Return a fresh list accessor bound to this kind."""
        return CollectionAccessor(
            kind=self.kind,
            repository=self.repository,
            page_cache=self.page_cache,
            notices=notices if notices is not None else Notices(),
        )

    def get(self, entity_id: str, notices: Notices) -> T | None:
        """Return an entity by id."""
        try:
            entity = self.repository.get(entity_id)
        except StoreError:
            logger.exception("Failed to load %s %s", self.noun, entity_id)
            notices.error(f"Failed to load {self.noun} details")
            return None
        if entity is None:
            raise EntityNotFoundError(self.noun, entity_id)
        return entity

    def create(self, fields: dict[str, object], notices: Notices) -> T | None:
        """Insert a new record; the store assigns its id and timestamp."""
        payload = _without_stamped(fields)
        try:
            payload = self._create_payload(payload)
            created = self.repository.create(payload)
        except StoreError:
            logger.exception("Failed to add %s", self.noun)
            notices.error(f"Failed to add {self.noun}")
            return None
        self.page_cache.invalidate(self.kind.name)
        notices.notify("Success", f"{self.noun.capitalize()} added successfully")
        return created

    def update(
        self, entity_id: str, fields: dict[str, object], notices: Notices
    ) -> T | None:
        """Merge fields into an existing record."""
        return self._update(
            entity_id,
            fields,
            notices,
            title="Success",
            description=f"{self.noun.capitalize()} updated successfully",
        )

    def delete(self, entity_id: str, notices: Notices) -> bool:
        """Remove a record. References held by other records are left alone."""
        try:
            deleted = self.repository.delete(entity_id)
        except StoreError:
            logger.exception("Failed to delete %s %s", self.noun, entity_id)
            notices.error(f"Failed to delete {self.noun}")
            return False
        if not deleted:
            raise EntityNotFoundError(self.noun, entity_id)
        self.page_cache.invalidate(self.kind.name)
        notices.notify("Success", f"{self.noun.capitalize()} deleted successfully")
        return True

    def _update(  # noqa: PLR0913
        self,
        entity_id: str,
        fields: dict[str, object],
        notices: Notices,
        *,
        title: str,
        description: str,
    ) -> T | None:
        payload = _without_stamped(fields)
        try:
            payload = self._update_payload(entity_id, payload)
            updated = self.repository.update(entity_id, payload)
        except StoreError:
            logger.exception("Failed to update %s %s", self.noun, entity_id)
            notices.error(f"Failed to update {self.noun}")
            return None
        if updated is None:
            raise EntityNotFoundError(self.noun, entity_id)
        self.page_cache.invalidate(self.kind.name)
        notices.notify(title, description)
        return updated

    def _create_payload(self, payload: dict[str, object]) -> dict[str, object]:
        return payload

    def _update_payload(
        self, entity_id: str, payload: dict[str, object]
    ) -> dict[str, object]:
        return payload


def _without_stamped(fields: dict[str, object]) -> dict[str, object]:
    return {
        name: value
        for name, value in fields.items()
        if name not in _STORE_STAMPED_FIELDS
    }
