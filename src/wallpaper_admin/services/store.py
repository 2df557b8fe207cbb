"""Persistence interface shared by every entity kind."""

from typing import Protocol, TypeVar

from wallpaper_admin.domain.pagination import PageQuery

T = TypeVar("T")


class EntityRepository(Protocol[T]):
    """Document-style access to one table.

    Implementations raise ``StoreError`` when the backend fails.
    """

    def query(self, page_query: PageQuery) -> list[T]:
        """Return entities matching the query, in order, at most page_size."""

    def get(self, entity_id: str) -> T | None:
        """Return an entity by id, if present."""

    def get_many(self, entity_ids: list[str]) -> list[T]:
        """Return the entities that exist among ``entity_ids``, in any order."""

    def create(self, payload: dict[str, object]) -> T:
        """Insert a record and return it with its store-assigned fields."""

    def update(self, entity_id: str, payload: dict[str, object]) -> T | None:
        """Merge fields into a record; return None if it does not exist."""

    def delete(self, entity_id: str) -> bool:
        """Delete a record; return False if it did not exist."""

    def count(self, filters: dict[str, object]) -> int:
        """Return the number of records matching equality filters."""
