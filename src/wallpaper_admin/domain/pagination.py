"""Pagination primitives shared by every entity kind."""

import base64
import binascii
import hashlib
import json
from dataclasses import dataclass, field
from datetime import datetime
from enum import StrEnum
from typing import Generic, TypeVar

from wallpaper_admin.domain.errors import InvalidCursorError

T = TypeVar("T")

IGNORED_FILTER_VALUES = frozenset({"all", ""})


class SortDirection(StrEnum):
    """Ordering direction for a page query."""

    ASC = "asc"
    DESC = "desc"


@dataclass(frozen=True)
class EntityKind:
    """Static description of a paginated entity collection."""

    name: str
    table: str
    label: str
    search_field: str
    sort_field: str
    sort_direction: SortDirection
    page_size: int


@dataclass(frozen=True)
class TextRange:
    """Half-open ``lower <= field < upper`` range used for prefix search."""

    field: str
    lower: str
    upper: str


@dataclass(frozen=True)
class Cursor:
    """Opaque continuation pointing at the last item of a page."""

    sort_field: str
    sort_value: object
    id: str
    fingerprint: str

    def encode(self) -> str:
        """Return a URL-safe token for this cursor."""
        raw = json.dumps(
            {
                "f": self.sort_field,
                "v": self.sort_value,
                "id": self.id,
                "q": self.fingerprint,
            },
            separators=(",", ":"),
        )
        return base64.urlsafe_b64encode(raw.encode()).decode().rstrip("=")

    @classmethod
    def decode(cls, token: str) -> "Cursor":
        """Parse a token produced by :meth:`encode`."""
        padded = token + "=" * (-len(token) % 4)
        try:
            payload = json.loads(base64.urlsafe_b64decode(padded.encode()))
            return cls(
                sort_field=str(payload["f"]),
                sort_value=payload["v"],
                id=str(payload["id"]),
                fingerprint=str(payload["q"]),
            )
        except (binascii.Error, ValueError, KeyError, TypeError) as exc:
            raise InvalidCursorError("Malformed cursor") from exc


@dataclass(frozen=True)
class PageQuery:
    """Everything needed to fetch one slice of an entity collection."""

    sort_field: str
    sort_direction: SortDirection
    page_size: int
    filters: dict[str, object] = field(default_factory=dict)
    text_range: TextRange | None = None
    array_contains: dict[str, list[str]] = field(default_factory=dict)
    cursor: Cursor | None = None

    def fingerprint(self, kind: str) -> str:
        """Hash of the parameters a cursor is bound to."""
        text_range = self.text_range
        raw = json.dumps(
            {
                "kind": kind,
                "filters": self.filters,
                "sort": [self.sort_field, self.sort_direction.value],
                "range": [text_range.field, text_range.lower]
                if text_range
                else None,
                "contains": self.array_contains,
            },
            sort_keys=True,
            default=str,
        )
        return hashlib.sha256(raw.encode()).hexdigest()[:16]


@dataclass(frozen=True)
class Page(Generic[T]):
    """One fetched slice of a collection."""

    items: list[T]
    cursor: Cursor | None
    has_more: bool


def active_filters(filters: dict[str, object] | None) -> dict[str, object]:
    """Drop filters whose value means "no constraint"."""
    if not filters:
        return {}
    return {
        name: value
        for name, value in filters.items()
        if value is not None
        and not (isinstance(value, str) and value in IGNORED_FILTER_VALUES)
    }


def cursor_value(value: object) -> object:
    """Normalize a sort value so it survives JSON encoding."""
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, StrEnum):
        return value.value
    return value
