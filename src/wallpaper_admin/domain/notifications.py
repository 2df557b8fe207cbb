"""User-facing notifications collected while serving a request."""

from dataclasses import dataclass, field
from enum import StrEnum


class NoticeVariant(StrEnum):
    """Visual weight of a notification."""

    DEFAULT = "default"
    DESTRUCTIVE = "destructive"


@dataclass(frozen=True)
class Notification:
    """A transient message shown to the administrator."""

    title: str
    description: str
    variant: NoticeVariant = NoticeVariant.DEFAULT


@dataclass
class Notices:
    """Collects notifications raised during one unit of work."""

    items: list[Notification] = field(default_factory=list)

    def notify(self, title: str, description: str) -> None:
        self.items.append(Notification(title=title, description=description))

    def error(self, description: str, title: str = "Error") -> None:
        self.items.append(
            Notification(
                title=title,
                description=description,
                variant=NoticeVariant.DESTRUCTIVE,
            )
        )

    def as_payload(self) -> list[dict[str, str]]:
        """Serialize notifications for an API response."""
        return [
            {
                "title": item.title,
                "description": item.description,
                "variant": item.variant.value,
            }
            for item in self.items
        ]
