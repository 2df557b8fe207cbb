"""Identity, role and session models."""

from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum


class Role(StrEnum):
    """Role classifier stored on a user record."""

    ADMIN = "admin"
    USER = "user"


@dataclass(frozen=True)
class Identity:
    """A signed-in visitor as reported by the identity provider."""

    id: str
    email: str | None
    display_name: str | None = None
    photo_url: str | None = None


@dataclass(frozen=True)
class UserProfile:
    """A user record from the users table."""

    id: str
    created_at: datetime
    display_name: str | None = None
    email: str = ""
    photo_url: str = ""
    username: str = ""
    bio: str = ""
    role: Role | None = None


@dataclass(frozen=True)
class SessionState:
    """Current session and role resolution state."""

    identity: Identity | None
    role: Role | None = None
    resolved: bool = True

    @classmethod
    def anonymous(cls) -> "SessionState":
        """Return the state for a visitor with no session."""
        return cls(identity=None)

    @classmethod
    def loading(cls, identity: Identity | None = None) -> "SessionState":
        """Return the state before sign-in state or role is known."""
        return cls(identity=identity, role=None, resolved=False)

    @property
    def is_admin(self) -> bool:
        return self.resolved and self.role is Role.ADMIN
