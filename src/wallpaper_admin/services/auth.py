"""Session resolution and the admin guard."""

import hashlib
import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import StrEnum
from typing import Protocol

from wallpaper_admin.domain.errors import StoreError
from wallpaper_admin.domain.users import Identity, Role, SessionState
from wallpaper_admin.services.cache import Cache

logger = logging.getLogger(__name__)


class IdentityProvider(Protocol):
    """Interface to the external sign-in service."""

    def get_identity(self, access_token: str) -> Identity | None:
        """Return the identity behind an access token, or None if invalid."""

    def on_change(
        self, callback: Callable[[Identity | None], None]
    ) -> Callable[[], None]:
        """Subscribe to sign-in state changes; return an unsubscribe callable."""


class RoleRepository(Protocol):
    """Persistence interface for per-user roles."""

    def get_role(self, user_id: str) -> str | None:
        """Return the stored role for a user, if any."""


class GuardOutcome(StrEnum):
    """What a protected view should do for the current session."""

    LOADING = "loading"
    REDIRECT_LOGIN = "redirect_login"
    REDIRECT_UNAUTHORIZED = "redirect_unauthorized"
    ALLOW = "allow"


def require_admin(session: SessionState) -> GuardOutcome:
    """Decide whether a session may see administrative views."""
    if not session.resolved:
        return GuardOutcome.LOADING
    if session.identity is None:
        return GuardOutcome.REDIRECT_LOGIN
    if session.role is not Role.ADMIN:
        return GuardOutcome.REDIRECT_UNAUTHORIZED
    return GuardOutcome.ALLOW


@dataclass
class AuthService:
    """Resolves identities into sessions with roles.

    Emails on the configured allow-list are administrators without a role
    lookup. Everyone else gets the role stored on their user record; a missing
    record or a failed lookup means no role.
    """

    identity_provider: IdentityProvider
    role_repository: RoleRepository
    admin_emails: frozenset[str]
    cache: Cache
    session_ttl_seconds: int = 300

    def resolve_session(self, identity: Identity | None) -> SessionState:
        """Return the session state for an identity."""
        session, _ = self._resolve(identity)
        return session

    def resolve_token(self, access_token: str | None) -> SessionState:
        """Resolve a bearer token, reusing sessions resolved recently."""
        if not access_token:
            return SessionState.anonymous()
        key = f"session:{hashlib.sha256(access_token.encode()).hexdigest()}"
        cached = self.cache.get(key)
        if isinstance(cached, SessionState):
            return cached
        identity = self.identity_provider.get_identity(access_token)
        session, lookup_failed = self._resolve(identity)
        # A failed role lookup only applies to this request.
        if identity is not None and not lookup_failed:
            self.cache.set(key, session, self.session_ttl_seconds)
        return session

    def _resolve(self, identity: Identity | None) -> tuple[SessionState, bool]:
        if identity is None:
            return SessionState.anonymous(), False
        if identity.email and identity.email.lower() in self.admin_emails:
            logger.info("Allow-listed admin signed in: %s", identity.id)
            return SessionState(identity=identity, role=Role.ADMIN), False
        try:
            raw_role = self.role_repository.get_role(identity.id)
        except StoreError:
            logger.exception("Error fetching role for user %s", identity.id)
            return SessionState(identity=identity, role=None), True
        return SessionState(identity=identity, role=_parse_role(raw_role)), False


@dataclass
class SessionTracker:
    """Follows the identity provider's sign-in state for one client."""

    auth_service: AuthService
    state: SessionState = field(default_factory=SessionState.loading)
    _unsubscribe: Callable[[], None] | None = field(default=None, repr=False)

    def start(self) -> None:
        """Subscribe to sign-in changes."""
        if self._unsubscribe is None:
            self._unsubscribe = self.auth_service.identity_provider.on_change(
                self.handle_change
            )

    def handle_change(self, identity: Identity | None) -> None:
        """Re-resolve the session after a sign-in state change."""
        if identity is None:
            self.state = SessionState.anonymous()
            return
        self.state = SessionState.loading(identity)
        self.state = self.auth_service.resolve_session(identity)

    def outcome(self) -> GuardOutcome:
        return require_admin(self.state)

    def close(self) -> None:
        """Unsubscribe from sign-in changes."""
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None


def _parse_role(raw: str | None) -> Role | None:
    if raw is None:
        return None
    try:
        return Role(raw)
    except ValueError:
        logger.warning("Ignoring unknown role %r", raw)
        return None
