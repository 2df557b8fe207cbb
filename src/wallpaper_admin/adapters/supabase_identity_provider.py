"""Supabase auth as the identity provider."""

import logging
from collections.abc import Callable
from dataclasses import dataclass

import httpx
from supabase import AuthError, Client

from wallpaper_admin.domain.users import Identity
from wallpaper_admin.services.auth import IdentityProvider

logger = logging.getLogger(__name__)


@dataclass
class SupabaseIdentityProvider(IdentityProvider):
    """Resolves access tokens and sign-in events through Supabase auth."""

    client: Client

    def get_identity(self, access_token: str) -> Identity | None:
        """Return the identity for a token, or None if it is rejected."""
        try:
            response = self.client.auth.get_user(access_token)
        except (AuthError, httpx.HTTPError):
            logger.warning("Access token rejected by Supabase auth", exc_info=True)
            return None
        user = response.user if response else None
        return identity_from_user(user)

    def on_change(
        self, callback: Callable[[Identity | None], None]
    ) -> Callable[[], None]:
        """Forward auth state changes as identities."""

        def handle(_event: object, session: object) -> None:
            user = getattr(session, "user", None)
            callback(identity_from_user(user))

        subscription = self.client.auth.on_auth_state_change(handle)
        return subscription.unsubscribe


def identity_from_user(user: object) -> Identity | None:
    """Map a Supabase auth user onto an identity."""
    if user is None:
        return None
    metadata = getattr(user, "user_metadata", None) or {}
    return Identity(
        id=str(user.id),  # type: ignore[attr-defined]
        email=getattr(user, "email", None),
        display_name=metadata.get("full_name") or metadata.get("name"),
        photo_url=metadata.get("avatar_url") or metadata.get("picture"),
    )
