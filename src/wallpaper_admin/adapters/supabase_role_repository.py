"""Supabase-backed role lookup."""

from dataclasses import dataclass

import httpx
from postgrest.exceptions import APIError
from supabase import Client

from wallpaper_admin.domain.errors import StoreError
from wallpaper_admin.services.auth import RoleRepository


@dataclass
class SupabaseRoleRepository(RoleRepository):
    """Reads roles from the users table."""

    client: Client

    def get_role(self, user_id: str) -> str | None:
        """Return the stored role for a user id, if present."""
        try:
            response = (
                self.client.table("users")
                .select("role")
                .eq("id", user_id)
                .limit(1)
                .execute()
            )
        except (APIError, httpx.HTTPError) as exc:
            raise StoreError(f"Role lookup failed: {exc}") from exc
        if not response.data:
            return None
        role = response.data[0].get("role")
        return str(role) if role else None
