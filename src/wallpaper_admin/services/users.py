"""User profiles and role management."""

from dataclasses import dataclass

from wallpaper_admin.domain.kinds import USERS
from wallpaper_admin.domain.notifications import Notices
from wallpaper_admin.domain.users import Role, UserProfile
from wallpaper_admin.services.entities import EntityService


@dataclass
class UserService(EntityService[UserProfile]):
    """Application service for user records."""

    kind = USERS
    noun = "user"

    def set_role(
        self, user_id: str, role: Role, notices: Notices
    ) -> UserProfile | None:
        """Change a user's role."""
        return self._update(
            user_id,
            {"role": role.value},
            notices,
            title="Success",
            description=f"User role updated to {role.value}",
        )

    def update_profile(
        self, user_id: str, fields: dict[str, object], notices: Notices
    ) -> UserProfile | None:
        """Merge edited profile fields into a user record."""
        return self._update(
            user_id,
            fields,
            notices,
            title="Profile updated",
            description="The profile has been updated successfully.",
        )
