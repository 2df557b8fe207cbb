"""Dependency container wiring for the application."""

from dataclasses import dataclass

from supabase import create_client

from wallpaper_admin.adapters.supabase_entity_repository import (
    SupabaseEntityRepository,
)
from wallpaper_admin.adapters.supabase_identity_provider import (
    SupabaseIdentityProvider,
)
from wallpaper_admin.adapters.supabase_role_repository import SupabaseRoleRepository
from wallpaper_admin.adapters.supabase_rows import (
    parse_category,
    parse_collection,
    parse_user_profile,
    parse_wallpaper,
)
from wallpaper_admin.config import Settings, parse_admin_emails
from wallpaper_admin.domain.kinds import CATEGORIES, COLLECTIONS, USERS, WALLPAPERS
from wallpaper_admin.services.auth import AuthService
from wallpaper_admin.services.cache import InMemoryCache, PageCache
from wallpaper_admin.services.catalog import CategoryService, CollectionService
from wallpaper_admin.services.dashboard import DashboardService
from wallpaper_admin.services.users import UserService
from wallpaper_admin.services.wallpapers import WallpaperService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    auth_service: AuthService
    wallpaper_service: WallpaperService
    category_service: CategoryService
    collection_service: CollectionService
    user_service: UserService
    dashboard_service: DashboardService
    page_cache: PageCache


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    page_cache = PageCache(
        cache=InMemoryCache(), ttl_seconds=resolved_settings.page_cache_ttl_seconds
    )
    wallpaper_repository = SupabaseEntityRepository(
        supabase_client, WALLPAPERS.table, parse_wallpaper
    )
    category_repository = SupabaseEntityRepository(
        supabase_client, CATEGORIES.table, parse_category
    )
    collection_repository = SupabaseEntityRepository(
        supabase_client, COLLECTIONS.table, parse_collection
    )
    user_repository = SupabaseEntityRepository(
        supabase_client, USERS.table, parse_user_profile
    )
    auth_service = AuthService(
        identity_provider=SupabaseIdentityProvider(supabase_client),
        role_repository=SupabaseRoleRepository(supabase_client),
        admin_emails=parse_admin_emails(resolved_settings.admin_emails),
        cache=InMemoryCache(),
        session_ttl_seconds=resolved_settings.session_cache_ttl_seconds,
    )

    return AppContainer(
        settings=resolved_settings,
        auth_service=auth_service,
        wallpaper_service=WallpaperService(wallpaper_repository, page_cache),
        category_service=CategoryService(category_repository, page_cache),
        collection_service=CollectionService(
            collection_repository, page_cache, wallpaper_repository
        ),
        user_service=UserService(user_repository, page_cache),
        dashboard_service=DashboardService(wallpaper_repository, page_cache),
        page_cache=page_cache,
    )
