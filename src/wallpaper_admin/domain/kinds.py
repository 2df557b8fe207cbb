"""Entity kinds served by the admin API."""

from wallpaper_admin.domain.pagination import EntityKind, SortDirection

WALLPAPERS = EntityKind(
    name="wallpapers",
    table="wallpapers",
    label="wallpapers",
    search_field="name",
    sort_field="created_at",
    sort_direction=SortDirection.DESC,
    page_size=20,
)

CATEGORIES = EntityKind(
    name="categories",
    table="categories",
    label="categories",
    search_field="name",
    sort_field="name",
    sort_direction=SortDirection.ASC,
    page_size=10,
)

COLLECTIONS = EntityKind(
    name="collections",
    table="collections",
    label="collections",
    search_field="name",
    sort_field="created_at",
    sort_direction=SortDirection.DESC,
    page_size=12,
)

USERS = EntityKind(
    name="users",
    table="users",
    label="users",
    search_field="display_name",
    sort_field="display_name",
    sort_direction=SortDirection.ASC,
    page_size=10,
)
