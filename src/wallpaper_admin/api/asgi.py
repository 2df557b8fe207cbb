"""ASGI entrypoint for the wallpaper admin API."""

from wallpaper_admin.api.app import create_app
from wallpaper_admin.containers import build_container

app = create_app(build_container())
