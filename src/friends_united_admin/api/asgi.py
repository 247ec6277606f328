"""ASGI entrypoint for the Friends United admin dashboard."""

from friends_united_admin.api.app import create_app
from friends_united_admin.containers import build_container

app = create_app(build_container())
