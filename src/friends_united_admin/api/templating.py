"""Jinja2 page rendering with the shared dashboard layout."""

from functools import partial
from pathlib import Path
from typing import Any

from fastapi import Request
from fastapi.responses import RedirectResponse
from fastapi.templating import Jinja2Templates
from starlette.responses import Response

from friends_united_admin.adapters.sanity_content_store import image_url
from friends_united_admin.navigation import (
    breadcrumbs,
    is_active,
    page_for_path,
    sidebar_groups,
)
from friends_united_admin.services.session import ViewContext

TEMPLATES_DIR = Path(__file__).resolve().parent / "templates"

templates = Jinja2Templates(directory=TEMPLATES_DIR)


def render(
    request: Request,
    name: str,
    context: dict[str, Any] | None = None,
    *,
    status_code: int = 200,
) -> Response:
    """Render a page, or follow a navigation forced while handling it.

    Queued notifications are drained into the page. A forced navigation skips
    rendering so they stay queued for the redirect.
    """
    view_context: ViewContext = request.state.view_context
    target = view_context.navigator.redirect_to
    if target and target != request.url.path:
        return RedirectResponse(target, status_code=303)
    settings = request.app.state.container.settings
    path = request.url.path
    return templates.TemplateResponse(
        request,
        name,
        {
            "current_user": view_context.current_user,
            "notifications": view_context.notifier.drain(),
            "sidebar": sidebar_groups(),
            "page": page_for_path(path),
            "breadcrumbs": breadcrumbs(path),
            "current_path": path,
            "is_active": is_active,
            "image_url": partial(image_url, settings.sanity_image_cdn_url),
            **(context or {}),
        },
        status_code=status_code,
    )
