"""Sidebar navigation and page titles."""

from dataclasses import dataclass
from enum import Enum


@dataclass(frozen=True)
class SidebarItem:
    """Declarative sidebar entry."""

    title: str
    path: str
    group: str
    icon: str


class Page(Enum):
    """Enum of dashboard pages (single source of truth for sidebar and header)."""

    DASHBOARD = SidebarItem("Dashboard", "/dashboard", "Main", "layout-dashboard")
    BANNER = SidebarItem("Banner", "/content/banner", "Content", "image")
    OUR_STORY = SidebarItem("Our Story", "/content/our-story", "Content", "book-open")
    SERVICES = SidebarItem("Services", "/content/services", "Content", "wrench")
    UNITED_VOICES = SidebarItem(
        "United Voices", "/content/united-voices", "Content", "quote"
    )
    REAL_WINNERS = SidebarItem(
        "Real Winners", "/content/real-winners", "Content", "trophy"
    )
    FAQS = SidebarItem("FAQs", "/content/faqs", "Content", "help-circle")
    WAY_CARDS = SidebarItem("Way Cards", "/content/way-cards", "Content", "columns")
    USERS = SidebarItem("Create a New account", "/content/users", "Content", "users")
    CONTACTS = SidebarItem("Contacts", "/contacts", "Other", "mail")
    SETTINGS = SidebarItem("Settings", "/settings", "Other", "settings")


@dataclass(frozen=True)
class Breadcrumb:
    name: str
    path: str


def sidebar_groups() -> list[tuple[str, list[SidebarItem]]]:
    """Return sidebar entries grouped in display order."""
    groups: dict[str, list[SidebarItem]] = {}
    for page in Page:
        groups.setdefault(page.value.group, []).append(page.value)
    return list(groups.items())


def page_for_path(path: str) -> SidebarItem:
    """Return the page owning a path; unknown paths fall back to the dashboard."""
    best: SidebarItem | None = None
    for page in Page:
        item = page.value
        if path == item.path or path.startswith(f"{item.path}/"):
            if best is None or len(item.path) > len(best.path):
                best = item
    return best or Page.DASHBOARD.value


def is_active(item: SidebarItem, path: str) -> bool:
    return path == item.path or path.startswith(f"{item.path}/")


def breadcrumbs(path: str) -> list[Breadcrumb]:
    """Build header breadcrumbs; content pages are nested under "Content"."""
    if path in {"/", Page.DASHBOARD.value.path}:
        return []
    page = page_for_path(path)
    crumbs: list[Breadcrumb] = []
    if page.group == "Content":
        crumbs.append(Breadcrumb("Content", ""))
    crumbs.append(Breadcrumb(page.title, page.path))
    return crumbs
