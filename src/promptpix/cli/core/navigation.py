"""Bottom navigation bar, rendered as a single line above each screen."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final


@dataclass(frozen=True)
class NavItem:
    """One navigation route with its icon pair."""

    route: str
    label: str
    icon_active: str
    icon_inactive: str


NAV_ITEMS: Final[dict[str, NavItem]] = {
    "home": NavItem("home", "Home", "◉", "○"),
    "news": NavItem("news", "News", "▣", "□"),
    "create": NavItem("create", "Create", "⊕", "+"),
    "profile": NavItem("profile", "Profile", "●", "○"),
}
"""Routes in display order, keyed by route name."""


def nav_icon(route: str, active_route: str | None) -> str:
    """Icon for `route`: the filled variant when it is the active one.

    Raises:
        KeyError: If the route is unknown.
    """
    item = NAV_ITEMS[route]
    return item.icon_active if route == active_route else item.icon_inactive


def render_nav(active_route: str | None) -> str:
    """Rich markup for the whole bar with `active_route` highlighted."""
    parts = []
    for route, item in NAV_ITEMS.items():
        text = f"{nav_icon(route, active_route)} {item.label}"
        if route == active_route:
            parts.append(f"[bold blue]{text}[/bold blue]")
        else:
            parts.append(f"[dim]{text}[/dim]")
    return "   ".join(parts)
