"""Admin route table — builds ``/{area}/{controller}/{action}?query`` URLs."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any
from urllib.parse import urlencode

if TYPE_CHECKING:
    from collections.abc import Mapping


class RouteTable:
    """Conventional MVC-style routing for the admin area.

    Route values that are None are left out of the query string, so an
    optional id simply disappears instead of rendering as ``None``.
    """

    def __init__(self, *, area: str = "Admin", base_path: str = "/") -> None:
        self._area = area.strip("/")
        self._base_path = base_path if base_path.endswith("/") else f"{base_path}/"

    def build_action_url(
        self, action: str, controller: str, route_values: Mapping[str, Any]
    ) -> str:
        segments = [s for s in (self._area, controller, action) if s]
        path = self._base_path + "/".join(segments)
        query = urlencode({k: v for k, v in route_values.items() if v is not None})
        return f"{path}?{query}" if query else path
