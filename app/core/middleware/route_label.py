from __future__ import annotations

from starlette.requests import Request

UNMATCHED_ROUTE = "unmatched"


def route_label(request: Request) -> str:
    """Route template for logs and metric labels (e.g. `/admin`).

    Raw paths are never used: unknown URLs collapse into a single `unmatched` label.
    """

    path = getattr(request.scope.get("route"), "path", None)
    if isinstance(path, str) and path:
        return path
    return UNMATCHED_ROUTE
