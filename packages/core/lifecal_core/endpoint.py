"""Image endpoint contract: query string in, SVG response out."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from urllib.parse import parse_qs

from lifecal_renderer import to_svg

from .config import AppConfig
from .logging_setup import get_logger
from .wallpaper import QueryParams, render_query

SVG_CONTENT_TYPE = "image/svg+xml"
ERROR_BODY = b"Error rendering wallpaper"


@dataclass(frozen=True)
class EndpointResponse:
    status: int
    headers: dict[str, str] = field(default_factory=dict)
    body: bytes = b""


def cache_control(max_age: int) -> str:
    return f"s-maxage={max_age}, stale-while-revalidate"


def handle_render(
    query: str | QueryParams,
    now: datetime | None = None,
    config: AppConfig | None = None,
) -> EndpointResponse:
    """Render the wallpaper described by ``query``.

    Any failure yields a 500 with a plain-text body; a partial image is never
    returned.
    """
    cfg = config or AppConfig()
    params = parse_qs(query, keep_blank_values=False) if isinstance(query, str) else query
    try:
        result = render_query(params, now=now)
        body = to_svg(result).encode("utf-8")
    except Exception:
        get_logger("endpoint").exception("render failed", extra={"event": "render_failed"})
        return EndpointResponse(
            status=500,
            headers={"Content-Type": "text/plain; charset=utf-8"},
            body=ERROR_BODY,
        )

    return EndpointResponse(
        status=200,
        headers={
            "Content-Type": SVG_CONTENT_TYPE,
            "Cache-Control": cache_control(cfg.server.cache_max_age),
        },
        body=body,
    )
