"""Render requests: query parsing, renderer dispatch, and share URLs.

Every surface (image endpoint, CLI, interactive preview) funnels its inputs
through :func:`parse_query` so defaults and fallbacks behave identically.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, ClassVar, Mapping, Union
from urllib.parse import urlencode

from lifecal_renderer import (
    CanvasSpec,
    Palette,
    RenderResult,
    get_device,
    get_palette,
    parse_date,
    render_goal,
    render_life,
    render_year,
    resolve_canvas,
)
from lifecal_renderer.clock import end_of_year, local_naive

from .config import CALENDAR_TYPES, MAX_LIFE_EXPECTANCY, AppConfig, normalize_accent
from .logging_setup import get_logger

DEFAULT_ACCENT = "#ff6b6b"
DEFAULT_BIRTH = "1990-01-01"
DEFAULT_EXPECTANCY = 80
DEFAULT_TITLE = "Goal"
ENDPOINT_PATH = "api/render"

QueryParams = Mapping[str, Any]


@dataclass(frozen=True)
class YearRequest:
    kind: ClassVar[str] = "year"
    canvas: CanvasSpec
    palette: Palette


@dataclass(frozen=True)
class LifeRequest:
    kind: ClassVar[str] = "life"
    canvas: CanvasSpec
    palette: Palette
    birth_date: datetime
    life_expectancy: int


@dataclass(frozen=True)
class GoalRequest:
    kind: ClassVar[str] = "goal"
    canvas: CanvasSpec
    palette: Palette
    target_date: datetime
    title: str
    start_date: datetime | None = None


RenderRequest = Union[YearRequest, LifeRequest, GoalRequest]


def _first(params: QueryParams, key: str) -> str | None:
    value = params.get(key)
    if isinstance(value, (list, tuple)):
        value = value[0] if value else None
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _positive_int(value: str | None) -> int | None:
    if value is None:
        return None
    try:
        number = int(value)
    except ValueError:
        return None
    return number if number > 0 else None


def _optional_color(value: str | None) -> str | None:
    if value is None:
        return None
    normalized = normalize_accent(value, default="")
    return normalized or None


def parse_query(params: QueryParams, now: datetime, defaults: AppConfig | None = None) -> RenderRequest:
    """Build a render request from endpoint-style query parameters.

    Missing or malformed values resolve to documented defaults. Unparseable
    dates raise ``ValueError``.
    """
    cfg = defaults or AppConfig()

    calendar_type = (_first(params, "type") or cfg.wallpaper.calendar_type).lower()
    if calendar_type not in CALENDAR_TYPES:
        calendar_type = "year"

    canvas = resolve_canvas(
        _first(params, "device") or cfg.wallpaper.device,
        _positive_int(_first(params, "width")),
        _positive_int(_first(params, "height")),
    )
    palette = get_palette(_first(params, "theme") or cfg.wallpaper.theme).with_overrides(
        accent=normalize_accent(_first(params, "accent"), default=cfg.wallpaper.accent or DEFAULT_ACCENT),
        background=_optional_color(_first(params, "bg")),
        foreground=_optional_color(_first(params, "fg")),
        muted=_optional_color(_first(params, "muted")),
        empty=_optional_color(_first(params, "empty")),
    )

    if calendar_type == "life":
        expectancy = _positive_int(_first(params, "expectancy")) or cfg.life.expectancy or DEFAULT_EXPECTANCY
        return LifeRequest(
            canvas=canvas,
            palette=palette,
            birth_date=parse_date(_first(params, "birth") or cfg.life.birth_date or DEFAULT_BIRTH),
            life_expectancy=min(expectancy, MAX_LIFE_EXPECTANCY),
        )

    if calendar_type == "goal":
        target_text = _first(params, "target") or cfg.goal.target_date
        start_text = _first(params, "start") or cfg.goal.start_date
        return GoalRequest(
            canvas=canvas,
            palette=palette,
            target_date=parse_date(target_text) if target_text else end_of_year(now),
            title=_first(params, "title") or cfg.goal.title or DEFAULT_TITLE,
            start_date=parse_date(start_text) if start_text else None,
        )

    return YearRequest(canvas=canvas, palette=palette)


def render_request(request: RenderRequest, now: datetime | None = None) -> RenderResult:
    now = local_naive(now or datetime.now())
    if isinstance(request, LifeRequest):
        result = render_life(request.canvas, request.palette, request.birth_date, request.life_expectancy, now)
    elif isinstance(request, GoalRequest):
        result = render_goal(
            request.canvas,
            request.palette,
            request.target_date,
            request.title,
            now,
            start_date=request.start_date,
        )
    elif isinstance(request, YearRequest):
        result = render_year(request.canvas, request.palette, now)
    else:
        raise TypeError(f"Unsupported render request: {request!r}")

    get_logger("render").debug(
        f"rendered {result.kind} {request.canvas.width}x{request.canvas.height} commands={len(result.commands)}",
        extra={
            "event": "render",
            "kind": result.kind,
            "width": request.canvas.width,
            "height": request.canvas.height,
            "commands": len(result.commands),
        },
    )
    return result


def render_query(params: QueryParams, now: datetime | None = None, defaults: AppConfig | None = None) -> RenderResult:
    now = local_naive(now or datetime.now())
    return render_request(parse_query(params, now, defaults), now)


@dataclass
class WizardState:
    """Interactive wizard selections, in query-parameter form."""

    calendar_type: str = "year"
    device: str = "iphone15pro"
    accent: str = DEFAULT_ACCENT
    theme: str | None = None
    birth_date: str = DEFAULT_BIRTH
    expectancy: int = DEFAULT_EXPECTANCY
    target_date: str | None = None
    title: str = "End of Year"
    start_date: str | None = None

    @classmethod
    def from_config(cls, cfg: AppConfig) -> WizardState:
        return cls(
            calendar_type=cfg.wallpaper.calendar_type,
            device=cfg.wallpaper.device,
            accent=cfg.wallpaper.accent,
            theme=cfg.wallpaper.theme,
            birth_date=cfg.life.birth_date,
            expectancy=cfg.life.expectancy,
            target_date=cfg.goal.target_date,
            title=cfg.goal.title,
            start_date=cfg.goal.start_date,
        )

    def to_query(self) -> dict[str, str]:
        query = {
            "type": self.calendar_type,
            "device": self.device,
            "accent": self.accent.lstrip("#"),
        }
        if self.theme:
            query["theme"] = self.theme
        if self.calendar_type == "life":
            query["birth"] = self.birth_date
            query["expectancy"] = str(self.expectancy)
        elif self.calendar_type == "goal":
            if self.target_date:
                query["target"] = self.target_date
            if self.start_date:
                query["start"] = self.start_date
            query["title"] = self.title or DEFAULT_TITLE
        return query


def build_share_url(
    base_url: str,
    state: WizardState,
    now: datetime | None = None,
    width: int | None = None,
    height: int | None = None,
) -> str:
    """Image-endpoint URL reproducing ``state`` with explicit pixel dimensions.

    The device id travels with the dimensions so the endpoint keeps the
    preset's safe-area insets; ``width`` and ``height`` override the preset
    size when both are positive.
    """
    device = get_device(state.device)
    canvas = resolve_canvas(device.id, width, height)
    params: dict[str, str] = {
        "type": state.calendar_type,
        "device": device.id,
        "width": str(canvas.width),
        "height": str(canvas.height),
        "accent": normalize_accent(state.accent).lstrip("#"),
    }
    if state.theme:
        params["theme"] = state.theme
    if state.calendar_type == "life":
        params["birth"] = parse_date(state.birth_date).date().isoformat()
        params["expectancy"] = str(state.expectancy)
    elif state.calendar_type == "goal":
        target = parse_date(state.target_date) if state.target_date else end_of_year(now or datetime.now())
        params["target"] = target.date().isoformat()
        if state.start_date:
            params["start"] = parse_date(state.start_date).date().isoformat()
        params["title"] = state.title or DEFAULT_TITLE
    return f"{base_url.rstrip('/')}/{ENDPOINT_PATH}?{urlencode(params)}"
