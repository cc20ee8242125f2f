"""Core app services for wallpaper requests, the image endpoint, preview, settings, and logging."""

from .config import AppConfig, config_path, load_config, save_config
from .endpoint import EndpointResponse, handle_render
from .preview import PreviewSession, stats_lines
from .wallpaper import (
    GoalRequest,
    LifeRequest,
    WizardState,
    YearRequest,
    build_share_url,
    parse_query,
    render_query,
    render_request,
)

__all__ = [
    "AppConfig",
    "EndpointResponse",
    "GoalRequest",
    "LifeRequest",
    "PreviewSession",
    "WizardState",
    "YearRequest",
    "build_share_url",
    "config_path",
    "handle_render",
    "load_config",
    "parse_query",
    "render_query",
    "render_request",
    "save_config",
    "stats_lines",
]
