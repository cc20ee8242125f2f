"""Renderer package for LifeCal wallpaper layout and encoding."""

from .clock import day_of_year, day_span, format_date, is_leap_year, parse_date, weeks_since
from .devices import DEFAULT_DEVICE_ID, DevicePreset, get_device, list_devices, resolve_canvas
from .goal import goal_stats, render_goal
from .grid import GridLayout, layout_grid
from .life import life_stats, render_life
from .models import CanvasSpec, Circle, DrawCommand, LinearGradient, Rect, RenderResult, Text
from .raster import preview_data_url, to_image, to_png
from .svg import to_svg
from .themes import DEFAULT_THEME_NAME, Palette, get_palette, list_themes
from .year import render_year, year_stats


__all__ = [
    "CanvasSpec",
    "Circle",
    "DEFAULT_DEVICE_ID",
    "DEFAULT_THEME_NAME",
    "DevicePreset",
    "DrawCommand",
    "GridLayout",
    "LinearGradient",
    "Palette",
    "Rect",
    "RenderResult",
    "Text",
    "day_of_year",
    "day_span",
    "format_date",
    "get_device",
    "get_palette",
    "goal_stats",
    "is_leap_year",
    "layout_grid",
    "life_stats",
    "list_devices",
    "list_themes",
    "parse_date",
    "preview_data_url",
    "render_goal",
    "render_life",
    "render_year",
    "resolve_canvas",
    "to_image",
    "to_png",
    "to_svg",
    "weeks_since",
    "year_stats",
]
