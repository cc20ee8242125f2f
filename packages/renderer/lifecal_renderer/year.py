"""Year calendar: one dot per day of the current year."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from .clock import day_of_year, days_in_year, format_percent
from .grid import DotGlyph, layout_grid, paint_grid
from .models import CanvasSpec, RenderResult, Text
from .themes import Palette

COLUMNS = 20
PADDING_FRACTION = 0.08
BAND_FRACTION = 0.6


def year_stats(now: datetime) -> dict[str, Any]:
    total_days = days_in_year(now.year)
    current_day = day_of_year(now)
    return {
        "year": now.year,
        "total_days": total_days,
        "current_day": current_day,
        "remaining_days": total_days - current_day,
        "progress_percent": format_percent(current_day / total_days),
    }


def render_year(canvas: CanvasSpec, palette: Palette, now: datetime) -> RenderResult:
    stats = year_stats(now)
    total_days = stats["total_days"]
    current_day = stats["current_day"]

    layout = layout_grid(canvas, COLUMNS, total_days, PADDING_FRACTION, BAND_FRACTION)
    commands = paint_grid(
        layout,
        item_count=total_days,
        filled_count=current_day - 1,
        current_index=current_day - 1,
        glyph=DotGlyph(),
        palette=palette,
    )

    first_row_y = layout.origin_y + layout.spacing_y / 2
    label_base = first_row_y + layout.height
    center_x = canvas.width / 2
    commands.append(
        Text(center_x, label_base + canvas.height * 0.08, str(now.year), 0.06, palette.foreground, weight="bold")
    )
    commands.append(
        Text(
            center_x,
            label_base + canvas.height * 0.12,
            f"{stats['progress_percent']}% of {now.year} complete",
            0.035,
            palette.text_secondary,
        )
    )

    return RenderResult(
        kind="year",
        canvas=canvas,
        background=palette.background,
        font_family=palette.font_family,
        commands=tuple(commands),
        stats=stats,
    )
