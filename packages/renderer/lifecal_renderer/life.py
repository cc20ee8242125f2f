"""Life calendar: one block per week of an expected lifespan."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from .clock import age_in_years, clamp, format_percent, weeks_since
from .grid import BlockGlyph, layout_grid, paint_grid
from .models import CanvasSpec, RenderResult, Text
from .themes import Palette

WEEKS_PER_YEAR = 52
PADDING_FRACTION = 0.05
BAND_FRACTION = 0.7
# Leftover height split 1:1.5 so the two-line label below gets more room.
CENTERING_DIVISOR = 2.5
GLYPH_FRACTION = 0.85


def current_week_index(weeks_lived: int, total_weeks: int) -> int | None:
    """Index of the accent cell, or None once the whole grid has been lived."""
    if weeks_lived >= total_weeks:
        return None
    return max(0, weeks_lived)


def life_stats(birth_date: datetime, life_expectancy: int, now: datetime) -> dict[str, Any]:
    if life_expectancy <= 0:
        raise ValueError("life_expectancy must be positive")
    total_weeks = WEEKS_PER_YEAR * life_expectancy
    weeks_lived = weeks_since(birth_date, now)
    # A birth date after ``now`` reads as born this week.
    return {
        "age_years": max(0, age_in_years(birth_date, now)),
        "weeks_lived": weeks_lived,
        "weeks_remaining": total_weeks - int(clamp(weeks_lived, 0, total_weeks)),
        "total_weeks": total_weeks,
        "life_expectancy": life_expectancy,
        "progress_percent": format_percent(clamp(weeks_lived / total_weeks, 0.0, 1.0)),
    }


def render_life(
    canvas: CanvasSpec,
    palette: Palette,
    birth_date: datetime,
    life_expectancy: int,
    now: datetime,
) -> RenderResult:
    stats = life_stats(birth_date, life_expectancy, now)
    total_weeks = stats["total_weeks"]
    weeks_lived = stats["weeks_lived"]

    layout = layout_grid(
        canvas,
        WEEKS_PER_YEAR,
        total_weeks,
        PADDING_FRACTION,
        BAND_FRACTION,
        centering_divisor=CENTERING_DIVISOR,
        glyph_fraction=GLYPH_FRACTION,
    )
    commands = paint_grid(
        layout,
        item_count=total_weeks,
        filled_count=int(clamp(weeks_lived, 0, total_weeks)),
        current_index=current_week_index(weeks_lived, total_weeks),
        glyph=BlockGlyph(),
        palette=palette,
    )

    center_x = canvas.width / 2
    label_y = layout.origin_y + layout.height + canvas.height * 0.05
    commands.append(
        Text(center_x, label_y, f"{stats['age_years']} years lived", 0.055, palette.foreground, weight="bold")
    )
    commands.append(
        Text(
            center_x,
            label_y + canvas.height * 0.04,
            f"{stats['weeks_remaining']:,} weeks remain",
            0.032,
            palette.text_secondary,
        )
    )
    commands.append(
        Text(
            center_x,
            label_y + canvas.height * 0.07,
            f"{stats['progress_percent']}% of {life_expectancy} years",
            0.032,
            palette.text_secondary,
        )
    )

    return RenderResult(
        kind="life",
        canvas=canvas,
        background=palette.background,
        font_family=palette.font_family,
        commands=tuple(commands),
        stats=stats,
    )
