"""Goal countdown: days remaining plus a progress bar toward a target date."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from .clock import clamp, day_span, format_date, format_percent, start_of_year
from .models import CanvasSpec, LinearGradient, Rect, RenderResult, Text
from .themes import Palette

BAR_PADDING_FRACTION = 0.1
BAR_HEIGHT_FRACTION = 0.025


def goal_progress(total_days: int, days_elapsed: int) -> float:
    # A target at or before the start counts as already reached.
    if total_days <= 0:
        return 1.0
    return clamp(days_elapsed / total_days, 0.0, 1.0)


def goal_stats(target_date: datetime, now: datetime, start_date: datetime | None = None) -> dict[str, Any]:
    start = start_date or start_of_year(now)
    total_days = day_span(start, target_date)
    days_elapsed = day_span(start, now)
    days_remaining = max(0, day_span(now, target_date))
    progress = goal_progress(total_days, days_elapsed)
    return {
        "total_days": total_days,
        "days_elapsed": days_elapsed,
        "days_remaining": days_remaining,
        "progress": progress,
        "progress_percent": format_percent(progress),
        "is_complete": days_remaining <= 0,
        "target_date": target_date.date().isoformat(),
    }


def render_goal(
    canvas: CanvasSpec,
    palette: Palette,
    target_date: datetime,
    title: str,
    now: datetime,
    start_date: datetime | None = None,
) -> RenderResult:
    stats = goal_stats(target_date, now, start_date)
    days_remaining = stats["days_remaining"]

    width, height = canvas.width, canvas.height
    center_x = width / 2
    center_y = canvas.safe_top_px + canvas.available_height / 2

    bar_x = width * BAR_PADDING_FRACTION
    bar_width = width - bar_x * 2
    bar_height = width * BAR_HEIGHT_FRACTION
    bar_y = center_y + height * 0.08
    radius = bar_height / 2
    fill_width = bar_width * stats["progress"]

    commands = [
        Text(center_x, center_y - height * 0.08, str(days_remaining), 0.25, palette.foreground, weight="bold", baseline="middle"),
        Text(
            center_x,
            center_y + height * 0.02,
            "day remaining" if days_remaining == 1 else "days remaining",
            0.05,
            palette.text_secondary,
            baseline="middle",
        ),
        Rect(bar_x, bar_y, bar_width, bar_height, palette.muted, corner_radius=radius),
    ]
    if fill_width > 0:
        gradient = LinearGradient(bar_x, bar_x + bar_width, palette.accent, palette.foreground)
        commands.append(Rect(bar_x, bar_y, fill_width, bar_height, palette.accent, corner_radius=radius, gradient=gradient))

    commands.extend(
        [
            Text(center_x, bar_y + height * 0.07, title, 0.045, palette.foreground, weight="bold", baseline="middle"),
            Text(center_x, bar_y + height * 0.10, format_date(target_date), 0.032, palette.text_secondary, baseline="middle"),
            Text(
                center_x,
                bar_y + height * 0.13,
                f"{stats['progress_percent']}% complete",
                0.032,
                palette.text_secondary,
                baseline="middle",
            ),
        ]
    )

    return RenderResult(
        kind="goal",
        canvas=canvas,
        background=palette.background,
        font_family=palette.font_family,
        commands=tuple(commands),
        stats=stats,
    )
