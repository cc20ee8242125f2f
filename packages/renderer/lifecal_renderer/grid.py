"""Bounded grid layout shared by the year and life calendars."""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum

from .models import CanvasSpec, Circle, DrawCommand, Rect
from .themes import Palette


class CellState(str, Enum):
    PAST = "past"
    CURRENT = "current"
    FUTURE = "future"


@dataclass(frozen=True)
class GridLayout:
    columns: int
    rows: int
    cell_width: float
    cell_height: float
    origin_x: float
    origin_y: float
    spacing_x: float
    spacing_y: float

    @property
    def width(self) -> float:
        return self.spacing_x * self.columns

    @property
    def height(self) -> float:
        return self.spacing_y * self.rows

    def cell_origin(self, index: int) -> tuple[float, float]:
        row, col = divmod(index, self.columns)
        return self.origin_x + col * self.spacing_x, self.origin_y + row * self.spacing_y

    def cell_center(self, index: int) -> tuple[float, float]:
        x, y = self.cell_origin(index)
        return x + self.spacing_x / 2, y + self.spacing_y / 2


def layout_grid(
    canvas: CanvasSpec,
    columns: int,
    item_count: int,
    padding_fraction: float,
    band_fraction: float,
    centering_divisor: float = 2.0,
    glyph_fraction: float = 1.0,
) -> GridLayout:
    """Pack ``item_count`` cells into ``columns`` inside the safe area.

    The band is ``band_fraction`` of the available height and is offset from
    the safe-area top by the leftover height divided by ``centering_divisor``
    (2 centres it, larger values bias it upward).
    """
    if columns <= 0 or item_count <= 0:
        raise ValueError("Grid needs at least one column and one item")
    rows = math.ceil(item_count / columns)
    padding = canvas.width * padding_fraction
    grid_width = canvas.width - padding * 2
    grid_height = canvas.available_height * band_fraction
    spacing_x = grid_width / columns
    spacing_y = grid_height / rows
    origin_y = canvas.safe_top_px + (canvas.available_height - grid_height) / centering_divisor
    return GridLayout(
        columns=columns,
        rows=rows,
        cell_width=spacing_x * glyph_fraction,
        cell_height=spacing_y * glyph_fraction,
        origin_x=padding,
        origin_y=origin_y,
        spacing_x=spacing_x,
        spacing_y=spacing_y,
    )


class DotGlyph:
    """Circle per cell; today is layered with a translucent halo."""

    radius_fraction = 0.35
    glow_scale = 2.0
    glow_opacity = 0.3
    outline_width = 2.0

    def radius(self, layout: GridLayout) -> float:
        return min(layout.spacing_x, layout.spacing_y) * self.radius_fraction

    def draw(self, layout: GridLayout, index: int, state: CellState, palette: Palette) -> list[DrawCommand]:
        cx, cy = layout.cell_center(index)
        r = self.radius(layout)
        if state is CellState.PAST:
            return [Circle(cx, cy, r, palette.foreground)]
        if state is CellState.CURRENT:
            return [
                Circle(cx, cy, r, palette.accent),
                Circle(cx, cy, r * self.glow_scale, palette.accent, opacity=self.glow_opacity, glow=True),
            ]
        return [Circle(cx, cy, r, palette.muted, filled=False, stroke_width=self.outline_width)]


class BlockGlyph:
    """Rectangle per cell; the current cell glows in the accent colour."""

    glow_blur = 10.0

    def draw(self, layout: GridLayout, index: int, state: CellState, palette: Palette) -> list[DrawCommand]:
        x, y = layout.cell_origin(index)
        if state is CellState.PAST:
            color = palette.foreground
        elif state is CellState.CURRENT:
            return [Rect(x, y, layout.cell_width, layout.cell_height, palette.accent, glow_blur=self.glow_blur)]
        else:
            color = palette.empty
        return [Rect(x, y, layout.cell_width, layout.cell_height, color)]


def cell_state(index: int, filled_count: int, current_index: int | None) -> CellState:
    if index == current_index:
        return CellState.CURRENT
    if index < filled_count:
        return CellState.PAST
    return CellState.FUTURE


def paint_grid(
    layout: GridLayout,
    item_count: int,
    filled_count: int,
    current_index: int | None,
    glyph: DotGlyph | BlockGlyph,
    palette: Palette,
) -> list[DrawCommand]:
    commands: list[DrawCommand] = []
    for index in range(item_count):
        state = cell_state(index, filled_count, current_index)
        commands.extend(glyph.draw(layout, index, state, palette))
    return commands
