"""Typed renderer models: canvas geometry, draw commands, and render output."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Union


@dataclass(frozen=True)
class CanvasSpec:
    width: int
    height: int
    safe_area_top: float
    safe_area_bottom: float

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"Canvas dimensions must be positive, got {self.width}x{self.height}")
        if not (0.0 <= self.safe_area_top < 1.0 and 0.0 <= self.safe_area_bottom < 1.0):
            raise ValueError("Safe-area fractions must be in [0, 1)")
        if self.safe_area_top + self.safe_area_bottom >= 1.0:
            raise ValueError("Safe-area fractions must leave some visible height")

    @property
    def safe_top_px(self) -> float:
        return self.height * self.safe_area_top

    @property
    def safe_bottom_px(self) -> float:
        return self.height * self.safe_area_bottom

    @property
    def available_height(self) -> float:
        return self.height - self.safe_top_px - self.safe_bottom_px


@dataclass(frozen=True)
class LinearGradient:
    """Horizontal gradient spanning x0..x1 in canvas coordinates."""

    x0: float
    x1: float
    start_color: str
    end_color: str


@dataclass(frozen=True)
class Circle:
    cx: float
    cy: float
    r: float
    color: str
    filled: bool = True
    stroke_width: float = 0.0
    opacity: float = 1.0
    glow: bool = False


@dataclass(frozen=True)
class Rect:
    x: float
    y: float
    w: float
    h: float
    color: str
    corner_radius: float = 0.0
    glow_blur: float = 0.0
    gradient: LinearGradient | None = None


@dataclass(frozen=True)
class Text:
    x: float
    y: float
    text: str
    font_size_fraction: float
    color: str
    weight: str = "normal"
    anchor: str = "middle"
    baseline: str = "alphabetic"


DrawCommand = Union[Circle, Rect, Text]


@dataclass(frozen=True)
class RenderResult:
    kind: str
    canvas: CanvasSpec
    background: str
    font_family: str
    commands: tuple[DrawCommand, ...]
    stats: dict[str, Any] = field(default_factory=dict)

    def glyphs(self) -> list[DrawCommand]:
        """Commands that represent one grid cell each (glow layers excluded)."""
        return [
            c
            for c in self.commands
            if (isinstance(c, Circle) and not c.glow) or (isinstance(c, Rect) and c.gradient is None and c.corner_radius == 0)
        ]
