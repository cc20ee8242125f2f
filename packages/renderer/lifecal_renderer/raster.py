"""Pixel-surface translator: replays draw commands onto a Pillow image."""

from __future__ import annotations

import base64
from io import BytesIO

import numpy as np
from PIL import Image, ImageColor, ImageDraw, ImageFilter, ImageFont

from .models import Circle, LinearGradient, Rect, RenderResult, Text

_ANCHORS = {
    ("middle", "alphabetic"): "ms",
    ("middle", "middle"): "mm",
    ("start", "alphabetic"): "ls",
    ("start", "middle"): "lm",
    ("end", "alphabetic"): "rs",
    ("end", "middle"): "rm",
}

_FONT_FILES = {
    "normal": ("Inter-Regular.ttf", "Arial.ttf", "DejaVuSans.ttf"),
    "bold": ("Inter-Bold.ttf", "Arial Bold.ttf", "DejaVuSans-Bold.ttf"),
}


def _rgb(color: str) -> tuple[int, int, int]:
    return ImageColor.getrgb(color)[:3]


class RasterSurface:
    """Imperative drawing surface sized to a canvas, optionally scaled down."""

    def __init__(self, width: int, height: int, background: str, scale: float = 1.0) -> None:
        if scale <= 0:
            raise ValueError("scale must be positive")
        self.scale = scale
        self.width = max(1, round(width * scale))
        self.height = max(1, round(height * scale))
        self.canvas_width = width
        self.image = Image.new("RGBA", (self.width, self.height), _rgb(background) + (255,))
        self._draw = ImageDraw.Draw(self.image)
        self._fonts: dict[tuple[int, str], ImageFont.FreeTypeFont] = {}

    def _s(self, value: float) -> float:
        return value * self.scale

    def _box(self, x: float, y: float, w: float, h: float) -> tuple[int, int, int, int]:
        x0, y0 = round(self._s(x)), round(self._s(y))
        x1 = max(x0, round(self._s(x + w)) - 1)
        y1 = max(y0, round(self._s(y + h)) - 1)
        return x0, y0, x1, y1

    def _font(self, size: int, weight: str):
        key = (size, weight)
        if key not in self._fonts:
            font = None
            for name in _FONT_FILES.get(weight, _FONT_FILES["normal"]):
                try:
                    font = ImageFont.truetype(name, size)
                    break
                except OSError:
                    continue
            self._fonts[key] = font or ImageFont.load_default(size=size)
        return self._fonts[key]

    def _overlay(self) -> tuple[Image.Image, ImageDraw.ImageDraw]:
        layer = Image.new("RGBA", self.image.size, (0, 0, 0, 0))
        return layer, ImageDraw.Draw(layer)

    def circle(self, c: Circle) -> None:
        cx, cy, r = self._s(c.cx), self._s(c.cy), self._s(c.r)
        box = (round(cx - r), round(cy - r), round(cx + r), round(cy + r))
        alpha = round(255 * c.opacity)
        if alpha < 255:
            layer, draw = self._overlay()
        else:
            layer, draw = None, self._draw
        rgba = _rgb(c.color) + (alpha,)
        if c.filled:
            draw.ellipse(box, fill=rgba)
        else:
            draw.ellipse(box, outline=rgba, width=max(1, round(self._s(c.stroke_width))))
        if layer is not None:
            self.image.alpha_composite(layer)

    def rect(self, r: Rect) -> None:
        box = self._box(r.x, r.y, r.w, r.h)
        radius = round(self._s(r.corner_radius))
        if r.glow_blur > 0:
            layer, draw = self._overlay()
            draw.rectangle(box, fill=_rgb(r.color) + (255,))
            self.image.alpha_composite(layer.filter(ImageFilter.GaussianBlur(self._s(r.glow_blur) / 2)))
        if r.gradient is not None:
            self._gradient_rect(box, radius, r.gradient)
        elif radius > 0:
            self._draw.rounded_rectangle(box, radius=radius, fill=_rgb(r.color))
        else:
            self._draw.rectangle(box, fill=_rgb(r.color))

    def _gradient_rect(self, box: tuple[int, int, int, int], radius: int, gradient: LinearGradient) -> None:
        x0, y0, x1, y1 = box
        w, h = x1 - x0 + 1, y1 - y0 + 1
        span = max(self._s(gradient.x1 - gradient.x0), 1e-9)
        xs = np.arange(x0, x1 + 1, dtype=np.float64)
        t = np.clip((xs - self._s(gradient.x0)) / span, 0.0, 1.0)[:, None]
        start = np.array(_rgb(gradient.start_color), dtype=np.float64)
        end = np.array(_rgb(gradient.end_color), dtype=np.float64)
        row = (start * (1 - t) + end * t).round().astype(np.uint8)
        pixels = np.broadcast_to(row[None, :, :], (h, w, 3))
        fill = Image.fromarray(np.ascontiguousarray(pixels)).convert("RGBA")

        mask = Image.new("L", (w, h), 0)
        ImageDraw.Draw(mask).rounded_rectangle((0, 0, w - 1, h - 1), radius=radius, fill=255)
        self.image.paste(fill, (x0, y0), mask)

    def text(self, t: Text) -> None:
        size = max(1, round(self._s(self.canvas_width * t.font_size_fraction)))
        anchor = _ANCHORS.get((t.anchor, t.baseline), "ms")
        self._draw.text(
            (self._s(t.x), self._s(t.y)),
            t.text,
            font=self._font(size, t.weight),
            fill=_rgb(t.color),
            anchor=anchor,
        )

    def replay(self, result: RenderResult) -> Image.Image:
        for command in result.commands:
            if isinstance(command, Circle):
                self.circle(command)
            elif isinstance(command, Rect):
                self.rect(command)
            elif isinstance(command, Text):
                self.text(command)
            else:
                raise TypeError(f"Unsupported draw command: {command!r}")
        return self.image


def to_image(result: RenderResult, scale: float = 1.0) -> Image.Image:
    surface = RasterSurface(result.canvas.width, result.canvas.height, result.background, scale=scale)
    return surface.replay(result).convert("RGB")


def to_png(result: RenderResult, scale: float = 1.0) -> bytes:
    buf = BytesIO()
    to_image(result, scale=scale).save(buf, format="PNG")
    return buf.getvalue()


def preview_data_url(result: RenderResult, scale: float = 1.0) -> str:
    b64 = base64.b64encode(to_png(result, scale=scale)).decode("ascii")
    return f"data:image/png;base64,{b64}"
