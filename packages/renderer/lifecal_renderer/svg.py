"""Translate a render result into an SVG document."""

from __future__ import annotations

from xml.sax.saxutils import escape, quoteattr

from .models import Circle, Rect, RenderResult, Text

SVG_NS = "http://www.w3.org/2000/svg"


def _num(value: float) -> str:
    text = f"{value:.2f}".rstrip("0").rstrip(".")
    return "0" if text == "-0" else text


def _circle(c: Circle) -> str:
    attrs = f'cx="{_num(c.cx)}" cy="{_num(c.cy)}" r="{_num(c.r)}"'
    if c.filled:
        paint = f"fill={quoteattr(c.color)}"
    else:
        paint = f'fill="none" stroke={quoteattr(c.color)} stroke-width="{_num(c.stroke_width)}"'
    opacity = f' opacity="{_num(c.opacity)}"' if c.opacity < 1.0 else ""
    return f"<circle {attrs} {paint}{opacity} />"


def _rect(r: Rect, fill: str, filter_ref: str | None) -> str:
    attrs = f'x="{_num(r.x)}" y="{_num(r.y)}" width="{_num(r.w)}" height="{_num(r.h)}"'
    if r.corner_radius > 0:
        attrs += f' rx="{_num(r.corner_radius)}"'
    extra = f' filter="url(#{filter_ref})"' if filter_ref else ""
    return f"<rect {attrs} fill={quoteattr(fill)}{extra} />"


def _text(t: Text, width: int, font_family: str) -> str:
    weight = ' font-weight="bold"' if t.weight == "bold" else ""
    baseline = ' dominant-baseline="middle"' if t.baseline == "middle" else ""
    return (
        f'<text x="{_num(t.x)}" y="{_num(t.y)}" font-family={quoteattr(font_family)} '
        f'font-size="{_num(width * t.font_size_fraction)}"{weight} fill={quoteattr(t.color)} '
        f'text-anchor={quoteattr(t.anchor)}{baseline}>{escape(t.text)}</text>'
    )


def to_svg(result: RenderResult) -> str:
    canvas = result.canvas
    defs: list[str] = []
    body: list[str] = []
    glow_filters: dict[tuple[str, float], str] = {}

    for command in result.commands:
        if isinstance(command, Circle):
            body.append(_circle(command))
        elif isinstance(command, Rect):
            fill = command.color
            filter_ref = None
            if command.gradient is not None:
                grad_id = f"grad{len(defs)}"
                g = command.gradient
                defs.append(
                    f'<linearGradient id="{grad_id}" gradientUnits="userSpaceOnUse" '
                    f'x1="{_num(g.x0)}" y1="0" x2="{_num(g.x1)}" y2="0">'
                    f"<stop offset=\"0\" stop-color={quoteattr(g.start_color)} />"
                    f"<stop offset=\"1\" stop-color={quoteattr(g.end_color)} />"
                    "</linearGradient>"
                )
                fill = f"url(#{grad_id})"
            if command.glow_blur > 0:
                key = (command.color, command.glow_blur)
                filter_ref = glow_filters.get(key)
                if filter_ref is None:
                    filter_ref = f"glow{len(defs)}"
                    glow_filters[key] = filter_ref
                    defs.append(
                        f'<filter id="{filter_ref}" x="-100%" y="-100%" width="300%" height="300%">'
                        f'<feDropShadow dx="0" dy="0" stdDeviation="{_num(command.glow_blur / 2)}" '
                        f"flood-color={quoteattr(command.color)} /></filter>"
                    )
            body.append(_rect(command, fill, filter_ref))
        elif isinstance(command, Text):
            body.append(_text(command, canvas.width, result.font_family))
        else:
            raise TypeError(f"Unsupported draw command: {command!r}")

    lines = [
        f'<svg width="{canvas.width}" height="{canvas.height}" '
        f'viewBox="0 0 {canvas.width} {canvas.height}" xmlns="{SVG_NS}">'
    ]
    if defs:
        lines.append("  <defs>" + "".join(defs) + "</defs>")
    lines.append(f'  <rect width="100%" height="100%" fill={quoteattr(result.background)} />')
    lines.extend(f"  {item}" for item in body)
    lines.append("</svg>")
    return "\n".join(lines) + "\n"
