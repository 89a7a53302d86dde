from __future__ import annotations

import re
from typing import Optional, Union

from .errors import LayoutError

SVG_NS = "http://www.w3.org/2000/svg"

HEX_COLOR_RE = re.compile(r"^#[0-9A-Fa-f]{6}$")

Number = Union[int, float]


def svg_text_escape(text: object) -> str:
    """Escape text for SVG element content and attribute values."""
    normalized = re.sub(r"\s+", " ", str(text)).strip()
    return (
        normalized.replace("&", "&amp;")
        .replace("<", "&lt;")
        .replace(">", "&gt;")
        .replace('"', "&quot;")
        .replace("'", "&apos;")
    )


def fmt_num(value: Number) -> str:
    """Format a coordinate deterministically: at most 2 decimals, no trailing zeros."""
    if isinstance(value, int):
        return str(value)
    out = f"{value:.2f}".rstrip("0").rstrip(".")
    return "0" if out in ("", "-0") else out


def hex_to_rgb(color: str) -> tuple[int, int, int]:
    if not HEX_COLOR_RE.match(color):
        raise LayoutError(f"Not a #rrggbb color: {color!r}")
    return int(color[1:3], 16), int(color[3:5], 16), int(color[5:7], 16)


def relative_luminance(color: str) -> float:
    r, g, b = hex_to_rgb(color)
    return (0.299 * r + 0.587 * g + 0.114 * b) / 255


def best_contrast_color(color: str) -> str:
    """Black text on light fills, white text on dark fills."""
    return "#000000" if relative_luminance(color) > 0.5 else "#ffffff"


def _attrs(**attrs: Optional[object]) -> str:
    # Keyword names use "_" for "-" (stroke_width -> stroke-width).
    parts: list[str] = []
    for key, value in attrs.items():
        if value is None:
            continue
        name = key.rstrip("_").replace("_", "-")
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            rendered = fmt_num(value)
        else:
            rendered = svg_text_escape(value)
        parts.append(f'{name}="{rendered}"')
    return " ".join(parts)


def svg_open(width: Number, height: Number) -> str:
    return (
        f'<svg width="{fmt_num(width)}" height="{fmt_num(height)}" '
        f'viewBox="0 0 {fmt_num(width)} {fmt_num(height)}" xmlns="{SVG_NS}">'
    )


def svg_close() -> str:
    return "</svg>"


def svg_rect(**attrs: Optional[object]) -> str:
    return f"<rect {_attrs(**attrs)}/>"


def svg_line(x1: Number, y1: Number, x2: Number, y2: Number) -> str:
    return f"<line {_attrs(x1=x1, y1=y1, x2=x2, y2=y2)}/>"


def svg_text(content: object, **attrs: Optional[object]) -> str:
    return f"<text {_attrs(**attrs)}>{svg_text_escape(content)}</text>"


def svg_group_open(**attrs: Optional[object]) -> str:
    return f"<g {_attrs(**attrs)}>"


def svg_group_close() -> str:
    return "</g>"
