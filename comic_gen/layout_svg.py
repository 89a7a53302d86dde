from __future__ import annotations

from .constants import (
    LAYOUT_HEIGHT_DEFAULT,
    LAYOUT_MAX_FONT_SIZE,
    LAYOUT_PADDING,
    LAYOUT_WIDTH_DEFAULT,
    PANEL_PALETTE,
)
from .errors import LayoutError
from .layout import LayoutInput, parse_layout
from .model import ParsedLayout, PanelPosition
from .svg_fmt import (
    Number,
    best_contrast_color,
    svg_close,
    svg_group_close,
    svg_group_open,
    svg_line,
    svg_open,
    svg_rect,
    svg_text,
)


def panel_color(panel_number: int) -> str:
    """Palette color for a sort key; equal keys always share a color."""
    return PANEL_PALETTE[(panel_number - 1) % len(PANEL_PALETTE)]


def render_placeholder_svg(
    width: Number = LAYOUT_WIDTH_DEFAULT,
    height: Number = LAYOUT_HEIGHT_DEFAULT,
    message: str = "No layout defined",
) -> str:
    """Gray diagram with a centered caption, used when there is nothing to draw."""
    return "".join(
        [
            svg_open(width, height),
            svg_rect(width=width, height=height, fill="#f0f0f0", stroke="#333", stroke_width=2),
            svg_text(
                message,
                x=width / 2,
                y=height / 2,
                text_anchor="middle",
                font_family="Arial",
                font_size=14,
                fill="#666",
            ),
            svg_close(),
        ]
    )


def _check_dimensions(width: Number, height: Number) -> None:
    if width <= 2 * LAYOUT_PADDING or height <= 2 * LAYOUT_PADDING:
        raise LayoutError(
            f"diagram size {width}x{height} leaves no room inside the "
            f"{LAYOUT_PADDING}px padding"
        )


def _panel_label(panel: PanelPosition) -> str:
    if panel.label:
        return panel.label
    if panel.panel_number <= 9:
        return str(panel.panel_number)
    return chr(65 + panel.panel_number - 10)


def render_layout_to_svg(
    layout: ParsedLayout,
    width: Number = LAYOUT_WIDTH_DEFAULT,
    height: Number = LAYOUT_HEIGHT_DEFAULT,
    *,
    show_numbers: bool = True,
    show_grid: bool = False,
) -> str:
    """Draw a parsed layout as a standalone SVG document.

    Each member cell is its own rectangle in the panel's palette color.
    Labels sit at the mean of the panel's cell coordinates, not at the
    bounding-box center.
    """
    if layout.is_empty:
        return render_placeholder_svg(width, height)

    _check_dimensions(width, height)
    if layout.grid_width <= 0 or layout.grid_height <= 0:
        raise LayoutError(
            f"layout has panels but a {layout.grid_width}x{layout.grid_height} grid"
        )

    padding = LAYOUT_PADDING
    inner_width = width - padding * 2
    inner_height = height - padding * 2
    cell_width = inner_width / layout.grid_width
    cell_height = inner_height / layout.grid_height

    parts: list[str] = [svg_open(width, height)]
    parts.append(svg_rect(width=width, height=height, fill="white"))

    if show_grid:
        parts.append(svg_group_open(stroke="#e0e0e0", stroke_width=0.5))
        for i in range(layout.grid_width + 1):
            x = padding + i * cell_width
            parts.append(svg_line(x, padding, x, height - padding))
        for i in range(layout.grid_height + 1):
            y = padding + i * cell_height
            parts.append(svg_line(padding, y, width - padding, y))
        parts.append(svg_group_close())

    for panel in layout.panels:
        color = panel_color(panel.panel_number)

        for cell in panel.cells:
            parts.append(
                svg_rect(
                    x=padding + cell.x * cell_width,
                    y=padding + cell.y * cell_height,
                    width=cell_width,
                    height=cell_height,
                    fill=color,
                )
            )

        if not show_numbers:
            continue

        centroid_x = sum(c.x for c in panel.cells) / len(panel.cells)
        centroid_y = sum(c.y for c in panel.cells) / len(panel.cells)
        bbox = panel.bounding_box
        font_size = min(
            LAYOUT_MAX_FONT_SIZE,
            min(bbox.width * cell_width, bbox.height * cell_height) / 3,
        )

        parts.append(
            svg_text(
                _panel_label(panel),
                x=padding + (centroid_x + 0.5) * cell_width,
                y=padding + (centroid_y + 0.5) * cell_height,
                text_anchor="middle",
                dominant_baseline="middle",
                font_family="Arial",
                font_size=font_size,
                font_weight="bold",
                fill=best_contrast_color(color),
            )
        )

    parts.append(
        svg_rect(
            x=padding,
            y=padding,
            width=inner_width,
            height=inner_height,
            fill="none",
            stroke="#333",
            stroke_width=3,
        )
    )
    parts.append(svg_close())
    return "".join(parts)


def render_layout(
    layout_input: LayoutInput,
    width: Number = LAYOUT_WIDTH_DEFAULT,
    height: Number = LAYOUT_HEIGHT_DEFAULT,
    *,
    show_numbers: bool = True,
    show_grid: bool = False,
) -> str:
    """Parse and draw a layout grid in one step; raises `LayoutError`."""
    return render_layout_to_svg(
        parse_layout(layout_input),
        width,
        height,
        show_numbers=show_numbers,
        show_grid=show_grid,
    )
