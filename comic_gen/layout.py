from __future__ import annotations

from typing import Optional, Sequence, Union

from .errors import LayoutError
from .model import BoundingBox, Cell, ParsedLayout, PanelPosition

BLANK = " "

LayoutInput = Union[str, Sequence[str]]


def _as_int(token: str) -> Optional[int]:
    try:
        return int(token)
    except ValueError:
        return None


def panel_sort_key(token: str) -> int:
    """Derive the ordering number of a panel token.

    Integer tokens sort by value; anything else by its first character's
    code point minus 55, so "A" -> 10, "B" -> 11.
    """
    number = _as_int(token)
    if number is not None:
        return number
    if not token:
        raise LayoutError("empty panel token")
    return ord(token[0]) - 55


def _normalize_lines(layout_input: LayoutInput) -> list[str]:
    if isinstance(layout_input, str):
        lines = layout_input.split("\n")
    elif isinstance(layout_input, (list, tuple)):
        lines = list(layout_input)
    else:
        raise LayoutError(
            f"layout must be a string or a list of lines, got {type(layout_input).__name__}"
        )

    out: list[str] = []
    for i, line in enumerate(lines):
        if not isinstance(line, str):
            raise LayoutError(f"layout line {i + 1} is not a string: {line!r}")
        line = line.rstrip("\r")
        if line.strip():
            out.append(line)
    return out


def _cell_value(char: str) -> str:
    if char == "." or char.isspace():
        return BLANK
    return char


def parse_layout(layout_input: LayoutInput) -> ParsedLayout:
    """Parse an ASCII layout grid into panel footprints.

    One line per grid row, one character per cell. "." and whitespace are
    empty cells; ragged rows are padded. Every occurrence of a token belongs
    to the same panel whether or not the cells touch.
    """
    lines = _normalize_lines(layout_input)
    if not lines:
        return ParsedLayout()

    grid_height = len(lines)
    grid_width = max(len(line) for line in lines)

    grid: list[tuple[str, ...]] = []
    for line in lines:
        row = [_cell_value(ch) for ch in line]
        row.extend(BLANK for _ in range(grid_width - len(row)))
        grid.append(tuple(row))

    # Insertion order = first appearance in a row-major scan.
    panel_cells: dict[str, list[Cell]] = {}
    for y, row in enumerate(grid):
        for x, value in enumerate(row):
            if value == BLANK:
                continue
            panel_cells.setdefault(value, []).append(Cell(x=x, y=y))

    positions: list[PanelPosition] = []
    for token, cells in panel_cells.items():
        min_x = min(c.x for c in cells)
        max_x = max(c.x for c in cells)
        min_y = min(c.y for c in cells)
        max_y = max(c.y for c in cells)

        positions.append(
            PanelPosition(
                label=token,
                panel_number=panel_sort_key(token),
                cells=tuple(cells),
                bounding_box=BoundingBox(
                    x=min_x,
                    y=min_y,
                    width=max_x - min_x + 1,
                    height=max_y - min_y + 1,
                ),
            )
        )

    # Stable: equal keys keep first-appearance order.
    positions.sort(key=lambda p: p.panel_number)

    return ParsedLayout(
        grid=tuple(grid),
        panels=tuple(positions),
        grid_width=grid_width,
        grid_height=grid_height,
    )
