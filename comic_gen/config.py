from __future__ import annotations

from dataclasses import dataclass

from .constants import DOCUMENT_TITLE_DEFAULT, LAYOUT_HEIGHT_DEFAULT, LAYOUT_WIDTH_DEFAULT


@dataclass(frozen=True)
class RenderConfig:
    """Options shared by the layout diagrams and the HTML document."""

    width: int = LAYOUT_WIDTH_DEFAULT
    height: int = LAYOUT_HEIGHT_DEFAULT
    show_numbers: bool = True
    show_grid: bool = False
    document_title: str = DOCUMENT_TITLE_DEFAULT
