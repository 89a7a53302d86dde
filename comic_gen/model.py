from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Union

LayoutSource = Union[str, tuple[str, ...]]


@dataclass(frozen=True)
class Dialogue:
    """One decoded dialogue line.

    `character` is empty for narration; `type` is "speech", "narration",
    "sound_effect" or any custom string ("whisper", "thought", ...).
    """

    character: str
    text: str
    type: str
    is_narration: bool = False


@dataclass(frozen=True)
class Panel:
    name: Optional[str] = None
    desc: Optional[str] = None
    fx: Optional[str] = None
    caption: Optional[str] = None
    end_caption: Optional[str] = None
    dialogue: tuple[Dialogue, ...] = ()


@dataclass(frozen=True)
class Page:
    """A page of panels in document order.

    `layout` is the raw ASCII grid (a string or a tuple of lines). Its panel
    tokens are unrelated to the order of `panels`.
    """

    name: Optional[str] = None
    layout: Optional[LayoutSource] = None
    panels: tuple[Panel, ...] = ()


@dataclass(frozen=True)
class Chapter:
    title: Optional[str] = None
    synopsis: Optional[str] = None
    credits: Optional[tuple[str, ...]] = None
    pages: tuple[Page, ...] = ()


@dataclass(frozen=True)
class Cell:
    x: int
    y: int


@dataclass(frozen=True)
class BoundingBox:
    x: int
    y: int
    width: int
    height: int


@dataclass(frozen=True)
class PanelPosition:
    """Footprint of one panel token on a layout grid."""

    label: str
    panel_number: int
    cells: tuple[Cell, ...]
    bounding_box: BoundingBox


@dataclass(frozen=True)
class ParsedLayout:
    grid: tuple[tuple[str, ...], ...] = ()
    panels: tuple[PanelPosition, ...] = ()
    grid_width: int = 0
    grid_height: int = 0

    @property
    def is_empty(self) -> bool:
        return not self.panels


@dataclass(frozen=True)
class RenderedMarkdown:
    """Markdown text plus the line index of every page heading.

    `page_starts[n]` is the 0-based line of the heading rendered for
    `chapter.pages[n]`.
    """

    text: str
    page_starts: tuple[int, ...] = ()


@dataclass(frozen=True)
class RenderSnapshot:
    """Last-good render state: the raw input and everything derived from it."""

    raw: str
    chapter: Chapter
    markdown: str
    html: str
    page_starts: tuple[int, ...] = field(default=())
