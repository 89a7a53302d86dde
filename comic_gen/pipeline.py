"""Entry points handed to a host editor.

Live preview goes through `RenderCache.try_update`; the one-shot exports
here propagate `FormatError` / `LayoutError` to the caller.
"""
from __future__ import annotations

from typing import Optional, Sequence

from .assembler import to_html as _to_html
from .cache import RenderCache, build_snapshot
from .config import RenderConfig
from .layout import LayoutInput
from .layout_svg import render_layout as _render_layout
from .markdown import render_chapter, render_document
from .model import Chapter
from .parser import parse

__all__ = [
    "RenderCache",
    "export_html",
    "export_markdown",
    "parse",
    "render",
    "render_document",
    "render_layout",
    "to_html",
]


def render(chapter: Chapter) -> str:
    return render_chapter(chapter)


def to_html(
    markdown: str,
    chapter: Optional[Chapter] = None,
    cfg: RenderConfig = RenderConfig(),
    *,
    page_starts: Optional[Sequence[int]] = None,
) -> str:
    """Assemble HTML for `markdown`, pairing pages with `chapter`'s layouts.

    Without `page_starts`, the page boundary index is taken from
    `render_document(chapter)` when that renders to the same markdown; only
    foreign markdown falls back to scanning "## " headings.
    """
    if chapter is not None and page_starts is None:
        doc = render_document(chapter)
        if doc.text == markdown:
            page_starts = doc.page_starts
    return _to_html(markdown, chapter, page_starts=page_starts, cfg=cfg)


def render_layout(layout_text: LayoutInput, cfg: RenderConfig = RenderConfig()) -> str:
    return _render_layout(
        layout_text,
        cfg.width,
        cfg.height,
        show_numbers=cfg.show_numbers,
        show_grid=cfg.show_grid,
    )


def export_markdown(raw: str, *, source: str = "<script>") -> str:
    return render_chapter(parse(raw, source=source))


def export_html(raw: str, cfg: RenderConfig = RenderConfig(), *, source: str = "<script>") -> str:
    return build_snapshot(raw, cfg, source=source).html
