from __future__ import annotations

import html
import re
from enum import Enum
from typing import Any, Optional, Sequence

from .config import RenderConfig
from .errors import LayoutError
from .layout_svg import render_layout, render_placeholder_svg
from .model import Chapter, Page

_HEADINGS: tuple[tuple[str, str], ...] = (
    ("# ", "h1"),
    ("## ", "h2"),
    ("### ", "h3"),
)

QUOTE_PREFIX = "> "
PAGE_HEADING_PREFIX = "## "


def render_inline(text: str) -> str:
    """Escape HTML, then turn **bold** and *italic* into tags (bold first)."""
    s = html.escape(text, quote=False)
    s = re.sub(r"\*\*(.*?)\*\*", r"<strong>\1</strong>", s)
    s = re.sub(r"\*(.*?)\*", r"<em>\1</em>", s)
    return s


class ScanState(Enum):
    NORMAL = "normal"
    IN_QUOTE = "in_quote"


class _MarkdownScanner:
    """Line scanner over the markdown subset emitted by the renderer.

    NORMAL -> IN_QUOTE on a "> " line; IN_QUOTE -> NORMAL flushes the pending
    quote as one <blockquote>. `finish()` flushes a quote still open at the
    end of input.
    """

    def __init__(self) -> None:
        self.state = ScanState.NORMAL
        self._quote: list[str] = []
        self._out: list[str] = []

    def _flush_quote(self) -> None:
        paras = "".join(
            f"<p>{render_inline(line.strip())}</p>\n"
            for line in self._quote
            if line.strip()
        )
        self._out.append(f"<blockquote>{paras}</blockquote>\n")
        self._quote = []
        self.state = ScanState.NORMAL

    def feed(self, line: str) -> None:
        if line.startswith(QUOTE_PREFIX):
            self.state = ScanState.IN_QUOTE
            self._quote.append(line[len(QUOTE_PREFIX):])
            return

        if self.state is ScanState.IN_QUOTE:
            self._flush_quote()

        if not line.strip():
            self._out.append("\n")
            return

        for prefix, tag in _HEADINGS:
            if line.startswith(prefix):
                text = html.escape(line[len(prefix):], quote=False)
                self._out.append(f"<{tag}>{text}</{tag}>\n")
                return

        self._out.append(f"<p>{render_inline(line)}</p>\n")

    def finish(self) -> str:
        if self.state is ScanState.IN_QUOTE:
            self._flush_quote()
        return "".join(self._out)


def markdown_to_html(markdown: str) -> str:
    """Convert rendered script markdown to an HTML fragment in one pass."""
    scanner = _MarkdownScanner()
    for line in markdown.split("\n"):
        scanner.feed(line)
    return scanner.finish()


def page_boundaries(markdown: str) -> list[int]:
    """Line index of every page heading ("## "), in document order."""
    return [
        i
        for i, line in enumerate(markdown.split("\n"))
        if line.startswith(PAGE_HEADING_PREFIX)
    ]


def _usable_starts(starts: Sequence[int], lines: Sequence[str]) -> bool:
    prev = -1
    for start in starts:
        if not isinstance(start, int) or start <= prev or start >= len(lines):
            return False
        if not lines[start].startswith(PAGE_HEADING_PREFIX):
            return False
        prev = start
    return True


def page_layout_svg(page: Any, cfg: RenderConfig = RenderConfig()) -> str:
    """Layout diagram for one page, or a placeholder when there is none."""
    if not isinstance(page, Page) or page.layout is None:
        return render_placeholder_svg(cfg.width, cfg.height)
    try:
        return render_layout(
            page.layout,
            cfg.width,
            cfg.height,
            show_numbers=cfg.show_numbers,
            show_grid=cfg.show_grid,
        )
    except LayoutError:
        return render_placeholder_svg(cfg.width, cfg.height, message="Invalid layout")


def _page_section(number: int, body_html: str, svg: str) -> str:
    return (
        f'<section class="page" data-page="{number}">\n'
        f'<div class="page-script">\n{body_html}</div>\n'
        f'<div class="page-layout">{svg}</div>\n'
        "</section>\n"
    )


def to_html(
    markdown: str,
    chapter: Optional[Chapter] = None,
    *,
    page_starts: Optional[Sequence[int]] = None,
    cfg: RenderConfig = RenderConfig(),
) -> str:
    """Assemble the HTML body for a rendered script.

    Without a chapter this is a flat conversion. With one, the markdown is cut
    at the page boundary index and the Nth cut is paired with
    `chapter.pages[N]`'s layout diagram. `page_starts` comes from
    `render_document`; when missing (or unusable) it is recomputed from the
    "## " headings.
    """
    if chapter is None:
        return markdown_to_html(markdown)

    lines = markdown.split("\n")
    starts = list(page_starts) if page_starts is not None else None
    if starts is None or not _usable_starts(starts, lines):
        starts = page_boundaries(markdown)

    pages: Sequence[Any] = chapter.pages if isinstance(chapter, Chapter) else ()

    out: list[str] = []
    header_end = starts[0] if starts else len(lines)
    header_md = "\n".join(lines[:header_end])
    if header_md.strip():
        out.append(
            f'<div class="chapter-header">\n{markdown_to_html(header_md)}</div>\n'
        )

    for n, start in enumerate(starts):
        end = starts[n + 1] if n + 1 < len(starts) else len(lines)
        body_html = markdown_to_html("\n".join(lines[start:end]))
        page = pages[n] if n < len(pages) else None
        out.append(_page_section(n + 1, body_html, page_layout_svg(page, cfg)))

    return "".join(out)


_STYLESHEET = """
body {
    font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, sans-serif;
    line-height: 1.4;
    margin: 0;
    padding: 1rem;
    color: #000;
    background-color: #fff;
    font-size: 12px;
}
h1 { color: #333; font-size: 18px; margin: 1rem 0; font-weight: 700; text-align: center; }
h2 {
    color: #555;
    margin: 1.5rem 0 0.5rem 0;
    font-size: 16px;
    font-weight: 600;
    border-bottom: 1px solid #e0e0e0;
    padding-bottom: 0.2rem;
}
h3 { color: #666; margin: 1.5rem 0 0.5rem 0; font-size: 12px; font-weight: 500; }
p { margin: 0.5rem 0; line-height: 1.5; }
blockquote {
    border-left: 3px solid #dfe2e5;
    padding: 0.5rem 0.75rem;
    margin: 0.75rem 0;
    color: #6a737d;
    background: #f6f8fa;
}
blockquote p { margin: 0.25rem 0; line-height: 1.4; }
.content { max-width: 1100px; margin: 0 auto; }
.page {
    display: grid;
    grid-template-columns: minmax(0, 3fr) minmax(0, 2fr);
    gap: 1.5rem;
    align-items: start;
}
.page-layout svg { width: 100%; height: auto; }
@media print {
    .page { break-inside: avoid; page-break-after: always; }
}
"""


def render_html_document(
    body: str,
    *,
    title: str = RenderConfig().document_title,
    printable: bool = False,
) -> str:
    """Wrap an HTML body in a standalone document with an embedded stylesheet."""
    if not body.strip():
        body = (
            f"<h1>{html.escape(title, quote=False)}</h1>\n"
            "<p>No content available.</p>\n"
        )
    full_title = f"{title} - Print" if printable else title
    return (
        "<!DOCTYPE html>\n"
        '<html lang="en">\n'
        "<head>\n"
        '<meta charset="UTF-8">\n'
        '<meta name="viewport" content="width=device-width, initial-scale=1.0">\n'
        f"<title>{html.escape(full_title, quote=False)}</title>\n"
        f"<style>{_STYLESHEET}</style>\n"
        "</head>\n"
        "<body>\n"
        f'<div class="content">\n{body}</div>\n'
        "</body>\n"
        "</html>\n"
    )
