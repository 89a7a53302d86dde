# comic_gen/layout_suite.py
from __future__ import annotations

from pathlib import Path

from .assembler import page_layout_svg
from .config import RenderConfig
from .errors import LayoutError
from .layout import parse_layout
from .markdown import collapse_ws
from .model import Chapter, Page
from .writer import write_text, write_text_md


def _page_display_name(page: Page, number: int) -> str:
    name = collapse_ws(page.name) if page.name else ""
    return f"Page {number}: {name}" if name else f"Page {number}"


def _md_table_cell(text: str) -> str:
    """Escape a string for use in a Markdown table cell."""
    s = (text or "").replace("\r", " ").replace("\n", " ").strip()
    s = s.replace("|", "\\|")
    return s


def _layout_panel_count(page: Page) -> str:
    if page.layout is None:
        return ""
    try:
        return str(len(parse_layout(page.layout).panels))
    except LayoutError:
        return "invalid"


def layout_filename(number: int) -> str:
    return f"page_{number:02d}.svg"


def generate_layout_suite(
    chapter: Chapter,
    out_dir: Path,
    cfg: RenderConfig = RenderConfig(),
    *,
    suite_dirname: str = "layouts",
    write_index: bool = True,
) -> list[Path]:
    """Write one layout diagram per page under out_dir/layouts/.

    Outputs:
      - layouts/page_NN.svg for every page (placeholder when it has no layout)
      - layouts/index.md listing pages, panel counts and diagram links

    Returns the written SVG paths in page order.
    """

    suite_dir = out_dir / suite_dirname
    written: list[Path] = []

    # (number, display_name, script panels, layout panels)
    rows: list[tuple[int, str, int, str]] = []

    for i, page in enumerate(chapter.pages):
        number = i + 1
        path = suite_dir / layout_filename(number)
        write_text(path, page_layout_svg(page, cfg))
        written.append(path)
        rows.append(
            (
                number,
                _page_display_name(page, number),
                len(page.panels),
                _layout_panel_count(page),
            )
        )

    if write_index:
        lines: list[str] = []
        lines.append("This page lists the panel layout diagram generated for each page.")
        lines.append("")
        lines.append("| page | name | script panels | layout panels | diagram |")
        lines.append("|---|---|---|---|---|")

        for number, label, script_panels, layout_panels in rows:
            filename = layout_filename(number)
            lines.append(
                "| "
                + " | ".join(
                    [
                        str(number),
                        _md_table_cell(label),
                        str(script_panels),
                        _md_table_cell(layout_panels),
                        f"[{filename}]({filename})",
                    ]
                )
                + " |"
            )

        if not rows:
            lines.append("")
            lines.append("The script has no pages.")

        title = f"Layouts: {chapter.title}" if chapter.title else "Layouts"
        write_text_md(suite_dir / "index.md", title=title, body_md="\n".join(lines))

    return written
