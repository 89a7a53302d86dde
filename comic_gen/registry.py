from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

from .assembler import render_html_document, to_html
from .config import RenderConfig
from .markdown import render_document
from .model import Chapter

RenderFn = Callable[[Chapter, RenderConfig], str]


@dataclass(frozen=True)
class OutputSpec:
    output_id: str
    title: str
    filename: str
    render: RenderFn


def _render_markdown(chapter: Chapter, _: RenderConfig) -> str:
    return render_document(chapter).text


def _render_html(chapter: Chapter, cfg: RenderConfig) -> str:
    doc = render_document(chapter)
    body = to_html(doc.text, chapter, page_starts=doc.page_starts, cfg=cfg)
    return render_html_document(
        body, title=chapter.title or cfg.document_title, printable=True
    )


OUTPUTS: list[OutputSpec] = [
    OutputSpec(
        output_id="markdown",
        title="Script (markdown)",
        filename="script.md",
        render=_render_markdown,
    ),
    OutputSpec(
        output_id="html",
        title="Script with page layouts (HTML)",
        filename="script.html",
        render=_render_html,
    ),
]


def outputs_for(format_name: str) -> list[OutputSpec]:
    """Select outputs by id; "all" selects every registered output."""
    if format_name == "all":
        return list(OUTPUTS)
    selected = [spec for spec in OUTPUTS if spec.output_id == format_name]
    if not selected:
        raise KeyError(f"unknown output format {format_name!r}")
    return selected
