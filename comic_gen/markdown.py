from __future__ import annotations

import re
from typing import Any, Optional

from .constants import DEFAULT_CHARACTER, DEFAULT_DIALOGUE_TYPE, NARRATION_TYPE, SOUND_EFFECT_TYPE
from .model import Chapter, Dialogue, Page, Panel, RenderedMarkdown

CHAPTER_ERROR = "# Error: Invalid chapter data"
PAGE_ERROR = "## Error: Invalid page data"
PANEL_ERROR = "### Error: Invalid panel data"


def collapse_ws(text: Any) -> str:
    """Collapse whitespace runs to one space and trim."""
    return re.sub(r"\s+", " ", str(text or "")).strip()


def render_description(description: str) -> str:
    return f"*{collapse_ws(description)}*"


def render_dialogue(dialogue: Dialogue) -> str:
    text = collapse_ws(dialogue.text)
    character = dialogue.character or DEFAULT_CHARACTER
    type_ = dialogue.type or DEFAULT_DIALOGUE_TYPE

    if dialogue.is_narration or type_ == NARRATION_TYPE:
        return f"*{text}*"

    if type_ == SOUND_EFFECT_TYPE:
        return f"**{text}**"

    if type_ == DEFAULT_DIALOGUE_TYPE:
        return f"**{character.upper()}:** {text}"

    # whisper, thought, ...
    return f"**{character.upper()}:** ({type_}) {text}"


def _numbered_title(kind: str, number: int, name: Optional[str]) -> str:
    name = collapse_ws(name) if name else ""
    return f"({kind} {number}) {name}" if name else f"({kind} {number})"


def _is_sequence(value: Any) -> bool:
    return isinstance(value, (tuple, list))


def render_panel(panel: Panel, panel_index: Optional[int] = None) -> str:
    """Render one panel block: heading, description, FX and the dialogue quote."""
    if not isinstance(panel, Panel) or not _is_sequence(panel.dialogue):
        return PANEL_ERROR
    if not all(isinstance(d, Dialogue) for d in panel.dialogue):
        return PANEL_ERROR

    number = panel_index + 1 if panel_index is not None else 1
    parts: list[str] = [f"### {_numbered_title('Panel', number, panel.name)}"]

    if panel.desc and collapse_ws(panel.desc):
        parts.append(render_description(panel.desc))

    if panel.fx and collapse_ws(panel.fx):
        parts.append(f"**FX:** {collapse_ws(panel.fx)}")

    quoted: list[str] = []
    if panel.caption and collapse_ws(panel.caption):
        quoted.append(f"*CAPTION: {collapse_ws(panel.caption)}*")

    quoted.extend(render_dialogue(d) for d in panel.dialogue)

    if panel.end_caption and collapse_ws(panel.end_caption):
        quoted.append(f"*END CAPTION: {collapse_ws(panel.end_caption)}*")

    if quoted:
        parts.append("> " + "\n> ".join(quoted))

    return "\n\n".join(parts)


def render_page(page: Page, page_index: Optional[int] = None) -> str:
    if not isinstance(page, Page) or not _is_sequence(page.panels):
        return PAGE_ERROR

    number = page_index + 1 if page_index is not None else 1
    parts: list[str] = [f"## {_numbered_title('Page', number, page.name)}"]
    parts.extend(render_panel(panel, i) for i, panel in enumerate(page.panels))
    return "\n\n".join(parts)


def _render_credits(credits: Any) -> Optional[str]:
    if not credits:
        return None
    if isinstance(credits, str):
        entries = [c.strip() for c in credits.split(",")]
    else:
        entries = [str(c).strip() for c in credits if c is not None]
    return "**Credits:**\n" + "\n".join(f"- {entry}" for entry in entries)


def render_document(chapter: Chapter) -> RenderedMarkdown:
    """Render a chapter and record where each page heading landed.

    Sections are joined by one blank line, so the start line of each section
    follows from the line counts of the sections before it.
    """
    if not isinstance(chapter, Chapter) or not _is_sequence(chapter.pages):
        return RenderedMarkdown(text=CHAPTER_ERROR)

    header: list[str] = []
    if chapter.title and isinstance(chapter.title, str):
        header.append(f"# {chapter.title}")
    if chapter.synopsis:
        header.append(f"**Synopsis:** {chapter.synopsis}")
    credits_block = _render_credits(chapter.credits)
    if credits_block:
        header.append(credits_block)

    sections = list(header)
    page_starts: list[int] = []
    line = sum(s.count("\n") + 2 for s in header)

    for i, page in enumerate(chapter.pages):
        block = render_page(page, i)
        page_starts.append(line)
        sections.append(block)
        line += block.count("\n") + 2

    return RenderedMarkdown(text="\n\n".join(sections), page_starts=tuple(page_starts))


def render_chapter(chapter: Chapter) -> str:
    """Render a chapter to markdown; identical input gives identical output."""
    return render_document(chapter).text
