# comic_gen/parser.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional

from .constants import DEFAULT_CHARACTER, DEFAULT_DIALOGUE_TYPE, NARRATION_TYPE
from .errors import FormatError
from .io import load_script_mapping
from .model import Chapter, Dialogue, LayoutSource, Page, Panel


@dataclass(frozen=True)
class ParseResult:
    """Outcome of `try_parse`: exactly one of `chapter` / `error` is set."""

    chapter: Optional[Chapter] = None
    error: Optional[FormatError] = None

    @property
    def ok(self) -> bool:
        return self.chapter is not None


def _opt_text(value: Any) -> Optional[str]:
    """Present scalar -> str; None, empty strings and containers -> None."""
    if value is None or isinstance(value, (bool, dict, list)):
        return None
    text = value if isinstance(value, str) else str(value)
    return text if text else None


def _require_list(value: Any, *, path: str) -> list[Any]:
    if value is None:
        return []
    if not isinstance(value, list):
        raise FormatError(f"expected a list, got {type(value).__name__}", path=path)
    return value


def _require_mapping(value: Any, *, path: str) -> Mapping[str, Any]:
    if not isinstance(value, dict):
        raise FormatError(f"expected a mapping, got {type(value).__name__}", path=path)
    return value


def normalize_credits(value: Any) -> Optional[tuple[str, ...]]:
    """Normalize credits to a tuple of trimmed entries.

    A string is split on commas; a list drops None entries and stringifies
    the rest. Anything else (or nothing) yields None.
    """
    if value is None or value == "" or value == []:
        return None
    if isinstance(value, (str, int, float)) and not isinstance(value, bool):
        return tuple(part.strip() for part in str(value).split(","))
    if isinstance(value, list):
        return tuple(str(item).strip() for item in value if item is not None)
    return None


def decode_dialogue(entry: Any) -> Optional[Dialogue]:
    """Decode one `key -> text` dialogue item.

    `/type` keys are narration (`/` alone is "narration"); otherwise the key
    is `character[/type]` with "Character" and "speech" as defaults. Entries
    that are not single-key mappings decode to None.
    """
    if not isinstance(entry, dict) or len(entry) != 1:
        return None

    (key, value), = entry.items()
    key = "" if key is None else str(key)
    text = "" if value is None else str(value)

    if key.startswith("/"):
        return Dialogue(
            character="",
            text=text,
            type=key[1:] or NARRATION_TYPE,
            is_narration=True,
        )

    character, _, type_ = key.partition("/")
    return Dialogue(
        character=character or DEFAULT_CHARACTER,
        text=text,
        type=type_ or DEFAULT_DIALOGUE_TYPE,
    )


def _build_layout(value: Any) -> Optional[LayoutSource]:
    if isinstance(value, list):
        lines = tuple(str(line) for line in value if line is not None)
        return lines or None
    return _opt_text(value)


def _build_panel(data: Any, *, path: str) -> Panel:
    data = _require_mapping(data, path=path)

    dialogue: list[Dialogue] = []
    for entry in _require_list(data.get("dialogue"), path=f"{path}/dialogue"):
        decoded = decode_dialogue(entry)
        if decoded is not None:
            dialogue.append(decoded)

    return Panel(
        name=_opt_text(data.get("name")),
        desc=_opt_text(data.get("desc")),
        fx=_opt_text(data.get("fx")),
        caption=_opt_text(data.get("caption")),
        end_caption=_opt_text(data.get("endCaption")),
        dialogue=tuple(dialogue),
    )


def _build_page(data: Any, *, path: str) -> Page:
    data = _require_mapping(data, path=path)
    panels = _require_list(data.get("panels"), path=f"{path}/panels")

    return Page(
        name=_opt_text(data.get("name")),
        layout=_build_layout(data.get("layout")),
        panels=tuple(
            _build_panel(panel, path=f"{path}/panels/{i}")
            for i, panel in enumerate(panels)
        ),
    )


def chapter_from_mapping(data: Mapping[str, Any]) -> Chapter:
    """Build a `Chapter` from an already-loaded script mapping."""
    data = _require_mapping(data, path="/")

    title = data.get("title")
    synopsis = data.get("synopsis")
    pages = _require_list(data.get("pages"), path="/pages")

    return Chapter(
        title=title if isinstance(title, str) and title else None,
        synopsis=synopsis if isinstance(synopsis, str) and synopsis else None,
        credits=normalize_credits(data.get("credits")),
        pages=tuple(
            _build_page(page, path=f"/pages/{i}") for i, page in enumerate(pages)
        ),
    )


def parse(raw: str, *, source: str = "<script>") -> Chapter:
    """Parse raw script text into a `Chapter`; raises `FormatError`."""
    return chapter_from_mapping(load_script_mapping(raw, source=source))


def try_parse(raw: str, *, source: str = "<script>") -> ParseResult:
    try:
        return ParseResult(chapter=parse(raw, source=source))
    except FormatError as e:
        return ParseResult(error=e)
