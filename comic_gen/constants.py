# comic_gen/constants.py
from __future__ import annotations

# Script files are recognised by suffix (host-side detection uses the same list).
SCRIPT_SUFFIXES: tuple[str, ...] = (".comic.yml", ".comic.yaml")

# Free-text keys whose unquoted values may be re-quoted by the YAML sanitizer.
FREE_TEXT_KEYS: tuple[str, ...] = (
    "title",
    "synopsis",
    "name",
    "desc",
    "fx",
    "caption",
    "endCaption",
)

TOP_LEVEL_KEYS: tuple[str, ...] = ("title", "synopsis", "credits", "pages")
PAGE_KEYS: tuple[str, ...] = ("name", "layout", "panels")
PANEL_KEYS: tuple[str, ...] = ("name", "desc", "fx", "caption", "endCaption", "dialogue")

DEFAULT_CHARACTER = "Character"
DEFAULT_DIALOGUE_TYPE = "speech"
NARRATION_TYPE = "narration"
SOUND_EFFECT_TYPE = "sound_effect"

# Layout diagrams.
LAYOUT_WIDTH_DEFAULT = 400
LAYOUT_HEIGHT_DEFAULT = 600
LAYOUT_PADDING = 10
LAYOUT_MAX_FONT_SIZE = 24

# Panel fill colors, cycled by (panel_number - 1) mod len(PANEL_PALETTE).
PANEL_PALETTE: tuple[str, ...] = (
    "#ff6b6b",
    "#4ecdc4",
    "#45b7d1",
    "#96ceb4",
    "#ffeaa7",
    "#dda0dd",
    "#98d8c8",
    "#f7dc6f",
    "#bb8fce",
    "#85c1e9",
    "#f8c471",
    "#82e0aa",
    "#f1948a",
    "#85c1e9",
    "#d7bde2",
)

DOCUMENT_TITLE_DEFAULT = "Comic Script Preview"
