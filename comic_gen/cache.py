# comic_gen/cache.py
from __future__ import annotations

import sys
from typing import Optional

from .assembler import render_html_document, to_html
from .config import RenderConfig
from .errors import ComicGenError, FormatError, LayoutError
from .markdown import render_document
from .model import RenderSnapshot
from .parser import parse


def build_snapshot(
    raw: str, cfg: RenderConfig = RenderConfig(), *, source: str = "<script>"
) -> RenderSnapshot:
    """Run the full pipeline on `raw`; raises `FormatError` / `LayoutError`."""
    chapter = parse(raw, source=source)
    doc = render_document(chapter)
    body = to_html(doc.text, chapter, page_starts=doc.page_starts, cfg=cfg)
    html_doc = render_html_document(body, title=chapter.title or cfg.document_title)
    return RenderSnapshot(
        raw=raw,
        chapter=chapter,
        markdown=doc.text,
        html=html_doc,
        page_starts=doc.page_starts,
    )


class RenderCache:
    """Live-preview session holding the last successfully rendered input.

    One instance per previewed buffer. `try_update` never raises pipeline
    errors: a failing edit keeps showing the last good render. Calls must be
    made in the order edits happen; the snapshot slot is replaced as a whole.
    """

    def __init__(self, cfg: RenderConfig = RenderConfig(), *, source: str = "<buffer>") -> None:
        self.cfg = cfg
        self.source = source
        self._last_good: Optional[RenderSnapshot] = None

    @property
    def last_good(self) -> Optional[RenderSnapshot]:
        return self._last_good

    @property
    def markdown(self) -> str:
        return self._last_good.markdown if self._last_good else ""

    @property
    def html(self) -> str:
        return self._last_good.html if self._last_good else ""

    def try_update(self, raw: str) -> Optional[RenderSnapshot]:
        """Render `raw`, falling back to the last good input on failure.

        Returns None when the input fails and nothing has rendered yet.
        """
        try:
            snapshot = build_snapshot(raw, self.cfg, source=self.source)
        except (FormatError, LayoutError) as e:
            return self._fallback(e)

        self._last_good = snapshot
        return snapshot

    def _fallback(self, error: ComicGenError) -> Optional[RenderSnapshot]:
        last = self._last_good
        if last is None:
            print(
                f"warning: {self.source}: render failed with nothing to fall back to: {error}",
                file=sys.stderr,
            )
            return None

        print(
            f"warning: {self.source}: render failed, keeping last good render: {error}",
            file=sys.stderr,
        )
        # Re-derive from the stored raw, not the failing input.
        try:
            return build_snapshot(last.raw, self.cfg, source=self.source)
        except (FormatError, LayoutError):
            return last

    def reset(self) -> None:
        self._last_good = None
