from __future__ import annotations

from pathlib import Path


def write_text(path: Path, text: str) -> None:
    """Write a generated artifact, creating parent directories."""
    path.parent.mkdir(parents=True, exist_ok=True)
    body = (text or "").rstrip() + "\n"
    path.write_text(body, encoding="utf-8")


def write_text_md(path: Path, title: str, body_md: str) -> None:
    """Write a titled Markdown file containing arbitrary Markdown body."""
    path.parent.mkdir(parents=True, exist_ok=True)
    body = (body_md or "").rstrip() + "\n"
    content = f"# {title}\n\n{body}"
    path.write_text(content, encoding="utf-8")
