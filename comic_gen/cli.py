# comic_gen/cli.py
from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Optional, Sequence

from .config import RenderConfig
from .constants import (
    LAYOUT_HEIGHT_DEFAULT,
    LAYOUT_PADDING,
    LAYOUT_WIDTH_DEFAULT,
    SCRIPT_SUFFIXES,
)
from .errors import ComicGenError
from .io import load_script_mapping, read_script
from .layout_suite import generate_layout_suite
from .markdown import render_chapter
from .parser import chapter_from_mapping
from .registry import OUTPUTS, outputs_for
from .validate import validate_script
from .writer import write_text


def _default_out_dir(script: Path) -> Path:
    """Compute the default output directory next to the script.

    Example:
      chapters/ch01.comic.yml -> chapters/ch01_out/
    """
    name = script.name
    for suffix in SCRIPT_SUFFIXES:
        if name.lower().endswith(suffix):
            name = name[: -len(suffix)]
            break
    else:
        name = script.stem
    return script.parent / f"{name}_out"


def _fail(message: str) -> None:
    print(f"error: {message}", file=sys.stderr)
    raise SystemExit(2)


def main(argv: Optional[Sequence[str]] = None) -> None:
    """CLI entrypoint."""
    parser = argparse.ArgumentParser(
        description="Render a YAML comic script to markdown, HTML and page layout SVGs."
    )
    parser.add_argument("script", type=Path, help="Path to a .comic.yml script")
    parser.add_argument(
        "--out-dir",
        type=Path,
        default=None,
        help="Output directory (default: <script name>_out next to the script)",
    )
    parser.add_argument(
        "--format",
        type=str,
        choices=tuple(spec.output_id for spec in OUTPUTS) + ("all",),
        default="all",
        help="Which document outputs to write",
    )
    parser.add_argument(
        "--layouts",
        action="store_true",
        help="Also write one SVG per page under layouts/ plus layouts/index.md",
    )
    parser.add_argument(
        "--width", type=int, default=LAYOUT_WIDTH_DEFAULT, help="Layout diagram width (px)"
    )
    parser.add_argument(
        "--height", type=int, default=LAYOUT_HEIGHT_DEFAULT, help="Layout diagram height (px)"
    )
    parser.add_argument(
        "--no-numbers",
        action="store_true",
        help="Do not draw panel labels on layout diagrams",
    )
    parser.add_argument(
        "--show-grid",
        action="store_true",
        help="Draw faint grid lines on layout diagrams",
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        help=(
            "Fail on validation warnings (e.g., dropped dialogue entries, layout "
            "and script panel counts that differ). Errors always fail."
        ),
    )
    parser.add_argument(
        "--print-markdown",
        action="store_true",
        help="Print the markdown script to stdout instead of writing files",
    )

    args = parser.parse_args(argv)
    script: Path = args.script

    try:
        raw = read_script(script)
        data = load_script_mapping(raw, source=str(script))
    except FileNotFoundError:
        _fail(f"script not found: {script}")
    except ComicGenError as e:
        _fail(str(e))

    errors, warnings = validate_script(data)
    for warning in warnings:
        print(f"warning: {warning}", file=sys.stderr)

    if errors or (args.strict and warnings):
        for error in errors:
            print(f"error: {error}", file=sys.stderr)
        raise SystemExit(2)

    if args.width <= 2 * LAYOUT_PADDING or args.height <= 2 * LAYOUT_PADDING:
        _fail(f"--width and --height must exceed {2 * LAYOUT_PADDING}px")

    cfg = RenderConfig(
        width=args.width,
        height=args.height,
        show_numbers=not args.no_numbers,
        show_grid=args.show_grid,
    )

    try:
        chapter = chapter_from_mapping(data)

        if args.print_markdown:
            sys.stdout.write(render_chapter(chapter) + "\n")
            return

        out_dir: Path = args.out_dir or _default_out_dir(script)
        for spec in outputs_for(args.format):
            write_text(out_dir / spec.filename, spec.render(chapter, cfg))

        if args.layouts:
            generate_layout_suite(chapter, out_dir, cfg)
    except ComicGenError as e:
        _fail(str(e))


if __name__ == "__main__":
    main()
