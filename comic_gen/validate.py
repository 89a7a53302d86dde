# comic_gen/validate.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Literal, Optional, Tuple

from .constants import PAGE_KEYS, PANEL_KEYS, TOP_LEVEL_KEYS
from .errors import LayoutError
from .layout import parse_layout

Severity = Literal["error", "warning"]


@dataclass(frozen=True)
class ValidationIssue:
    """Structured validation issue for callers that want more than strings."""

    severity: Severity
    code: str
    message: str
    path: str = ""
    hint: Optional[str] = None


@dataclass(frozen=True)
class ValidateConfig:
    """Validation configuration.

    The CLI uses the `validate_script()` wrapper, which returns
    `(errors, warnings)` as lists of strings.
    """

    ignore: set[str] = field(default_factory=set)
    escalate: set[str] = field(default_factory=set)

    check_layout_panel_count: bool = True


def validate_script_issues(
    data: Any, cfg: Optional[ValidateConfig] = None
) -> list[ValidationIssue]:
    """Return structured validation issues for a loaded script mapping.

    Errors mark input that `parse()` rejects; warnings mark input that parses
    but is silently dropped or likely to render unexpectedly.
    """

    cfg = cfg or ValidateConfig()
    issues: list[ValidationIssue] = []

    def emit(
        severity: Severity,
        code: str,
        message: str,
        path: str = "",
        hint: Optional[str] = None,
    ) -> None:
        if code in cfg.ignore:
            return
        final_severity: Severity = (
            "error" if (severity == "warning" and code in cfg.escalate) else severity
        )
        issues.append(
            ValidationIssue(
                severity=final_severity,
                code=code,
                message=message,
                path=path,
                hint=hint,
            )
        )

    def unknown_keys(mapping: dict[str, Any], allowed: tuple[str, ...], path: str) -> None:
        for key in mapping:
            if key not in allowed:
                emit(
                    "warning",
                    "W_UNKNOWN_KEY",
                    f"unknown key {key!r} is ignored",
                    path=f"{path}/{key}",
                    hint=f"expected one of: {', '.join(allowed)}",
                )

    if not isinstance(data, dict):
        emit(
            "error",
            "E_ROOT_NOT_MAPPING",
            f"script root must be a mapping, got {type(data).__name__}",
            path="/",
        )
        return issues

    unknown_keys(data, TOP_LEVEL_KEYS, "")

    for key in ("title", "synopsis"):
        value = data.get(key)
        if value is not None and not isinstance(value, str):
            emit(
                "warning",
                f"W_{key.upper()}_NOT_STRING",
                f"{key} is not a string and will be ignored",
                path=f"/{key}",
                hint="Quote the value",
            )

    credits = data.get("credits")
    if isinstance(credits, (dict, bool)):
        emit(
            "warning",
            "W_CREDITS_BAD_TYPE",
            "credits must be a string or a list and will be ignored",
            path="/credits",
        )

    pages = data.get("pages")
    if pages is None:
        return issues
    if not isinstance(pages, list):
        emit("error", "E_PAGES_NOT_LIST", "pages must be a list", path="/pages")
        return issues

    for page_i, page in enumerate(pages):
        page_path = f"/pages/{page_i}"
        if not isinstance(page, dict):
            emit(
                "error",
                "E_PAGE_NOT_MAPPING",
                f"page {page_i + 1} is not a mapping",
                path=page_path,
            )
            continue

        unknown_keys(page, PAGE_KEYS, page_path)

        panels = page.get("panels")
        if panels is not None and not isinstance(panels, list):
            emit(
                "error",
                "E_PANELS_NOT_LIST",
                f"page {page_i + 1} panels must be a list",
                path=f"{page_path}/panels",
            )
            panels = None

        panel_count = 0
        for panel_i, panel in enumerate(panels or []):
            panel_path = f"{page_path}/panels/{panel_i}"
            if not isinstance(panel, dict):
                emit(
                    "error",
                    "E_PANEL_NOT_MAPPING",
                    f"page {page_i + 1} panel {panel_i + 1} is not a mapping",
                    path=panel_path,
                )
                continue

            panel_count += 1
            unknown_keys(panel, PANEL_KEYS, panel_path)
            _check_dialogue(panel.get("dialogue"), panel_path, emit)

        layout = page.get("layout")
        if layout is None:
            continue
        if isinstance(layout, (int, float)) and not isinstance(layout, bool):
            # Digit-only rows such as `layout: 112` or `layout: 1.5` load as numbers.
            layout = str(layout)

        if not isinstance(layout, (str, list)):
            emit(
                "error",
                "E_LAYOUT_BAD_TYPE",
                f"page {page_i + 1} layout must be a string or a list of rows",
                path=f"{page_path}/layout",
            )
            continue

        try:
            parsed = parse_layout(
                layout if isinstance(layout, str) else [str(r) for r in layout if r is not None]
            )
        except LayoutError as e:
            emit(
                "error",
                "E_LAYOUT_INVALID",
                f"page {page_i + 1} layout cannot be parsed: {e}",
                path=f"{page_path}/layout",
            )
            continue

        keys: dict[int, str] = {}
        for pos in parsed.panels:
            other = keys.setdefault(pos.panel_number, pos.label)
            if other != pos.label:
                emit(
                    "warning",
                    "W_LAYOUT_TOKEN_COLLISION",
                    f"page {page_i + 1} layout tokens {other!r} and {pos.label!r} "
                    f"share sort key {pos.panel_number} (same color, arbitrary order)",
                    path=f"{page_path}/layout",
                )

        if (
            cfg.check_layout_panel_count
            and panels is not None
            and len(parsed.panels) != panel_count
        ):
            emit(
                "warning",
                "W_LAYOUT_PANEL_COUNT_MISMATCH",
                f"page {page_i + 1} layout has {len(parsed.panels)} panel(s) "
                f"but the script has {panel_count}",
                path=f"{page_path}/layout",
            )

    return issues


def _check_dialogue(dialogue: Any, panel_path: str, emit: Any) -> None:
    if dialogue is None:
        return
    if not isinstance(dialogue, list):
        emit(
            "error",
            "E_DIALOGUE_NOT_LIST",
            "dialogue must be a list",
            path=f"{panel_path}/dialogue",
        )
        return

    for i, entry in enumerate(dialogue):
        path = f"{panel_path}/dialogue/{i}"
        if not isinstance(entry, dict) or len(entry) != 1:
            emit(
                "warning",
                "W_DIALOGUE_ENTRY_DISCARDED",
                "dialogue entry is not a single-key mapping and will be dropped",
                path=path,
                hint='Write entries as "- Character/type: text"',
            )
            continue

        key = str(next(iter(entry)))
        if key.partition("/")[0] == "" and not key.startswith("/"):
            emit(
                "warning",
                "W_DIALOGUE_EMPTY_CHARACTER",
                f"dialogue key {key!r} has no character; rendered as 'Character'",
                path=path,
            )


def validate_script(data: Any) -> Tuple[list[str], list[str]]:
    """Perform lightweight structural validation of a loaded script."""
    issues = validate_script_issues(data)
    errors = [iss.message for iss in issues if iss.severity == "error"]
    warnings = [iss.message for iss in issues if iss.severity == "warning"]
    return errors, warnings
