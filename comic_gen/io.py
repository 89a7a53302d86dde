# comic_gen/io.py
from __future__ import annotations

import re
import sys
from pathlib import Path
from typing import Any

import yaml

from .constants import FREE_TEXT_KEYS
from .errors import FormatError

_FREE_TEXT_LINE_RE = re.compile(
    r"^(\s*(?:-\s*)?(?:" + "|".join(FREE_TEXT_KEYS) + r"):\s*)(.+)$"
)

# Single-key dialogue items: "- Alice/whisper: text", "- /: text".
_DIALOGUE_LINE_RE = re.compile(r"^(\s*-\s+[^\s:#'\"{\[&*!|>][^:#]*:\s+)(.+)$")

_UNQUOTED_SKIP = ("'", '"', "|", ">", "[", "{", "&", "*", "!")


def _quote_plain_scalar(prefix: str, value: str) -> str:
    # Preserve any trailing inline comment (space-# ...).
    body, comment = value, ""
    m = re.match(r"^(.*?)(\s+#.*)$", value)
    if m:
        body, comment = m.group(1), m.group(2)

    if not re.search(r":(?=\s|$)", body):
        return prefix + value

    escaped = body.replace("\\", "\\\\").replace('"', '\\"')
    return f'{prefix}"{escaped}"{comment}'


def _sanitize_yaml_for_pyyaml(raw: str) -> tuple[str, list[tuple[int, str, str]]]:
    """Return (sanitized_yaml, changes).

    Comic scripts routinely carry dialogue such as "Wait: what?" as a plain
    scalar, which PyYAML rejects. Only free-text keys and dialogue items are
    rewritten. Each change is (line_number_1_based, original_line, new_line).
    """
    changes: list[tuple[int, str, str]] = []
    out_lines: list[str] = []

    for i, line in enumerate(raw.splitlines(), start=1):
        match = _FREE_TEXT_LINE_RE.match(line) or _DIALOGUE_LINE_RE.match(line)
        if not match:
            out_lines.append(line)
            continue

        prefix, value = match.group(1), match.group(2)

        # Already quoted, a block scalar or a flow collection.
        if value.startswith(_UNQUOTED_SKIP):
            out_lines.append(line)
            continue

        new_line = _quote_plain_scalar(prefix, value)
        out_lines.append(new_line)
        if new_line != line:
            changes.append((i, line, new_line))

    sanitized = "\n".join(out_lines) + ("\n" if raw.endswith("\n") else "")
    return sanitized, changes


def _report_changes(source: str, changes: list[tuple[int, str, str]]) -> None:
    print(
        f"warning: parsed {source} after sanitizing {len(changes)} line(s); "
        "consider quoting values containing ':' followed by whitespace",
        file=sys.stderr,
    )
    for (ln, old, new) in changes[:10]:
        print(f"warning: {source}:{ln}: {old}", file=sys.stderr)
        print(f"warning: {source}:{ln}: {new}", file=sys.stderr)
    if len(changes) > 10:
        print(f"warning: (and {len(changes) - 10} more)", file=sys.stderr)


def load_yaml_document(raw: str, *, source: str = "<script>", warn: bool = True) -> Any:
    """Parse YAML text, retrying once with colon-quoting on failure."""
    try:
        return yaml.safe_load(raw)
    except Exception as e:
        sanitized, changes = _sanitize_yaml_for_pyyaml(raw)
        if not changes:
            raise FormatError(f"Failed to parse YAML {source}: {e}") from e
        try:
            data = yaml.safe_load(sanitized)
        except Exception as e2:
            raise FormatError(f"Failed to parse YAML {source}: {e2}") from e2

    if warn:
        _report_changes(source, changes)
    return data


def load_script_mapping(
    raw: str, *, source: str = "<script>", warn: bool = True
) -> dict[str, Any]:
    """Load a comic script and require a mapping at the top level."""
    data = load_yaml_document(raw, source=source, warn=warn)

    if not isinstance(data, dict):
        raise FormatError(
            f"Top-level YAML must be a mapping in {source}, got {type(data).__name__}"
        )

    return data


def read_script(path: Path) -> str:
    """Read a script file as UTF-8 text."""
    if not path.exists():
        raise FileNotFoundError(str(path))
    return path.read_text(encoding="utf-8")
