from pathlib import Path

from comic_gen.io import load_script_mapping
from comic_gen.validate import ValidateConfig, validate_script, validate_script_issues


FIXTURE_DIR = Path(__file__).resolve().parents[1] / "fixtures" / "scripts"


def load_fixture(name: str):
    raw = (FIXTURE_DIR / name).read_text(encoding="utf-8")
    return load_script_mapping(raw, source=name)


def codes(issues) -> list[str]:
    return [iss.code for iss in issues]


def test_sample_script_is_clean():
    errors, warnings = validate_script(load_fixture("sample.comic.yml"))
    assert errors == []
    assert warnings == []


def test_lint_fixture_reports_warnings_only():
    issues = validate_script_issues(load_fixture("lint.comic.yml"))
    assert all(iss.severity == "warning" for iss in issues)
    assert codes(issues).count("W_DIALOGUE_ENTRY_DISCARDED") == 3
    assert "W_UNKNOWN_KEY" in codes(issues)
    assert "W_LAYOUT_PANEL_COUNT_MISMATCH" in codes(issues)
    # "/whisper" is narration, not a missing character.
    assert "W_DIALOGUE_EMPTY_CHARACTER" not in codes(issues)

    unknown = [iss for iss in issues if iss.code == "W_UNKNOWN_KEY"]
    assert unknown[0].path == "/colour"

    mismatch = [iss for iss in issues if iss.code == "W_LAYOUT_PANEL_COUNT_MISMATCH"]
    assert "3 panel(s)" in mismatch[0].message
    assert "script has 2" in mismatch[0].message


def test_root_not_mapping():
    issues = validate_script_issues(["not", "a", "mapping"])
    assert codes(issues) == ["E_ROOT_NOT_MAPPING"]
    assert issues[0].severity == "error"


def test_structural_errors():
    data = {
        "pages": [
            "oops",
            {"panels": {"name": "x"}},
            {"panels": [3, {"dialogue": "Bob: hi"}], "layout": {"a": 1}},
        ]
    }
    errors, _ = validate_script(data)
    issue_codes = codes(validate_script_issues(data))
    assert issue_codes == [
        "E_PAGE_NOT_MAPPING",
        "E_PANELS_NOT_LIST",
        "E_PANEL_NOT_MAPPING",
        "E_DIALOGUE_NOT_LIST",
        "E_LAYOUT_BAD_TYPE",
    ]
    assert len(errors) == 5


def test_pages_not_list():
    assert codes(validate_script_issues({"pages": "one"})) == ["E_PAGES_NOT_LIST"]


def test_header_type_warnings():
    data = {"title": 12, "synopsis": ["a"], "credits": {"by": "me"}}
    assert codes(validate_script_issues(data)) == [
        "W_TITLE_NOT_STRING",
        "W_SYNOPSIS_NOT_STRING",
        "W_CREDITS_BAD_TYPE",
    ]


def test_empty_character_warning():
    data = {"pages": [{"panels": [{"dialogue": [{"/": "narration"}, {"/whisper": "x"}]}]}]}
    assert validate_script_issues(data) == []

    data = {"pages": [{"panels": [{"dialogue": [{"": "who?"}]}]}]}
    assert codes(validate_script_issues(data)) == ["W_DIALOGUE_EMPTY_CHARACTER"]


def test_numeric_layout_scalars_are_accepted():
    data = {"pages": [{"layout": 112, "panels": [{}, {}]}]}
    assert validate_script_issues(data) == []

    # "1.5" is panels 1 and 5 with an empty cell between them.
    data = {"pages": [{"layout": 1.5, "panels": [{}, {}]}]}
    assert validate_script_issues(data) == []

    data = {"pages": [{"layout": True, "panels": []}]}
    assert codes(validate_script_issues(data)) == ["E_LAYOUT_BAD_TYPE"]


def test_token_collision_warning():
    # ":" sorts as 58 - 55 = 3, the same key as "3".
    data = {"pages": [{"layout": ["3:"], "panels": [{}, {}]}]}
    issues = validate_script_issues(data)
    assert codes(issues) == ["W_LAYOUT_TOKEN_COLLISION"]
    assert "share sort key 3" in issues[0].message


def test_ignore_and_escalate():
    data = load_fixture("lint.comic.yml")
    cfg = ValidateConfig(
        ignore={"W_UNKNOWN_KEY", "W_DIALOGUE_ENTRY_DISCARDED"},
        escalate={"W_LAYOUT_PANEL_COUNT_MISMATCH"},
    )
    issues = validate_script_issues(data, cfg)
    assert codes(issues) == ["W_LAYOUT_PANEL_COUNT_MISMATCH"]
    assert issues[0].severity == "error"


def test_panel_count_check_can_be_disabled():
    data = {"pages": [{"layout": "ABC", "panels": [{}]}]}
    assert codes(validate_script_issues(data)) == ["W_LAYOUT_PANEL_COUNT_MISMATCH"]
    assert validate_script_issues(data, ValidateConfig(check_layout_panel_count=False)) == []
