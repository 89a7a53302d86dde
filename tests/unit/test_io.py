import pytest

from comic_gen.errors import FormatError
from comic_gen.io import _sanitize_yaml_for_pyyaml, load_script_mapping, read_script


UNQUOTED_COLONS = """\
title: Act One: The Call
pages:
  - panels:
      - desc: Interior: night
        dialogue:
          - Alice: Wait: what?
          - Bob: "Already: quoted"
          - /: Later: much later  # narrator
"""


def test_sanitizer_quotes_only_free_text_and_dialogue_values():
    sanitized, changes = _sanitize_yaml_for_pyyaml(UNQUOTED_COLONS)

    changed_lines = [ln for (ln, _, _) in changes]
    assert changed_lines == [1, 4, 6, 8]
    assert 'title: "Act One: The Call"' in sanitized
    assert '- desc: "Interior: night"' in sanitized
    assert '- Alice: "Wait: what?"' in sanitized
    assert '- Bob: "Already: quoted"' in sanitized
    assert '- /: "Later: much later"  # narrator' in sanitized


def test_load_script_mapping_recovers_and_warns(capsys):
    data = load_script_mapping(UNQUOTED_COLONS, source="act1.comic.yml")

    assert data["title"] == "Act One: The Call"
    dialogue = data["pages"][0]["panels"][0]["dialogue"]
    assert dialogue[0] == {"Alice": "Wait: what?"}
    assert dialogue[2] == {"/": "Later: much later"}

    err = capsys.readouterr().err
    assert "warning: parsed act1.comic.yml after sanitizing 4 line(s)" in err


def test_load_script_mapping_can_stay_quiet(capsys):
    load_script_mapping(UNQUOTED_COLONS, warn=False)
    assert capsys.readouterr().err == ""


def test_load_script_mapping_rejects_unrecoverable_yaml():
    with pytest.raises(FormatError, match="Failed to parse YAML"):
        load_script_mapping("pages:\n  - panels: [\n")


@pytest.mark.parametrize("raw", ["synopsis: 2024-13-01\n", "title: !!int abc\n"])
def test_load_script_mapping_wraps_constructor_errors(raw):
    with pytest.raises(FormatError, match="Failed to parse YAML"):
        load_script_mapping(raw)


def test_load_script_mapping_requires_mapping_root():
    with pytest.raises(FormatError, match="must be a mapping"):
        load_script_mapping("- one\n- two\n")


def test_read_script_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        read_script(tmp_path / "missing.comic.yml")
