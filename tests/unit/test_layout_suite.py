from pathlib import Path

from comic_gen.config import RenderConfig
from comic_gen.layout_suite import generate_layout_suite, layout_filename
from comic_gen.model import Chapter, Page, Panel
from comic_gen.parser import parse


FIXTURE_DIR = Path(__file__).resolve().parents[1] / "fixtures" / "scripts"


def test_layout_filename_is_zero_padded():
    assert layout_filename(1) == "page_01.svg"
    assert layout_filename(12) == "page_12.svg"


def test_suite_writes_one_svg_per_page_and_index(tmp_path: Path):
    chapter = parse((FIXTURE_DIR / "sample.comic.yml").read_text(encoding="utf-8"))
    written = generate_layout_suite(chapter, tmp_path)

    suite = tmp_path / "layouts"
    assert written == [suite / "page_01.svg", suite / "page_02.svg"]

    first = (suite / "page_01.svg").read_text(encoding="utf-8")
    assert first.startswith("<svg ")
    assert ">B</text>" in first
    assert "No layout defined" in (suite / "page_02.svg").read_text(encoding="utf-8")

    index = (suite / "index.md").read_text(encoding="utf-8")
    assert index.startswith("# Layouts: The Lighthouse\n")
    assert "| 1 | Page 1: Intro | 3 | 3 | [page_01.svg](page_01.svg) |" in index
    assert "| 2 | Page 2 | 1 |  | [page_02.svg](page_02.svg) |" in index


def test_invalid_layout_is_flagged_in_index(tmp_path: Path):
    chapter = Chapter(pages=(Page(name="A|B", layout="AB", panels=(Panel(), Panel())),))
    generate_layout_suite(chapter, tmp_path, RenderConfig(width=15))

    svg = (tmp_path / "layouts" / "page_01.svg").read_text(encoding="utf-8")
    assert "Invalid layout" in svg

    index = (tmp_path / "layouts" / "index.md").read_text(encoding="utf-8")
    assert index.startswith("# Layouts\n")
    assert "| 1 | Page 1: A\\|B | 2 | 2 |" in index


def test_empty_chapter_index(tmp_path: Path):
    written = generate_layout_suite(Chapter(), tmp_path, suite_dirname="diagrams")
    assert written == []
    index = (tmp_path / "diagrams" / "index.md").read_text(encoding="utf-8")
    assert "The script has no pages." in index


def test_index_can_be_skipped(tmp_path: Path):
    chapter = Chapter(pages=(Page(layout="A"),))
    generate_layout_suite(chapter, tmp_path, write_index=False)
    assert (tmp_path / "layouts" / "page_01.svg").exists()
    assert not (tmp_path / "layouts" / "index.md").exists()
