from pathlib import Path

from comic_gen.assembler import (
    markdown_to_html,
    page_boundaries,
    page_layout_svg,
    render_html_document,
    render_inline,
    to_html,
)
from comic_gen.config import RenderConfig
from comic_gen.markdown import render_document
from comic_gen.model import Chapter, Page, Panel
from comic_gen.parser import parse


FIXTURE_DIR = Path(__file__).resolve().parents[1] / "fixtures" / "scripts"


def sample_chapter() -> Chapter:
    return parse((FIXTURE_DIR / "sample.comic.yml").read_text(encoding="utf-8"))


def test_headings_paragraphs_and_blank_lines():
    html = markdown_to_html("# Title\n\n## (Page 1)\n### (Panel 1)\nplain **bold** and *it*")
    assert html == (
        "<h1>Title</h1>\n"
        "\n"
        "<h2>(Page 1)</h2>\n"
        "<h3>(Panel 1)</h3>\n"
        "<p>plain <strong>bold</strong> and <em>it</em></p>\n"
    )


def test_blockquote_is_flushed_by_next_non_quote_line():
    html = markdown_to_html("> *CAPTION: Begin*\n> **BOB:** Hello\n\n### (Panel 2)")
    assert html == (
        "<blockquote><p><em>CAPTION: Begin</em></p>\n"
        "<p><strong>BOB:</strong> Hello</p>\n"
        "</blockquote>\n"
        "\n"
        "<h3>(Panel 2)</h3>\n"
    )


def test_blockquote_open_at_end_of_input_is_flushed():
    html = markdown_to_html("### (Panel 1)\n\n> **BOB:** Bye")
    assert html.endswith("<blockquote><p><strong>BOB:</strong> Bye</p>\n</blockquote>\n")
    assert html.count("<blockquote>") == 1


def test_separate_quotes_stay_separate():
    html = markdown_to_html("> one\n\n> two")
    assert html.count("<blockquote>") == 2


def test_inline_bold_resolves_before_italic_and_text_is_escaped():
    assert render_inline("**A** *b* <c> & d") == (
        "<strong>A</strong> <em>b</em> &lt;c&gt; &amp; d"
    )
    assert markdown_to_html("## <Page>") == "<h2>&lt;Page&gt;</h2>\n"


def test_flat_conversion_without_chapter():
    markdown = render_document(sample_chapter()).text
    assert to_html(markdown) == markdown_to_html(markdown)


def test_page_boundaries_scan():
    assert page_boundaries("# T\n\n## (Page 1)\n\n### (Panel 1)\n\n## (Page 2)") == [2, 6]


def test_integrated_paging_pairs_sections_with_layouts():
    chapter = sample_chapter()
    doc = render_document(chapter)
    html = to_html(doc.text, chapter, page_starts=doc.page_starts)

    assert html.startswith('<div class="chapter-header">\n<h1>The Lighthouse</h1>\n')
    assert html.count('<section class="page"') == 2

    first, second = html.split('<section class="page" data-page="2">')
    assert '<section class="page" data-page="1">' in first
    assert "<h2>(Page 1) Intro</h2>" in first
    assert ">A</text>" in first and ">C</text>" in first
    assert "<h2>(Page 2)</h2>" in second
    assert "No layout defined" in second
    # Header content is not repeated inside page sections.
    assert "Synopsis" not in first.split('<section class="page"', 1)[1]


def test_missing_page_index_is_recomputed_from_headings():
    chapter = sample_chapter()
    doc = render_document(chapter)
    assert to_html(doc.text, chapter) == to_html(doc.text, chapter, page_starts=doc.page_starts)


def test_unusable_page_index_falls_back_to_headings():
    chapter = sample_chapter()
    doc = render_document(chapter)
    expected = to_html(doc.text, chapter, page_starts=doc.page_starts)
    assert to_html(doc.text, chapter, page_starts=[0, 1]) == expected
    assert to_html(doc.text, chapter, page_starts=[999]) == expected


def test_chapter_without_pages_is_header_only():
    chapter = Chapter(title="Solo")
    html = to_html("# Solo", chapter, page_starts=())
    assert html == '<div class="chapter-header">\n<h1>Solo</h1>\n</div>\n'


def test_more_headings_than_pages_get_placeholders():
    chapter = Chapter(pages=(Page(name="Only", layout="A"),))
    html = to_html("## (Page 1) Only\n\n## (Page 2) Extra", chapter)
    assert html.count('<section class="page"') == 2
    assert "No layout defined" in html.split('data-page="2"')[1]


def test_layout_errors_become_invalid_layout_placeholder():
    page = Page(layout="AB", panels=(Panel(),))
    svg = page_layout_svg(page, RenderConfig(width=15, height=15))
    assert "Invalid layout" in svg


def test_page_layout_svg_respects_config():
    page = Page(layout=("AB",))
    svg = page_layout_svg(page, RenderConfig(width=200, height=300, show_numbers=False))
    assert svg.startswith('<svg width="200" height="300"')
    assert "<text" not in svg


def test_render_html_document():
    doc = render_html_document("<p>x</p>\n", title="A & B")
    assert doc.startswith("<!DOCTYPE html>\n")
    assert "<title>A &amp; B</title>" in doc
    assert '<div class="content">\n<p>x</p>\n</div>' in doc

    printable = render_html_document("<p>x</p>\n", title="T", printable=True)
    assert "<title>T - Print</title>" in printable


def test_render_html_document_empty_body_placeholder():
    doc = render_html_document("", title="Preview")
    assert "<h1>Preview</h1>" in doc
    assert "No content available." in doc
