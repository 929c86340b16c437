"""Tests for the HTML walker: render HTML → python-docx Document → inspect."""

import pytest
from docx import Document
from docx.document import Document as DocxDocument
from docx.shared import Pt, Twips

from html_numbering.config import Config
from html_numbering.exceptions import GenerationError
from html_numbering.generators.word_generator import HtmlWordGenerator, open_document
from html_numbering.numbering.store import NumberingStore


@pytest.fixture
def generator():
    return HtmlWordGenerator()


def _numbering(paragraph):
    """Return (ilvl, numId) of a paragraph, or None when it is not numbered."""
    pPr = paragraph._p.pPr
    if pPr is None or pPr.numPr is None:
        return None
    return pPr.numPr.ilvl.val, pPr.numPr.numId.val


def _definition_name(doc, instance_id):
    store = NumberingStore.from_document(doc)
    return store.find_definition(store.find_instance(instance_id).definition_id).name


# ---------------------------------------------------------------------------
# Basic generation
# ---------------------------------------------------------------------------

class TestBasicGeneration:
    def test_generates_docx_file(self, generator, tmp_path):
        out = tmp_path / "out.docx"
        result = generator.generate("<p>Hello</p>", out)
        assert result == out
        assert out.exists()
        assert Document(str(out)).paragraphs[0].text == "Hello"

    def test_generates_document_object(self, generator):
        assert isinstance(generator.generate_document("<p>x</p>"), DocxDocument)

    def test_empty_html(self, generator):
        assert len(generator.generate_document("").paragraphs) == 0

    def test_inline_text_collapsed(self, generator):
        doc = generator.generate_document("<p>Hello   <b>bold</b>\n world<br>again</p>")
        assert doc.paragraphs[0].text == "Hello bold world again"

    def test_loose_text_and_blocks(self, generator):
        doc = generator.generate_document("Loose <i>text</i><div><p>Para</p></div><!-- note -->")
        assert [p.text for p in doc.paragraphs] == ["Loose text", "Para"]

    def test_head_is_skipped(self, generator):
        html = "<html><head><title>T</title></head><body><p>Body</p></body></html>"
        assert [p.text for p in generator.generate_document(html).paragraphs] == ["Body"]


# ---------------------------------------------------------------------------
# Lists
# ---------------------------------------------------------------------------

class TestLists:
    def test_nested_ordered_list(self, generator):
        doc = generator.generate_document(
            "<ol><li>One</li><li>Two<ol><li>Two a</li></ol></li></ol>"
        )
        paragraphs = doc.paragraphs
        assert [p.text for p in paragraphs] == ["One", "Two", "Two a"]
        assert [_numbering(p) for p in paragraphs] == [(0, 10), (0, 10), (1, 10)]
        assert paragraphs[0].style.name == "List Paragraph"

    def test_sibling_bullet_lists_share_numbering(self, generator):
        doc = generator.generate_document("<ul><li>a</li></ul><p>between</p><ul><li>b</li></ul>")
        a, between, b = doc.paragraphs
        assert _numbering(a) == _numbering(b)
        assert _numbering(between) is None

    def test_sibling_ordered_lists_restart(self, generator):
        doc = generator.generate_document("<ol><li>a</li></ol><ol><li>b</li></ol>")
        a, b = doc.paragraphs
        assert _numbering(a)[1] != _numbering(b)[1]

    def test_ol_type_attribute(self, generator):
        doc = generator.generate_document('<ol type="a"><li>x</li></ol>')
        assert _definition_name(doc, _numbering(doc.paragraphs[0])[1]) == "lower-alpha"

    def test_list_style_type(self, generator):
        doc = generator.generate_document('<ul style="list-style-type: square"><li>x</li></ul>')
        assert _definition_name(doc, _numbering(doc.paragraphs[0])[1]) == "square"

    def test_ordered_style_on_ul(self, generator):
        doc = generator.generate_document(
            '<ul style="list-style-type: upper-roman"><li>a<ul style="list-style-type: upper-roman">'
            "<li>b</li></ul></li></ul>"
        )
        a, b = doc.paragraphs
        assert _numbering(a)[1] == _numbering(b)[1]
        assert _numbering(b)[0] == 1

    def test_item_margin_splits_and_indents(self, generator):
        doc = generator.generate_document(
            '<ul><li style="margin-left: 20px">a</li><li>b</li></ul><ul><li>c</li></ul>'
        )
        a, b, c = doc.paragraphs
        assert _numbering(a) == _numbering(b)
        assert _numbering(a)[1] != _numbering(c)[1]
        assert a.paragraph_format.left_indent == Pt(15)
        assert b.paragraph_format.left_indent is None

    def test_nested_bullets_are_indented(self, generator):
        doc = generator.generate_document("<ul><li>outer<ul><li>inner<ul><li>deep</li></ul></li></ul></li></ul>")
        outer, inner, deep = doc.paragraphs
        assert [_numbering(p)[0] for p in doc.paragraphs] == [0, 0, 0]
        assert outer.paragraph_format.left_indent is None
        assert inner.paragraph_format.left_indent == Twips(720)
        assert deep.paragraph_format.left_indent == Twips(1440)

    def test_nested_ordered_lists_rely_on_levels(self, generator):
        doc = generator.generate_document("<ol><li>a<ol><li>b</li></ol></li></ol>")
        assert doc.paragraphs[1].paragraph_format.left_indent is None

    def test_class_selects_paragraph_style(self, generator):
        doc = generator.generate_document('<ol class="compact ListNumber"><li>x</li></ol>')
        assert doc.paragraphs[0].style.name == "List Number"

    def test_stray_li_is_plain_paragraph(self, generator):
        doc = generator.generate_document("<li>orphan</li>")
        assert _numbering(doc.paragraphs[0]) is None

    def test_text_directly_in_list(self, generator):
        doc = generator.generate_document("<ul>stray<li>a</li></ul>")
        assert [p.text for p in doc.paragraphs] == ["stray", "a"]
        assert _numbering(doc.paragraphs[0]) is None


# ---------------------------------------------------------------------------
# Headings
# ---------------------------------------------------------------------------

class TestHeadings:
    def test_numbered_headings(self, generator):
        doc = generator.generate_document(
            "<h1>1. Introduction</h1><h2>1.1 Scope</h2><h3>1.1.1. Details</h3>"
        )
        h1, h2, h3 = doc.paragraphs
        assert [p.text for p in doc.paragraphs] == ["Introduction", "Scope", "Details"]
        assert h1.style.name == "Heading 1"
        assert h2.style.name == "Heading 2"
        assert [_numbering(p)[0] for p in doc.paragraphs] == [0, 1, 2]
        assert len({_numbering(p)[1] for p in doc.paragraphs}) == 1

    def test_unnumbered_heading(self, generator):
        doc = generator.generate_document("<h1>Overview</h1><h2>Plans for 2024</h2>")
        assert [_numbering(p) for p in doc.paragraphs] == [None, None]
        assert doc.paragraphs[1].text == "Plans for 2024"

    def test_heading_numbering_disabled(self):
        config = Config.default()
        config.numbering.number_headings = False
        doc = HtmlWordGenerator(config).generate_document("<h1>1. Introduction</h1>")
        assert doc.paragraphs[0].text == "1. Introduction"
        assert _numbering(doc.paragraphs[0]) is None

    def test_heading_inside_list_not_numbered(self, generator):
        doc = generator.generate_document("<ol><li>a</li><h2>2. Inside</h2><li>b</li></ol>")
        a, inside, b = doc.paragraphs
        assert inside.text == "2. Inside"
        assert _numbering(inside) is None
        assert _numbering(a) == _numbering(b)

    def test_list_after_heading_starts_at_top_level(self, generator):
        doc = generator.generate_document("<h1>1. Title</h1><ol><li>x</li></ol>")
        assert _numbering(doc.paragraphs[1])[0] == 0

    def test_second_pass_continues_heading_numbering(self, generator):
        doc = generator.generate_document("<h1>1. First</h1>")
        generator.generate_document("<h1>2. Second</h1>", doc)
        first, second = doc.paragraphs
        assert _numbering(first) == _numbering(second)
        assert len(NumberingStore.from_document(doc).definitions()) == 18

    def test_missing_heading_style_falls_back(self, generator):
        doc = generator.generate_document("<h6>Deep</h6>")
        assert doc.paragraphs[0].style.name in ("Heading 6", "Normal")


class TestOpenDocument:
    def test_blank_when_no_path(self):
        assert isinstance(open_document(None), DocxDocument)

    def test_invalid_file_raises(self, tmp_path):
        bad = tmp_path / "bad.docx"
        bad.write_text("not a zip")
        with pytest.raises(GenerationError):
            open_document(bad)
