import pytest

from discountpy.document import (
    Document,
    Footnote,
    FootnoteList,
    Line,
    Paragraph,
    ParagraphType,
)


def test_header_accessors_return_text_from_dle():
    doc = Document(title=Line("  My Title", dle=2), author=Line("Ann"), date=Line("today"))
    assert doc.header_title() == "My Title"
    assert doc.header_author() == "Ann"
    assert doc.header_date() == "today"


def test_header_missing_or_empty_is_none():
    doc = Document(title=Line("", dle=0), author=Line("abc", dle=3), date=None)
    assert doc.header_title() is None
    assert doc.header_author() is None
    assert doc.header_date() is None


def test_header_negative_dle_is_none():
    doc = Document(title=Line("abc", dle=-1))
    assert doc.header_title() is None


def test_css_requires_compiled_document():
    with pytest.raises(ValueError):
        Document().css()


def test_css_collects_nested_styles_in_order():
    inner = Paragraph(ParagraphType.STYLE, [Line("b {}")])
    doc = Document(
        compiled=True,
        code=[
            Paragraph(ParagraphType.STYLE, [Line("a {}"), Line("c {}")]),
            Paragraph(ParagraphType.MARKUP, [Line("text")]),
            Paragraph(ParagraphType.QUOTE, down=[inner]),
        ],
    )
    assert doc.css() == "a {}\nc {}\nb {}\n"


def test_css_without_styles_is_empty():
    doc = Document(compiled=True, code=[Paragraph(ParagraphType.MARKUP, [Line("x")])])
    assert doc.css() == ""


def test_line_tidy_strips_trailing_space():
    line = Line("hello \t  ")
    line.tidy()
    assert line.text == "hello"


def test_footnote_find_ignores_case_and_whitespace_kind():
    notes = FootnoteList()
    note = Footnote(tag="Foo Bar", link="/x")
    notes.add(note)
    assert notes.find("foo\tbar") is note
    assert notes.find("FOO BAR") is note
    assert notes.find("foo  bar") is None
    assert len(notes) == 1


def test_footnote_find_first_of_duplicates():
    notes = FootnoteList()
    first = Footnote(tag="a", link="1")
    notes.add(first)
    notes.add(Footnote(tag="A", link="2"))
    assert notes.find("a") is first
    assert [n.link for n in notes] == ["1", "2"]