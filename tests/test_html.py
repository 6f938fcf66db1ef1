import pytest

from discountpy.document import (
    GITHUB_CHECK,
    IS_CHECKED,
    Document,
    Footnote,
    FootnoteList,
    Line,
    Paragraph,
    ParagraphType,
)
from discountpy.flags import Flag, FlagSet
from discountpy.html import h1_title, render_blocks, render_document, set_basename
from discountpy.inline import SpanRenderer


def para(text, align=1):
    return Paragraph(ParagraphType.MARKUP, [Line(text)], align=align)


def render(blocks, flags=None, **kw):
    return render_blocks(blocks, SpanRenderer(flags, **kw))


def test_horizontal_rule():
    assert render([Paragraph(ParagraphType.HR)]) == "<hr />"


def test_single_paragraph():
    assert render([para("hello")]) == "<p>hello</p>"


def test_paragraphs_are_separated():
    out = render([para("a"), para("b")])
    assert out == "<p>a</p>\n\n<p>b</p>"


def test_emphasis_resolved():
    assert render([para("*hi*")]) == "<p><em>hi</em></p>"


def test_code_block_escapes_and_blank_lines():
    block = Paragraph(ParagraphType.CODE, [Line("x < y"), Line(""), Line("z")])
    out = render([block])
    assert out.startswith("<pre><code>")
    assert out.endswith("</code></pre>")
    assert "x &lt; y\n\nz\n" in out


def test_code_block_external_formatter():
    seen = []

    def fmt(src, lang):
        seen.append((src, lang))
        return "FORMATTED"

    from discountpy.document import Callbacks

    block = Paragraph(ParagraphType.CODE, [Line("a"), Line("b")], lang="c")
    out = render([block], callbacks=Callbacks(code_format=fmt))
    assert out == '<pre><code class="c">FORMATTED</code></pre>'
    assert seen == [("a\nb\n", "c")]


def test_fenced_code_inside_block():
    lines = [
        Line("", is_fenced=True, fence_class="py"),
        Line("x<y", is_fenced=True),
        Line("```"),
    ]
    out = render([Paragraph(ParagraphType.MARKUP, lines, align=0)])
    assert out.startswith('<pre><code class="py">')
    assert "x&lt;y\n" in out
    assert "```" not in out


def test_header_plain():
    block = Paragraph(ParagraphType.HDR, [Line("Title")], hnumber=2)
    assert render([block]) == "<h2>Title</h2>"


def test_header_id_anchor_with_callback():
    from discountpy.document import Callbacks

    block = Paragraph(ParagraphType.HDR, [Line("Title")], hnumber=2, label="Title")
    flags = FlagSet([Flag.TOC, Flag.IDANCHOR])
    cb = Callbacks(anchor=lambda s, d: "custom")
    assert render([block], flags, callbacks=cb) == '<h2 id="custom">Title</h2>'


def test_header_label_ignored_without_toc():
    block = Paragraph(ParagraphType.HDR, [Line("Title")], hnumber=3, label="Title")
    out = render([block], FlagSet([Flag.IDANCHOR]))
    assert out == "<h3>Title</h3>"


def test_table_alignment_and_structure():
    lines = [Line("a|b"), Line("-|:-"), Line("1|2")]
    out = render([Paragraph(ParagraphType.TABLE, lines)])
    assert out.startswith("<table>\n<thead>\n")
    assert out.endswith("</tbody>\n</table>\n")
    assert out.count("<tr>") == 2
    assert out.count(' style="text-align:left;"') == 2
    assert "<th>a</th>" in out
    assert "<td>1</td>" in out


def test_table_pads_missing_cells():
    lines = [Line("a|b"), Line("-|-"), Line("1")]
    out = render([Paragraph(ParagraphType.TABLE, lines)])
    assert "<td></td>" in out


def test_blockquote():
    quote = Paragraph(ParagraphType.QUOTE, down=[para("q")])
    assert render([quote]) == "<blockquote><p>q</p></blockquote>"


def test_unordered_list():
    item = Paragraph(ParagraphType.LISTITEM, down=[para("one", align=0)])
    ul = Paragraph(ParagraphType.UL, down=[item])
    assert render([ul]) == "<ul>\n<li>one</li>\n</ul>\n"


def test_github_checkbox_item():
    item = Paragraph(ParagraphType.LISTITEM, down=[para("done", align=0)],
                     para_flags=GITHUB_CHECK | IS_CHECKED)
    out = render([Paragraph(ParagraphType.UL, down=[item])])
    assert 'class="github_checkbox"' in out
    assert "&#x2611;" in out


def test_alpha_list():
    item = Paragraph(ParagraphType.LISTITEM, down=[para("x", align=0)])
    out = render([Paragraph(ParagraphType.AL, down=[item])])
    assert out.startswith('<ol type="a">\n')
    assert out.endswith("</ol>\n")


def test_definition_list():
    entry = Paragraph(ParagraphType.MARKUP, [Line("term")], down=[para("def", align=0)])
    out = render([Paragraph(ParagraphType.DL, down=[entry])])
    assert out.startswith("<dl>\n<dt>term</dt>\n")
    assert out.endswith("</dl>")
    assert "def" in out


def test_html_block_passthrough():
    block = Paragraph(ParagraphType.HTML, [Line("<div>"), Line(""), Line("</div>")])
    assert render([block]) == "<div>\n\n</div>\n"


def test_render_document_requires_compile():
    with pytest.raises(ValueError):
        render_document(Document())


def test_render_document_caches():
    doc = Document(code=[para("hi")], compiled=True)
    first = render_document(doc)
    assert first == "<p>hi</p>"
    assert doc.html == first
    assert render_document(doc) == first


def test_extra_footnotes():
    notes = FootnoteList()
    notes.add(Footnote(tag="^1", text=[para("note")]))
    doc = Document(code=[para("see[^1]")], compiled=True,
                   flags=FlagSet([Flag.EXTRA_FOOTNOTE]), footnotes=notes)
    out = render_document(doc)
    assert '<sup id="fnref:1"><a href="#fn:1" rel="footnote">1</a></sup>' in out
    assert '<li id="fn:1">' in out
    assert '<a href="#fnref:1" rev="footnote">&#8617;</a>' in out
    assert notes.notes[0].referenced
    assert notes.reference == 1


def test_h1_title_nested_and_tagtext():
    header = Paragraph(ParagraphType.HDR, [Line("Big *Title*")], hnumber=1)
    doc = Document(code=[Paragraph(ParagraphType.QUOTE, down=[header])], compiled=True)
    flags = FlagSet()
    assert h1_title(doc, flags) == "Big *Title*"
    assert not flags.isset(Flag.TAGTEXT)


def test_h1_title_missing():
    doc = Document(code=[para("text")], compiled=True)
    assert h1_title(doc, FlagSet()) is None
    assert h1_title(None, FlagSet()) is None


def test_set_basename_prefixes_absolute_links():
    doc = Document(code=[para("[x](/path) [y](rel)")], compiled=True)
    set_basename(doc, "http://example.com")
    out = render_document(doc)
    assert 'href="http://example.com/path"' in out
    assert 'href="rel"' in out