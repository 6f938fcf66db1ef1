from discountpy.document import Line, Paragraph, ParagraphType
from discountpy.dumptree import dump_tree


def _markup(n=1):
    return Paragraph(ParagraphType.MARKUP, [Line("x") for _ in range(n)])


def test_single_paragraph_diagram():
    assert dump_tree([_markup()], "stdin") == "stdin-----[markup, 1 line]\n"


def test_two_paragraphs_use_branch_and_corner():
    out = dump_tree([_markup(), _markup(2)], "stdin")
    first, second = out.splitlines()
    assert first == "stdin--+--[markup, 1 line]"
    assert second.endswith("`--[markup, 2 lines]")
    assert second.strip().startswith("`")


def test_one_output_line_per_leaf():
    tree = [
        Paragraph(ParagraphType.QUOTE, down=[_markup(), _markup()]),
        _markup(),
        Paragraph(ParagraphType.UL, down=[Paragraph(ParagraphType.LISTITEM, down=[_markup()])]),
    ]
    lines = dump_tree(tree, "doc").splitlines()
    assert len(lines) == 4
    assert lines[0].startswith("doc")
    assert all(line.endswith("[markup, 1 line]") for line in lines)


def test_header_ident_flags_and_alignment():
    hdr = Paragraph(ParagraphType.HDR, [Line("Title")], hnumber=2)
    para = Paragraph(ParagraphType.MARKUP, [Line("a")], ident="note", align=2)
    out = dump_tree([hdr, para], "t")
    assert "[h2, 1 line]" in out
    assert "[markup note, <center>, 1 line]" in out


def test_unknown_type_and_no_lines():
    out = dump_tree([Paragraph(ParagraphType.AL)], "t")
    assert out.endswith("[mystery node!]\n")