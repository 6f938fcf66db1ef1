"""Block-level html generation for a compiled document tree."""

from __future__ import annotations

from typing import Any, Sequence

from .document import (
    ALIGN_NONE,
    GITHUB_CHECK,
    IS_CHECKED,
    Document,
    Line,
    Paragraph,
    ParagraphType,
)
from .flags import Flag, FlagSet
from .inline import EOLN, SpanRenderer, render_line

_SPACE = " \t\n\v\f\r"

_BEGIN = ("", "<p>", '<div style="text-align:center;">')
_END = ("", "</p>", "</div>")

_A_NONE, _A_CENTER, _A_LEFT, _A_RIGHT = range(4)
_ALIGNMENTS = (
    "",
    ' style="text-align:center;"',
    ' style="text-align:left;"',
    ' style="text-align:right;"',
)


def _anchor(label: str, r: SpanRenderer) -> None:
    cb = r.callbacks
    name = cb.anchor(label, cb.data) if cb.anchor else None
    if name is None:
        name = "-".join(label.split())
        for plain, entity in (("&", "&amp;"), ("<", "&lt;"), (">", "&gt;"), ('"', "&quot;")):
            name = name.replace(plain, entity)
    r.write(name)


def _print_header(p: Paragraph, r: SpanRenderer) -> None:
    f = r.flags
    labelled = p.label and f.isset(Flag.TOC) and not f.isset(Flag.STRICT)
    if f.isset(Flag.IDANCHOR):
        r.write(f"<h{p.hnumber}")
        if labelled:
            r.write(' id="')
            _anchor(p.label, r)
            r.write('"')
        r.write(">")
    else:
        if labelled:
            r.write('<a name="')
            _anchor(p.label, r)
            r.write('"></a>\n')
        r.write(f"<h{p.hnumber}>")
    if p.text:
        r.push(p.text[0].text)
    r.text()
    r.write(f"</h{p.hnumber}>")


def _splat(line: Line, block: str, align: list[int], force: bool, r: SpanRenderer) -> int:
    line.tidy()
    if line.text.endswith("|"):
        line.text = line.text[:-1]
    text = line.text
    n = len(text)
    idx = line.dle
    colno = 0

    r.write("<tr>\n")
    while idx < n:
        first = idx
        if force and colno >= len(align) - 1:
            idx = n
        else:
            while idx < n and text[idx] != "|":
                if text[idx] == "\\":
                    idx += 1
                idx += 1
        style = _ALIGNMENTS[align[colno] if colno < len(align) else _A_NONE]
        r.write(f"<{block}{style}>")
        r.reparse(text[first:idx], None, "|")
        r.write(f"</{block}>\n")
        idx += 1
        colno += 1
    if force:
        while colno < len(align):
            r.write(f"<{block}></{block}>\n")
            colno += 1
    r.write("</tr>\n")
    return colno


def _column_alignments(dash: Line) -> list[int]:
    p = dash.text
    n = len(p)
    align: list[int] = []
    start = dash.dle
    while start < n:
        first = last = None
        end = start
        while end < n and p[end] != "|":
            if p[end] == "\\":
                end += 1
            elif p[end] not in _SPACE:
                if first is None:
                    first = p[end]
                last = p[end]
            end += 1
        if first == ":":
            align.append(_A_CENTER if last == ":" else _A_LEFT)
        else:
            align.append(_A_RIGHT if last == ":" else _A_NONE)
        start = end + 1
    return align


def _print_table(p: Paragraph, r: SpanRenderer) -> None:
    hdr, dash, *body = p.text
    if hdr.dle < len(hdr.text) and hdr.text[hdr.dle] == "|":
        for line in p.text:
            line.dle += 1

    align = _column_alignments(dash)

    r.write("<table>\n")
    r.write("<thead>\n")
    hcols = _splat(hdr, "th", align, False, r)
    r.write("</thead>\n")

    if hcols < len(align):
        del align[hcols:]
    else:
        align.extend([_A_NONE] * (hcols - len(align)))

    r.write("<tbody>\n")
    for line in body:
        _splat(line, "td", align, True, r)
    r.write("</tbody>\n")
    r.write("</table>\n")


def _code_callback(lines: Sequence[Line], start: int, lang: str | None,
                   fenced: bool, r: SpanRenderer) -> int | None:
    """Run the external code formatter; return the index after the block, or None."""
    formatter = r.callbacks.code_format
    if formatter is None:
        return None
    end = start
    while end < len(lines) and (lines[end].is_fenced if fenced else True):
        end += 1
    source = "".join(line.text + "\n" for line in lines[start:end])
    formatted = formatter(source, lang or None)
    if formatted is None:
        return None
    r.write(formatted)
    return end


def _print_fenced(lines: Sequence[Line], start: int, r: SpanRenderer) -> int:
    opener = lines[start]
    r.write("<pre><code")
    if opener.fence_class:
        r.write(f' class="{opener.fence_class}"')
    r.write(">")

    ret = _code_callback(lines, start, opener.fence_class, True, r)
    if ret is None:
        ret = start + 1
        while ret < len(lines) and lines[ret].is_fenced:
            r.code(lines[ret].text)
            r.write("\n")
            ret += 1

    r.write("</code></pre>\n")
    return ret


def _print_block(p: Paragraph, r: SpanRenderer) -> None:
    lines = p.text
    n = len(lines)
    r.write(_BEGIN[p.align])
    i = 0
    while i < n:
        line = lines[i]
        has_next = i + 1 < n
        if line.is_fenced:
            r.text()
            i = _print_fenced(lines, i, r)
        elif line.text:
            if has_next and len(line.text) > 2 and line.text.endswith("  "):
                r.push(line.text[:-2] + EOLN + "\n")
            else:
                line.tidy()
                r.push(line.text + ("\n" if has_next else ""))
        i += 1
    r.text()
    r.write(_END[p.align])


def _print_code(lines: Sequence[Line], lang: str | None, r: SpanRenderer) -> None:
    r.write("<pre><code")
    if lang:
        r.write(f' class="{lang}"')
    r.write(">")

    if _code_callback(lines, 0, lang, False, r) is None:
        blanks = 0
        for line in lines:
            if len(line.text) > line.dle:
                r.write("\n" * blanks)
                blanks = 0
                r.code(line.text)
                r.write("\n")
            else:
                blanks += 1
    r.write("</code></pre>")


def _print_html(lines: Sequence[Line], r: SpanRenderer) -> None:
    blanks = 0
    for line in lines:
        if line.text:
            r.write("\n" * blanks)
            blanks = 0
            r.write(line.text)
            r.write("\n")
        else:
            blanks += 1


def _htmlify_paragraphs(blocks: Sequence[Paragraph], r: SpanRenderer) -> None:
    r.emblock()
    for pos, p in enumerate(blocks):
        _display(p, r)
        if pos + 1 < len(blocks):
            r.emblock()
            r.write("\n\n")


def _li_htmlify(blocks: Sequence[Paragraph], arguments: str | None,
                flags: int, r: SpanRenderer) -> None:
    r.emblock()
    r.write("<li")
    if arguments:
        r.write(f" {arguments}")
    if flags & GITHUB_CHECK:
        r.write(' class="github_checkbox"')
    r.write(">")
    if flags & GITHUB_CHECK:
        r.write("&#x2611;" if flags & IS_CHECKED else "&#x2610;")
    _htmlify_paragraphs(blocks, r)
    r.write("</li>")
    r.emblock()


def _htmlify(blocks: Sequence[Paragraph], block: str | None,
             arguments: str | None, r: SpanRenderer) -> None:
    r.emblock()
    if block:
        r.write(f"<{block} {arguments}>" if arguments else f"<{block}>")
    _htmlify_paragraphs(blocks, r)
    if block:
        r.write(f"</{block}>")
    r.emblock()


def _definition_list(blocks: Sequence[Paragraph], r: SpanRenderer) -> None:
    if not blocks:
        return
    r.write("<dl>\n")
    for p in blocks:
        for tag in p.text:
            r.write("<dt>")
            r.reparse(tag.text)
            r.write("</dt>\n")
        _htmlify(p.down, "dd", p.ident, r)
        r.write("\n")
    r.write("</dl>")


def _list_display(typ: ParagraphType, blocks: Sequence[Paragraph], r: SpanRenderer) -> None:
    if not blocks:
        return
    letter = "u" if typ is ParagraphType.UL else "o"
    r.write(f"<{letter}l")
    if typ is ParagraphType.AL:
        r.write(' type="a"')
    r.write(">\n")
    for p in blocks:
        _li_htmlify(p.down, p.ident, p.para_flags, r)
        r.write("\n")
    r.write(f"</{letter}l>\n")


def _display(p: Paragraph, r: SpanRenderer) -> None:
    typ = p.typ
    if typ in (ParagraphType.STYLE, ParagraphType.WHITESPACE):
        return
    if typ is ParagraphType.HTML:
        _print_html(p.text, r)
    elif typ is ParagraphType.CODE:
        _print_code(p.text, p.lang, r)
    elif typ is ParagraphType.QUOTE:
        _htmlify(p.down, "div" if p.ident else "blockquote", p.ident, r)
    elif typ in (ParagraphType.UL, ParagraphType.OL, ParagraphType.AL):
        _list_display(typ, p.down, r)
    elif typ is ParagraphType.DL:
        _definition_list(p.down, r)
    elif typ is ParagraphType.HR:
        r.write("<hr />")
    elif typ is ParagraphType.HDR:
        _print_header(p, r)
    elif typ is ParagraphType.TABLE:
        _print_table(p, r)
    elif typ is ParagraphType.SOURCE:
        _htmlify(p.down, None, None, r)
    else:
        _print_block(p, r)


def _append_out(r: SpanRenderer, s: str) -> None:
    r.emblock()
    r.queue.out += s


def _extra_footnotes(r: SpanRenderer) -> None:
    notes = r.footnotes
    if notes.reference == 0:
        return
    prefix = r.ref_prefix or "fn"
    _append_out(r, '\n<div class="footnotes">\n<hr/>\n<ol>\n')
    for i in range(1, notes.reference + 1):
        for note in notes:
            if note.refnumber == i and note.referenced:
                _append_out(r, f'<li id="{prefix}:{i}">\n')
                _htmlify(note.text, None, None, r)
                _append_out(r, f'<a href="#{prefix}ref:{i}" rev="footnote">&#8617;</a>')
                _append_out(r, "</li>\n")
    _append_out(r, "</ol>\n</div>\n")


def render_blocks(blocks: Sequence[Paragraph], renderer: SpanRenderer) -> str:
    """Render a list of blocks with `renderer`; return everything it has output."""
    _htmlify(blocks, None, None, renderer)
    return renderer.out


def render_document(doc: Document) -> str:
    """Return the html of a compiled document, generating it on first use."""
    if not doc.compiled:
        raise ValueError("document has not been compiled")
    if doc.html is None:
        r = SpanRenderer(doc.flags, doc.footnotes, doc.callbacks, doc.ref_prefix)
        _htmlify(doc.code, None, None, r)
        if doc.flags.isset(Flag.EXTRA_FOOTNOTE) and not doc.flags.isset(Flag.STRICT):
            _extra_footnotes(r)
        doc.html = r.out
    return doc.html


def _find_h1(blocks: Sequence[Paragraph]) -> Paragraph | None:
    for p in blocks:
        if p.typ is ParagraphType.HDR and p.hnumber == 1:
            return p
        if p.down and (found := _find_h1(p.down)) is not None:
            return found
    return None


def h1_title(doc: Document | None, flags: FlagSet | None = None) -> str | None:
    """Render the first level-one header of the document as plain tag text."""
    if doc is None:
        return None
    title = _find_h1(doc.code)
    if title is None or not title.text:
        return None
    line_flags = flags.copy() if flags is not None else FlagSet()
    line_flags.set(Flag.TAGTEXT)
    generated = render_line(title.text[0].text, line_flags)
    return generated or None


def _e_basename(link: str, base: Any) -> str | None:
    if base and link.startswith("/"):
        return base + link
    return None


def set_basename(doc: Document, base: str) -> None:
    """Prefix every absolute ('/'-rooted) link url in the document with `base`."""
    doc.callbacks.url = _e_basename
    doc.callbacks.data = base