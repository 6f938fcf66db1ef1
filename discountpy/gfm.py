"""Build a document where every line break is a hard break."""

from __future__ import annotations

from typing import Iterable, TextIO

from .document import Document, Line
from .flags import Flag, FlagSet, copy_flags

_DEFAULT_TABSTOP = 4
_HEADER_LINES = 3


def _first_nonblank(text: str) -> int:
    return len(text) - len(text.lstrip(" "))


def _enqueue(doc: Document, chars: list[str]) -> None:
    out: list[str] = []
    for c in chars:
        if c == "\t":
            out.append(" ")
            while len(out) % doc.tabstop:
                out.append(" ")
        elif c >= " ":
            out.append(c)
    text = "".join(out)
    doc.content.append(Line(text, _first_nonblank(text)))


def _trim_line(line: Line, clip: int) -> None:
    if clip >= len(line.text):
        line.text = ""
        line.dle = 0
    else:
        line.text = line.text[clip:]
        line.dle = _first_nonblank(line.text)


def _keep(c: str) -> bool:
    code = ord(c)
    return code >= 0x80 or 0x20 <= code < 0x7F or c in "\t\n\v\f\r"


def gfm_populate(chars: Iterable[str], flags: FlagSet | None = None) -> Document:
    """Read characters into a document, turning each newline into a hard break."""
    flags = copy_flags(flags)
    doc = Document(flags=flags)
    if flags.isset(Flag.TABSTOP) or flags.isset(Flag.STRICT):
        doc.tabstop = 4
    else:
        doc.tabstop = _DEFAULT_TABSTOP

    # Counts leading "%" lines; None once a line does not start with "%".
    pandoc: int | None = 0
    line: list[str] = []

    for c in chars:
        if c == "\n":
            if pandoc is not None and pandoc < _HEADER_LINES:
                if line and line[0] == "%":
                    pandoc += 1
                else:
                    pandoc = None
            if pandoc is None:
                line += [" ", " "]
            _enqueue(doc, line)
            line = []
        elif _keep(c):
            line.append(c)

    if line:
        _enqueue(doc, line)

    if pandoc == _HEADER_LINES and not flags.isset(Flag.NOHEADER):
        doc.title, doc.author, doc.date = doc.content[:_HEADER_LINES]
        for header in (doc.title, doc.author, doc.date):
            _trim_line(header, 1)
        doc.content = doc.content[_HEADER_LINES:]

    return doc


def gfm_string(text: str, flags: FlagSet | None = None) -> Document:
    """Build a document from a string."""
    return gfm_populate(text, flags)


def gfm_read(stream: TextIO, flags: FlagSet | None = None) -> Document:
    """Build a document from a text stream."""
    return gfm_populate(iter(lambda: stream.read(1), ""), flags)