"""Parsed-document structures: lines, block tree, footnotes and header access."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any, Callable, Iterator

from .flags import FlagSet

_ASCII_SPACE = " \t\n\v\f\r"

ALIGN_NONE = 0
ALIGN_PARA = 1
ALIGN_CENTER = 2

GITHUB_CHECK = 0x01
IS_CHECKED = 0x02


class ParagraphType(Enum):
    """The kind of a block in the document tree."""

    WHITESPACE = auto()
    CODE = auto()
    QUOTE = auto()
    MARKUP = auto()
    HTML = auto()
    STYLE = auto()
    DL = auto()
    UL = auto()
    OL = auto()
    AL = auto()
    LISTITEM = auto()
    HDR = auto()
    HR = auto()
    TABLE = auto()
    SOURCE = auto()


@dataclass
class Line:
    """One input line; `dle` is the offset of its first non-blank character."""

    text: str = ""
    dle: int = 0
    is_fenced: bool = False
    fence_class: str | None = None

    def tidy(self) -> None:
        """Remove trailing whitespace."""
        self.text = self.text.rstrip(_ASCII_SPACE)


@dataclass
class Paragraph:
    """A block of the document tree, with its lines and child blocks."""

    typ: ParagraphType = ParagraphType.MARKUP
    text: list[Line] = field(default_factory=list)
    down: list[Paragraph] = field(default_factory=list)
    ident: str | None = None
    lang: str | None = None
    label: str | None = None
    hnumber: int = 0
    align: int = ALIGN_NONE
    para_flags: int = 0


@dataclass
class Footnote:
    """A reference-style link target, or the body of an extra-style footnote."""

    tag: str = ""
    link: str = ""
    title: str = ""
    text: list[Paragraph] = field(default_factory=list)
    height: int = 0
    width: int = 0
    refnumber: int = 0
    referenced: bool = False


def _footnote_key(tag: str) -> str:
    # Case-insensitive, and any whitespace character matches any other.
    return "".join(" " if c in _ASCII_SPACE else c.lower() for c in tag)


@dataclass
class FootnoteList:
    """The footnotes of a document and the count of those referenced so far."""

    notes: list[Footnote] = field(default_factory=list)
    reference: int = 0

    def find(self, tag: str) -> Footnote | None:
        """Look a footnote up by tag, ignoring case and kind of whitespace."""
        key = _footnote_key(tag)
        return next((n for n in self.notes if _footnote_key(n.tag) == key), None)

    def add(self, note: Footnote) -> None:
        self.notes.append(note)

    def __iter__(self) -> Iterator[Footnote]:
        return iter(self.notes)

    def __len__(self) -> int:
        return len(self.notes)


@dataclass
class Callbacks:
    """Hooks that rewrite urls, add link attributes, name anchors or format code."""

    url: Callable[[str, Any], str | None] | None = None
    flags: Callable[[str, Any], str | None] | None = None
    anchor: Callable[[str, Any], str | None] | None = None
    code_format: Callable[[str, str | None], str | None] | None = None
    data: Any = None


@dataclass
class Document:
    """A markdown document: its input lines, header and compiled block tree."""

    content: list[Line] = field(default_factory=list)
    title: Line | None = None
    author: Line | None = None
    date: Line | None = None
    code: list[Paragraph] = field(default_factory=list)
    compiled: bool = False
    html: str | None = None
    tabstop: int = 4
    flags: FlagSet = field(default_factory=FlagSet)
    footnotes: FootnoteList = field(default_factory=FootnoteList)
    callbacks: Callbacks = field(default_factory=Callbacks)
    ref_prefix: str | None = None

    @staticmethod
    def _only_if_set(line: Line | None) -> str | None:
        if line is None or line.dle < 0 or line.dle >= len(line.text):
            return None
        return line.text[line.dle:] or None

    def header_title(self) -> str | None:
        return self._only_if_set(self.title)

    def header_author(self) -> str | None:
        return self._only_if_set(self.author)

    def header_date(self) -> str | None:
        return self._only_if_set(self.date)

    def css(self) -> str:
        """Collect the text of every embedded style block, one line per line."""
        if not self.compiled:
            raise ValueError("document has not been compiled")
        out: list[str] = []

        def walk(blocks: list[Paragraph]) -> None:
            for p in blocks:
                if p.typ is ParagraphType.STYLE:
                    out.extend(line.text + "\n" for line in p.text)
                if p.down:
                    walk(p.down)

        walk(self.code)
        return "".join(out)