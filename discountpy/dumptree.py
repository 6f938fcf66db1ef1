"""Render a document's block tree as an indented text diagram."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from .document import Paragraph, ParagraphType

_TYPE_NAMES = {
    ParagraphType.WHITESPACE: "whitespace",
    ParagraphType.CODE: "code",
    ParagraphType.QUOTE: "quote",
    ParagraphType.MARKUP: "markup",
    ParagraphType.HTML: "html",
    ParagraphType.DL: "dl",
    ParagraphType.UL: "ul",
    ParagraphType.OL: "ol",
    ParagraphType.LISTITEM: "item",
    ParagraphType.HDR: "header",
    ParagraphType.HR: "hr",
    ParagraphType.TABLE: "table",
    ParagraphType.SOURCE: "source",
    ParagraphType.STYLE: "style",
}

_ALIGN_NAMES = {1: "P", 2: "center"}


@dataclass
class _Frame:
    indent: int
    c: str


def _change_prefix(stack: list[_Frame], c: str) -> None:
    if stack and stack[-1].c in "+|":
        stack[-1].c = c


def _print_prefix(stack: list[_Frame], out: list[str]) -> None:
    if not stack:
        return
    top = stack[-1]
    if top.c in "+-":
        out.append("--" + top.c)
        top.c = " " if top.c == "-" else "|"
    else:
        for i, frame in enumerate(stack):
            if i:
                out.append("  ")
            out.append(" " * max(frame.indent + 2, 1) + frame.c)
            if frame.c == "`":
                frame.c = " "
    out.append("--")


def _dump(blocks: Sequence[Paragraph], stack: list[_Frame], out: list[str]) -> None:
    for pos, pp in enumerate(blocks):
        if pos == len(blocks) - 1:
            _change_prefix(stack, "`")
        _print_prefix(stack, out)

        if pp.typ is ParagraphType.HDR:
            label = f"[h{pp.hnumber}"
        else:
            label = "[" + _TYPE_NAMES.get(pp.typ, "mystery node!")
        if pp.ident:
            label += f" {pp.ident}"
        if pp.para_flags:
            label += f" {pp.para_flags:x}"
        if pp.align > 1:
            label += f", <{_ALIGN_NAMES.get(pp.align, '')}>"
        count = len(pp.text)
        if count:
            label += f", {count} line{'' if count == 1 else 's'}"
        label += "]"
        out.append(label)

        if pp.down:
            stack.append(_Frame(len(label), "+" if len(pp.down) > 1 else "-"))
            _dump(pp.down, stack, out)
            stack.pop()
        else:
            out.append("\n")


def dump_tree(blocks: Sequence[Paragraph], title: str) -> str:
    """Return a diagram of `blocks`, one line per leaf block, headed by `title`."""
    out = [title]
    stack = [_Frame(len(title), "+" if len(blocks) > 1 else "-")]
    _dump(blocks, stack, out)
    return "".join(out)