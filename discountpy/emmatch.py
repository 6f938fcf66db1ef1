"""Emphasis matching over a queue of text and emphasis-marker blocks."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class BlockType(Enum):
    TEXT = 0
    STAR = 1
    UNDER = 2


@dataclass
class Block:
    """A run of text, or a run of `count` emphasis characters."""

    type: BlockType = BlockType.TEXT
    count: int = 0
    char: str = ""
    text: str = ""
    post: str = ""

    def fill(self) -> None:
        """Turn unmatched emphasis characters back into text."""
        if self.type is BlockType.TEXT:
            return
        self.text += self.char * self.count
        self.count = 0


_EMTAGS = (("<em>", "</em>"), ("<strong>", "</strong>"))


class SpanQueue:
    """Collects text and emphasis markers, then renders matched emphasis."""

    def __init__(self) -> None:
        self.blocks: list[Block] = []
        self.out = ""

    def char(self, c: str) -> None:
        if not self.blocks:
            self.blocks.append(Block())
        self.blocks[-1].text += c

    def string(self, s: str) -> None:
        if s:
            self.char(s)

    def emphasis(self, c: str, count: int) -> None:
        """Queue a run of `count` emphasis characters `c` ('*' or '_')."""
        kind = BlockType.STAR if c == "*" else BlockType.UNDER
        self.blocks.append(Block(kind, count, c))
        self.blocks.append(Block())

    def flush(self) -> str:
        """Match emphasis, append the rendered text to `out`, empty the queue."""
        if self.blocks:
            self._emblock(0, len(self.blocks) - 1)
        pieces = []
        for block in self.blocks:
            block.fill()
            pieces.append(block.post)
            pieces.append(block.text)
        self.blocks.clear()
        chunk = "".join(pieces)
        self.out += chunk
        return chunk

    def _empair(self, first: int, last: int, match: int) -> int:
        begin = self.blocks[first]
        for i in range(first + 1, last + 1):
            p = self.blocks[i]
            if p.type is not BlockType.TEXT and p.count <= 0:
                continue
            if p.type is begin.type and (p.count == match or p.count > 2):
                return i
        return 0

    def _emclose(self, first: int, last: int) -> None:
        for block in self.blocks[first + 1:last - 1]:
            block.fill()

    def _emmatch(self, first: int, last: int) -> None:
        start = self.blocks[first]
        while True:
            count = start.count
            if count <= 0:
                return
            if count == 2:
                match = 2
                e = self._empair(first, last, 2)
                if not e:
                    match = 1
                    e = self._empair(first, last, 1)
            elif count == 1:
                match = 1
                e = self._empair(first, last, 1)
            else:
                e = self._empair(first, last, 1)
                e2 = self._empair(first, last, 2)
                if e2 >= e:
                    e, match = e2, 2
                else:
                    match = 1
            if not e:
                return
            end = self.blocks[e]
            end.count -= match
            start.count -= match
            self._emblock(first, e)
            opener, closer = _EMTAGS[match - 1]
            start.text = opener + start.text
            end.post += closer

    def _emblock(self, first: int, last: int) -> None:
        for i in range(first, last + 1):
            if self.blocks[i].type is not BlockType.TEXT:
                self._emmatch(i, last)
        self._emclose(first, last)