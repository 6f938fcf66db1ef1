"""Rendering flags and helpers for building, copying and describing flag sets."""

from __future__ import annotations

from enum import IntEnum
from typing import Iterable, Iterator


class Flag(IntEnum):
    """Individual options that change how markdown is rendered."""

    NOLINKS = 0
    NOIMAGE = 1
    NOPANTS = 2
    NOHTML = 3
    NORMAL_LISTITEM = 4
    TAGTEXT = 5
    NO_EXT = 6
    CDATA = 7
    NOSUPERSCRIPT = 8
    STRICT = 9
    NOTABLES = 10
    NOSTRIKETHROUGH = 11
    TOC = 12
    COMPAT_1 = 13
    AUTOLINK = 14
    SAFELINK = 15
    NOHEADER = 16
    TABSTOP = 17
    NODIVQUOTE = 18
    NOALPHALIST = 19
    EXTRA_FOOTNOTE = 20
    NOSTYLE = 21
    DLDISCOUNT = 22
    DLEXTRA = 23
    FENCEDCODE = 24
    IDANCHOR = 25
    GITHUBTAGS = 26
    URLENCODEDANCHOR = 27
    LATEX = 28
    EXPLICITLIST = 29
    ALT_AS_TITLE = 30
    IS_LABEL = 31


NR_FLAGS = len(Flag)

# Display names; a leading "!" means the flag disables a feature.
_FLAG_NAMES: tuple[tuple[Flag, str], ...] = (
    (Flag.NOLINKS, "!LINKS"),
    (Flag.NOIMAGE, "!IMAGE"),
    (Flag.NOPANTS, "!PANTS"),
    (Flag.NOHTML, "!HTML"),
    (Flag.TAGTEXT, "TAGTEXT"),
    (Flag.NO_EXT, "!EXT"),
    (Flag.CDATA, "CDATA"),
    (Flag.NOSUPERSCRIPT, "!SUPERSCRIPT"),
    (Flag.STRICT, "STRICT"),
    (Flag.NOTABLES, "!TABLES"),
    (Flag.NOSTRIKETHROUGH, "!STRIKETHROUGH"),
    (Flag.TOC, "TOC"),
    (Flag.COMPAT_1, "MKD_1_COMPAT"),
    (Flag.AUTOLINK, "AUTOLINK"),
    (Flag.SAFELINK, "SAFELINK"),
    (Flag.NOHEADER, "!HEADER"),
    (Flag.TABSTOP, "TABSTOP"),
    (Flag.NODIVQUOTE, "!DIVQUOTE"),
    (Flag.NOALPHALIST, "!ALPHALIST"),
    (Flag.EXTRA_FOOTNOTE, "FOOTNOTE"),
    (Flag.NOSTYLE, "!STYLE"),
    (Flag.DLDISCOUNT, "DLDISCOUNT"),
    (Flag.DLEXTRA, "DLEXTRA"),
    (Flag.FENCEDCODE, "FENCEDCODE"),
    (Flag.IDANCHOR, "IDANCHOR"),
    (Flag.GITHUBTAGS, "GITHUBTAGS"),
    (Flag.NORMAL_LISTITEM, "NORMAL_LISTITEM"),
    (Flag.URLENCODEDANCHOR, "URLENCODEDANCHOR"),
    (Flag.LATEX, "LATEX"),
    (Flag.EXPLICITLIST, "EXPLICITLIST"),
    (Flag.ALT_AS_TITLE, "ALT_AS_TITLE"),
)


class FlagSet:
    """A mutable set of rendering flags."""

    __slots__ = ("_bits",)

    def __init__(self, flags: Iterable[int] = ()) -> None:
        self._bits: set[Flag] = set()
        for flag in flags:
            self.set(flag)

    def set(self, bit: int) -> None:
        """Turn a flag on; unknown flag numbers raise ValueError."""
        self._bits.add(Flag(bit))

    def clear(self, bit: int) -> None:
        """Turn a flag off; unknown flag numbers raise ValueError."""
        self._bits.discard(Flag(bit))

    def isset(self, bit: int) -> bool:
        return bit in self._bits

    def any_of(self, other: FlagSet) -> bool:
        """True if any flag of `other` is also set here."""
        return bool(self._bits & other._bits)

    def update(self, other: FlagSet) -> None:
        """Add every flag of `other` to this set."""
        self._bits |= other._bits

    def copy(self) -> FlagSet:
        return FlagSet(self._bits)

    def __contains__(self, bit: object) -> bool:
        return bit in self._bits

    def __iter__(self) -> Iterator[Flag]:
        return iter(sorted(self._bits))

    def __len__(self) -> int:
        return len(self._bits)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FlagSet):
            return NotImplemented
        return self._bits == other._bits

    def __repr__(self) -> str:
        names = ", ".join(flag.name for flag in self)
        return f"FlagSet([{names}])"


def set_flag_num(flags: FlagSet | None, bit: int) -> None:
    """Set flag number `bit`; ignored for a missing set or an out-of-range bit."""
    if flags is not None and 0 <= bit < NR_FLAGS:
        flags.set(bit)


def clear_flag_num(flags: FlagSet | None, bit: int) -> None:
    """Clear flag number `bit`; ignored for a missing set or an out-of-range bit."""
    if flags is not None and 0 <= bit < NR_FLAGS:
        flags.clear(bit)


def set_flag_bitmap(flags: FlagSet | None, bits: int) -> None:
    """Set every flag whose bit is on in the integer `bits`."""
    if flags is None:
        return
    for i in range(min(64, NR_FLAGS)):
        if (bits >> i) & 1:
            flags.set(i)


def flag_isset(flags: FlagSet | None, flag: int) -> bool:
    return flags is not None and flags.isset(flag)


def copy_flags(original: FlagSet | None) -> FlagSet:
    """Return an independent copy; a missing original gives an empty set."""
    return FlagSet() if original is None else original.copy()


def flags_are(flags: FlagSet | None, html: bool = False) -> str:
    """Describe which features are on, as plain text or as an html table."""
    parts: list[str] = []
    even = True
    if html:
        parts.append('<table class="mkd_flags_are">\n')
    for flag, name in _FLAG_NAMES:
        is_set = flag_isset(flags, flag)
        if name.startswith("!"):
            name = name[1:]
            is_set = not is_set
        if html:
            if even:
                parts.append(" <tr>")
            parts.append("<td>")
        else:
            parts.append(" ")
        if not is_set:
            parts.append("<s>" if html else "!")
        parts.append(name)
        if html:
            if not is_set:
                parts.append("</s>")
            parts.append("</td>")
            if not even:
                parts.append("</tr>\n")
        even = not even
    if html:
        if even:
            parts.append("</tr>\n")
        parts.append("</table>\n")
    return "".join(parts)