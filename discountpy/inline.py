"""Span-level rendering: emphasis, code spans, links, smartypants and escapes."""

from __future__ import annotations

import random
import string
from dataclasses import dataclass, field
from typing import Callable

from .document import Callbacks, Footnote, FootnoteList
from .emmatch import SpanQueue
from .flags import Flag, FlagSet

EOLN = "\r"  # a tokenised hard line break

_SPACE = " \t\n\v\f\r"
_PUNCT = set(string.punctuation)
_ALNUM = set(string.ascii_letters + string.digits)
_ALPHA = set(string.ascii_letters)


def _isspace(c: str | None) -> bool:
    return c is not None and c in _SPACE


def _ispunct(c: str | None) -> bool:
    return c is not None and c in _PUNCT


def _isalnum(c: str | None) -> bool:
    return c is not None and c in _ALNUM


def _isalpha(c: str | None) -> bool:
    return c is not None and c in _ALPHA


def _isdigit(c: str | None) -> bool:
    return c is not None and c in string.digits


_PROTOCOLS = ("https:", "http:", "news:", "ftp:")


def _isautoprefix(text: str) -> bool:
    low = text.lower()
    return any(low.startswith(p) for p in _PROTOCOLS)


@dataclass(frozen=True)
class _LinkyType:
    pat: str
    link_pfx: str | None
    link_sfx: str | None
    wxh: bool
    text_pfx: str | None
    text_sfx: str | None
    flags: tuple[Flag, ...] = ()
    refuse: tuple[Flag, ...] = ()
    is_url: bool = False

    def flagset(self) -> FlagSet:
        return FlagSet(self.flags)


_IMAGE = _LinkyType("", '<img src="', '"', True, ' alt="', '" />',
                    (Flag.NOIMAGE, Flag.TAGTEXT, Flag.ALT_AS_TITLE),
                    (Flag.NOIMAGE,), True)
_LINK = _LinkyType("", '<a href="', '"', False, ">", "</a>",
                   (Flag.NOLINKS,), (Flag.NOLINKS,), True)
_SPECIALS = (
    _LinkyType("id:", '<span id="', '"', False, ">", "</span>"),
    _LinkyType("raw:", None, None, False, None, None, (Flag.NOHTML,), (Flag.NOHTML,)),
    _LinkyType("lang:", '<span lang="', '"', False, ">", "</span>"),
    _LinkyType("abbr:", '<abbr title="', '"', False, ">", "</abbr>"),
    _LinkyType("class:", '<span class="', '"', False, ">", "</span>"),
)


def _pseudo(link: str) -> _LinkyType | None:
    low = link.lower()
    for special in _SPECIALS:
        if len(link) > len(special.pat) and low.startswith(special.pat):
            return special
    return None


def _safelink(link: str) -> bool:
    colon = link.find(":")
    if not link or colon < 0:
        return True
    if not _isalpha(link[0]):
        return True
    if any(not (_isalnum(c) or c in ".+-") for c in link[1:colon]):
        return True
    return _isautoprefix(link)


def _maybe_address(text: str) -> bool:
    i, n = 0, len(text)
    while i < n and (_isalnum(text[i]) or text[i] in "._-+*"):
        i += 1
    if not (i < n and text[i] == "@"):
        return False
    i += 1
    if i < n and text[i] == ".":
        return False
    ok = False
    while i < n and (_isalnum(text[i]) or text[i] in "._-+"):
        if text[i] == "." and n - i > 1:
            ok = True
        i += 1
    return ok if i == n else False


_SMARTIES = (
    ("'", "'s|", "rsquo", 0),
    ("'", "'t|", "rsquo", 0),
    ("'", "'re|", "rsquo", 0),
    ("'", "'ll|", "rsquo", 0),
    ("'", "'ve|", "rsquo", 0),
    ("'", "'m|", "rsquo", 0),
    ("'", "'d|", "rsquo", 0),
    ("-", "---", "mdash", 2),
    ("-", "--", "ndash", 1),
    (".", "...", "hellip", 2),
    (".", ". . .", "hellip", 4),
    ("(", "(c)", "copy", 2),
    ("(", "(r)", "reg", 2),
    ("(", "(tm)", "trade", 3),
    ("3", "|3/4|", "frac34", 2),
    ("3", "|3/4ths|", "frac34", 2),
    ("1", "|1/2|", "frac12", 2),
    ("1", "|1/4|", "frac14", 2),
    ("1", "|1/4th|", "frac14", 2),
    ("&", "&#0;", None, 3),
)

_ESCAPABLE = ">#.-+{}]![*_\\()`"


@dataclass
class _Ref:
    link: str = ""
    title: str = ""
    height: int = 0
    width: int = 0
    tag: str = ""


class SpanRenderer:
    """Turns a buffer of inline markdown into html, one paragraph at a time."""

    def __init__(self, flags: FlagSet | None = None, footnotes: FootnoteList | None = None,
                 callbacks: Callbacks | None = None, ref_prefix: str | None = None) -> None:
        self.flags = flags.copy() if flags is not None else FlagSet()
        self.footnotes = footnotes if footnotes is not None else FootnoteList()
        self.callbacks = callbacks if callbacks is not None else Callbacks()
        self.ref_prefix = ref_prefix
        self.queue = SpanQueue()
        self.last: str | None = None
        self._esc: list[str] = []
        self._in = ""
        self._isp = 0

    # -- output ------------------------------------------------------------

    @property
    def out(self) -> str:
        """Everything rendered and flushed so far."""
        return self.queue.out

    def write(self, s: str) -> None:
        """Queue literal html."""
        self.queue.string(s)

    def _cputc(self, c: str | None) -> None:
        if c is None:
            return
        self.write({"&": "&amp;", ">": "&gt;", "<": "&lt;"}.get(c, c))

    def code(self, s: str) -> None:
        """Queue text as code: only <, > and & are escaped."""
        i, n = 0, len(s)
        while i < n:
            c = s[i]
            if c == EOLN:
                self.write("  ")
            elif c == "\\" and i < n - 1 and self._escaped(s[i + 1]):
                i += 1
                self._cputc(s[i])
            else:
                self._cputc(c)
            i += 1

    def emblock(self) -> str:
        """Resolve queued emphasis and append the result to `out`."""
        return self.queue.flush()

    # -- input cursor --------------------------------------------------------

    def push(self, text: str) -> None:
        """Append text to the input buffer."""
        self._in += text

    def _peek(self, i: int) -> str | None:
        i += self._isp - 1
        return self._in[i] if 0 <= i < len(self._in) else None

    def _pull(self) -> str | None:
        if self._isp < len(self._in):
            c = self._in[self._isp]
            self._isp += 1
            return c
        return None

    def _seek(self, pos: int) -> None:
        self._isp = pos
        self.last = None

    def _shift(self, i: int) -> None:
        if self._isp + i >= 0:
            self._isp += i

    def _isthisspace(self, i: int) -> bool:
        c = self._peek(i)
        if c is None:
            return True
        if ord(c) >= 0x80:
            return False
        return c in _SPACE or c < " "

    def _isthisalnum(self, i: int) -> bool:
        return _isalnum(self._peek(i))

    def _isthisnonword(self, i: int) -> bool:
        return self._isthisspace(i) or _ispunct(self._peek(i))

    def _escaped(self, c: str) -> bool:
        return any(c in s for s in self._esc)

    # -- reparsing -------------------------------------------------------------

    def reparse(self, text: str, flags: FlagSet | None = None,
                escapes: str | None = None) -> None:
        """Render `text` in a sub-renderer and queue its html here."""
        sub = SpanRenderer(self.flags, self.footnotes, self.callbacks, self.ref_prefix)
        if flags is not None:
            sub.flags.update(flags)
        sub._esc = ([escapes] if escapes else []) + self._esc
        sub.push(text)
        sub.text()
        sub.emblock()
        self.write(sub.out)
        self.last = sub.last

    # -- urls and links ------------------------------------------------------

    def _puturl(self, s: str, display: bool) -> None:
        if s and s[0] == "<" and s[-1] == ">":
            s = s[1:-1]
        i, n = 0, len(s)
        while i < n:
            c = s[i]
            i += 1
            if c == "\\" and i < n:
                c = s[i]
                i += 1
                if not (_ispunct(c) or _isspace(c)):
                    self.queue.char("\\")
            if c == "&":
                self.write("&amp;")
            elif c == "<":
                self.write("&lt;")
            elif c == '"':
                self.write("%22")
            elif _isalnum(c) or _ispunct(c) or (display and _isspace(c)):
                self.queue.char(c)
            elif c == EOLN:
                self.write("  ")
            else:
                self.write("".join(f"%{b:02X}" for b in c.encode("utf-8")))

    def _eatspace(self) -> str | None:
        while (c := self._peek(1)) is not None and _isspace(c):
            self._pull()
        return c

    def _parenthetical(self, opener: str, closer: str) -> int | None:
        indent, size = 1, 0
        while indent:
            c = self._pull()
            if c is None:
                return None
            if c == "\\" and self._peek(1) in (opener, closer):
                size += 1
                self._pull()
            elif c == opener:
                indent += 1
            elif c == closer:
                indent -= 1
            size += 1
        return size - 1 if size else 0

    def _linkylabel(self) -> str | None:
        start = self._isp
        size = self._parenthetical("[", "]")
        return None if size is None else self._in[start:start + size]

    def _linkytitle(self, quote: str, ref: _Ref) -> bool:
        whence = title = self._isp
        while (c := self._pull()) is not None:
            e = self._isp
            if c == quote and self._eatspace() == ")":
                ref.title = self._in[title + 1:title + 1 + (e - title) - 2]
                return True
        self._seek(whence)
        return False

    def _linkysize(self, ref: _Ref) -> bool:
        whence = self._isp
        height = width = 0
        if _isspace(self._peek(0)):
            self._pull()
            c = self._pull()
            while _isdigit(c):
                width = width * 10 + int(c)
                c = self._pull()
            if c == "x":
                c = self._pull()
                while _isdigit(c):
                    height = height * 10 + int(c)
                    c = self._pull()
                if _isspace(c):
                    c = self._eatspace()
                if c == ")" or (c in ("'", '"') and self._linkytitle(c, ref)):
                    ref.height, ref.width = height, width
                    return True
        self._seek(whence)
        return False

    def _linkybroket(self, image: bool, ref: _Ref) -> bool:
        start, size = self._isp, 0
        while (c := self._pull()) != ">":
            if c is None:
                return False
            if c == "\\" and _ispunct(self._peek(2)):
                size += 1
                self._pull()
            size += 1
        ref.link = self._in[start:start + size]
        c = self._eatspace()
        if c in ("'", '"') and self._linkytitle(c, ref):
            good = True
        elif image and c == "=" and self._linkysize(ref):
            good = True
        else:
            good = c == ")"
        if good:
            if self._peek(1) == ")":
                self._pull()
            ref.link = ref.link.rstrip(_SPACE)
        return good

    def _linkyurl(self, image: bool, ref: _Ref) -> bool:
        c = self._eatspace()
        if c is None:
            return False
        trim = False
        if c == "<":
            self._pull()
            if not self.flags.isset(Flag.COMPAT_1):
                return self._linkybroket(image, ref)
            trim = True
        start, size = self._isp, 0
        while (c := self._peek(1)) != ")":
            if c is None:
                return False
            if c in ('"', "'") and self._linkytitle(c, ref):
                break
            if image and c == "=" and self._linkysize(ref):
                break
            if c == "\\" and _ispunct(self._peek(2)):
                size += 1
                self._pull()
            self._pull()
            size += 1
        if self._peek(1) == ")":
            self._pull()
        ref.link = self._in[start:start + size].rstrip(_SPACE)
        if trim and ref.link.endswith(">"):
            ref.link = ref.link[:-1]
        return True

    def _printlinkyref(self, tag: _LinkyType, link: str) -> None:
        if self.flags.isset(Flag.IS_LABEL):
            return
        self.write(tag.link_pfx or "")
        cb = self.callbacks
        if tag.is_url:
            edit = cb.url(link, cb.data) if cb.url else None
            self._puturl(edit if edit else link[len(tag.pat):], False)
        else:
            self.reparse(link[len(tag.pat):], FlagSet([Flag.TAGTEXT]))
        self.write(tag.link_sfx or "")
        if cb.flags and (edit := cb.flags(link, cb.data)):
            self.write(" " + edit)

    def _prefix(self) -> str:
        return self.ref_prefix or "fn"

    def _extra_linky(self, text: str, ref: Footnote) -> bool:
        if ref.referenced:
            return False
        if self.flags.isset(Flag.IS_LABEL):
            self.reparse(text, _LINK.flagset())
        else:
            ref.referenced = True
            self.footnotes.reference += 1
            ref.refnumber = n = self.footnotes.reference
            p = self._prefix()
            self.write(f'<sup id="{p}ref:{n}"><a href="#{p}:{n}" rel="footnote">{n}</a></sup>')
        return True

    def _linkyformat(self, text: str, image: bool, ref: _Ref | Footnote) -> bool:
        f = self.flags
        if image:
            tag = _IMAGE
        elif (special := _pseudo(ref.link)) is not None:
            if f.isset(Flag.NO_EXT) or f.isset(Flag.STRICT) or f.isset(Flag.SAFELINK):
                return False
            tag = special
        elif f.isset(Flag.SAFELINK) and not f.isset(Flag.STRICT) and not _safelink(ref.link):
            return False
        else:
            tag = _LINK
        if any(f.isset(flag) for flag in tag.refuse):
            return False

        if f.isset(Flag.IS_LABEL):
            self.reparse(text, tag.flagset())
        elif tag.link_pfx:
            self._printlinkyref(tag, ref.link)
            if tag.wxh:
                if ref.height:
                    self.write(f' height="{ref.height}"')
                if ref.width:
                    self.write(f' width="{ref.width}"')
            if ref.title or (f.isset(Flag.ALT_AS_TITLE) and Flag.ALT_AS_TITLE in tag.flags):
                self.write(' title="')
                self.reparse(ref.title or text, FlagSet([Flag.TAGTEXT]))
                self.queue.char('"')
            self.write(tag.text_pfx or "")
            self.reparse(text, tag.flagset())
            self.write(tag.text_sfx or "")
        else:
            self.write(ref.link[len(tag.pat):])
        return True

    def _linkylinky(self, image: bool) -> bool:
        start = self._isp
        status = False
        name = self._linkylabel()
        if name is not None:
            if self._peek(1) == "(":
                self._pull()
                key = _Ref()
                if self._linkyurl(image, key):
                    status = self._linkyformat(name, image, key)
            else:
                mark = self._isp
                extra = False
                tag: str | None = ""
                if _isspace(self._peek(1)):
                    self._pull()
                if self._peek(1) == "[":
                    self._pull()
                    tag = self._linkylabel()
                    good = tag is not None
                else:
                    self._seek(mark)
                    good = not self.flags.isset(Flag.COMPAT_1)
                    if (self.flags.isset(Flag.EXTRA_FOOTNOTE)
                            and not self.flags.isset(Flag.STRICT)
                            and not image and name.startswith("^")):
                        extra = True
                if good:
                    ref = self.footnotes.find(tag or name)
                    if ref is not None:
                        status = (self._extra_linky(name, ref) if extra
                                  else self._linkyformat(name, image, ref))
        if not status:
            self._seek(start)
        return status

    def _mangle(self, s: str) -> None:
        for c in s:
            code = ord(c)
            self.write("&#" + (f"x{code:02x};" if random.random() < 0.5 else f"{code:02d};"))

    def _process_possible_link(self, size: int) -> bool:
        if self.flags.isset(Flag.NOLINKS):
            return False
        text = self._in[self._isp:self._isp + size]
        mailto = 0
        if size > 7 and text.lower().startswith("mailto:"):
            address, mailto = True, 7
        else:
            address = _maybe_address(text)
        if address:
            self.write('<a href="')
            if not mailto:
                self._mangle("mailto:")
            self._mangle(text)
            self.write('">')
            self._mangle(text[mailto:])
            self.write("</a>")
            return True
        if _isautoprefix(text):
            self._printlinkyref(_LINK, text)
            self.queue.char(">")
            self._puturl(text, True)
            self.write("</a>")
            return True
        return False

    @staticmethod
    def _strict_tag_prefix(c: str | None) -> bool:
        return _isalpha(c) or c in ("/", "!", "$", "?")

    def _forbidden_tag(self) -> bool:
        c = (self._peek(1) or "").upper()
        if self.flags.isset(Flag.NOHTML):
            return True
        if c == "A" and self.flags.isset(Flag.NOLINKS) and not self._isthisalnum(2):
            return True
        return (c == "I" and self.flags.isset(Flag.NOIMAGE)
                and self._in[self._isp + 1:self._isp + 3].upper() == "MG"
                and not self._isthisalnum(4))

    def _maybe_tag_or_link(self) -> bool:
        if self.flags.isset(Flag.TAGTEXT):
            return False
        if not self._strict_tag_prefix(self._peek(1)):
            return False
        size = 1
        while (c := self._peek(size + 1)) != ">":
            if c is None or c == "<":
                return False
            if self.flags.isset(Flag.STRICT) and c == "`":
                return False
            size += 1
        if self._process_possible_link(size):
            self._shift(size + 1)
            return True
        if self._forbidden_tag():
            return False
        for i in range(size + 2):
            c = self._peek(i)
            if c == "&" and i > 0:
                self.write("&amp;")
            elif c is not None:
                self.queue.char(c)
        self._shift(size + 1)
        return True

    def _maybe_autolink(self) -> bool:
        size = 0
        while (c := self._peek(size + 1)) is not None:
            if c == "\\":
                if self._peek(size + 2) is not None:
                    size += 1
            elif ord(c) >= 0x80:
                pass
            elif _isspace(c) or c in "'\"()[]{}<>`" or c == EOLN:
                break
            size += 1
        if size > 1 and self._process_possible_link(size):
            self._shift(size)
            return True
        return False

    # -- smartypants -----------------------------------------------------------

    def _smartyquote(self, state: list[int], kind: str) -> bool:
        bit = 0x01 if kind == "s" else 0x02
        if state[0] & bit:
            if self._isthisnonword(1):
                self.write(f"&r{kind}quo;")
                state[0] &= ~bit
                return True
        elif self._isthisnonword(-1) and self._peek(1) is not None:
            self.write(f"&l{kind}quo;")
            state[0] |= bit
            return True
        return False

    def _islike(self, s: str) -> bool:
        if s.startswith("|"):
            if not self._isthisnonword(-1):
                return False
            s = s[1:]
        if not s:
            return False
        n = len(s)
        if s.endswith("|"):
            if not self._isthisnonword(n - 1):
                return False
            n -= 1
        for i in range(1, n):
            c = self._peek(i)
            if c is None or c.lower() != s[i]:
                return False
        return True

    def _smartypants(self, c: str, state: list[int]) -> bool:
        f = self.flags
        if f.isset(Flag.NOPANTS) or f.isset(Flag.TAGTEXT) or f.isset(Flag.IS_LABEL):
            return False
        for c0, pat, entity, shift in _SMARTIES:
            if c == c0 and self._islike(pat):
                if entity:
                    self.write(f"&{entity};")
                self._shift(shift)
                return True
        if c == "'":
            return self._smartyquote(state, "s")
        if c == '"':
            return self._smartyquote(state, "d")
        if c == "`" and self._peek(1) == "`":
            j = 2
            while (d := self._peek(j)) is not None:
                if d == "\\":
                    j += 2
                elif d == "`":
                    break
                elif d == "'" and self._peek(j + 1) == "'":
                    self.write("&ldquo;")
                    self.reparse(self._in[self._isp + 1:self._isp + 1 + j - 2])
                    self.write("&rdquo;")
                    self._shift(j + 1)
                    return True
                else:
                    j += 1
        return False

    # -- ticks and math ------------------------------------------------------

    def _nrticks(self, offset: int, tickchar: str) -> int:
        tick = 0
        while self._peek(offset + tick) == tickchar:
            tick += 1
        return tick

    def _matchticks(self, tickchar: str, ticks: int) -> tuple[int, int]:
        subsize = subtick = 0
        size = 0
        while (c := self._peek(size + ticks)) is not None:
            if c == tickchar:
                count = self._nrticks(size + ticks, tickchar)
                if count == ticks:
                    return size, ticks
                if subtick < count < ticks:
                    subsize, subtick = size, count
                size += count
            size += 1
        if subsize:
            return subsize, subtick
        return 0, ticks

    def _codespan(self, size: int) -> None:
        i = 0
        if size > 1 and self._peek(size - 1) == " ":
            size -= 1
        if self._peek(0) == " ":
            i, size = 1, size - 1
        start = self._isp + i - 1
        self.write("<code>")
        self.code(self._in[start:start + size])
        self.write("</code>")

    def _delspan(self, size: int) -> None:
        self.write("<del>")
        start = self._isp - 1
        self.reparse(self._in[start:start + size])
        self.write("</del>")

    def _tickhandler(self, tickchar: str, minticks: int, allow_space: bool,
                     spanner: Callable[[int], None]) -> bool:
        tick = self._nrticks(0, tickchar)
        if not allow_space and _isspace(self._peek(tick)):
            return False
        if tick < minticks:
            return False
        size, endticks = self._matchticks(tickchar, tick)
        if not size:
            return False
        if endticks < tick:
            size += tick - endticks
            tick = endticks
        self._shift(tick)
        spanner(size)
        self._shift(size + tick - 1)
        return True

    def _mathhandler(self, e1: str, e2: str) -> bool:
        i = 1
        while self._peek(i) is not None:
            if self._peek(i) == e1 and self._peek(i + 1) == e2:
                self._cputc(self._peek(-1))
                self._cputc(self._peek(0))
                for _ in range(i + 1):
                    self._cputc(self._pull())
                return True
            i += 1
        return False

    # -- the main loop ---------------------------------------------------------

    def _superscript(self, c: str) -> None:
        f = self.flags
        last = self.last
        if (f.isset(Flag.NOSUPERSCRIPT) or f.isset(Flag.STRICT) or f.isset(Flag.TAGTEXT)
                or last is None
                or ((_ispunct(last) or _isspace(last)) and last != ")")
                or self._isthisspace(1)):
            self.queue.char(c)
            return
        sup = self._isp
        if self._peek(1) == "(":
            here = self._isp
            self._pull()
            length = self._parenthetical("(", ")")
            if length is None or length <= 0:
                self._seek(here)
                self.queue.char(c)
                return
            sup += 1
        else:
            length = 0
            while self._isthisalnum(1 + length):
                length += 1
            if not length:
                self.queue.char(c)
                return
            self._shift(length)
        self.write("<sup>")
        self.reparse(self._in[sup:sup + length], None, "()")
        self.write("</sup>")

    def _backslash(self) -> None:
        f = self.flags
        c = self._pull()
        if c is None:
            self.queue.char("\\")
        elif c == "&":
            self.write("&amp;")
        elif c == "<":
            nxt = self._peek(1)
            if nxt is None or _isspace(nxt):
                self.write("&lt;")
            else:
                self.queue.char("\\")
                self._shift(-1)
        elif c == "^" and f.isset(Flag.NOSUPERSCRIPT):
            self.queue.char("\\")
            self._shift(-1)
        elif c == "^":
            self.queue.char(c)
        elif c in ":|":
            if f.isset(Flag.NOTABLES) or f.isset(Flag.STRICT):
                self.queue.char("\\")
                self._shift(-1)
            else:
                self.queue.char(c)
        else:
            if (c in "[(" and f.isset(Flag.LATEX) and not f.isset(Flag.STRICT)
                    and self._mathhandler("\\", ")" if c == "(" else "]")):
                return
            if self._escaped(c) or c in _ESCAPABLE:
                self.queue.char(c)
            else:
                self.queue.char("\\")
                self._shift(-1)

    def text(self) -> None:
        """Render the whole input buffer into the queue, then empty the buffer."""
        f = self.flags
        q = self.queue
        state = [0]
        while True:
            tagtext = f.isset(Flag.TAGTEXT)
            if (f.isset(Flag.AUTOLINK) and not f.isset(Flag.STRICT)
                    and _isalpha(self._peek(1)) and not tagtext):
                self._maybe_autolink()
            c = self._pull()
            if c is None:
                break
            if self._smartypants(c, state):
                continue
            if c == "\0":
                continue
            if c == EOLN:
                self.write("  " if tagtext else "<br/>")
            elif c == ">":
                self.write("&gt;" if tagtext else c)
            elif c == '"':
                self.write("&quot;" if tagtext else c)
            elif c == "!":
                if self._peek(1) == "[":
                    self._pull()
                    if tagtext or not self._linkylinky(True):
                        self.write("![")
                else:
                    q.char(c)
            elif c == "[":
                if tagtext or not self._linkylinky(False):
                    q.char(c)
            elif c == "^":
                self._superscript(c)
            elif c in "_*":
                if (c == "_" and not f.isset(Flag.STRICT)
                        and self._isthisalnum(-1) and self._isthisalnum(1)):
                    q.char(c)
                elif self._isthisspace(-1) and self._isthisspace(1):
                    q.char(c)
                elif tagtext:
                    q.char(c)
                else:
                    rep = 1
                    while self._peek(1) == c:
                        self._pull()
                        rep += 1
                    q.emphasis(c, rep)
            elif c == "~":
                if (f.isset(Flag.NOSTRIKETHROUGH) or f.isset(Flag.STRICT) or tagtext
                        or not self._tickhandler(c, 2, False, self._delspan)):
                    q.char(c)
            elif c == "`":
                if tagtext or not self._tickhandler(c, 1, True, self._codespan):
                    q.char(c)
            elif c == "\\":
                self._backslash()
            elif c == "<":
                if not self._maybe_tag_or_link():
                    if f.isset(Flag.STRICT) and self._strict_tag_prefix(self._peek(1)):
                        q.char(c)
                    else:
                        self.write("&lt;")
            elif c == "&":
                j = 2 if self._peek(1) == "#" else 1
                while self._isthisalnum(j):
                    j += 1
                self.write("&amp;" if self._peek(j) != ";" else c)
            else:
                if c == "$" and f.isset(Flag.LATEX) and not f.isset(Flag.STRICT) \
                        and self._peek(1) == "$":
                    self._pull()
                    if self._mathhandler("$", "$"):
                        continue
                    q.char("$")
                self.last = c
                q.char(c)
        self._in = ""
        self._isp = 0


def render_line(text: str, flags: FlagSet | None = None) -> str:
    """Render a single line of inline markdown to html."""
    renderer = SpanRenderer(flags)
    renderer.push(text)
    renderer.text()
    renderer.emblock()
    return renderer.out