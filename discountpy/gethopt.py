"""Command-line option parsing with single-character and whole-word options."""

from __future__ import annotations

import sys
from dataclasses import dataclass
from typing import Iterator, Sequence


@dataclass(frozen=True)
class HOpt:
    """One option: a word and/or a character, an argument name if it takes one."""

    option: int = 0
    optword: str | None = None
    optchar: str | None = None
    opthasarg: str | None = None
    optdesc: str | None = None


class HoptError(Exception):
    """An unknown option, or an option missing its required argument."""


class HoptContext:
    """Walks an argument vector, returning options one by one."""

    def __init__(self, argv: Sequence[str], report_errors: bool = False) -> None:
        self.argv = list(argv)
        self.report_errors = report_errors
        self.optind = 1
        self.optarg: str | None = None
        self.optopt: str | None = None
        self._optchar = 0
        self._ended = False

    def _fail(self, message: str) -> None:
        if self.report_errors:
            print(f"{self.argv[0]}: {message}", file=sys.stderr)
        raise HoptError(message)

    def next_option(self, opts: Sequence[HOpt]) -> HOpt | None:
        """Return the next option, or None when the options are finished."""
        argv = self.argv
        while True:
            if self._ended or self.optind >= len(argv):
                return None
            self.optarg = None
            self.optopt = None
            arg = argv[self.optind]

            if self._optchar == 0:
                if not arg.startswith("-"):
                    self._ended = True
                    return None
                if arg in ("-", "--"):
                    self._ended = True
                    self.optind += 1
                    return None
                word = arg[2:] if arg.startswith("--") else arg[1:]
                for opt in opts:
                    if opt.optword and opt.optword == word:
                        if opt.opthasarg:
                            nxt = self.optind + 1
                            self.optarg = argv[nxt] if nxt < len(argv) else None
                            self.optind += 2
                        else:
                            self.optind += 1
                        return opt
                self._optchar = 1

            if self._optchar >= len(arg):
                self.optind += 1
                self._optchar = 0
                continue

            c = arg[self._optchar]
            self._optchar += 1
            self.optopt = c

            for opt in opts:
                if opt.optchar != c:
                    continue
                if opt.opthasarg:
                    rest = arg[self._optchar:]
                    if rest:
                        self.optarg = rest
                        self.optind += 1
                    elif self.optind < len(argv) - 1:
                        self.optarg = argv[self.optind + 1]
                        self.optind += 2
                    else:
                        self.optind += 1
                        self._optchar = 0
                        self._fail(f"option requires an argument -- {c}")
                    self._optchar = 0
                elif self._optchar >= len(arg):
                    self.optind += 1
                    self._optchar = 0
                return opt

            self._fail(f"illegal option -- {c}")

    def options(self, opts: Sequence[HOpt]) -> Iterator[tuple[HOpt, str | None]]:
        """Yield (option, argument) pairs until the options are finished."""
        while (opt := self.next_option(opts)) is not None:
            yield opt, self.optarg

    def remaining(self) -> list[str]:
        """The arguments left after the options."""
        return self.argv[self.optind:]


def hoptdescribe(
    pgm: str, opts: Sequence[HOpt], arguments: str | None = None, verbose: bool = False
) -> str:
    """Build a usage message; verbose lists every option with its description."""
    out: list[str] = [f"usage: {pgm}"]

    if verbose:
        if opts:
            out.append(" [options]")
        if arguments:
            out.append(f" {arguments}")
        out.append("\n")
        if opts:
            out.append("options:\n")
        maxoptwidth = max((len(o.optword) for o in opts if o.optword), default=0)
        maxargwidth = max((len(o.opthasarg) for o in opts if o.opthasarg), default=0)
        hasoptchar = any(o.optchar for o in opts)

        for opt in opts:
            if opt.optword:
                out.append(f" -{opt.optword}")
                width = len(opt.optword)
            else:
                width = -2
            out.append(" " * max(0, maxoptwidth - width))

            if opt.optchar:
                out.append(f" -{opt.optchar} ")
            elif hasoptchar:
                out.append("    ")

            if maxargwidth > 0:
                if opt.opthasarg:
                    out.append(f" [{opt.opthasarg}]")
                    width = len(opt.opthasarg)
                else:
                    out.append("   ")
                    width = 0
                out.append(" " * max(0, maxargwidth - width))

            if opt.optdesc:
                out.append(f" {opt.optdesc}")
            out.append("\n")
    else:
        flags = "".join(o.optchar for o in opts if o.optchar and not o.opthasarg)
        if flags:
            out.append(f" [-{flags}]")
        for opt in opts:
            if opt.optchar and opt.opthasarg:
                out.append(f" [-{opt.optchar} {opt.opthasarg}]")
        for opt in opts:
            if opt.optword:
                out.append(f" [-{opt.optword}")
                if opt.opthasarg:
                    out.append(f" {opt.opthasarg}")
                out.append("]")
        if arguments:
            out.append(f" {arguments}")

    out.append("\n")
    return "".join(out)


def hoptusage(pgm: str, opts: Sequence[HOpt], arguments: str | None = None) -> str:
    """The short, one-line usage message."""
    return hoptdescribe(pgm, opts, arguments, False)