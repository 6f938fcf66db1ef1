"""Markdown rendering to HTML: inline spans, block trees, flags and option parsing."""

__version__ = "0.1.0"

__all__ = [
    "document",
    "dumptree",
    "emmatch",
    "flags",
    "gethopt",
    "gfm",
    "html",
    "inline",
]