# discountpy

discountpy renders Markdown to HTML. Besides the classic inline syntax it
handles a set of optional extensions: tables, fenced code blocks,
extra-style footnotes, superscripts, `~~strikethrough~~`, smart
punctuation, LaTeX pass-through, autolinks, and pseudo-protocol links
(`id:`, `class:`, `abbr:`, `lang:`, `raw:`). It is pure Python with no
dependencies outside the standard library.

## Rendering a line of text

`discountpy.inline.render_line(text, flags)` renders inline markdown:
emphasis, code spans, links and images, entities and escapes. It adds no
block wrappers such as `<p>`:

```python
from discountpy.flags import Flag, FlagSet
from discountpy.inline import render_line

render_line("some *emphasised* text and `code`")
render_line("x^2 and ~~gone~~", FlagSet([Flag.NOPANTS]))
```

Mail addresses in `<...>` or autolinks are written as a mix of decimal and
hexadecimal character entities chosen at random, so their output differs
between runs.

For more control, `SpanRenderer(flags, footnotes, callbacks, ref_prefix)`
does the same work step by step: `push(text)` adds input, `text()` renders
it into the emphasis queue, `emblock()` resolves emphasis and appends the
result to `renderer.out`, and `reparse(text, flags, escapes)` renders a
fragment through a sub-renderer. Reference-style links such as
`[text][tag]` are looked up in the `FootnoteList` passed as `footnotes`.

## Rendering a block tree

`discountpy.html.render_document(doc)` turns a compiled `Document` into
HTML. The blocks are `Paragraph` objects (see `discountpy.document`) with a
`ParagraphType`, a list of `Line`s and child blocks in `down`:

```python
from discountpy.document import ALIGN_PARA, Document, Line, Paragraph, ParagraphType
from discountpy.html import h1_title, render_document

doc = Document(
    code=[
        Paragraph(ParagraphType.HDR, [Line("Hello")], hnumber=1),
        Paragraph(ParagraphType.MARKUP, [Line("some *text*")], align=ALIGN_PARA),
    ],
    compiled=True,
)
html = render_document(doc)   # cached in doc.html after the first call
h1_title(doc)                 # the first level-one header, as tag text
doc.css()                     # text of any STYLE blocks, one line per line
```

`render_document` and `Document.css` raise `ValueError` for a document
that is not marked compiled. `render_blocks(blocks, renderer)` renders a
list of blocks with a given `SpanRenderer`. `set_basename(doc, base)`
puts `base` in front of every link url that starts with `/`. The
`Callbacks` of a document can also rewrite urls, add attributes to links,
name header anchors, or format code blocks.

## GitHub-flavoured input and document headers

`discountpy.gfm.gfm_string(text, flags)` and `gfm_read(stream, flags)`
read text into a `Document`'s `content` lines, turning every line break
into a hard break. If the first three lines start with `%`, they become
the title, author and date, readable with `header_title()`,
`header_author()` and `header_date()` (unless `Flag.NOHEADER` is set):

```python
from discountpy.gfm import gfm_string

doc = gfm_string("% Title\n% Author\n% Date\n\nbody\n")
doc.header_title()   # "Title"
```

## What the package does not do

There is no block parser: nothing turns a document's `content` lines into
the `Paragraph` tree that `render_document` needs, and `gfm_string` /
`gfm_read` leave a document uncompiled. Callers build the tree themselves.
There is also no command-line program.

## Flags

Options are held in a `FlagSet` of `Flag` members (`FlagSet()` is empty).
Helpers in `discountpy.flags`:

- `set_flag_num(flags, bit)` and `clear_flag_num(flags, bit)` change one
  flag; out-of-range numbers and a `None` set are ignored.
- `set_flag_bitmap(flags, bits)` sets every flag whose bit is on.
- `flag_isset(flags, flag)` and `copy_flags(original)` test and copy.
- `flags_are(flags, html)` returns a description of which features are on,
  as plain text or as an HTML table.

## Other tools

- `discountpy.dumptree.dump_tree(blocks, title)` returns a text diagram of
  a block tree, for debugging.
- `discountpy.emmatch.SpanQueue` collects text and emphasis runs and
  `flush()` renders the matched `<em>` / `<strong>` pairs.
- `discountpy.gethopt` parses options that may be single characters
  (`-T`) or whole words (`-toc`, `--toc`). Describe them with `HOpt`, then
  iterate `HoptContext(argv, report_errors).options(opts)` for
  `(option, argument)` pairs; `remaining()` gives the arguments left over.
  Unknown options and missing arguments raise `HoptError`. `hoptusage` and
  `hoptdescribe` return a short or detailed usage message as a string.