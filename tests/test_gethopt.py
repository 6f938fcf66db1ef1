import pytest

from discountpy.gethopt import HOpt, HoptContext, HoptError, hoptdescribe, hoptusage

OPTS = [
    HOpt(0, "css", None, "file", "css file"),
    HOpt(1, "header", None, "file", "header file"),
    HOpt(2, None, "a", None, "option a (no arg)"),
    HOpt(3, None, "b", "arg", "option B (with arg)"),
    HOpt(4, "help", "?", None, "help message"),
]


def test_single_char_options_and_remaining():
    ctx = HoptContext(["prog", "-a", "-b", "val", "x"])
    assert list(ctx.options(OPTS)) == [(OPTS[2], None), (OPTS[3], "val")]
    assert ctx.remaining() == ["x"]


def test_combined_options_with_attached_argument():
    ctx = HoptContext(["prog", "-abval", "rest"])
    assert list(ctx.options(OPTS)) == [(OPTS[2], None), (OPTS[3], "val")]
    assert ctx.remaining() == ["rest"]


def test_word_options_single_and_double_dash():
    ctx = HoptContext(["prog", "-css", "style.css", "--header", "h.txt", "-help"])
    assert list(ctx.options(OPTS)) == [
        (OPTS[0], "style.css"),
        (OPTS[1], "h.txt"),
        (OPTS[4], None),
    ]
    assert ctx.remaining() == []


@pytest.mark.parametrize("terminator", ["-", "--"])
def test_terminator_is_consumed(terminator):
    ctx = HoptContext(["prog", "-a", terminator, "-a"])
    assert list(ctx.options(OPTS)) == [(OPTS[2], None)]
    assert ctx.remaining() == ["-a"]


def test_non_option_stops_without_consuming():
    ctx = HoptContext(["prog", "file", "-a"])
    assert ctx.next_option(OPTS) is None
    assert ctx.remaining() == ["file", "-a"]


def test_illegal_option_raises():
    ctx = HoptContext(["prog", "-z"])
    with pytest.raises(HoptError):
        ctx.next_option(OPTS)
    assert ctx.optopt == "z"


def test_unknown_double_dash_word_scans_dash():
    ctx = HoptContext(["prog", "--zz"])
    with pytest.raises(HoptError):
        ctx.next_option(OPTS)
    assert ctx.optopt == "-"


def test_missing_argument_raises():
    ctx = HoptContext(["prog", "-b"])
    with pytest.raises(HoptError):
        ctx.next_option(OPTS)
    assert ctx.optarg is None


def test_errors_reported_on_stderr(capsys):
    ctx = HoptContext(["prog", "-z"], report_errors=True)
    with pytest.raises(HoptError):
        ctx.next_option(OPTS)
    assert "prog: illegal option -- z" in capsys.readouterr().err


def test_errors_silent_by_default(capsys):
    ctx = HoptContext(["prog", "-z"])
    with pytest.raises(HoptError):
        ctx.next_option(OPTS)
    assert capsys.readouterr().err == ""


def test_short_usage():
    opts = [
        HOpt(0, None, "a", None, "a"),
        HOpt(1, None, "b", "x", "b"),
        HOpt(2, "css", None, "file", "css"),
    ]
    assert hoptusage("p", opts, "[file]") == "usage: p [-a] [-b x] [-css file] [file]\n"


def test_verbose_usage_lists_every_option():
    text = hoptdescribe("prog", OPTS, "[file]", True)
    lines = text.split("\n")
    assert lines[0] == "usage: prog [options] [file]"
    assert lines[1] == "options:"
    option_lines = lines[2:2 + len(OPTS)]
    for line, opt in zip(option_lines, OPTS):
        assert line.endswith(" " + opt.optdesc)
    widths = {line.index(opt.optdesc) for line, opt in zip(option_lines, OPTS)}
    assert len(widths) == 1
    assert text.endswith("\n\n")