import pytest

from discountpy.emmatch import Block, BlockType, SpanQueue


def _emphasised(char, count, word):
    q = SpanQueue()
    q.emphasis(char, count)
    q.string(word)
    q.emphasis(char, count)
    return q.flush()


def test_single_emphasis():
    assert _emphasised("*", 1, "a") == "<em>a</em>"


def test_double_emphasis():
    assert _emphasised("_", 2, "a") == "<strong>a</strong>"


def test_plain_text_passes_through():
    q = SpanQueue()
    q.string("hello world")
    assert q.flush() == "hello world"


@pytest.mark.parametrize("count", [1, 2, 3])
def test_unmatched_emphasis_becomes_text(count):
    q = SpanQueue()
    q.emphasis("*", count)
    q.string("abc")
    assert q.flush() == "*" * count + "abc"


def test_different_characters_do_not_pair():
    q = SpanQueue()
    q.emphasis("*", 1)
    q.char("a")
    q.emphasis("_", 1)
    assert q.flush() == "*a_"


def test_nested_emphasis_is_balanced():
    q = SpanQueue()
    q.emphasis("*", 1)
    q.string("a ")
    q.emphasis("*", 2)
    q.string("b")
    q.emphasis("*", 2)
    q.string(" c")
    q.emphasis("*", 1)
    result = q.flush()
    assert result.count("<em>") == result.count("</em>") == 1
    assert result.count("<strong>") == result.count("</strong>") == 1
    assert "*" not in result


def test_flush_accumulates_output_and_empties_queue():
    q = SpanQueue()
    q.string("x")
    q.flush()
    assert q.blocks == []
    q.string("y")
    q.flush()
    assert q.out == "xy"


def test_emphasis_queues_marker_and_text_block():
    q = SpanQueue()
    q.emphasis("_", 2)
    assert q.blocks == [Block(BlockType.UNDER, 2, "_"), Block()]


def test_block_fill_leaves_text_blocks_alone():
    block = Block(text="abc", count=3, char="*")
    block.fill()
    assert block.text == "abc"
    marker = Block(BlockType.STAR, 2, "*", "x")
    marker.fill()
    assert (marker.text, marker.count) == ("x**", 0)