"""Test word segmentation, cursor addressing and word migration."""

import pytest

from mentry.errors import InvariantViolation
from mentry.words import CursorIndex, LinearOffset, WordList, WordOffset, as_address


def test_whitespace_runs_collapse():
    """Test that any whitespace run separates exactly two words."""
    words = WordList("  hello \t  world ")
    assert words.words == ["hello", "world"]
    assert words.text == "hello world"
    assert words.size == 11


def test_empty_line_has_one_empty_word():
    """Test the empty line representation."""
    words = WordList()
    assert words.words == [""]
    assert words.is_empty()
    assert words.size == 0
    assert words.is_at_line_start()
    assert words.is_at_line_end()


def test_locate_linear_offsets():
    """Test linear offsets resolve onto words, preferring the end of a word."""
    words = WordList("hello world")
    assert words.locate(LinearOffset(5)) == CursorIndex(0, 5, 5)
    assert words.locate(LinearOffset(6)) == CursorIndex(1, 0, 6)
    assert words.locate(LinearOffset(8)) == CursorIndex(1, 2, 8)


def test_locate_clamps_out_of_range():
    """Test out-of-range addresses clamp to the line."""
    words = WordList("hello world")
    assert words.locate(LinearOffset(99)) == CursorIndex(1, 5, 11)
    assert words.locate(LinearOffset(-3)) == CursorIndex(0, 0, 0)
    assert words.locate(WordOffset(5, 0)) == CursorIndex(1, 5, 11)
    assert words.locate(WordOffset(-1, 3)) == CursorIndex(0, 0, 0)
    assert words.locate(WordOffset(0, 42)) == CursorIndex(0, 5, 5)


def test_word_offset_computes_linear():
    words = WordList("one two three")
    assert words.locate(WordOffset(2, 3)) == CursorIndex(2, 3, 11)


def test_as_address_accepts_ints():
    assert as_address(4) == LinearOffset(4)
    assert as_address(WordOffset(1, 0)) == WordOffset(1, 0)
    with pytest.raises(TypeError):
        as_address("4")


def test_insert_character_inside_word():
    """Test inserting a letter moves the cursor past it."""
    words = WordList("hello")
    words.insert_char("X", WordOffset(0, 2))
    assert words.words == ["heXllo"]
    assert words.cursor == CursorIndex(0, 3, 3)


def test_insert_separator_splits_word():
    """Test the separator splits a word and the cursor starts the second half."""
    words = WordList("helloworld")
    words.insert_char(" ", LinearOffset(5))
    assert words.words == ["hello", "world"]
    assert words.cursor == CursorIndex(1, 0, 6)


def test_insert_separator_at_word_end_creates_empty_word():
    """Test a separator typed after a word leaves an empty word behind it."""
    words = WordList("hello world")
    words.insert_char(" ", LinearOffset(5))
    assert words.words == ["hello", "", "world"]
    assert words.text == "hello  world"
    assert words.export_text() == "hello world"


def test_delete_char_inside_word():
    words = WordList("hello")
    words.delete_char(LinearOffset(1))
    assert words.words == ["hllo"]
    assert words.cursor == CursorIndex(0, 1, 1)


def test_delete_char_at_word_end_joins_words():
    """Test deleting the separator joins two words; the cursor stays put."""
    words = WordList("hello world")
    words.delete_char(LinearOffset(5))
    assert words.words == ["helloworld"]
    assert words.cursor == CursorIndex(0, 5, 5)


def test_delete_char_at_line_end_raises_without_mutating():
    words = WordList("hello")
    with pytest.raises(InvariantViolation):
        words.delete_char(LinearOffset(5))
    assert words.words == ["hello"]


def test_push_last_word_carries_focus():
    """Test the cursor follows the pushed word onto the next line."""
    source = WordList("one two", line_offset=6)
    source.focused = True
    target = WordList("three")

    source.push_last_word_to(target)

    assert source.words == ["one"]
    assert target.words == ["two", "three"]
    assert not source.focused
    assert target.focused
    assert target.cursor == CursorIndex(0, 2, 2)
    assert source.cursor == CursorIndex(0, 3, 3)


def test_push_last_word_keeps_focus_when_cursor_elsewhere():
    source = WordList("one two")
    source.focused = True
    target = WordList("three", line_offset=2)

    source.push_last_word_to(target)

    assert source.focused
    assert not target.focused
    assert source.cursor == CursorIndex(0, 0, 0)
    # The target cursor keeps pointing into "three"
    assert target.cursor == CursorIndex(1, 2, 6)


def test_push_moves_paragraph_end_onto_empty_line():
    source = WordList("one two")
    source.eop = True
    target = WordList()

    source.push_last_word_to(target)

    assert not source.eop
    assert target.eop
    assert target.words == ["two"]


def test_push_paragraph_end_onto_non_empty_line_raises():
    source = WordList("one two")
    source.eop = True
    target = WordList("three")
    with pytest.raises(InvariantViolation):
        source.push_last_word_to(target)
    assert source.words == ["one", "two"]
    assert target.words == ["three"]


def test_pull_first_word():
    """Test pulling words up and handing over the paragraph end."""
    line = WordList("one")
    source = WordList("two three")
    source.eop = True

    assert not line.pull_first_word_from(source)
    assert line.words == ["one", "two"]
    assert source.words == ["three"]
    assert source.eop and not line.eop

    assert line.pull_first_word_from(source)
    assert line.words == ["one", "two", "three"]
    assert source.is_empty()
    assert line.eop and not source.eop


def test_pull_leaving_typed_separator_keeps_paragraph_end():
    """Test a source left holding only an empty word keeps its paragraph end."""
    line = WordList("aaaa")
    source = WordList("bbbbb ")
    source.insert_char(" ", LinearOffset(5))
    assert source.words == ["bbbbb", ""]
    source.eop = True

    assert not line.pull_first_word_from(source)
    assert line.words == ["aaaa", "bbbbb"]
    assert source.words == [""]
    assert source.eop and not line.eop


def test_pull_carries_focus():
    line = WordList("one")
    source = WordList("two three", line_offset=1)
    source.focused = True

    line.pull_first_word_from(source)

    assert line.focused and not source.focused
    assert line.cursor == CursorIndex(1, 1, 5)
    assert source.cursor == CursorIndex(0, 0, 0)


def test_pull_keeps_empty_word_on_receiving_line():
    """Test an empty word is a typed separator, not room to overwrite."""
    line = WordList()
    source = WordList("two")
    line.pull_first_word_from(source)
    assert line.words == ["", "two"]
    assert line.text == " two"


def test_pull_past_paragraph_end_raises():
    line = WordList("one")
    line.eop = True
    with pytest.raises(InvariantViolation):
        line.pull_first_word_from(WordList("two"))


def test_character_and_word_navigation():
    words = WordList("ab cd")
    assert not words.prev_char()
    assert words.next_char()
    assert words.cursor == CursorIndex(0, 1, 1)
    words.next_word()
    assert words.cursor == CursorIndex(1, 0, 3)
    words.next_word()
    assert words.cursor == CursorIndex(1, 0, 3)
    words.to_line_end()
    assert words.is_at_line_end()
    assert not words.next_char()
    words.prev_word()
    assert words.cursor == CursorIndex(0, 0, 0)
