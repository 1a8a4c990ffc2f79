"""Random editing sessions must never break the document's bookkeeping."""

import random

import pytest

from mentry.document import Document, RepaintHint
from mentry.errors import InvariantViolation
from mentry.operations import Operation

NAVIGATION = [
    Operation.PREV_CHAR, Operation.NEXT_CHAR, Operation.PREV_WORD, Operation.NEXT_WORD,
    Operation.LINE_START, Operation.LINE_END, Operation.PREV_LINE, Operation.NEXT_LINE,
    Operation.DOCUMENT_START, Operation.DOCUMENT_END,
]

TEXT = "lorem ipsum dolor sit amet\ntempor incidid ut labore\n\nsed do eiusmod"

# Every width from 10 to 15 with every indent from 0 to 3
GEOMETRIES = [(width, indent) for width in range(10, 16) for indent in range(4)]


def random_step(document, rng):
    roll = rng.random()
    if roll < 0.45:
        return document.perform(Operation.INSERT_CHAR, rng.choice("abcde  \n"))
    if roll < 0.55:
        return document.perform(Operation.DELETE_FORWARD)
    if roll < 0.7:
        return document.perform(Operation.DELETE_BACKWARD)
    if roll < 0.75:
        return document.perform(Operation.MOVE_TO, rng.randrange(8), rng.randrange(16))
    return document.perform(rng.choice(NAVIGATION))


def snapshot(document):
    words = document.current.words
    return list(words.words), words.cursor, document.to_text()


def insert_then_backspace(document, ch):
    """Type ``ch`` and take it back; the cursor line must be as it was."""
    before = snapshot(document)
    if document.insert_char(ch) is RepaintHint.NOOP:
        assert snapshot(document) == before
        return
    document.check_invariants()
    assert document.delete_backward() is RepaintHint.FULL
    assert snapshot(document) == before


@pytest.mark.parametrize("width, indent", GEOMETRIES)
def test_random_session_keeps_invariants(width, indent):
    """Test width, fill, focus and cursor bookkeeping after every operation."""
    rng = random.Random(width * 10 + indent)
    document = Document(TEXT, width=width, indent=indent)
    document.check_invariants()
    for _ in range(300):
        hint = random_step(document, rng)
        assert isinstance(hint, RepaintHint)
        document.check_invariants()
        text = document.to_text()
        # Whatever was typed can be laid out again at the same geometry
        assert Document(text, width=width, indent=indent).to_text() == text


@pytest.mark.parametrize("width, indent", GEOMETRIES)
def test_insert_then_backspace_is_symmetric(width, indent):
    """Test typing a character and deleting it restores the cursor line exactly."""
    rng = random.Random(1000 + width * 10 + indent)
    document = Document(TEXT, width=width, indent=indent)
    for _ in range(200):
        random_step(document, rng)
        insert_then_backspace(document, rng.choice("xyz  "))
        document.check_invariants()


@pytest.mark.parametrize("seed", [3, 11])
def test_noop_leaves_document_untouched(seed):
    """Test an operation reporting NOOP changed neither text nor cursor."""
    rng = random.Random(seed)
    document = Document(TEXT, width=14, indent=2)
    for _ in range(300):
        before = (document.to_text(), document.cursor_row(), document.cursor_column())
        if random_step(document, rng) is RepaintHint.NOOP:
            assert (document.to_text(), document.cursor_row(), document.cursor_column()) == before


def test_unfilled_line_is_reported():
    """Test the invariant check notices a line with room for the next word."""
    document = Document("aaa bbb ccc", width=8, indent=0)
    assert len(document.chain) == 2
    document.chain.head.words.reset("aaa")
    with pytest.raises(InvariantViolation):
        document.check_invariants()
