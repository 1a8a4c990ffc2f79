"""Test exporting a document back to plain text."""

from mentry.document import Document


def test_round_trip_keeps_empty_paragraphs():
    """Test empty and trailing paragraphs survive a round trip."""
    for text in ["", "a", "a\n\nb", "a\n\nb\n", "\n", "one two\nthree"]:
        assert Document(text).to_text() == text


def test_whitespace_is_normalized():
    """Test whitespace runs collapse to single spaces on the way in."""
    document = Document("  lots   of \t space  \nnext   line")
    assert document.to_text() == "lots of space\nnext line"


def test_wrapped_paragraph_exports_as_one_line():
    document = Document("aaa bbb ccc ddd eee", width=10, indent=0)
    assert len(document.chain) == 3
    assert document.to_text() == "aaa bbb ccc ddd eee"


def test_line_texts_are_restartable():
    """Test the line view can be iterated more than once."""
    document = Document("aaa bbb ccc ddd eee", width=10, indent=0)
    texts = document.to_paragraphs()
    assert len(texts) == 3
    assert list(texts) == ["aaa bbb", "ccc ddd", "eee"]
    assert list(texts) == list(texts)


def test_line_texts_follow_edits():
    document = Document("abc")
    texts = document.to_paragraphs()
    document.insert_char("x", at=0)
    assert list(texts) == ["xabc"]


def test_only_last_line_lacks_paragraph_end():
    document = Document("a\nb\nc")
    flags = [node.words.eop for node in document.iterate_lines()]
    assert flags == [True, True, False]
