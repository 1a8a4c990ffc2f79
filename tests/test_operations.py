"""Test the operation table and dispatch."""

import pytest

from mentry.document import Document, RepaintHint
from mentry.operations import OPERATIONS_BY_NAME, Operation, resolve_operation


def test_every_operation_is_a_document_method():
    for operation in Operation:
        assert callable(getattr(Document, operation.value))


def test_resolve_by_name_and_member():
    assert resolve_operation("insert_char") is Operation.INSERT_CHAR
    assert resolve_operation(Operation.NEXT_WORD) is Operation.NEXT_WORD
    with pytest.raises(KeyError):
        resolve_operation("launch_rockets")


def test_operation_table_is_read_only():
    with pytest.raises(TypeError):
        OPERATIONS_BY_NAME["undo"] = Operation.INSERT_CHAR


def test_editing_operations():
    editing = {operation for operation in Operation if operation.edits}
    assert editing == {Operation.INSERT_CHAR, Operation.DELETE_FORWARD, Operation.DELETE_BACKWARD}


def test_perform_dispatches_with_arguments():
    document = Document("abc")
    assert document.perform("insert_char", "x", 3) is RepaintHint.FULL
    assert document.to_text() == "abcx"
    assert document.perform(Operation.LINE_START) is RepaintHint.CURSOR
    assert document.perform("prev_char") is RepaintHint.NOOP
