"""The closed set of operations a Document understands."""

from enum import Enum
from types import MappingProxyType
from typing import Mapping, Union


class Operation(Enum):
    """Document operations; each value is the name of the Document method."""
    INSERT_CHAR = "insert_char"
    DELETE_FORWARD = "delete_forward"
    DELETE_BACKWARD = "delete_backward"
    PREV_CHAR = "prev_char"
    NEXT_CHAR = "next_char"
    PREV_WORD = "prev_word"
    NEXT_WORD = "next_word"
    LINE_START = "line_start"
    LINE_END = "line_end"
    PREV_LINE = "prev_line"
    NEXT_LINE = "next_line"
    DOCUMENT_START = "document_start"
    DOCUMENT_END = "document_end"
    MOVE_TO = "move_to"

    @property
    def edits(self) -> bool:
        """True for operations that can change the text."""
        return self in _EDITING


_EDITING = frozenset({Operation.INSERT_CHAR, Operation.DELETE_FORWARD, Operation.DELETE_BACKWARD})

OPERATIONS_BY_NAME: Mapping[str, Operation] = MappingProxyType(
    {operation.value: operation for operation in Operation}
)


def resolve_operation(operation: Union[Operation, str]) -> Operation:
    """Look up an operation by enum member or method name.

    Raises:
        KeyError: for an unknown name.
    """
    if isinstance(operation, Operation):
        return operation
    return OPERATIONS_BY_NAME[operation]
