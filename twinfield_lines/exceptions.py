"""Custom exception hierarchy for twinfield-lines."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from twinfield_lines.models.base import Dimension
    from twinfield_lines.models.enums import (
        LineType,
        MatchStatus,
        TransactionCategory,
    )


class TwinfieldLinesError(Exception):
    """Base exception for all twinfield-lines errors."""


class LineValidationError(TwinfieldLinesError):
    """Raised when an attribute value is not allowed on a line."""


class InvalidFieldForLineTypeError(LineValidationError):
    """Raised when a field cannot be set for the line's current type."""

    def __init__(self, field: str, line_type: LineType) -> None:
        self.field = field
        self.line_type = line_type
        super().__init__(f"Field '{field}' is not allowed on a line of type '{line_type.value}'")


class InvalidDimensionForLineTypeError(LineValidationError):
    """Raised when dim2 or dim3 is set on a line type that has no such dimension."""

    def __init__(self, dimension: int, line_type: LineType) -> None:
        self.dimension = dimension
        self.line_type = line_type
        super().__init__(
            f"Dimension {dimension} is not allowed on a line of type '{line_type.value}'"
        )


class InvalidLineTypeForTransactionError(LineValidationError):
    """Raised when a line type is not supported by the transaction category."""

    def __init__(self, line_type: LineType, category: TransactionCategory) -> None:
        self.line_type = line_type
        self.category = category
        super().__init__(
            f"Line type '{line_type.value}' is not allowed on a {category.value} transaction"
        )


class InvalidMatchStatusForLineTypeError(LineValidationError):
    """Raised when the match status conflicts with the status pinned by the line type."""

    def __init__(self, match_status: MatchStatus, line_type: LineType) -> None:
        self.match_status = match_status
        self.line_type = line_type
        super().__init__(
            f"Match status '{match_status.value}' is not allowed on a line of type '{line_type.value}'"
        )


class InvalidDimensionKindError(LineValidationError):
    """Raised when a dimension of the wrong kind is put in a dimension slot."""

    def __init__(self, position: int, dimension: Dimension) -> None:
        self.position = position
        self.dimension = dimension
        super().__init__(
            f"A {dimension.kind.value} dimension cannot be used as dimension {position}"
        )


class LineAttachmentError(TwinfieldLinesError):
    """Raised when the link between a line and its transaction is misused."""


class AlreadyAttachedError(LineAttachmentError):
    """Raised when a line that already belongs to a transaction is attached again."""

    def __init__(self) -> None:
        super().__init__("Attempting to set a transaction while the transaction is already set")


class DetachedLineError(LineAttachmentError):
    """Raised when the transaction of a line is requested but none is bound."""

    def __init__(self) -> None:
        super().__init__("Line is not attached to a transaction")


class TransactionCategoryMismatchError(LineAttachmentError):
    """Raised when a line is attached to a transaction of another category."""

    def __init__(self, expected: TransactionCategory, actual: TransactionCategory) -> None:
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Line expects a {expected.value} transaction, got a {actual.value} transaction"
        )


class ConfigurationError(TwinfieldLinesError):
    """Raised when configuration is invalid or missing."""
