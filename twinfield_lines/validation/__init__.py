"""Attribute rules for transaction lines."""

from twinfield_lines.validation.rules import (
    GUARDED_FIELDS,
    RULES,
    FieldRule,
    LineState,
    check_field,
    check_line_type,
    is_allowed,
    legality_matrix,
    violations,
)

__all__ = [
    "FieldRule",
    "GUARDED_FIELDS",
    "LineState",
    "RULES",
    "check_field",
    "check_line_type",
    "is_allowed",
    "legality_matrix",
    "violations",
]
