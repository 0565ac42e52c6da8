"""Transaction line models."""

from twinfield_lines.models.base import Dimension, Money
from twinfield_lines.models.enums import (
    DebitCredit,
    DimensionKind,
    LineType,
    MatchStatus,
    PerformanceType,
    TransactionCategory,
)
from twinfield_lines.models.line_kind import (
    BANK,
    CASH,
    JOURNAL,
    LINE_KINDS,
    PURCHASE,
    SALES,
    LineKind,
    line_kind_for,
)
from twinfield_lines.models.line import Line
from twinfield_lines.models.transaction import Transaction

__all__ = [
    "BANK",
    "CASH",
    "DebitCredit",
    "Dimension",
    "DimensionKind",
    "JOURNAL",
    "LINE_KINDS",
    "Line",
    "LineKind",
    "LineType",
    "MatchStatus",
    "Money",
    "PURCHASE",
    "PerformanceType",
    "SALES",
    "Transaction",
    "TransactionCategory",
    "line_kind_for",
]
