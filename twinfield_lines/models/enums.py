"""Enumeration types for transaction lines."""

from enum import Enum


class LineType(str, Enum):
    DETAIL = "detail"
    VAT = "vat"
    TOTAL = "total"


class PerformanceType(str, Enum):
    SERVICES = "services"
    GOODS = "goods"


class MatchStatus(str, Enum):
    AVAILABLE = "available"
    MATCHED = "matched"
    PROPOSED = "proposed"
    NOT_MATCHABLE = "notmatchable"


class DebitCredit(str, Enum):
    DEBIT = "debit"
    CREDIT = "credit"


class DimensionKind(str, Enum):
    """Kind of general ledger element referenced by a dimension.

    dim1 holds a balance sheet or profit and loss account, dim2 a customer,
    supplier or cost center and dim3 a project or asset.
    """

    BALANCE_SHEET = "BAS"
    PROFIT_AND_LOSS = "PNL"
    CUSTOMER = "DEB"
    SUPPLIER = "CRD"
    COST_CENTER = "KPL"
    PROJECT = "PRJ"
    ASSET = "AST"

    @property
    def position(self) -> int:
        """Dimension slot (1, 2 or 3) this kind belongs in."""
        return _POSITIONS[self]


_POSITIONS = {
    DimensionKind.BALANCE_SHEET: 1,
    DimensionKind.PROFIT_AND_LOSS: 1,
    DimensionKind.CUSTOMER: 2,
    DimensionKind.SUPPLIER: 2,
    DimensionKind.COST_CENTER: 2,
    DimensionKind.PROJECT: 3,
    DimensionKind.ASSET: 3,
}


class TransactionCategory(str, Enum):
    JOURNAL = "journal"
    SALES = "sales"
    PURCHASE = "purchase"
    BANK = "bank"
    CASH = "cash"
