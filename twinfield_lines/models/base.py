"""Value objects shared by transaction lines."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation

from twinfield_lines.models.enums import DimensionKind


@dataclass(frozen=True)
class Money:
    """Monetary amount in a single currency.

    The amount is always a ``Decimal``. Integers and numeric strings are
    converted on construction; floats are refused because they cannot hold
    cent values exactly.
    """

    amount: Decimal
    currency: str = "EUR"

    def __post_init__(self) -> None:
        amount = self.amount
        if isinstance(amount, (float, bool)):
            raise TypeError(f"Money amount must be Decimal, int or str, got {type(amount).__name__}")
        if not isinstance(amount, Decimal):
            try:
                amount = Decimal(str(amount))
            except InvalidOperation as exc:
                raise ValueError(f"Invalid money amount: {self.amount!r}") from exc
        if not amount.is_finite():
            raise ValueError(f"Invalid money amount: {self.amount!r}")

        currency = self.currency.upper()
        if len(currency) != 3 or not currency.isalpha():
            raise ValueError(f"Currency must be an ISO 4217 code, got {self.currency!r}")

        # frozen dataclass
        object.__setattr__(self, "amount", amount)
        object.__setattr__(self, "currency", currency)

    @classmethod
    def of(cls, amount: Decimal | int | str, currency: str = "EUR") -> Money:
        """Build an amount from a Decimal, int or numeric string."""
        return cls(amount, currency)  # type: ignore[arg-type]

    def is_negative(self) -> bool:
        return self.amount < 0

    def is_zero(self) -> bool:
        return self.amount == 0

    def abs(self) -> Money:
        return Money(abs(self.amount), self.currency)

    def __neg__(self) -> Money:
        return Money(-self.amount, self.currency)

    def __str__(self) -> str:
        return f"{self.currency} {self.amount:.2f}"


@dataclass(frozen=True)
class Dimension:
    """Reference to a general ledger element in one of the dimension slots.

    A dimension is a tagged value: ``kind`` says what the code refers to and
    therefore which slot (dim1, dim2 or dim3) it can occupy.
    """

    kind: DimensionKind
    code: str

    def __post_init__(self) -> None:
        if not isinstance(self.kind, DimensionKind):
            raise TypeError(f"Dimension kind must be a DimensionKind, got {self.kind!r}")
        if not self.code:
            raise ValueError("Dimension code must not be empty")

    @property
    def position(self) -> int:
        return self.kind.position

    @classmethod
    def balance_sheet(cls, code: str) -> Dimension:
        return cls(DimensionKind.BALANCE_SHEET, code)

    @classmethod
    def profit_and_loss(cls, code: str) -> Dimension:
        return cls(DimensionKind.PROFIT_AND_LOSS, code)

    @classmethod
    def customer(cls, code: str) -> Dimension:
        return cls(DimensionKind.CUSTOMER, code)

    @classmethod
    def supplier(cls, code: str) -> Dimension:
        return cls(DimensionKind.SUPPLIER, code)

    @classmethod
    def cost_center(cls, code: str) -> Dimension:
        return cls(DimensionKind.COST_CENTER, code)

    @classmethod
    def project(cls, code: str) -> Dimension:
        return cls(DimensionKind.PROJECT, code)

    @classmethod
    def asset(cls, code: str) -> Dimension:
        return cls(DimensionKind.ASSET, code)

    def __str__(self) -> str:
        return self.code
