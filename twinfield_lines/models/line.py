"""Transaction line with guarded attributes.

Which attributes a line may carry depends on its line type (detail, vat,
total) and, for the performance date, on its performance type. Every guarded
assignment goes through ``twinfield_lines.validation.rules`` before the value
is stored, so a rejected set leaves the line as it was.
"""

from __future__ import annotations

import logging
import threading
import weakref
from datetime import date
from typing import TYPE_CHECKING, Any

from twinfield_lines import config as lines_config
from twinfield_lines.exceptions import (
    AlreadyAttachedError,
    DetachedLineError,
    InvalidDimensionKindError,
    LineValidationError,
    TransactionCategoryMismatchError,
)
from twinfield_lines.models.base import Dimension, Money
from twinfield_lines.models.enums import (
    DebitCredit,
    LineType,
    MatchStatus,
    PerformanceType,
)
from twinfield_lines.models.line_kind import JOURNAL, LineKind
from twinfield_lines.validation import rules

if TYPE_CHECKING:
    from twinfield_lines.config import ValidationConfig
    from twinfield_lines.models.transaction import Transaction

logger = logging.getLogger(__name__)


class GuardedAttribute:
    """Data descriptor that validates assignments against the rule table."""

    def __set_name__(self, owner: type, name: str) -> None:
        self.name = name
        self.storage = f"_{name}"

    def __get__(self, obj: Line | None, objtype: type | None = None) -> Any:
        if obj is None:
            return self
        return getattr(obj, self.storage)

    def __set__(self, obj: Line, value: Any) -> None:
        obj._assign(self.name, value)


class Line:
    """One line of a transaction.

    Parameters
    ----------
    kind : LineKind
        Capabilities of the transaction category the line belongs to.
    line_type : LineType | str | None
        Initial line type, defaults to ``config.default_line_type``.
    config : ValidationConfig | None
        Validation behavior, defaults to ``ValidationConfig()``.
    """

    baseline = GuardedAttribute()
    base_value_open = GuardedAttribute()
    currency_date = GuardedAttribute()
    dim2 = GuardedAttribute()
    dim3 = GuardedAttribute()
    invoice_number = GuardedAttribute()
    match_level = GuardedAttribute()
    match_status = GuardedAttribute()
    performance_type = GuardedAttribute()
    performance_country = GuardedAttribute()
    performance_vat_number = GuardedAttribute()
    performance_date = GuardedAttribute()
    relation = GuardedAttribute()
    rep_value_open = GuardedAttribute()

    def __init__(
        self,
        kind: LineKind = JOURNAL,
        line_type: LineType | str | None = None,
        *,
        config: ValidationConfig | None = None,
    ) -> None:
        self.kind = kind
        self.config = config or lines_config.ValidationConfig()
        self._lock = threading.RLock()
        self._transaction_ref: weakref.ref[Transaction] | None = None

        for name in rules.GUARDED_FIELDS:
            setattr(self, f"_{name}", None)

        self._line_type = rules.check_line_type(
            line_type if line_type is not None else self.config.default_line_type,
            kind,
        )

        # Unguarded attributes
        self.id: int | None = None
        self._dim1: Dimension | None = None
        self.value: Money | None = None
        self.debit_credit: DebitCredit | None = None
        self.description: str | None = None
        self.vat_code: str | None = None
        self.comment: str | None = None

    def __repr__(self) -> str:
        return f"Line(kind={self.kind.name!r}, line_type={self._line_type.value!r}, id={self.id!r})"

    # --- validation core ---

    @property
    def state(self) -> rules.LineState:
        """Snapshot of the attributes the rules read."""
        return rules.LineState(self._line_type, self._performance_type)

    def _assign(self, name: str, value: Any) -> Line:
        with self._lock:
            try:
                value = rules.check_field(name, value, self.state, self.kind)
            except LineValidationError as exc:
                logger.debug(
                    "Rejected %s on %s line: %s",
                    name,
                    self._line_type.value,
                    exc,
                    extra={"extra": self._log_context(field=name)},
                )
                raise
            setattr(self, f"_{name}", value)
        return self

    def _log_context(self, **fields: Any) -> dict[str, Any]:
        return {"kind": self.kind.name, "line_type": self._line_type.value, "line_id": self.id, **fields}

    def guarded_values(self) -> dict[str, Any]:
        """Return the guarded attributes that are currently set."""
        values = {name: getattr(self, f"_{name}") for name in rules.GUARDED_FIELDS}
        return {name: value for name, value in values.items() if value is not None}

    # --- line type ---

    @property
    def line_type(self) -> LineType:
        return self._line_type

    @line_type.setter
    def line_type(self, line_type: LineType) -> None:
        self.set_line_type(line_type)

    def set_line_type(self, line_type: LineType | str) -> Line:
        """Change the line type.

        Raises
        ------
        InvalidLineTypeForTransactionError
            If the line kind does not support ``line_type``.
        LineValidationError
            If re-validation is enabled and a value already on the line is
            not allowed for ``line_type``.
        """
        with self._lock:
            try:
                candidate = rules.check_line_type(line_type, self.kind)
                if self.config.revalidate_on_line_type_change:
                    errors = rules.violations(
                        self.guarded_values(),
                        rules.LineState(candidate, self._performance_type),
                        self.kind,
                    )
                    if errors:
                        raise errors[0]
            except LineValidationError as exc:
                logger.debug(
                    "Rejected line type %s: %s",
                    line_type,
                    exc,
                    extra={"extra": self._log_context(field="line_type")},
                )
                raise
            self._line_type = candidate
        return self

    # --- transaction reference ---

    def attach_transaction(self, transaction: Transaction) -> None:
        """Bind the line to its transaction. Can only be done once.

        The line keeps a weak reference; the transaction owns its lines.

        Raises
        ------
        AlreadyAttachedError
            If the line already belongs to a transaction.
        TransactionCategoryMismatchError
            If the transaction's category differs from the line kind's.
        """
        with self._lock:
            if self._transaction_ref is not None:
                raise AlreadyAttachedError()
            if transaction.category != self.kind.category:
                raise TransactionCategoryMismatchError(self.kind.category, transaction.category)
            self._transaction_ref = weakref.ref(transaction)

    @property
    def is_attached(self) -> bool:
        return self._transaction_ref is not None and self._transaction_ref() is not None

    @property
    def transaction(self) -> Transaction:
        """The transaction this line belongs to.

        Raises
        ------
        DetachedLineError
            If the line was never attached or its transaction no longer exists.
        """
        transaction = self._transaction_ref() if self._transaction_ref is not None else None
        if transaction is None:
            raise DetachedLineError()
        return transaction

    # --- dim1 and value ---

    @property
    def dim1(self) -> Dimension | None:
        return self._dim1

    @dim1.setter
    def dim1(self, dim1: Dimension | None) -> None:
        if dim1 is not None and dim1.position != 1:
            raise InvalidDimensionKindError(1, dim1)
        self._dim1 = dim1

    def _positive_is_debit(self) -> bool:
        # Total lines carry the opposite side of detail and vat lines.
        return (self._line_type == LineType.TOTAL) == self.kind.incoming

    def set_value(self, value: Money | None) -> Line:
        """Set the line amount and derive its debit/credit side from the sign.

        The amount is stored without sign. On a total line of an incoming
        transaction a positive amount is a debit; detail and vat lines use
        the opposite side, and outgoing transactions flip both.
        """
        with self._lock:
            if value is None:
                self.value = None
                self.debit_credit = None
                return self
            if not isinstance(value, Money):
                raise TypeError(f"value must be Money, got {type(value).__name__}")

            positive_side = DebitCredit.DEBIT if self._positive_is_debit() else DebitCredit.CREDIT
            negative_side = DebitCredit.CREDIT if positive_side == DebitCredit.DEBIT else DebitCredit.DEBIT
            self.debit_credit = negative_side if value.is_negative() else positive_side
            self.value = value.abs()
        return self

    @property
    def signed_value(self) -> Money | None:
        """The amount with the sign implied by ``debit_credit`` and line type."""
        if self.value is None or self.debit_credit is None:
            return self.value
        positive_side = DebitCredit.DEBIT if self._positive_is_debit() else DebitCredit.CREDIT
        return self.value if self.debit_credit == positive_side else -self.value

    # --- chainable setters ---

    def set_baseline(self, baseline: int | None) -> Line:
        """Only on vat lines. Line ID of the VAT rate the line refers to."""
        return self._assign("baseline", baseline)

    def set_base_value_open(self, base_value_open: Money | None) -> Line:
        """Only on detail lines. Amount still owed in base currency."""
        return self._assign("base_value_open", base_value_open)

    def set_currency_date(self, currency_date: date | None) -> Line:
        """Only on detail lines."""
        return self._assign("currency_date", currency_date)

    def set_dim2(self, dim2: Dimension | None) -> Line:
        """Customer, supplier or cost center. Not on vat lines."""
        return self._assign("dim2", dim2)

    def set_dim3(self, dim3: Dimension | None) -> Line:
        """Project or asset. Not on vat lines."""
        return self._assign("dim3", dim3)

    def set_invoice_number(self, invoice_number: str | None) -> Line:
        return self._assign("invoice_number", invoice_number)

    def set_match_level(self, match_level: int | None) -> Line:
        """Only on detail lines. Level of the matchable dimension."""
        return self._assign("match_level", match_level)

    def set_match_status(self, match_status: MatchStatus | str | None) -> Line:
        """Payment status. Vat lines are pinned to the kind's vat match status."""
        return self._assign("match_status", match_status)

    def set_performance_type(self, performance_type: PerformanceType | str | None) -> Line:
        return self._assign("performance_type", performance_type)

    def set_performance_country(self, performance_country: str | None) -> Line:
        """ISO 3166-1 alpha-2 code. Not on total lines."""
        return self._assign("performance_country", performance_country)

    def set_performance_vat_number(self, performance_vat_number: str | None) -> Line:
        return self._assign("performance_vat_number", performance_vat_number)

    def set_performance_date(self, performance_date: date | None) -> Line:
        """Not on total lines, and only when the performance type is services."""
        return self._assign("performance_date", performance_date)

    def set_relation(self, relation: int | None) -> Line:
        """Only on detail lines."""
        return self._assign("relation", relation)

    def set_rep_value_open(self, rep_value_open: Money | None) -> Line:
        """Only on detail lines. Amount still owed in reporting currency."""
        return self._assign("rep_value_open", rep_value_open)
