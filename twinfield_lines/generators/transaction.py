"""Sample transaction generator."""

import logging
import random
from decimal import Decimal

from twinfield_lines.generators.base import BaseGenerator
from twinfield_lines.generators.line import LineGenerator
from twinfield_lines.models import (
    JOURNAL,
    DebitCredit,
    Dimension,
    Line,
    LineKind,
    LineType,
    Money,
    Transaction,
    TransactionCategory,
)

logger = logging.getLogger(__name__)


class TransactionGenerator(BaseGenerator):
    """Generate balanced transactions made of generated lines.

    Detail lines and an optional vat line are generated first. The
    transaction is then balanced with a total line, or with one more
    detail line for kinds that have no total line (journal).
    """

    DAYBOOK_CODES = {
        TransactionCategory.JOURNAL: "MEMO",
        TransactionCategory.SALES: "VRK",
        TransactionCategory.PURCHASE: "INK",
        TransactionCategory.BANK: "BNK",
        TransactionCategory.CASH: "KAS",
    }

    def __init__(
        self,
        seed: int | None = None,
        locale: str = "nl_NL",
        currency: str = "EUR",
        line_generator: LineGenerator | None = None,
    ) -> None:
        super().__init__(seed, locale, currency)
        self.line_generator = line_generator or LineGenerator(seed, locale, currency)

    def generate(
        self,
        kind: LineKind = JOURNAL,
        detail_lines: int = 3,
        with_vat: bool = True,
    ) -> Transaction:
        """Generate a single balanced transaction.

        Parameters
        ----------
        kind : LineKind
            Line kind, also determines the transaction category.
        detail_lines : int
            Number of generated detail lines before balancing.
        with_vat : bool
            Whether to add a vat line.

        Returns
        -------
        Transaction
            Transaction whose debit and credit totals are equal.
        """
        transaction = Transaction(
            category=kind.category,
            office=self.fake.bothify("NLA######"),
            code=self.DAYBOOK_CODES[kind.category],
            number=random.randint(201900001, 202499999),
            currency=self.currency,
            line_kind=kind,
        )

        for line in self.line_generator.generate_batch(detail_lines, kind, LineType.DETAIL):
            transaction.add_line(line)
        if with_vat:
            transaction.add_line(self.line_generator.generate(kind, LineType.VAT))

        self._balance(transaction)

        logger.debug(
            "Generated %s transaction %s/%s with %d lines",
            kind.name,
            transaction.code,
            transaction.number,
            len(transaction.lines),
        )
        return transaction

    def _balance(self, transaction: Transaction) -> None:
        net = sum(
            (
                line.value.amount if line.debit_credit == DebitCredit.DEBIT else -line.value.amount
                for line in transaction.lines
                if line.value is not None
            ),
            Decimal("0"),
        )

        if transaction.kind.allows(LineType.TOTAL):
            line = Line(transaction.kind, LineType.TOTAL)
            line.dim1 = Dimension.balance_sheet(self.fake.numerify("13##"))
            line.dim2 = Dimension.customer(self.fake.numerify("1####"))
        else:
            line = Line(transaction.kind, LineType.DETAIL)
            line.dim1 = Dimension.balance_sheet(self.fake.numerify("0###"))
        line.description = "Balance"

        line.value = Money(abs(net), self.currency)
        line.debit_credit = DebitCredit.CREDIT if net > 0 else DebitCredit.DEBIT
        transaction.add_line(line)
