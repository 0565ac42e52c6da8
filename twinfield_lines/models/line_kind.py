"""Per-category line capabilities.

Each transaction category restricts what its lines may do. Rather than
subclassing ``Line`` per category, the differences are described as data
and handed to the rule evaluator.
"""

from dataclasses import dataclass, field

from twinfield_lines.models.enums import LineType, MatchStatus, TransactionCategory


@dataclass(frozen=True)
class LineKind:
    """Capabilities of the lines of one transaction category.

    Attributes
    ----------
    name : str
        Human readable name, e.g. ``"journal"``.
    category : TransactionCategory
        Category of the transactions these lines belong to.
    excluded_line_types : frozenset[LineType]
        Line types a line of this kind can never have.
    vat_match_status : MatchStatus | None
        Match status every VAT line is pinned to, or ``None`` when VAT lines
        may carry any match status.
    performance_date_requires_services : bool
        Whether a performance date needs performance type ``SERVICES``.
    incoming : bool
        True if a positive amount on the TOTAL line is a debit (sales, bank,
        cash), False if it is a credit (purchase).
    """

    name: str
    category: TransactionCategory
    excluded_line_types: frozenset[LineType] = field(default_factory=frozenset)
    vat_match_status: MatchStatus | None = MatchStatus.NOT_MATCHABLE
    performance_date_requires_services: bool = True
    incoming: bool = True

    @property
    def allowed_line_types(self) -> tuple[LineType, ...]:
        """Line types this kind accepts, in declaration order."""
        return tuple(lt for lt in LineType if lt not in self.excluded_line_types)

    def allows(self, line_type: LineType) -> bool:
        return line_type not in self.excluded_line_types


# Journal transactions only know detail and vat lines.
JOURNAL = LineKind(
    name="journal",
    category=TransactionCategory.JOURNAL,
    excluded_line_types=frozenset({LineType.TOTAL}),
)

SALES = LineKind(name="sales", category=TransactionCategory.SALES)

PURCHASE = LineKind(name="purchase", category=TransactionCategory.PURCHASE, incoming=False)

BANK = LineKind(name="bank", category=TransactionCategory.BANK)

CASH = LineKind(name="cash", category=TransactionCategory.CASH)

LINE_KINDS: dict[TransactionCategory, LineKind] = {
    kind.category: kind for kind in (JOURNAL, SALES, PURCHASE, BANK, CASH)
}


def line_kind_for(category: TransactionCategory | str) -> LineKind:
    """Look up the preset line kind for a transaction category.

    Parameters
    ----------
    category : TransactionCategory | str
        Category enum member or its value (``"journal"``, ``"sales"``...).

    Returns
    -------
    LineKind
        Preset kind for the category.
    """
    return LINE_KINDS[TransactionCategory(category)]
