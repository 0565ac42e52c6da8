"""Sample transaction line generator."""

import random
from datetime import date
from decimal import Decimal
from typing import Any, Callable, Iterator

from twinfield_lines.generators.base import BaseGenerator
from twinfield_lines.models import (
    JOURNAL,
    Dimension,
    Line,
    LineKind,
    LineType,
    MatchStatus,
    Money,
    PerformanceType,
)
from twinfield_lines.validation import GUARDED_FIELDS, is_allowed


class LineGenerator(BaseGenerator):
    """Generate lines that only carry attributes their line type allows.

    Every guarded attribute the rules accept for the line's state is filled
    with probability ``optional_rate``; attributes the rules refuse are left
    unset.
    """

    DIM2_FACTORIES = [Dimension.customer, Dimension.supplier, Dimension.cost_center]
    DIM2_WEIGHTS = [0.45, 0.35, 0.20]

    VAT_CODES = ["VH", "VL", "VN", "IH", "IL", "IN"]

    def __init__(
        self,
        seed: int | None = None,
        locale: str = "nl_NL",
        currency: str = "EUR",
        optional_rate: float = 0.7,
    ) -> None:
        super().__init__(seed, locale, currency)
        self.optional_rate = optional_rate

    def generate(self, kind: LineKind = JOURNAL, line_type: LineType | None = None) -> Line:
        """Generate a single line.

        Parameters
        ----------
        kind : LineKind
            Line kind the line is generated for.
        line_type : LineType | None
            Line type to use, a random allowed type when omitted.

        Returns
        -------
        Line
            Generated, unattached line.
        """
        if line_type is None:
            line_type = random.choice(kind.allowed_line_types)

        line = Line(kind, line_type)
        line.id = random.randint(1, 999)
        line.dim1 = self._dim1(line_type)
        line.set_value(self._money())
        line.description = self.fake.catch_phrase()[:40]
        if line_type != LineType.TOTAL:
            line.vat_code = random.choice(self.VAT_CODES)

        # rules order puts performance_type before performance_date
        for name in GUARDED_FIELDS:
            if random.random() >= self.optional_rate:
                continue
            value = self._sample_value(name, line)
            if is_allowed(name, value, line.state, kind):
                setattr(line, name, value)

        return line

    def generate_batch(
        self,
        count: int,
        kind: LineKind = JOURNAL,
        line_type: LineType | None = None,
    ) -> Iterator[Line]:
        """Generate ``count`` lines."""
        for _ in range(count):
            yield self.generate(kind, line_type)

    def _money(self, low: int = 10, high: int = 5000) -> Money:
        cents = random.randint(low * 100, high * 100)
        return Money(Decimal(cents) / 100, self.currency)

    def _date(self) -> date:
        return self.fake.date_between(start_date="-90d", end_date="today")

    def _dim1(self, line_type: LineType) -> Dimension:
        if line_type == LineType.DETAIL:
            return Dimension.profit_and_loss(self.fake.numerify("8###"))
        if line_type == LineType.VAT:
            return Dimension.balance_sheet(self.fake.numerify("15##"))
        return Dimension.balance_sheet(self.fake.numerify("13##"))

    def _sample_value(self, name: str, line: Line) -> Any:
        country = self.fake.country_code()
        factories: dict[str, Callable[[], Any]] = {
            "baseline": lambda: random.randint(1, 10),
            "base_value_open": lambda: line.value,
            "currency_date": self._date,
            "dim2": lambda: random.choices(self.DIM2_FACTORIES, weights=self.DIM2_WEIGHTS, k=1)[0](
                self.fake.numerify("1####")
            ),
            "dim3": lambda: Dimension.project(self.fake.bothify("P-####")),
            "invoice_number": lambda: self.fake.bothify("INV-#####"),
            "match_level": lambda: 2,
            "match_status": lambda: self._match_status(line),
            "performance_type": lambda: random.choice(list(PerformanceType)),
            "performance_country": lambda: country,
            "performance_vat_number": lambda: f"{country}{self.fake.numerify('#########')}B01",
            "performance_date": self._date,
            "relation": lambda: random.randint(1, 99999),
            "rep_value_open": lambda: line.value,
        }
        return factories[name]()

    @staticmethod
    def _match_status(line: Line) -> MatchStatus:
        if line.line_type == LineType.VAT and line.kind.vat_match_status is not None:
            return line.kind.vat_match_status
        return random.choice([MatchStatus.AVAILABLE, MatchStatus.MATCHED, MatchStatus.PROPOSED])
