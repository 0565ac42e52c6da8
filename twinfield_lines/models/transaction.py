"""Transaction owning its lines."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from twinfield_lines.models.enums import LineType, TransactionCategory
from twinfield_lines.models.line import Line
from twinfield_lines.models.line_kind import LineKind, line_kind_for

if TYPE_CHECKING:
    from twinfield_lines.config import ValidationConfig

logger = logging.getLogger(__name__)


@dataclass(eq=False)
class Transaction:
    """Transaction header and its lines.

    The transaction holds its lines; each line only keeps a weak reference
    back, so dropping the transaction does not leave a reference cycle.
    ``line_kind`` defaults to the preset for ``category``.
    """

    category: TransactionCategory
    office: str | None = None
    code: str | None = None
    number: int | None = None
    currency: str = "EUR"
    line_kind: LineKind | None = None
    lines: list[Line] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.category = TransactionCategory(self.category)
        if self.line_kind is None:
            self.line_kind = line_kind_for(self.category)
        elif self.line_kind.category != self.category:
            raise ValueError(
                f"Line kind {self.line_kind.name!r} is for {self.line_kind.category.value} "
                f"transactions, not {self.category.value}"
            )

    @property
    def kind(self) -> LineKind:
        assert self.line_kind is not None
        return self.line_kind

    def add_line(self, line: Line) -> Line:
        """Attach a line to this transaction and append it."""
        line.attach_transaction(self)
        self.lines.append(line)
        logger.debug(
            "Added %s line to %s transaction %s/%s",
            line.line_type.value,
            self.category.value,
            self.code,
            self.number,
        )
        return line

    def new_line(
        self,
        line_type: LineType | str = LineType.DETAIL,
        config: ValidationConfig | None = None,
    ) -> Line:
        """Create a line of this transaction's kind and add it."""
        return self.add_line(Line(self.kind, line_type, config=config))

    def lines_of_type(self, line_type: LineType) -> list[Line]:
        return [line for line in self.lines if line.line_type == line_type]
