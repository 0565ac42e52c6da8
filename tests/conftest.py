"""Pytest configuration and fixtures."""

import pytest

from twinfield_lines.config import ValidationConfig
from twinfield_lines.models import (
    JOURNAL,
    Line,
    LineType,
    Transaction,
    TransactionCategory,
)


@pytest.fixture
def seed() -> int:
    """Fixed seed for reproducible tests."""
    return 42


@pytest.fixture
def detail_line() -> Line:
    """Unattached journal detail line."""
    return Line(JOURNAL, LineType.DETAIL)


@pytest.fixture
def vat_line() -> Line:
    """Unattached journal vat line."""
    return Line(JOURNAL, LineType.VAT)


@pytest.fixture
def journal_transaction() -> Transaction:
    """Empty journal transaction."""
    return Transaction(category=TransactionCategory.JOURNAL, office="NLA000001", code="MEMO", number=201900001)


@pytest.fixture
def sales_transaction() -> Transaction:
    """Empty sales transaction."""
    return Transaction(category=TransactionCategory.SALES, office="NLA000001", code="VRK", number=201900002)


@pytest.fixture
def strict_config() -> ValidationConfig:
    """Validation config that re-checks lines when their type changes."""
    return ValidationConfig(revalidate_on_line_type_change=True)
