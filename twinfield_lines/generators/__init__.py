"""Sample data generators."""

from twinfield_lines.generators.line import LineGenerator
from twinfield_lines.generators.transaction import TransactionGenerator

__all__ = [
    "LineGenerator",
    "TransactionGenerator",
]
