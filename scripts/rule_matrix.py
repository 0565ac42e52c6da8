#!/usr/bin/env python3
"""Print which guarded line attributes each line type accepts.

Renders the legality matrix of a line kind as a table: one row per guarded
attribute, one column per line type the kind allows. With
``--sample N`` it also generates N sample transactions and reports how many
lines of each type were produced.
"""

import argparse
import logging
import sys
from collections import Counter
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from twinfield_lines.config import LinesConfig
from twinfield_lines.generators import TransactionGenerator
from twinfield_lines.logging import configure_logging
from twinfield_lines.models import LINE_KINDS, PerformanceType, TransactionCategory
from twinfield_lines.validation import RULES, legality_matrix

logger = logging.getLogger(__name__)


def render_matrix(category: TransactionCategory, performance_type: PerformanceType | None) -> str:
    """Render the legality matrix of a category as a text table."""
    kind = LINE_KINDS[category]
    matrix = legality_matrix(kind, performance_type)
    line_types = kind.allowed_line_types

    width = max(len(rule.wire_name) for rule in RULES.values())
    header = "attribute".ljust(width) + "".join(f" | {lt.value:^6}" for lt in line_types)
    rows = [header, "-" * len(header)]
    for name, allowed in matrix.items():
        cells = "".join(f" | {'yes' if allowed[lt] else '-':^6}" for lt in line_types)
        rows.append(RULES[name].wire_name.ljust(width) + cells)
    return "\n".join(rows)


def main() -> None:
    """Main entry point."""
    parser = argparse.ArgumentParser(description="Show line attribute rules per line type")
    parser.add_argument(
        "--kind",
        choices=[c.value for c in TransactionCategory],
        default=TransactionCategory.JOURNAL.value,
        help="Transaction category (default: journal)",
    )
    parser.add_argument(
        "--performance-type",
        choices=[p.value for p in PerformanceType] + ["none"],
        default=PerformanceType.SERVICES.value,
        help="Performance type assumed on the line (default: services)",
    )
    parser.add_argument("--sample", type=int, default=0, help="Generate N sample transactions")
    parser.add_argument("--seed", type=int, default=None, help="Random seed for --sample")
    args = parser.parse_args()

    config = LinesConfig.from_env()
    configure_logging(config)

    category = TransactionCategory(args.kind)
    performance_type = None if args.performance_type == "none" else PerformanceType(args.performance_type)

    print(render_matrix(category, performance_type))

    if args.sample > 0:
        generator = TransactionGenerator(
            seed=args.seed if args.seed is not None else config.generator.seed,
            locale=config.generator.locale,
            currency=config.generator.currency,
        )
        counts: Counter[str] = Counter()
        for _ in range(args.sample):
            transaction = generator.generate(LINE_KINDS[category])
            counts.update(line.line_type.value for line in transaction.lines)
        logger.info("Generated %d %s transactions: %s", args.sample, category.value, dict(counts))


if __name__ == "__main__":
    main()
