"""Base generator class for sample line generators."""

from __future__ import annotations

import random
from abc import ABC

from faker import Faker

from twinfield_lines.config import GeneratorConfig


class BaseGenerator(ABC):
    """Base class for all sample generators.

    Provides common initialization: Faker instance creation and seed-based
    reproducibility.

    Parameters
    ----------
    seed : int | None
        Random seed for reproducibility.
    locale : str
        Faker locale (default ``nl_NL``).
    currency : str
        ISO 4217 currency of generated amounts.
    """

    def __init__(
        self,
        seed: int | None = None,
        locale: str = "nl_NL",
        currency: str = "EUR",
    ) -> None:
        self.fake = Faker(locale)
        self.currency = currency
        if seed is not None:
            self.fake.seed_instance(seed)
            random.seed(seed)

    @classmethod
    def from_config(cls, config: GeneratorConfig):
        """Create a generator from a ``GeneratorConfig``."""
        return cls(seed=config.seed, locale=config.locale, currency=config.currency)
