"""Configuration management for twinfield-lines."""

from dataclasses import dataclass, field

from twinfield_lines.exceptions import ConfigurationError
from twinfield_lines.models.enums import LineType

_TRUE_VALUES = ("1", "true", "yes", "on")
_FALSE_VALUES = ("0", "false", "no", "off", "")


@dataclass
class ValidationConfig:
    """Line validation behavior.

    ``revalidate_on_line_type_change`` makes ``Line.set_line_type`` re-check
    every attribute already set on the line against the new type and refuse
    the change if one of them would no longer be allowed. Off by default:
    a line type change then leaves earlier values untouched.
    """

    revalidate_on_line_type_change: bool = False
    default_line_type: LineType = LineType.DETAIL


@dataclass
class GeneratorConfig:
    """Sample line generator configuration."""

    locale: str = "nl_NL"
    seed: int | None = None
    currency: str = "EUR"


@dataclass
class LinesConfig:
    """Main configuration for twinfield-lines."""

    validation: ValidationConfig = field(default_factory=ValidationConfig)
    generator: GeneratorConfig = field(default_factory=GeneratorConfig)
    log_level: str = "INFO"
    log_format: str = "standard"

    @classmethod
    def from_env(cls) -> "LinesConfig":
        """Create config from environment variables."""
        import os

        revalidate = os.getenv("TWINFIELD_REVALIDATE_LINE_TYPE", "false").strip().lower()
        if revalidate not in _TRUE_VALUES + _FALSE_VALUES:
            raise ConfigurationError(f"Invalid TWINFIELD_REVALIDATE_LINE_TYPE: {revalidate!r}")

        default_line_type = os.getenv("TWINFIELD_DEFAULT_LINE_TYPE", LineType.DETAIL.value)
        try:
            line_type = LineType(default_line_type.lower())
        except ValueError as exc:
            raise ConfigurationError(
                f"Invalid TWINFIELD_DEFAULT_LINE_TYPE: {default_line_type!r}"
            ) from exc

        validation = ValidationConfig(
            revalidate_on_line_type_change=revalidate in _TRUE_VALUES,
            default_line_type=line_type,
        )

        seed = os.getenv("TWINFIELD_SEED")
        try:
            generator = GeneratorConfig(
                locale=os.getenv("TWINFIELD_LOCALE", "nl_NL"),
                seed=int(seed) if seed else None,
                currency=os.getenv("TWINFIELD_CURRENCY", "EUR").upper(),
            )
        except ValueError as exc:
            raise ConfigurationError(f"Invalid TWINFIELD_SEED: {seed!r}") from exc

        log_format = os.getenv("LOG_FORMAT", "standard")
        if log_format not in ("standard", "json"):
            raise ConfigurationError(f"Invalid LOG_FORMAT: {log_format!r}")

        return cls(
            validation=validation,
            generator=generator,
            log_level=os.getenv("LOG_LEVEL", "INFO"),
            log_format=log_format,
        )
