"""Declarative rule table for guarded transaction line attributes.

Every guarded attribute has one ``FieldRule``: how to normalize a candidate
value, when a non-null value is legal given the line's current state, and
which error to raise otherwise. ``check_field`` is the single evaluator used
by ``Line`` for every guarded set; ``None`` is always accepted.

The rules themselves do not vary per transaction category. What varies
(excluded line types, pinned VAT match status, performance date gating) is
read from the ``LineKind`` passed in.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Callable, Iterable, Mapping

from twinfield_lines.exceptions import (
    InvalidDimensionForLineTypeError,
    InvalidDimensionKindError,
    InvalidFieldForLineTypeError,
    InvalidLineTypeForTransactionError,
    InvalidMatchStatusForLineTypeError,
    LineValidationError,
)
from twinfield_lines.models.base import Dimension, Money
from twinfield_lines.models.enums import LineType, MatchStatus, PerformanceType
from twinfield_lines.models.line_kind import LineKind


@dataclass(frozen=True)
class LineState:
    """Snapshot of the line attributes the predicates read."""

    line_type: LineType
    performance_type: PerformanceType | None = None


Predicate = Callable[[LineState, Any, LineKind], bool]
ErrorFactory = Callable[["FieldRule", Any, LineState], LineValidationError]


@dataclass(frozen=True)
class FieldRule:
    """Legality rule for one guarded attribute.

    Attributes
    ----------
    name : str
        Python attribute name on ``Line``.
    wire_name : str
        Element name used by the remote API, reported in errors.
    normalize : Callable[[Any], Any]
        Type check and conversion of a non-null candidate value.
    predicate : Predicate
        True when a non-null value may be set in the given state.
    error : ErrorFactory
        Builds the exception raised when the predicate fails.
    sample : Any
        Representative non-null value, used to render the legality matrix.
    """

    name: str
    wire_name: str
    normalize: Callable[[Any], Any]
    predicate: Predicate
    error: ErrorFactory
    sample: Any


# --- predicates ---


def _only(*line_types: LineType) -> Predicate:
    return lambda state, value, kind: state.line_type in line_types


def _never(*line_types: LineType) -> Predicate:
    return lambda state, value, kind: state.line_type not in line_types


def _match_status_allowed(state: LineState, value: MatchStatus, kind: LineKind) -> bool:
    if state.line_type != LineType.VAT or kind.vat_match_status is None:
        return True
    return value == kind.vat_match_status


def _performance_date_allowed(state: LineState, value: date, kind: LineKind) -> bool:
    if state.line_type == LineType.TOTAL:
        return False
    if not kind.performance_date_requires_services:
        return True
    return state.performance_type == PerformanceType.SERVICES


# --- errors ---


def _field_error(rule: FieldRule, value: Any, state: LineState) -> LineValidationError:
    return InvalidFieldForLineTypeError(rule.wire_name, state.line_type)


def _dimension_error(position: int) -> ErrorFactory:
    return lambda rule, value, state: InvalidDimensionForLineTypeError(position, state.line_type)


def _match_status_error(rule: FieldRule, value: MatchStatus, state: LineState) -> LineValidationError:
    return InvalidMatchStatusForLineTypeError(value, state.line_type)


# --- value normalizers ---


def _money(name: str) -> Callable[[Any], Money]:
    def normalize(value: Any) -> Money:
        if not isinstance(value, Money):
            raise TypeError(f"{name} must be Money, got {type(value).__name__}")
        return value

    return normalize


def _identifier(name: str) -> Callable[[Any], int]:
    def normalize(value: Any) -> int:
        if isinstance(value, bool) or not isinstance(value, int):
            raise TypeError(f"{name} must be an int, got {type(value).__name__}")
        if value < 0:
            raise ValueError(f"{name} must not be negative, got {value}")
        return value

    return normalize


def _calendar_date(name: str) -> Callable[[Any], date]:
    def normalize(value: Any) -> date:
        # datetime is a date subclass but carries a time (and maybe a zone)
        if isinstance(value, datetime) or not isinstance(value, date):
            raise TypeError(f"{name} must be a date, got {type(value).__name__}")
        return value

    return normalize


def _text(name: str) -> Callable[[Any], str]:
    def normalize(value: Any) -> str:
        if not isinstance(value, str):
            raise TypeError(f"{name} must be a str, got {type(value).__name__}")
        return value

    return normalize


def _country(value: Any) -> str:
    if not isinstance(value, str) or len(value) != 2 or not value.isalpha():
        raise ValueError(f"performance_country must be an ISO 3166-1 alpha-2 code, got {value!r}")
    return value.upper()


def _dimension(position: int) -> Callable[[Any], Dimension]:
    def normalize(value: Any) -> Dimension:
        if not isinstance(value, Dimension):
            raise TypeError(f"dim{position} must be a Dimension, got {type(value).__name__}")
        if value.position != position:
            raise InvalidDimensionKindError(position, value)
        return value

    return normalize


RULES: dict[str, FieldRule] = {
    rule.name: rule
    for rule in (
        FieldRule(
            name="baseline",
            wire_name="baseline",
            normalize=_identifier("baseline"),
            predicate=_only(LineType.VAT),
            error=_field_error,
            sample=1,
        ),
        FieldRule(
            name="base_value_open",
            wire_name="basevalueopen",
            normalize=_money("base_value_open"),
            predicate=_only(LineType.DETAIL),
            error=_field_error,
            sample=Money.of("10.00"),
        ),
        FieldRule(
            name="currency_date",
            wire_name="currencydate",
            normalize=_calendar_date("currency_date"),
            predicate=_only(LineType.DETAIL),
            error=_field_error,
            sample=date(2024, 1, 1),
        ),
        FieldRule(
            name="dim2",
            wire_name="dim2",
            normalize=_dimension(2),
            predicate=_never(LineType.VAT),
            error=_dimension_error(2),
            sample=Dimension.customer("1000"),
        ),
        FieldRule(
            name="dim3",
            wire_name="dim3",
            normalize=_dimension(3),
            predicate=_never(LineType.VAT),
            error=_dimension_error(3),
            sample=Dimension.project("P100"),
        ),
        FieldRule(
            name="invoice_number",
            wire_name="invoicenumber",
            normalize=_text("invoice_number"),
            predicate=_only(LineType.DETAIL),
            error=_field_error,
            sample="INV-1",
        ),
        FieldRule(
            name="match_level",
            wire_name="matchlevel",
            normalize=_identifier("match_level"),
            predicate=_only(LineType.DETAIL),
            error=_field_error,
            sample=2,
        ),
        FieldRule(
            name="match_status",
            wire_name="matchstatus",
            normalize=MatchStatus,
            predicate=_match_status_allowed,
            error=_match_status_error,
            sample=MatchStatus.AVAILABLE,
        ),
        FieldRule(
            name="performance_type",
            wire_name="performancetype",
            normalize=PerformanceType,
            predicate=_never(LineType.TOTAL),
            error=_field_error,
            sample=PerformanceType.SERVICES,
        ),
        FieldRule(
            name="performance_country",
            wire_name="performancecountry",
            normalize=_country,
            predicate=_never(LineType.TOTAL),
            error=_field_error,
            sample="NL",
        ),
        FieldRule(
            name="performance_vat_number",
            wire_name="performancevatnumber",
            normalize=_text("performance_vat_number"),
            predicate=_never(LineType.TOTAL),
            error=_field_error,
            sample="NL123456789B01",
        ),
        FieldRule(
            name="performance_date",
            wire_name="performancedate",
            normalize=_calendar_date("performance_date"),
            predicate=_performance_date_allowed,
            error=_field_error,
            sample=date(2024, 1, 1),
        ),
        FieldRule(
            name="relation",
            wire_name="relation",
            normalize=_identifier("relation"),
            predicate=_only(LineType.DETAIL),
            error=_field_error,
            sample=42,
        ),
        FieldRule(
            name="rep_value_open",
            wire_name="repvalueopen",
            normalize=_money("rep_value_open"),
            predicate=_only(LineType.DETAIL),
            error=_field_error,
            sample=Money.of("10.00"),
        ),
    )
}

GUARDED_FIELDS: tuple[str, ...] = tuple(RULES)


def check_field(name: str, value: Any, state: LineState, kind: LineKind) -> Any:
    """Validate a candidate value for a guarded attribute.

    Parameters
    ----------
    name : str
        Attribute name, one of ``GUARDED_FIELDS``.
    value : Any
        Candidate value. ``None`` is always accepted.
    state : LineState
        Current state of the line the value is meant for.
    kind : LineKind
        Capabilities of the line.

    Returns
    -------
    Any
        The normalized value (enum members for enum strings), or ``None``.

    Raises
    ------
    LineValidationError
        If the value is not allowed in ``state``.
    TypeError, ValueError
        If the value has the wrong type or is out of range.
    """
    rule = RULES[name]
    if value is None:
        return None

    value = rule.normalize(value)
    if not rule.predicate(state, value, kind):
        raise rule.error(rule, value, state)
    return value


def is_allowed(name: str, value: Any, state: LineState, kind: LineKind) -> bool:
    """Whether an already normalized value passes the rule for ``name``."""
    return value is None or RULES[name].predicate(state, value, kind)


def check_line_type(candidate: LineType | str | None, kind: LineKind) -> LineType:
    """Validate a line type against the line kind.

    Raises
    ------
    ValueError
        If ``candidate`` is ``None`` or not a line type.
    InvalidLineTypeForTransactionError
        If the kind excludes ``candidate``.
    """
    if candidate is None:
        raise ValueError("A line type is required")
    line_type = LineType(candidate)
    if not kind.allows(line_type):
        raise InvalidLineTypeForTransactionError(line_type, kind.category)
    return line_type


def violations(
    values: Mapping[str, Any],
    state: LineState,
    kind: LineKind,
) -> list[LineValidationError]:
    """Collect the errors the given stored values would raise in ``state``.

    Used to re-check a line before its type changes. Values are assumed to
    be normalized already, so only the predicates are evaluated.
    """
    errors: list[LineValidationError] = []
    for name, value in values.items():
        if value is None:
            continue
        rule = RULES[name]
        if not rule.predicate(state, value, kind):
            errors.append(rule.error(rule, value, state))
    return errors


def legality_matrix(
    kind: LineKind,
    performance_type: PerformanceType | None = PerformanceType.SERVICES,
    fields: Iterable[str] = GUARDED_FIELDS,
) -> dict[str, dict[LineType, bool]]:
    """Tabulate which guarded attributes accept a non-null value per line type.

    Parameters
    ----------
    kind : LineKind
        Line kind to evaluate.
    performance_type : PerformanceType | None
        Performance type assumed to be set on the line.
    fields : Iterable[str]
        Attributes to include, defaults to all guarded attributes.

    Returns
    -------
    dict[str, dict[LineType, bool]]
        ``matrix[field][line_type]`` is True when the rule's sample value
        would be accepted. Only line types allowed by ``kind`` appear.
    """
    matrix: dict[str, dict[LineType, bool]] = {}
    for name in fields:
        rule = RULES[name]
        matrix[name] = {
            line_type: rule.predicate(LineState(line_type, performance_type), rule.sample, kind)
            for line_type in kind.allowed_line_types
        }
    return matrix
