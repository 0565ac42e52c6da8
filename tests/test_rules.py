"""Tests for the line attribute rule table."""

from datetime import date, datetime

import pytest

from twinfield_lines.exceptions import (
    InvalidDimensionForLineTypeError,
    InvalidDimensionKindError,
    InvalidFieldForLineTypeError,
    InvalidLineTypeForTransactionError,
    InvalidMatchStatusForLineTypeError,
)
from twinfield_lines.models import (
    JOURNAL,
    SALES,
    Dimension,
    LineKind,
    LineType,
    MatchStatus,
    Money,
    PerformanceType,
    TransactionCategory,
)
from twinfield_lines.validation import (
    GUARDED_FIELDS,
    RULES,
    LineState,
    check_field,
    check_line_type,
    is_allowed,
    legality_matrix,
    violations,
)

DETAIL = LineState(LineType.DETAIL)
VAT = LineState(LineType.VAT)
TOTAL = LineState(LineType.TOTAL)

# attribute -> line types on which a non-null value is allowed (services line)
EXPECTED = {
    "baseline": {LineType.VAT},
    "base_value_open": {LineType.DETAIL},
    "currency_date": {LineType.DETAIL},
    "dim2": {LineType.DETAIL, LineType.TOTAL},
    "dim3": {LineType.DETAIL, LineType.TOTAL},
    "invoice_number": {LineType.DETAIL},
    "match_level": {LineType.DETAIL},
    "match_status": {LineType.DETAIL, LineType.TOTAL},
    "performance_type": {LineType.DETAIL, LineType.VAT},
    "performance_country": {LineType.DETAIL, LineType.VAT},
    "performance_vat_number": {LineType.DETAIL, LineType.VAT},
    "performance_date": {LineType.DETAIL, LineType.VAT},
    "relation": {LineType.DETAIL},
    "rep_value_open": {LineType.DETAIL},
}


class TestRuleTable:
    """Tests for the rule table contents."""

    def test_all_guarded_fields_have_rules(self) -> None:
        assert set(GUARDED_FIELDS) == set(EXPECTED)

    def test_wire_names(self) -> None:
        assert RULES["base_value_open"].wire_name == "basevalueopen"
        assert RULES["invoice_number"].wire_name == "invoicenumber"
        assert RULES["performance_vat_number"].wire_name == "performancevatnumber"

    def test_performance_type_precedes_performance_date(self) -> None:
        assert GUARDED_FIELDS.index("performance_type") < GUARDED_FIELDS.index("performance_date")

    @pytest.mark.parametrize("name", sorted(EXPECTED))
    def test_predicates_match_expected_line_types(self, name: str) -> None:
        rule = RULES[name]
        for line_type in LineType:
            state = LineState(line_type, PerformanceType.SERVICES)
            assert rule.predicate(state, rule.sample, SALES) is (line_type in EXPECTED[name]), line_type


class TestCheckField:
    """Tests for check_field."""

    @pytest.mark.parametrize("name", GUARDED_FIELDS)
    def test_none_always_allowed(self, name: str) -> None:
        for line_type in LineType:
            assert check_field(name, None, LineState(line_type), SALES) is None

    def test_allowed_value_returned(self) -> None:
        assert check_field("baseline", 3, VAT, JOURNAL) == 3

    def test_field_error(self) -> None:
        with pytest.raises(InvalidFieldForLineTypeError) as exc_info:
            check_field("invoice_number", "INV-1", VAT, JOURNAL)

        assert exc_info.value.field == "invoicenumber"
        assert exc_info.value.line_type is LineType.VAT

    @pytest.mark.parametrize(("name", "position"), [("dim2", 2), ("dim3", 3)])
    def test_dimension_error(self, name: str, position: int) -> None:
        with pytest.raises(InvalidDimensionForLineTypeError) as exc_info:
            check_field(name, RULES[name].sample, VAT, JOURNAL)

        assert exc_info.value.dimension == position
        assert exc_info.value.line_type is LineType.VAT

    def test_dimension_kind_checked(self) -> None:
        with pytest.raises(InvalidDimensionKindError):
            check_field("dim2", Dimension.project("P1"), DETAIL, JOURNAL)
        with pytest.raises(InvalidDimensionKindError):
            check_field("dim3", Dimension.supplier("2000"), DETAIL, JOURNAL)

    def test_dimension_type_checked(self) -> None:
        with pytest.raises(TypeError):
            check_field("dim2", "1000", DETAIL, JOURNAL)

    def test_match_status_pinned_on_vat(self) -> None:
        assert check_field("match_status", MatchStatus.NOT_MATCHABLE, VAT, JOURNAL) is MatchStatus.NOT_MATCHABLE

        with pytest.raises(InvalidMatchStatusForLineTypeError) as exc_info:
            check_field("match_status", MatchStatus.MATCHED, VAT, JOURNAL)
        assert exc_info.value.match_status is MatchStatus.MATCHED
        assert exc_info.value.line_type is LineType.VAT

    def test_match_status_free_on_detail(self) -> None:
        for status in MatchStatus:
            assert check_field("match_status", status, DETAIL, JOURNAL) is status

    def test_match_status_not_pinned_when_kind_has_no_pin(self) -> None:
        kind = LineKind(name="loose", category=TransactionCategory.JOURNAL, vat_match_status=None)

        assert check_field("match_status", MatchStatus.MATCHED, VAT, kind) is MatchStatus.MATCHED

    def test_enum_values_normalized(self) -> None:
        assert check_field("match_status", "notmatchable", VAT, JOURNAL) is MatchStatus.NOT_MATCHABLE
        assert check_field("performance_type", "goods", DETAIL, JOURNAL) is PerformanceType.GOODS

    def test_unknown_enum_value(self) -> None:
        with pytest.raises(ValueError):
            check_field("match_status", "paid", DETAIL, JOURNAL)

    def test_performance_date_requires_services(self) -> None:
        day = date(2024, 1, 1)

        assert check_field("performance_date", day, LineState(LineType.DETAIL, PerformanceType.SERVICES), JOURNAL) == day
        for performance_type in (None, PerformanceType.GOODS):
            with pytest.raises(InvalidFieldForLineTypeError) as exc_info:
                check_field("performance_date", day, LineState(LineType.DETAIL, performance_type), JOURNAL)
            assert exc_info.value.field == "performancedate"

    def test_performance_date_never_on_total(self) -> None:
        with pytest.raises(InvalidFieldForLineTypeError):
            check_field("performance_date", date(2024, 1, 1), LineState(LineType.TOTAL, PerformanceType.SERVICES), SALES)

    def test_performance_date_without_services_gate(self) -> None:
        kind = LineKind(
            name="ungated",
            category=TransactionCategory.SALES,
            performance_date_requires_services=False,
        )

        assert check_field("performance_date", date(2024, 1, 1), DETAIL, kind) == date(2024, 1, 1)

    def test_identifier_validation(self) -> None:
        with pytest.raises(ValueError):
            check_field("relation", -1, DETAIL, JOURNAL)
        with pytest.raises(TypeError):
            check_field("relation", "42", DETAIL, JOURNAL)
        with pytest.raises(TypeError):
            check_field("match_level", True, DETAIL, JOURNAL)

    def test_money_required(self) -> None:
        with pytest.raises(TypeError):
            check_field("base_value_open", "10.00", DETAIL, JOURNAL)
        assert check_field("rep_value_open", Money.of("1.00"), DETAIL, JOURNAL) == Money.of("1.00")

    def test_datetime_rejected_for_dates(self) -> None:
        with pytest.raises(TypeError):
            check_field("currency_date", datetime(2024, 1, 1, 12, 0), DETAIL, JOURNAL)

    def test_country_normalized(self) -> None:
        assert check_field("performance_country", "be", DETAIL, JOURNAL) == "BE"
        with pytest.raises(ValueError):
            check_field("performance_country", "BEL", DETAIL, JOURNAL)

    def test_type_checked_before_line_type(self) -> None:
        with pytest.raises(TypeError):
            check_field("base_value_open", 10, VAT, JOURNAL)


class TestCheckLineType:
    """Tests for check_line_type."""

    def test_allowed(self) -> None:
        assert check_line_type(LineType.DETAIL, JOURNAL) is LineType.DETAIL
        assert check_line_type("vat", JOURNAL) is LineType.VAT
        assert check_line_type(LineType.TOTAL, SALES) is LineType.TOTAL

    def test_total_on_journal(self) -> None:
        with pytest.raises(InvalidLineTypeForTransactionError) as exc_info:
            check_line_type(LineType.TOTAL, JOURNAL)

        assert exc_info.value.line_type is LineType.TOTAL
        assert exc_info.value.category is TransactionCategory.JOURNAL

    def test_none_rejected(self) -> None:
        with pytest.raises(ValueError):
            check_line_type(None, JOURNAL)


class TestIsAllowed:
    """Tests for is_allowed."""

    def test_none(self) -> None:
        assert is_allowed("baseline", None, DETAIL, JOURNAL)

    def test_values(self) -> None:
        assert is_allowed("baseline", 1, VAT, JOURNAL)
        assert not is_allowed("baseline", 1, DETAIL, JOURNAL)


class TestViolations:
    """Tests for violations."""

    def test_no_violations(self) -> None:
        values = {"invoice_number": "INV-1", "relation": 3, "dim2": Dimension.customer("1000")}

        assert violations(values, DETAIL, JOURNAL) == []

    def test_collects_each_violation(self) -> None:
        values = {"invoice_number": "INV-1", "dim2": Dimension.customer("1000"), "baseline": None}

        errors = violations(values, VAT, JOURNAL)

        assert len(errors) == 2
        assert isinstance(errors[0], InvalidFieldForLineTypeError)
        assert isinstance(errors[1], InvalidDimensionForLineTypeError)


class TestLegalityMatrix:
    """Tests for legality_matrix."""

    def test_journal_has_no_total_column(self) -> None:
        matrix = legality_matrix(JOURNAL)

        assert set(matrix) == set(GUARDED_FIELDS)
        for row in matrix.values():
            assert set(row) == {LineType.DETAIL, LineType.VAT}

    def test_sales_matrix_matches_rules(self) -> None:
        matrix = legality_matrix(SALES)

        for name, allowed in matrix.items():
            assert {lt for lt, ok in allowed.items() if ok} == EXPECTED[name]

    def test_performance_date_without_services(self) -> None:
        matrix = legality_matrix(SALES, PerformanceType.GOODS, fields=["performance_date"])

        assert matrix == {
            "performance_date": {LineType.DETAIL: False, LineType.VAT: False, LineType.TOTAL: False}
        }
