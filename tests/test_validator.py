"""Tests for business-rule checks and the schema validator."""

from __future__ import annotations

import pytest

from docfill.checks import (
    check_balance_sheet,
    check_employee_report,
    check_generic,
    check_income_statement,
    check_invoice,
)
from docfill.config import PipelineConfig
from docfill.quality import QualityMetrics
from docfill.records import (
    BalanceSheetFields,
    EmployeeReportFields,
    GenericFields,
    IncomeStatementFields,
    InvoiceFields,
)
from docfill.result import Findings, ValidationResult
from docfill.validator import UNRELATED_INPUT_ERROR, SchemaValidator

# --- Helpers ---


def _metrics(overall: float) -> QualityMetrics:
    """Quality metrics with a given overall score."""
    return QualityMetrics(relevance=0.5, completeness=0.5, accuracy=0.5, overall=overall)


def _run(check, record, config: PipelineConfig | None = None) -> ValidationResult:
    """Run one business check and freeze its findings."""
    findings = Findings()
    check(record, findings, config or PipelineConfig())
    return findings.freeze(50.0)


# --- Findings Tests ---


class TestFindings:
    """Tests for the Findings builder."""

    def test_freeze_valid_without_errors(self) -> None:
        """Test that warnings alone keep the result valid."""
        findings = Findings()
        findings.warn("careful")
        findings.suggest("try this")
        result = findings.freeze(80.0)
        assert result.is_valid
        assert result.warnings == ("careful",)
        assert result.suggestions == ("try this",)
        assert result.confidence == 80.0

    def test_freeze_invalid_with_error(self) -> None:
        """Test that any error invalidates the result."""
        findings = Findings()
        findings.error("broken")
        assert not findings.freeze(90.0).is_valid

    def test_is_clean(self) -> None:
        """Test is_clean ignores suggestions."""
        findings = Findings()
        findings.suggest("note")
        assert findings.is_clean
        findings.warn("warn")
        assert not findings.is_clean

    def test_result_to_dict(self) -> None:
        """Test ValidationResult serialization."""
        result = ValidationResult(is_valid=False, confidence=12.5, errors=("e",))
        assert result.to_dict() == {
            "is_valid": False,
            "confidence": 12.5,
            "errors": ["e"],
            "warnings": [],
            "suggestions": [],
        }


# --- Business check Tests ---


class TestIncomeStatementCheck:
    """Tests for check_income_statement."""

    def test_clean_statement(self) -> None:
        """Test that sound figures get only the positive suggestion."""
        record = IncomeStatementFields(revenue=500000, cogs=200000, expenses=150000)
        result = _run(check_income_statement, record)
        assert result.is_valid
        assert result.warnings == ()
        assert len(result.suggestions) == 1
        assert "looks good" in result.suggestions[0]

    def test_missing_fields_warning(self) -> None:
        """Test the missing-or-zero warning lists the fields."""
        result = _run(check_income_statement, IncomeStatementFields(revenue=1000, expenses=0))
        assert "Missing or zero values for: cogs, expenses" in result.warnings
        assert result.is_valid

    def test_cogs_exceeds_revenue(self) -> None:
        """Test the COGS above revenue warning."""
        record = IncomeStatementFields(revenue=100, cogs=150, expenses=10)
        result = _run(check_income_statement, record)
        assert "Cost of Goods Sold exceeds Revenue - please verify" in result.warnings

    def test_high_cost_ratio(self) -> None:
        """Test the total cost ratio warning."""
        record = IncomeStatementFields(revenue=100, cogs=90, expenses=70)
        result = _run(check_income_statement, record)
        assert "Total costs seem unusually high compared to revenue" in result.warnings

    def test_cost_ratio_limit_configurable(self) -> None:
        """Test that the ratio limit comes from config."""
        record = IncomeStatementFields(revenue=100, cogs=90, expenses=70)
        result = _run(check_income_statement, record, PipelineConfig(cost_ratio_limit=2.0))
        assert "Total costs seem unusually high compared to revenue" not in result.warnings

    def test_negative_revenue_is_error(self) -> None:
        """Test that negative revenue is a hard error."""
        result = _run(check_income_statement, IncomeStatementFields(revenue=-500))
        assert "Revenue cannot be negative" in result.errors
        assert not result.is_valid
        assert result.suggestions == ()

    def test_oversized_amounts(self) -> None:
        """Test that integers beyond float range are checked without raising."""
        record = IncomeStatementFields(revenue=10**400, cogs=10**400, expenses=5)
        result = _run(check_income_statement, record)
        assert result.is_valid
        assert "Total costs seem unusually high compared to revenue" not in result.warnings

        result = _run(check_income_statement, IncomeStatementFields(revenue=-(10**400)))
        assert "Revenue cannot be negative" in result.errors


class TestBalanceSheetCheck:
    """Tests for check_balance_sheet."""

    def test_identity_holds(self) -> None:
        """Test the reference balanced sheet."""
        record = BalanceSheetFields.from_field_map(
            {
                "currentAssets": 150000,
                "fixedAssets": 300000,
                "currentLiabilities": 75000,
                "longTermDebt": 125000,
                "equity": 250000,
            }
        )
        result = _run(check_balance_sheet, record)
        assert result.warnings == ()
        assert result.is_valid

    def test_within_tolerance(self) -> None:
        """Test that a mismatch under 1% of assets passes."""
        record = BalanceSheetFields(current_assets=1000, equity=995)
        assert _run(check_balance_sheet, record).warnings == ()

    def test_does_not_balance(self) -> None:
        """Test the mismatch warning."""
        record = BalanceSheetFields(current_assets=1000, equity=500)
        result = _run(check_balance_sheet, record)
        assert any("does not balance" in w for w in result.warnings)
        assert result.is_valid

    def test_no_assets(self) -> None:
        """Test the missing assets warning."""
        result = _run(check_balance_sheet, BalanceSheetFields(equity=100))
        assert "No asset values detected" in result.warnings

    def test_oversized_amounts(self) -> None:
        """Test that integers beyond float range are checked without raising."""
        record = BalanceSheetFields(current_assets=10**400, equity=10**400)
        result = _run(check_balance_sheet, record)
        assert result.is_valid
        assert "No asset values detected" not in result.warnings


class TestInvoiceCheck:
    """Tests for check_invoice."""

    def test_complete_invoice(self) -> None:
        """Test that a complete invoice has no findings."""
        record = InvoiceFields(
            invoice_number="INV-1", date="2024-01-15", amount=10.0, client="Acme"
        )
        result = _run(check_invoice, record)
        assert result.is_valid
        assert result.errors == result.warnings == result.suggestions == ()

    @pytest.mark.parametrize("amount", [None, 0.0, -5.0])
    def test_amount_required_positive(self, amount: float | None) -> None:
        """Test the amount error."""
        result = _run(check_invoice, InvoiceFields(amount=amount, client="Acme"))
        assert "Invoice amount is required and must be positive" in result.errors
        assert not result.is_valid

    def test_missing_client_and_number(self) -> None:
        """Test client warning and invoice number suggestion."""
        result = _run(check_invoice, InvoiceFields(amount=25.0))
        assert result.is_valid
        assert "Client name is missing" in result.warnings
        assert "Consider adding an invoice number for better tracking" in result.suggestions


class TestEmployeeReportCheck:
    """Tests for check_employee_report."""

    def test_missing_name(self) -> None:
        """Test the missing name warning."""
        result = _run(check_employee_report, EmployeeReportFields(salary=60000))
        assert result.warnings == ("Employee name is missing",)

    @pytest.mark.parametrize("salary", [10000, 750000])
    def test_unusual_salary(self, salary: int) -> None:
        """Test salaries outside the usual range."""
        record = EmployeeReportFields(employee_name="Jane", salary=salary)
        result = _run(check_employee_report, record)
        assert "Salary amount seems unusual - please verify" in result.warnings
        assert result.is_valid

    def test_absent_salary_not_flagged(self) -> None:
        """Test that a missing salary is not called unusual."""
        result = _run(check_employee_report, EmployeeReportFields(employee_name="Jane"))
        assert result.warnings == ()


class TestGenericCheck:
    """Tests for check_generic."""

    def test_empty_record_is_error(self) -> None:
        """Test that nothing extracted is a hard error."""
        result = _run(check_generic, GenericFields())
        assert result.errors == ("No data could be extracted from the input",)

    def test_non_empty_record_passes(self) -> None:
        """Test that any extracted value passes."""
        assert _run(check_generic, GenericFields(values={"x": 1})).is_valid


# --- SchemaValidator Tests ---


class TestSchemaValidator:
    """Tests for SchemaValidator.validate."""

    def test_confidence_equals_quality(self) -> None:
        """Test confidence is the overall quality times 100."""
        result = SchemaValidator().validate(
            {"amount": 50.0, "client": "A"}, "invoice", _metrics(0.72)
        )
        assert result.confidence == pytest.approx(72.0)

    def test_below_floor_short_circuits(self) -> None:
        """Test low quality yields only the unrelated-input findings."""
        result = SchemaValidator().validate({"revenue": -10}, "income-statement", _metrics(0.2))
        assert not result.is_valid
        assert result.errors == (UNRELATED_INPUT_ERROR,)
        assert result.warnings == ()
        assert result.suggestions == (
            "Please provide data relevant to financial data including revenue, costs, and expenses",
        )

    def test_floor_is_inclusive(self) -> None:
        """Test that quality exactly at the floor runs business rules."""
        result = SchemaValidator().validate(
            {"amount": 5.0, "client": "A"}, "invoice", _metrics(0.3)
        )
        assert UNRELATED_INPUT_ERROR not in result.errors

    def test_configurable_floor(self) -> None:
        """Test that the quality floor comes from config."""
        validator = SchemaValidator(config=PipelineConfig(quality_floor=0.8))
        result = validator.validate({"amount": 5.0}, "invoice", _metrics(0.7))
        assert result.errors == (UNRELATED_INPUT_ERROR,)

    def test_errors_do_not_change_confidence(self) -> None:
        """Test that hard errors leave confidence unchanged."""
        result = SchemaValidator().validate({"revenue": -500}, "income-statement", _metrics(0.54))
        assert not result.is_valid
        assert result.confidence == pytest.approx(54.0)

    def test_comprehensive_uses_income_checks(self) -> None:
        """Test that comprehensive statements get income statement checks."""
        result = SchemaValidator().validate(
            {"revenue": -1, "cash": 100}, "comprehensive-financial", _metrics(0.6)
        )
        assert "Revenue cannot be negative" in result.errors

    def test_unknown_schema_generic_rules(self) -> None:
        """Test that an unknown schema with no data is invalid."""
        result = SchemaValidator().validate({}, "mystery", _metrics(0.5))
        assert result.errors == ("No data could be extracted from the input",)

    def test_unknown_schema_unrelated_suggestion(self) -> None:
        """Test the generic description in the unrelated-input suggestion."""
        result = SchemaValidator().validate({}, "mystery", _metrics(0.1))
        assert result.suggestions == (
            "Please provide data relevant to relevant data for the selected template",
        )

    def test_oversized_salary(self) -> None:
        """Test that a salary beyond float range is flagged, not raised."""
        result = SchemaValidator().validate(
            {"employeeName": "A", "salary": 10**400}, "employee-report", _metrics(0.6)
        )
        assert "Salary amount seems unusual - please verify" in result.warnings
