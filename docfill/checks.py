"""Template-specific business rules.

Each check inspects a typed field record and records errors, warnings
and suggestions on a Findings builder. Errors make the result invalid;
warnings and suggestions never do.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from docfill.config import PipelineConfig
from docfill.records import (
    BalanceSheetFields,
    EmployeeReportFields,
    FieldRecord,
    IncomeStatementFields,
    InvoiceFields,
    as_number,
)
from docfill.result import Findings

BusinessCheck = Callable[[Any, Findings, PipelineConfig], None]

# Reported when missing or zero
_REQUIRED_INCOME_FIELDS = ("revenue", "cogs", "expenses")


def check_income_statement(
    record: IncomeStatementFields,
    findings: Findings,
    config: PipelineConfig,
) -> None:
    """Check revenue and cost figures of an income statement.

    Also used for comprehensive financial statements, whose record
    carries the same headline attributes.

    Args:
        record: Income statement or comprehensive financial record.
        findings: Collector for results.
        config: Pipeline thresholds.
    """
    missing = [name for name in _REQUIRED_INCOME_FIELDS if not as_number(getattr(record, name))]
    if missing:
        findings.warn(f"Missing or zero values for: {', '.join(missing)}")

    revenue = as_number(record.revenue)
    cogs = as_number(record.cogs)
    expenses = as_number(record.expenses)

    if cogs > revenue:
        findings.warn("Cost of Goods Sold exceeds Revenue - please verify")

    if revenue > 0 and (cogs + expenses) > revenue * config.cost_ratio_limit:
        findings.warn("Total costs seem unusually high compared to revenue")

    if revenue < 0:
        findings.error("Revenue cannot be negative")

    if findings.is_clean:
        findings.suggest(
            "Financial data looks good! Consider adding more detailed expense breakdowns."
        )


def check_balance_sheet(
    record: BalanceSheetFields,
    findings: Findings,
    config: PipelineConfig,
) -> None:
    """Check that assets equal liabilities plus equity."""
    assets = as_number(record.current_assets) + as_number(record.fixed_assets)
    liabilities = as_number(record.current_liabilities) + as_number(record.long_term_debt)
    equity = as_number(record.equity)

    difference = abs(assets - (liabilities + equity))
    if difference > assets * config.balance_tolerance:
        findings.warn("Balance sheet does not balance - Assets ≠ Liabilities + Equity")

    if assets == 0:
        findings.warn("No asset values detected")


def check_invoice(
    record: InvoiceFields,
    findings: Findings,
    config: PipelineConfig,
) -> None:
    """Check invoice amount, client and number."""
    if record.amount is None or as_number(record.amount) <= 0:
        findings.error("Invoice amount is required and must be positive")

    if not record.client or not str(record.client).strip():
        findings.warn("Client name is missing")

    if not record.invoice_number:
        findings.suggest("Consider adding an invoice number for better tracking")


def check_employee_report(
    record: EmployeeReportFields,
    findings: Findings,
    config: PipelineConfig,
) -> None:
    """Check employee name presence and salary range."""
    if not record.employee_name:
        findings.warn("Employee name is missing")

    salary = as_number(record.salary)
    if salary > 0 and not config.salary_min <= salary <= config.salary_max:
        findings.warn("Salary amount seems unusual - please verify")


def check_generic(
    record: FieldRecord,
    findings: Findings,
    config: PipelineConfig,
) -> None:
    """Require that something was extracted for schemas without rules."""
    if not record.to_field_map():
        findings.error("No data could be extracted from the input")
