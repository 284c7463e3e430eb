"""Typed per-schema field records.

Each schema has a record dataclass with one optional attribute per
extraction rule. Absent fields are None. Records convert to and from
the generic string-keyed field map used at the pipeline boundary.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field, fields
from typing import Any, Mapping, TypeVar

from docfill.rules import FieldValue

FieldMap = dict[str, FieldValue]

R = TypeVar("R", bound="FieldRecord")


def _key(name: str) -> Any:
    """Declare an optional record attribute stored under *name*."""
    return field(default=None, metadata={"key": name})


def as_number(value: Any) -> float:
    """Read a field value as a number, treating unusable values as 0.

    Args:
        value: Field value (number, numeric string, or None).

    Returns:
        The numeric value, or 0.0 when absent or not numeric. Integers
        too large for a float become signed infinity.
    """
    if value is None or isinstance(value, bool):
        return 0.0
    if isinstance(value, int):
        try:
            return float(value)
        except OverflowError:
            return math.inf if value > 0 else -math.inf
    if isinstance(value, float):
        return value
    try:
        return float(str(value).strip())
    except ValueError:
        return 0.0


@dataclass(frozen=True)
class FieldRecord:
    """Base class for typed field records."""

    @classmethod
    def field_keys(cls) -> list[str]:
        """Return the field-map keys this record understands."""
        return [f.metadata["key"] for f in fields(cls)]

    @classmethod
    def from_field_map(cls: type[R], data: Mapping[str, Any]) -> R:
        """Build a record from a field map, ignoring unknown keys."""
        kwargs = {f.name: data.get(f.metadata["key"]) for f in fields(cls)}
        return cls(**kwargs)

    def to_field_map(self) -> FieldMap:
        """Return the generic view, omitting absent fields."""
        result: FieldMap = {}
        for f in fields(self):
            value = getattr(self, f.name)
            if value is not None:
                result[f.metadata["key"]] = value
        return result


@dataclass(frozen=True)
class IncomeStatementFields(FieldRecord):
    """Income statement headline figures."""

    revenue: int | None = _key("revenue")
    cogs: int | None = _key("cogs")
    expenses: int | None = _key("expenses")
    net_income: int | None = _key("netIncome")


@dataclass(frozen=True)
class ComprehensiveFinancialFields(FieldRecord):
    """Income statement, balance sheet and cash flow figures."""

    revenue: int | None = _key("revenue")
    cogs: int | None = _key("cogs")
    expenses: int | None = _key("expenses")
    depreciation: int | None = _key("depreciation")
    interest_expense: int | None = _key("interestExpense")
    tax_expense: int | None = _key("taxExpense")
    net_income: int | None = _key("netIncome")

    cash: int | None = _key("cash")
    accounts_receivable: int | None = _key("accountsReceivable")
    inventory: int | None = _key("inventory")
    ppe: int | None = _key("ppe")
    intangible_assets: int | None = _key("intangibleAssets")
    accounts_payable: int | None = _key("accountsPayable")
    short_term_debt: int | None = _key("shortTermDebt")
    long_term_debt: int | None = _key("longTermDebt")
    share_capital: int | None = _key("shareCapital")
    retained_earnings: int | None = _key("retainedEarnings")

    capex: int | None = _key("capex")
    working_capital_change: int | None = _key("workingCapitalChange")
    debt_proceeds: int | None = _key("debtProceeds")
    debt_repayments: int | None = _key("debtRepayments")
    dividends_paid: int | None = _key("dividendsPaid")
    beginning_cash: int | None = _key("beginningCash")


@dataclass(frozen=True)
class BalanceSheetFields(FieldRecord):
    """Balance sheet totals."""

    current_assets: int | None = _key("currentAssets")
    fixed_assets: int | None = _key("fixedAssets")
    current_liabilities: int | None = _key("currentLiabilities")
    long_term_debt: int | None = _key("longTermDebt")
    equity: int | None = _key("equity")


@dataclass(frozen=True)
class InvoiceFields(FieldRecord):
    """Invoice header fields."""

    invoice_number: str | None = _key("invoiceNumber")
    date: str | None = _key("date")
    amount: float | None = _key("amount")
    client: str | None = _key("client")


@dataclass(frozen=True)
class EmployeeReportFields(FieldRecord):
    """Employee record fields. The performance score is kept as text."""

    employee_name: str | None = _key("employeeName")
    department: str | None = _key("department")
    position: str | None = _key("position")
    salary: int | None = _key("salary")
    performance_score: str | None = _key("performanceScore")
    start_date: str | None = _key("startDate")


@dataclass(frozen=True)
class GenericFields(FieldRecord):
    """Untyped record for schemas without a dedicated layout."""

    values: dict[str, FieldValue] = field(default_factory=dict)

    @classmethod
    def field_keys(cls) -> list[str]:
        return []

    @classmethod
    def from_field_map(cls, data: Mapping[str, Any]) -> GenericFields:
        return cls(values=dict(data))

    def to_field_map(self) -> FieldMap:
        return dict(self.values)
