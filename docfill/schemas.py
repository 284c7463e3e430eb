"""Template schemas and the schema registry.

Each schema bundles the extraction rules, relevance keywords, typed
record layout and business-rule check for one template kind. The
registry resolves a SchemaId to its schema with a single lookup.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from typing import Any

from docfill import checks, patterns
from docfill.checks import BusinessCheck
from docfill.records import (
    BalanceSheetFields,
    ComprehensiveFinancialFields,
    EmployeeReportFields,
    FieldRecord,
    GenericFields,
    IncomeStatementFields,
    InvoiceFields,
)
from docfill.rules import FieldRule
from docfill.taxonomy import SchemaFamily, SchemaId


class UnknownSchemaError(KeyError):
    """Raised by strict lookups for identifiers outside the known set."""

    def __init__(self, schema_id: object) -> None:
        self.schema_id = schema_id
        super().__init__(f"Unknown template schema: {schema_id!r}")

    def __str__(self) -> str:
        return str(self.args[0])


@dataclass(frozen=True)
class Schema:
    """Extraction and validation rules for one template kind.

    Args:
        id: The schema identifier.
        name: Display name.
        description: Short description of the expected data, used in
            suggestions when input looks unrelated.
        family: Completeness scoring family.
        rules: Field extraction rules.
        keywords: Relevance keywords (lowercase).
        record_type: Typed record class for extracted fields.
        check: Business-rule check run by the validator.
    """

    id: SchemaId
    name: str
    description: str
    family: SchemaFamily
    rules: tuple[FieldRule, ...]
    keywords: tuple[str, ...]
    record_type: type[FieldRecord]
    check: BusinessCheck

    @property
    def field_names(self) -> list[str]:
        """Return the field-map keys this schema can produce."""
        return [r.field_name for r in self.rules]

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary."""
        return {
            "id": self.id.value,
            "name": self.name,
            "description": self.description,
            "family": self.family.value,
            "fields": [
                {"name": r.field_name, "kind": r.kind.value, "description": r.description}
                for r in self.rules
            ],
            "keywords": list(self.keywords),
        }


# --- Built-in schemas ---

_COMPREHENSIVE_FINANCIAL_SCHEMA = Schema(
    id=SchemaId.COMPREHENSIVE_FINANCIAL,
    name="Comprehensive Financial Statements",
    description=(
        "comprehensive financial statements with income, balance sheet, and cash flow data"
    ),
    family=SchemaFamily.FINANCIAL,
    rules=patterns.COMPREHENSIVE_FINANCIAL_RULES,
    keywords=patterns.RELEVANCE_KEYWORDS[SchemaId.COMPREHENSIVE_FINANCIAL],
    record_type=ComprehensiveFinancialFields,
    check=checks.check_income_statement,
)

_INCOME_STATEMENT_SCHEMA = Schema(
    id=SchemaId.INCOME_STATEMENT,
    name="Income Statement",
    description="financial data including revenue, costs, and expenses",
    family=SchemaFamily.FINANCIAL,
    rules=patterns.INCOME_STATEMENT_RULES,
    keywords=patterns.RELEVANCE_KEYWORDS[SchemaId.INCOME_STATEMENT],
    record_type=IncomeStatementFields,
    check=checks.check_income_statement,
)

_BALANCE_SHEET_SCHEMA = Schema(
    id=SchemaId.BALANCE_SHEET,
    name="Balance Sheet",
    description="balance sheet data including assets, liabilities, and equity",
    family=SchemaFamily.FINANCIAL,
    rules=patterns.BALANCE_SHEET_RULES,
    keywords=patterns.RELEVANCE_KEYWORDS[SchemaId.BALANCE_SHEET],
    record_type=BalanceSheetFields,
    check=checks.check_balance_sheet,
)

_INVOICE_SCHEMA = Schema(
    id=SchemaId.INVOICE,
    name="Invoice Template",
    description="invoice data including amounts, client information, and dates",
    family=SchemaFamily.INVOICE,
    rules=patterns.INVOICE_RULES,
    keywords=patterns.RELEVANCE_KEYWORDS[SchemaId.INVOICE],
    record_type=InvoiceFields,
    check=checks.check_invoice,
)

_EMPLOYEE_REPORT_SCHEMA = Schema(
    id=SchemaId.EMPLOYEE_REPORT,
    name="Employee Report",
    description="employee information including names, salaries, and performance data",
    family=SchemaFamily.EMPLOYEE,
    rules=patterns.EMPLOYEE_REPORT_RULES,
    keywords=patterns.RELEVANCE_KEYWORDS[SchemaId.EMPLOYEE_REPORT],
    record_type=EmployeeReportFields,
    check=checks.check_employee_report,
)

_GENERIC_SCHEMA = Schema(
    id=SchemaId.UNKNOWN,
    name="Generic",
    description="relevant data for the selected template",
    family=SchemaFamily.GENERIC,
    rules=(),
    keywords=(),
    record_type=GenericFields,
    check=checks.check_generic,
)


class SchemaRegistry:
    """Registry mapping schema identifiers to schemas.

    Comes pre-loaded with the built-in template schemas. Lookups accept
    a SchemaId or any string understood by ``SchemaId.parse``.

    Example::

        registry = SchemaRegistry()
        schema = registry.get("invoice")
        print(schema.field_names)
    """

    def __init__(self) -> None:
        self._schemas: dict[SchemaId, Schema] = {}
        self._register_builtins()

    def _register_builtins(self) -> None:
        """Register all built-in schemas."""
        for schema in [
            _COMPREHENSIVE_FINANCIAL_SCHEMA,
            _INCOME_STATEMENT_SCHEMA,
            _BALANCE_SHEET_SCHEMA,
            _INVOICE_SCHEMA,
            _EMPLOYEE_REPORT_SCHEMA,
        ]:
            self._schemas[schema.id] = schema

    def get(self, schema_id: SchemaId | str | None) -> Schema:
        """Get the schema for an identifier.

        Falls back to the generic schema for unrecognized identifiers,
        so callers always receive a usable schema.

        Args:
            schema_id: Identifier to look up.

        Returns:
            The matching Schema, or the generic schema.
        """
        return self._schemas.get(SchemaId.parse(schema_id), _GENERIC_SCHEMA)

    def require(self, schema_id: SchemaId | str | None) -> Schema:
        """Get the schema for an identifier, rejecting unknown ones.

        Args:
            schema_id: Identifier to look up.

        Returns:
            The matching Schema.

        Raises:
            UnknownSchemaError: If the identifier is not registered.
        """
        schema = self._schemas.get(SchemaId.parse(schema_id))
        if schema is None:
            raise UnknownSchemaError(schema_id)
        return schema

    def register(self, schema: Schema) -> None:
        """Register a custom schema.

        Args:
            schema: The schema to register. Overwrites any existing
                schema with the same identifier.
        """
        self._schemas[schema.id] = schema

    @property
    def registered_ids(self) -> list[SchemaId]:
        """Return identifiers with registered schemas."""
        return list(self._schemas.keys())

    def __iter__(self) -> Iterator[Schema]:
        return iter(self._schemas.values())
