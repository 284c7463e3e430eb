"""Tests for the field extractor."""

from __future__ import annotations

from docfill.extractor import FieldExtractor
from docfill.records import EmployeeReportFields, InvoiceFields
from docfill.schemas import SchemaRegistry
from docfill.taxonomy import SchemaId


class TestFieldExtractor:
    """Tests for FieldExtractor.extract."""

    def test_invoice_scenario(self, invoice_text: str) -> None:
        """Test the reference invoice text."""
        fields = FieldExtractor().extract(invoice_text, SchemaId.INVOICE)
        assert fields == {
            "invoiceNumber": "INV-2024-001",
            "date": "2024-01-15",
            "amount": 5500,
            "client": "ABC Corporation",
        }

    def test_income_statement_scenario(self, income_statement_text: str) -> None:
        """Test the reference income statement text."""
        fields = FieldExtractor().extract(income_statement_text, "income-statement")
        assert fields == {
            "revenue": 500000,
            "cogs": 200000,
            "expenses": 150000,
            "netIncome": 150000,
        }

    def test_employee_report(self, employee_text: str) -> None:
        """Test all employee fields."""
        fields = FieldExtractor().extract(employee_text, SchemaId.EMPLOYEE_REPORT)
        assert fields == {
            "employeeName": "Jane Doe",
            "department": "Engineering",
            "position": "Senior Developer",
            "salary": 95000,
            "performanceScore": "4.5",
            "startDate": "2021-03-01",
        }

    def test_balance_sheet(self, balance_sheet_text: str) -> None:
        """Test all balance sheet fields."""
        fields = FieldExtractor().extract(balance_sheet_text, SchemaId.BALANCE_SHEET)
        assert fields == {
            "currentAssets": 150000,
            "fixedAssets": 300000,
            "currentLiabilities": 75000,
            "longTermDebt": 125000,
            "equity": 250000,
        }

    def test_keys_within_schema(self, income_statement_text: str) -> None:
        """Test that only the schema's own keys are produced."""
        registry = SchemaRegistry()
        for schema in registry:
            fields = FieldExtractor(registry).extract(income_statement_text, schema.id)
            assert set(fields) <= set(schema.field_names)

    def test_missing_fields_are_absent(self) -> None:
        """Test that unmatched rules leave no key."""
        fields = FieldExtractor().extract("Revenue: $1,000", SchemaId.INCOME_STATEMENT)
        assert fields == {"revenue": 1000}

    def test_unknown_schema_yields_empty_map(self) -> None:
        """Test that an unknown schema has no rules to apply."""
        assert FieldExtractor().extract("Revenue: $1,000", "cash-flow") == {}

    def test_legacy_alias(self) -> None:
        """Test that the legacy financial-statement id uses income rules."""
        fields = FieldExtractor().extract("Revenue: 10", "financial-statement")
        assert fields == {"revenue": 10}

    def test_empty_text(self) -> None:
        """Test that empty text yields an empty map."""
        assert FieldExtractor().extract("", SchemaId.INVOICE) == {}

    def test_deterministic(self, invoice_text: str) -> None:
        """Test that repeated extraction gives identical maps."""
        extractor = FieldExtractor()
        assert extractor.extract(invoice_text, "invoice") == extractor.extract(
            invoice_text, "invoice"
        )


class TestExtractRecord:
    """Tests for typed record extraction."""

    def test_invoice_record(self, invoice_text: str) -> None:
        """Test typed attributes on the invoice record."""
        record = FieldExtractor().extract_record(invoice_text, SchemaId.INVOICE)
        assert isinstance(record, InvoiceFields)
        assert record.invoice_number == "INV-2024-001"
        assert record.amount == 5500.0
        assert record.client == "ABC Corporation"

    def test_missing_attributes_are_none(self) -> None:
        """Test that unmatched fields are None on the record."""
        record = FieldExtractor().extract_record("Salary: 50,000", SchemaId.EMPLOYEE_REPORT)
        assert isinstance(record, EmployeeReportFields)
        assert record.salary == 50000
        assert record.employee_name is None
        assert record.start_date is None
