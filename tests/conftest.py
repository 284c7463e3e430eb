"""Shared fixtures for docfill tests."""

from __future__ import annotations

import pytest

from docfill.config import PipelineConfig
from docfill.pipeline import ExtractionPipeline
from docfill.schemas import SchemaRegistry

INVOICE_TEXT = (
    "Invoice Number: INV-2024-001\n"
    "Date: 2024-01-15\n"
    "Client: ABC Corporation\n"
    "Amount: $5,500"
)

INCOME_STATEMENT_TEXT = (
    "Revenue: $500,000\n"
    "Cost of Goods Sold: $200,000\n"
    "Operating Expenses: $150,000\n"
    "Net Income: $150,000"
)

EMPLOYEE_TEXT = (
    "Employee Name: Jane Doe\n"
    "Department: Engineering\n"
    "Position: Senior Developer\n"
    "Salary: $95,000\n"
    "Performance Score: 4.5\n"
    "Start Date: 2021-03-01"
)

BALANCE_SHEET_TEXT = (
    "Current Assets: $150,000\n"
    "Fixed Assets: $300,000\n"
    "Current Liabilities: $75,000\n"
    "Long-term Debt: $125,000\n"
    "Total Equity: $250,000"
)


@pytest.fixture
def config() -> PipelineConfig:
    """Default pipeline configuration."""
    return PipelineConfig()


@pytest.fixture
def registry() -> SchemaRegistry:
    """Registry with the built-in schemas."""
    return SchemaRegistry()


@pytest.fixture
def pipeline(config: PipelineConfig, registry: SchemaRegistry) -> ExtractionPipeline:
    """Pipeline with default configuration."""
    return ExtractionPipeline(config, registry)


@pytest.fixture
def invoice_text() -> str:
    return INVOICE_TEXT


@pytest.fixture
def income_statement_text() -> str:
    return INCOME_STATEMENT_TEXT


@pytest.fixture
def employee_text() -> str:
    return EMPLOYEE_TEXT


@pytest.fixture
def balance_sheet_text() -> str:
    return BALANCE_SHEET_TEXT
