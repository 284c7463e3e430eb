"""Template schema taxonomy.

Defines the template kinds the pipeline knows how to extract and
validate, and the families used to pick completeness weights.
"""

from __future__ import annotations

from enum import Enum


class SchemaFamily(str, Enum):
    """Group of schemas that share completeness scoring weights."""

    FINANCIAL = "financial"
    INVOICE = "invoice"
    EMPLOYEE = "employee"
    GENERIC = "generic"


class SchemaId(str, Enum):
    """Enumeration of all template schemas.

    UNKNOWN is a sentinel for identifiers outside the fixed set; it
    resolves to a generic schema with no extraction rules.
    """

    COMPREHENSIVE_FINANCIAL = "comprehensive-financial"
    INCOME_STATEMENT = "income-statement"
    BALANCE_SHEET = "balance-sheet"
    INVOICE = "invoice"
    EMPLOYEE_REPORT = "employee-report"
    UNKNOWN = "unknown"

    @classmethod
    def parse(cls, value: SchemaId | str | None) -> SchemaId:
        """Resolve a loosely formatted identifier to a SchemaId.

        Matching ignores case, surrounding whitespace, and the choice
        between underscores and hyphens. The legacy identifier
        ``financial-statement`` resolves to INCOME_STATEMENT.

        Args:
            value: Identifier from a caller.

        Returns:
            The matching SchemaId, or UNKNOWN if nothing matches.
        """
        if isinstance(value, SchemaId):
            return value
        if not value:
            return cls.UNKNOWN
        key = value.strip().lower().replace("_", "-")
        if key in _ALIASES:
            return _ALIASES[key]
        try:
            return cls(key)
        except ValueError:
            return cls.UNKNOWN


KNOWN_SCHEMAS: list[SchemaId] = [s for s in SchemaId if s != SchemaId.UNKNOWN]

_ALIASES: dict[str, SchemaId] = {
    "financial-statement": SchemaId.INCOME_STATEMENT,
}
