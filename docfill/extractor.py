"""Field extractor.

Applies a schema's field rules to raw text and collects the matched,
typed values into a field map.
"""

from __future__ import annotations

import logging

from docfill.records import FieldMap, FieldRecord
from docfill.schemas import Schema, SchemaRegistry
from docfill.taxonomy import SchemaId

logger = logging.getLogger(__name__)


class FieldExtractor:
    """Extracts typed field values from free text.

    Each rule of the schema is applied independently; only the first
    match per rule is used. Rules that do not match leave their key
    out of the result.

    Args:
        registry: Schema registry to use. Defaults to built-in.

    Example::

        extractor = FieldExtractor()
        fields = extractor.extract("Revenue: $1,200", "income-statement")
        assert fields == {"revenue": 1200}
    """

    def __init__(self, registry: SchemaRegistry | None = None) -> None:
        self._registry = registry or SchemaRegistry()

    def extract(self, raw_text: str, schema_id: SchemaId | str | None) -> FieldMap:
        """Extract a field map for a schema.

        Args:
            raw_text: Free text to search.
            schema_id: Schema to apply. Unknown identifiers yield an
                empty map.

        Returns:
            Mapping of field name to coerced value.
        """
        return self.extract_with_schema(raw_text, self._registry.get(schema_id))

    def extract_with_schema(self, raw_text: str, schema: Schema) -> FieldMap:
        """Extract a field map using an already resolved schema."""
        data: FieldMap = {}
        for rule in schema.rules:
            value = rule.apply(raw_text)
            if value is not None:
                data[rule.field_name] = value

        logger.debug(
            "Extracted %d/%d fields for schema %s",
            len(data),
            len(schema.rules),
            schema.id.value,
        )
        return data

    def extract_record(self, raw_text: str, schema_id: SchemaId | str | None) -> FieldRecord:
        """Extract fields into the schema's typed record.

        Args:
            raw_text: Free text to search.
            schema_id: Schema to apply.

        Returns:
            Typed record with None for unmatched fields.
        """
        schema = self._registry.get(schema_id)
        return schema.record_type.from_field_map(self.extract_with_schema(raw_text, schema))
