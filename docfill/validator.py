"""Schema validator.

Applies template-specific business rules to an extracted field map
and folds in the input quality score.
"""

from __future__ import annotations

import logging
from typing import Any, Mapping

from docfill.config import PipelineConfig
from docfill.quality import QualityMetrics
from docfill.result import Findings, ValidationResult
from docfill.schemas import Schema, SchemaRegistry
from docfill.taxonomy import SchemaId

logger = logging.getLogger(__name__)

UNRELATED_INPUT_ERROR = "Input appears to be unrelated to the selected template"


class SchemaValidator:
    """Validates extracted field maps against schema business rules.

    Confidence always equals the overall quality score times 100;
    business-rule findings never adjust it.

    Args:
        registry: Schema registry to use. Defaults to built-in.
        config: Thresholds. Defaults to PipelineConfig().

    Example::

        validator = SchemaValidator()
        result = validator.validate({"amount": 120.0}, "invoice", metrics)
        assert result.is_valid
    """

    def __init__(
        self,
        registry: SchemaRegistry | None = None,
        config: PipelineConfig | None = None,
    ) -> None:
        self._registry = registry or SchemaRegistry()
        self._config = config or PipelineConfig()

    def validate(
        self,
        field_map: Mapping[str, Any],
        schema_id: SchemaId | str | None,
        quality: QualityMetrics,
    ) -> ValidationResult:
        """Validate a field map.

        Args:
            field_map: Extracted fields.
            schema_id: Schema whose rules apply.
            quality: Precomputed quality metrics for the source text.

        Returns:
            Frozen ValidationResult.
        """
        return self.validate_with_schema(field_map, self._registry.get(schema_id), quality)

    def validate_with_schema(
        self,
        field_map: Mapping[str, Any],
        schema: Schema,
        quality: QualityMetrics,
    ) -> ValidationResult:
        """Validate a field map using an already resolved schema."""
        confidence = quality.overall * 100
        findings = Findings()

        if quality.overall < self._config.quality_floor:
            logger.debug(
                "Quality %.3f below floor %.3f for schema %s",
                quality.overall,
                self._config.quality_floor,
                schema.id.value,
            )
            findings.error(UNRELATED_INPUT_ERROR)
            findings.suggest(f"Please provide data relevant to {schema.description}")
            return findings.freeze(confidence)

        record = schema.record_type.from_field_map(field_map)
        schema.check(record, findings, self._config)
        return findings.freeze(confidence)
