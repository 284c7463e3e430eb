"""Extraction pipeline.

Orchestrates: quality assessment -> field extraction -> schema
validation, producing a field map and a verdict in one call.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any

from docfill.config import PipelineConfig
from docfill.extractor import FieldExtractor
from docfill.quality import QualityAssessor, QualityMetrics
from docfill.records import FieldMap, FieldRecord
from docfill.result import ValidationResult
from docfill.schemas import SchemaRegistry
from docfill.taxonomy import SchemaId
from docfill.validator import SchemaValidator

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ExtractionOutcome:
    """Result of running the full pipeline on one input.

    Args:
        schema_id: Schema the input was processed against.
        field_map: Extracted fields.
        quality: Quality metrics of the input.
        validation: Validation verdict.
    """

    schema_id: SchemaId
    field_map: FieldMap = field(default_factory=dict)
    quality: QualityMetrics | None = None
    validation: ValidationResult | None = None

    @property
    def is_valid(self) -> bool:
        """True when the validation verdict has no hard errors."""
        return self.validation is not None and self.validation.is_valid

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary."""
        return {
            "schema_id": self.schema_id.value,
            "field_map": dict(self.field_map),
            "quality": self.quality.to_dict() if self.quality else None,
            "validation": self.validation.to_dict() if self.validation else None,
        }


class ExtractionPipeline:
    """Quality gate, field extraction and validation in one call.

    The pipeline holds no per-call state, so one instance can serve
    concurrent callers.

    Args:
        config: Pipeline configuration. Defaults to PipelineConfig().
        registry: Schema registry shared by all stages.

    Example::

        pipeline = ExtractionPipeline()
        outcome = pipeline.process("Invoice Number: INV-1\\nAmount: $90", "invoice")
        if outcome.is_valid:
            render(outcome.field_map)
    """

    def __init__(
        self,
        config: PipelineConfig | None = None,
        registry: SchemaRegistry | None = None,
    ) -> None:
        self._config = config or PipelineConfig()
        self._registry = registry or SchemaRegistry()
        self._assessor = QualityAssessor(self._registry, self._config)
        self._extractor = FieldExtractor(self._registry)
        self._validator = SchemaValidator(self._registry, self._config)

    @property
    def config(self) -> PipelineConfig:
        return self._config

    @property
    def registry(self) -> SchemaRegistry:
        return self._registry

    def process(self, raw_text: str, schema_id: SchemaId | str | None) -> ExtractionOutcome:
        """Run the pipeline on one input.

        Args:
            raw_text: Free text to extract from.
            schema_id: Template schema identifier.

        Returns:
            ExtractionOutcome with field map, quality and verdict.
        """
        schema = self._registry.get(schema_id)

        quality = self._assessor.assess_with_schema(raw_text, schema)
        field_map = self._extractor.extract_with_schema(raw_text, schema)
        validation = self._validator.validate_with_schema(field_map, schema, quality)

        logger.info(
            "Processed input for schema %s: %d fields, valid=%s, confidence=%.1f",
            schema.id.value,
            len(field_map),
            validation.is_valid,
            validation.confidence,
        )
        return ExtractionOutcome(
            schema_id=schema.id,
            field_map=field_map,
            quality=quality,
            validation=validation,
        )

    def process_many(
        self,
        items: Iterable[tuple[str, SchemaId | str | None]],
    ) -> list[ExtractionOutcome]:
        """Run the pipeline over (raw_text, schema_id) pairs in order."""
        return [self.process(text, schema_id) for text, schema_id in items]

    def to_record(self, outcome: ExtractionOutcome) -> FieldRecord:
        """Convert an outcome's field map into its schema's typed record."""
        return self._registry.get(outcome.schema_id).record_type.from_field_map(
            outcome.field_map
        )
