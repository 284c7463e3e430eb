"""docfill: rule-based field extraction and validation for document templates.

Raw text goes through three stages against a template schema:
quality assessment, pattern-based field extraction, and business-rule
validation. The result is a field map ready to fill the template plus
a verdict with errors, warnings and suggestions.
"""

from docfill.config import PipelineConfig
from docfill.extractor import FieldExtractor
from docfill.intake import IntakeError, IntakeResult, TextIntake
from docfill.pipeline import ExtractionOutcome, ExtractionPipeline
from docfill.quality import QualityAssessor, QualityMetrics
from docfill.result import ValidationResult
from docfill.schemas import Schema, SchemaRegistry, UnknownSchemaError
from docfill.taxonomy import SchemaId
from docfill.validator import SchemaValidator

__version__ = "0.1.0"

__all__ = [
    "ExtractionOutcome",
    "ExtractionPipeline",
    "FieldExtractor",
    "IntakeError",
    "IntakeResult",
    "PipelineConfig",
    "QualityAssessor",
    "QualityMetrics",
    "Schema",
    "SchemaId",
    "SchemaRegistry",
    "SchemaValidator",
    "TextIntake",
    "UnknownSchemaError",
    "ValidationResult",
]
