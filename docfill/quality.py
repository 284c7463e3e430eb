"""Input quality assessment.

Scores raw text against a schema before extraction results are trusted.
Quality is scored across three dimensions:
- Relevance (does the text mention the template's vocabulary?)
- Completeness (does it carry the kinds of tokens the template needs?)
- Accuracy (are those tokens well formed?)
Obvious nonsense short-circuits to a fixed low score.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Any

from docfill.config import PipelineConfig
from docfill.detectors import detect_garbage
from docfill.schemas import Schema, SchemaRegistry
from docfill.taxonomy import SchemaFamily, SchemaId

logger = logging.getLogger(__name__)

# Structural signals for completeness
_DIGIT_RE = re.compile(r"\d")
_CURRENCY_RE = re.compile(r"\$|USD|EUR|GBP|\d+\.\d{2}")
_PERCENT_RE = re.compile(r"%|\d+\s*percent")
_DATE_RE = re.compile(r"\d{1,2}[/-]\d{1,2}[/-]\d{2,4}|\d{4}[/-]\d{1,2}[/-]\d{1,2}")

# Well-formed tokens for accuracy
_GROUPED_NUMBER_RE = re.compile(r"\d+(?:,\d{3})*(?:\.\d{2})?")
_CURRENCY_AMOUNT_RE = re.compile(r"\$\d+(?:,\d{3})*(?:\.\d{2})?")
_LEAKED_PLACEHOLDERS = ("undefined", "null")

# (digits, currency, percent, dates, long text) weights per family
_COMPLETENESS_WEIGHTS: dict[SchemaFamily, tuple[float, float, float, float, float]] = {
    SchemaFamily.FINANCIAL: (0.4, 0.4, 0.2, 0.0, 0.0),
    SchemaFamily.INVOICE: (0.3, 0.4, 0.0, 0.3, 0.0),
    SchemaFamily.EMPLOYEE: (0.3, 0.3, 0.0, 0.2, 0.2),
    SchemaFamily.GENERIC: (0.0, 0.0, 0.0, 0.0, 0.0),
}
_LONG_TEXT_CHARS = 50

_ACCURACY_BASE = 0.5
_ACCURACY_NUMBER_BONUS = 0.2
_ACCURACY_CURRENCY_BONUS = 0.2
_ACCURACY_LENGTH_BONUS = 0.1
_ACCURACY_PLACEHOLDER_PENALTY = 0.3


@dataclass(frozen=True)
class QualityMetrics:
    """Quality scores for one input against one schema.

    Args:
        relevance: Share of schema keywords present (0.0-1.0), or None
            when the garbage gate fired.
        completeness: Weighted presence of structural signals, or None.
        accuracy: Well-formedness score, or None.
        overall: Weighted combination (0.0-1.0).
        garbage_detector: Name of the detector that fired, if any.
    """

    relevance: float | None
    completeness: float | None
    accuracy: float | None
    overall: float
    garbage_detector: str | None = None

    @property
    def is_garbage(self) -> bool:
        """True when the input was rejected as nonsense."""
        return self.garbage_detector is not None

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary."""
        return {
            "relevance": self.relevance,
            "completeness": self.completeness,
            "accuracy": self.accuracy,
            "overall": self.overall,
            "garbage_detector": self.garbage_detector,
        }


class QualityAssessor:
    """Score raw text for relevance, completeness and accuracy.

    Args:
        registry: Schema registry to use. Defaults to built-in.
        config: Weights and thresholds. Defaults to PipelineConfig().

    Example::

        assessor = QualityAssessor()
        metrics = assessor.assess("Invoice total: $500", "invoice")
        print(f"{metrics.overall:.2f}")
    """

    def __init__(
        self,
        registry: SchemaRegistry | None = None,
        config: PipelineConfig | None = None,
    ) -> None:
        self._registry = registry or SchemaRegistry()
        self._config = config or PipelineConfig()

    def assess(self, raw_text: str, schema_id: SchemaId | str | None) -> QualityMetrics:
        """Assess raw text against a schema.

        Args:
            raw_text: Input text.
            schema_id: Schema to score against.

        Returns:
            QualityMetrics with all scores in [0, 1].
        """
        return self.assess_with_schema(raw_text, self._registry.get(schema_id))

    def assess_with_schema(self, raw_text: str, schema: Schema) -> QualityMetrics:
        """Assess raw text using an already resolved schema."""
        detector = detect_garbage(raw_text)
        if detector is not None:
            logger.info(
                "Input rejected as nonsense by %s for schema %s",
                detector.name,
                schema.id.value,
            )
            return QualityMetrics(
                relevance=None,
                completeness=None,
                accuracy=None,
                overall=self._config.garbage_score,
                garbage_detector=detector.name,
            )

        relevance = self._score_relevance(raw_text, schema)
        completeness = self._score_completeness(raw_text, schema)
        accuracy = self._score_accuracy(raw_text)

        cfg = self._config
        overall = (
            cfg.relevance_weight * relevance
            + cfg.completeness_weight * completeness
            + cfg.accuracy_weight * accuracy
        )
        return QualityMetrics(
            relevance=relevance,
            completeness=completeness,
            accuracy=accuracy,
            overall=min(max(overall, 0.0), 1.0),
        )

    @staticmethod
    def _score_relevance(text: str, schema: Schema) -> float:
        """Share of schema keywords found anywhere in the text."""
        if not schema.keywords:
            return 0.0
        lowered = text.lower()
        hits = sum(1 for keyword in schema.keywords if keyword in lowered)
        return min(hits / len(schema.keywords), 1.0)

    @staticmethod
    def _score_completeness(text: str, schema: Schema) -> float:
        """Weighted presence of the token kinds the schema family needs."""
        digits, currency, percent, dates, long_text = _COMPLETENESS_WEIGHTS[schema.family]
        score = 0.0
        if digits and _DIGIT_RE.search(text):
            score += digits
        if currency and _CURRENCY_RE.search(text):
            score += currency
        if percent and _PERCENT_RE.search(text):
            score += percent
        if dates and _DATE_RE.search(text):
            score += dates
        if long_text and len(text) > _LONG_TEXT_CHARS:
            score += long_text
        return min(score, 1.0)

    def _score_accuracy(self, text: str) -> float:
        """Reward well-formed numbers, penalize leaked placeholders."""
        score = _ACCURACY_BASE

        if _GROUPED_NUMBER_RE.search(text):
            score += _ACCURACY_NUMBER_BONUS

        if _CURRENCY_AMOUNT_RE.search(text):
            score += _ACCURACY_CURRENCY_BONUS

        if any(token in text for token in _LEAKED_PLACEHOLDERS):
            score -= _ACCURACY_PLACEHOLDER_PENALTY

        if self._config.min_text_length < len(text) < self._config.max_text_length:
            score += _ACCURACY_LENGTH_BONUS

        return min(max(score, 0.0), 1.0)
