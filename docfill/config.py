"""Pipeline configuration.

Thresholds and weights shared by the quality assessor, the schema
validator, and the intake layer.
"""

from __future__ import annotations

import math
from dataclasses import asdict, dataclass, fields
from typing import Any

DEFAULT_STAND_IN_TEXT = (
    "Revenue: $100,000\nCOGS: $50,000\nExpenses: $30,000\nNet Income: $20,000"
)

_WEIGHT_FIELDS = (
    "relevance_weight",
    "completeness_weight",
    "accuracy_weight",
    "quality_floor",
    "garbage_score",
    "balance_tolerance",
)
_INT_FIELDS = (
    "salary_min",
    "salary_max",
    "min_text_length",
    "max_text_length",
    "max_input_chars",
)


def _as_real(name: str, value: Any) -> float:
    """Return *value* as a finite float, or raise ValueError."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"{name} must be a number, got {value!r}")
    try:
        number = float(value)
    except OverflowError:
        number = math.inf
    if not math.isfinite(number):
        raise ValueError(f"{name} must be finite, got {value!r}")
    return number


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


@dataclass
class PipelineConfig:
    """Configuration for the extraction pipeline.

    Args:
        quality_floor: Overall quality below which input is rejected
            as unrelated to the template.
        garbage_score: Overall quality reported when a garbage
            detector fires.
        relevance_weight: Weight of relevance in the overall score.
        completeness_weight: Weight of completeness in the overall score.
        accuracy_weight: Weight of accuracy in the overall score.
        balance_tolerance: Allowed balance-sheet mismatch as a fraction
            of total assets.
        cost_ratio_limit: Multiple of revenue that total costs may
            reach before a warning is raised.
        salary_min: Lowest salary considered usual.
        salary_max: Highest salary considered usual.
        min_text_length: Text must be longer than this for the
            accuracy length bonus.
        max_text_length: Text must be shorter than this for the
            accuracy length bonus.
        max_input_chars: Intake rejects text longer than this.
        stand_in_text: Text substituted for non-text uploads.
    """

    quality_floor: float = 0.3
    garbage_score: float = 0.1
    relevance_weight: float = 0.4
    completeness_weight: float = 0.3
    accuracy_weight: float = 0.3
    balance_tolerance: float = 0.01
    cost_ratio_limit: float = 1.5
    salary_min: int = 20_000
    salary_max: int = 500_000
    min_text_length: int = 20
    max_text_length: int = 10_000
    max_input_chars: int = 1_000_000
    stand_in_text: str = DEFAULT_STAND_IN_TEXT

    def __post_init__(self) -> None:
        for name in (*_WEIGHT_FIELDS, "cost_ratio_limit"):
            setattr(self, name, _as_real(name, getattr(self, name)))
        for name in _INT_FIELDS:
            value = getattr(self, name)
            if not _is_int(value):
                raise ValueError(f"{name} must be an integer, got {value!r}")
            if value < 0:
                raise ValueError(f"{name} must not be negative, got {value}")
        if not isinstance(self.stand_in_text, str):
            raise ValueError(f"stand_in_text must be a string, got {self.stand_in_text!r}")

        for name in _WEIGHT_FIELDS:
            value = getattr(self, name)
            if not 0.0 <= value <= 1.0:
                raise ValueError(f"{name} must be between 0 and 1, got {value}")
        if self.cost_ratio_limit <= 0:
            raise ValueError(f"cost_ratio_limit must be positive, got {self.cost_ratio_limit}")
        if self.salary_min > self.salary_max:
            raise ValueError(
                f"salary_min ({self.salary_min}) exceeds salary_max ({self.salary_max})"
            )
        if self.min_text_length > self.max_text_length:
            raise ValueError("min_text_length exceeds max_text_length")
        if self.max_input_chars <= 0:
            raise ValueError("max_input_chars must be positive")

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> PipelineConfig:
        """Deserialize from dictionary.

        Unknown keys are rejected so that typos in settings payloads
        do not pass silently.

        Raises:
            ValueError: On unknown keys, wrong value types or out-of-range
                values.
        """
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ValueError(f"Unknown settings: {', '.join(unknown)}")
        return cls(**data)

    def updated(self, changes: dict[str, Any]) -> PipelineConfig:
        """Return a copy with *changes* applied.

        Args:
            changes: Partial settings to override.

        Returns:
            New validated PipelineConfig.
        """
        merged = self.to_dict()
        merged.update(changes)
        return PipelineConfig.from_dict(merged)
