"""Result dataclasses for schema validation.

Findings are collected in a mutable builder while business rules run,
then frozen into a ValidationResult that is never modified afterwards.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class ValidationResult:
    """Verdict for one extraction.

    Args:
        is_valid: False when at least one hard error fired.
        confidence: Quality-derived confidence (0-100).
        errors: Hard errors, in evaluation order.
        warnings: Soft findings that do not affect validity.
        suggestions: Advisory notes.
    """

    is_valid: bool
    confidence: float
    errors: tuple[str, ...] = ()
    warnings: tuple[str, ...] = ()
    suggestions: tuple[str, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary."""
        return {
            "is_valid": self.is_valid,
            "confidence": self.confidence,
            "errors": list(self.errors),
            "warnings": list(self.warnings),
            "suggestions": list(self.suggestions),
        }


@dataclass
class Findings:
    """Mutable collector used by business-rule checks.

    Attributes:
        errors: Hard errors collected so far.
        warnings: Warnings collected so far.
        suggestions: Suggestions collected so far.
    """

    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    suggestions: list[str] = field(default_factory=list)

    def error(self, message: str) -> None:
        self.errors.append(message)

    def warn(self, message: str) -> None:
        self.warnings.append(message)

    def suggest(self, message: str) -> None:
        self.suggestions.append(message)

    @property
    def is_clean(self) -> bool:
        """True when no errors or warnings have been recorded."""
        return not self.errors and not self.warnings

    def freeze(self, confidence: float) -> ValidationResult:
        """Build the immutable result.

        Args:
            confidence: Confidence to report (0-100).

        Returns:
            ValidationResult, invalid iff any error was recorded.
        """
        return ValidationResult(
            is_valid=not self.errors,
            confidence=confidence,
            errors=tuple(self.errors),
            warnings=tuple(self.warnings),
            suggestions=tuple(self.suggestions),
        )
