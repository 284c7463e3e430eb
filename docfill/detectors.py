"""Pattern library for nonsense input detection.

Compiled regex patterns for identifying keyboard mashing, filler text,
and other input that cannot belong to any template.
"""

from __future__ import annotations

import re
from dataclasses import dataclass


@dataclass(frozen=True)
class GarbageDetector:
    """A compiled regex that flags nonsense input.

    Attributes:
        name: Detector name for logs and quality metrics.
        pattern: Compiled regex, searched against stripped text.
        description: What the detector looks for.
    """

    name: str
    pattern: re.Pattern[str]
    description: str = ""

    def matches(self, text: str) -> bool:
        """Return True if the detector fires on *text*."""
        return self.pattern.search(text) is not None


GARBAGE_DETECTORS: list[GarbageDetector] = [
    GarbageDetector(
        name="short_token_run",
        pattern=re.compile(r"^[a-z]{1,3}(\s[a-z]{1,3}){10,}$", re.IGNORECASE),
        description="Long run of one-to-three letter tokens",
    ),
    GarbageDetector(
        name="symbols_only",
        pattern=re.compile(r"^[!@#$%^&*()]{5,}$"),
        description="Nothing but shifted-digit symbols",
    ),
    GarbageDetector(
        name="repeated_character",
        pattern=re.compile(r"^(\w)\1{10,}$"),
        description="A single character repeated",
    ),
    GarbageDetector(
        name="lorem_ipsum",
        pattern=re.compile(r"lorem\s+ipsum", re.IGNORECASE),
        description="Placeholder filler text",
    ),
    GarbageDetector(
        name="repeated_test_token",
        pattern=re.compile(
            r"\btest(?:[\s,.;]+test)+\b|\bsample(?:[\s,.;]+sample)+\b",
            re.IGNORECASE,
        ),
        description="The words 'test' or 'sample' repeated back to back",
    ),
    GarbageDetector(
        name="digits_only",
        pattern=re.compile(r"^[0-9\s]{50,}$"),
        description="Long blob of digits and whitespace",
    ),
    GarbageDetector(
        name="punctuation_only",
        pattern=re.compile(r"^[.,;:!?]{10,}$"),
        description="Long blob of punctuation",
    ),
]


def detect_garbage(
    text: str,
    detectors: list[GarbageDetector] | None = None,
) -> GarbageDetector | None:
    """Return the first detector that fires on *text*, or None.

    Args:
        text: Raw input text. Surrounding whitespace is ignored.
        detectors: Detectors to try. Defaults to GARBAGE_DETECTORS.

    Returns:
        First matching GarbageDetector, or None.
    """
    if detectors is None:
        detectors = GARBAGE_DETECTORS

    stripped = text.strip()
    for detector in detectors:
        if detector.matches(stripped):
            return detector
    return None
