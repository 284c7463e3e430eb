"""Field extraction rules.

Defines regex-based rules that pull a single typed field value out of
free text, and helpers that build those rules from label synonyms.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Union

FieldValue = Union[int, float, str]


class ValueKind(str, Enum):
    """How a matched token is coerced into a field value.

    Attributes:
        INTEGER_AMOUNT: Whole-number amount, fractions truncated.
        DECIMAL_AMOUNT: Amount that keeps its fractional part.
        FREE_TEXT: Stripped text.
        DATE_TEXT: Date token kept verbatim as text.
    """

    INTEGER_AMOUNT = "integer_amount"
    DECIMAL_AMOUNT = "decimal_amount"
    FREE_TEXT = "free_text"
    DATE_TEXT = "date_text"


# --- Token patterns ---

# Between a label and its value: whitespace, ':', '#', '='
_SEPARATOR = r"[\s:#=]*"

# A minus sign only counts when it touches the currency symbol or digits,
# so "Revenue - 500" is not read as a negative amount.
AMOUNT_TOKEN = (
    r"(?P<sign>-(?=[$€£¥\d]))?"
    r"(?:[$€£¥]|USD|EUR|GBP)?[ \t]*"
    r"(?P<sign2>-(?=\d))?"
    r"(?P<value>\d[\d,]*(?:\.\d+)?)"
)
TEXT_TOKEN = r"(?P<value>[A-Za-z][A-Za-z \t.&'-]{0,79})"
DATE_TOKEN = r"(?P<value>\d{1,4}[/-]\d{1,2}[/-]\d{1,4})"
IDENTIFIER_TOKEN = r"(?P<value>(?=[A-Z-]*\d)[A-Z0-9][A-Z0-9-]*)"
DECIMAL_TEXT_TOKEN = r"(?P<value>\d+(?:\.\d+)?)"

_TEXT_TRAILING = " \t.-'&"

# Longest integer part a float can hold (sys.float_info.max has 309 digits).
MAX_AMOUNT_DIGITS = 308


@dataclass(frozen=True)
class FieldRule:
    """A regex-based rule for extracting one field.

    Args:
        field_name: Key the value is stored under in the field map.
        pattern: Compiled regex. The ``value`` group holds the token;
            optional ``sign``/``sign2`` groups mark a negative amount.
        kind: How the token is coerced.
        description: Human-readable description of the field.
    """

    field_name: str
    pattern: re.Pattern[str]
    kind: ValueKind
    description: str = ""

    def apply(self, text: str) -> FieldValue | None:
        """Return the coerced value of the first match, or None.

        Args:
            text: Raw text to search.

        Returns:
            The coerced value, or None if the rule does not match.
        """
        match = self.pattern.search(text)
        if match is None:
            return None
        return coerce(match, self.kind)

    def to_dict(self) -> dict[str, object]:
        """Serialize to dictionary."""
        return {
            "field_name": self.field_name,
            "pattern": self.pattern.pattern,
            "kind": self.kind.value,
            "description": self.description,
        }


def coerce(match: re.Match[str], kind: ValueKind) -> FieldValue | None:
    """Coerce a rule match into a typed value.

    Thousands separators are stripped from amounts. Integer amounts
    drop any fractional part.

    Args:
        match: Match produced by a FieldRule pattern.
        kind: Target value kind.

    Returns:
        The coerced value, or None for text that is empty once
        trailing punctuation is stripped and for amounts whose integer
        part exceeds MAX_AMOUNT_DIGITS.
    """
    token = match.group("value").strip()
    if kind in (ValueKind.FREE_TEXT, ValueKind.DATE_TEXT):
        return token.rstrip(_TEXT_TRAILING) or None

    cleaned = token.replace(",", "")
    whole = cleaned.split(".", 1)[0].lstrip("0") or "0"
    if len(whole) > MAX_AMOUNT_DIGITS:
        return None
    groups = match.groupdict()
    negative = bool(groups.get("sign") or groups.get("sign2"))

    number: int | float
    if kind == ValueKind.INTEGER_AMOUNT:
        number = int(whole)
    else:
        number = float(cleaned)
    return -number if negative else number


# --- Rule builders ---


def label_pattern(labels: list[str], token: str) -> re.Pattern[str]:
    """Compile a case-insensitive "label, separator, token" pattern.

    Labels must not sit inside a longer word on either side.

    Args:
        labels: Regex fragments for label synonyms, tried in order.
        token: Regex for the value token; must define a ``value`` group.

    Returns:
        Compiled pattern.
    """
    alternatives = "|".join(labels)
    return re.compile(
        rf"(?<![A-Za-z])(?:{alternatives})(?![A-Za-z]){_SEPARATOR}{token}",
        re.IGNORECASE,
    )


def amount_rule(
    field_name: str,
    labels: list[str],
    kind: ValueKind = ValueKind.INTEGER_AMOUNT,
    description: str = "",
) -> FieldRule:
    """Build a rule for a currency amount."""
    return FieldRule(field_name, label_pattern(labels, AMOUNT_TOKEN), kind, description)


def text_rule(
    field_name: str,
    labels: list[str],
    description: str = "",
    token: str = TEXT_TOKEN,
) -> FieldRule:
    """Build a rule for a short single-line text value."""
    return FieldRule(field_name, label_pattern(labels, token), ValueKind.FREE_TEXT, description)


def date_rule(field_name: str, labels: list[str], description: str = "") -> FieldRule:
    """Build a rule for a slash or dash delimited date."""
    return FieldRule(
        field_name, label_pattern(labels, DATE_TOKEN), ValueKind.DATE_TEXT, description
    )
