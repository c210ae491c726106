"""Value normalization: infers a typed value from a tag's raw text content.

The cascade is an ordered table of rules. Each rule pairs a predicate with a
constructor and both operate on the already-trimmed text; the first rule whose
predicate accepts the text produces the value. Order matters: the boolean rule
must run before the text rule, the numeric rule before the structured rule.
"""

import json
import math
import re
import sys
from collections.abc import Callable
from dataclasses import dataclass

type Structured = dict[str, object] | list[object]
type Value = str | bool | int | float | Structured

# Decimal literal: optional sign, digits with optional fraction (or a bare
# fraction), optional exponent. Nothing else may surround it.
_NUMBER_PATTERN = re.compile(
    r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?", re.ASCII
)

_BOOLEANS = {"true": True, "false": False}


@dataclass(frozen=True)
class ValueRule:
    """One step of the normalization cascade."""

    name: str
    matches: Callable[[str], bool]
    convert: Callable[[str], Value]


def _is_empty(text: str) -> bool:
    return text == ""


def _is_boolean(text: str) -> bool:
    return text.lower() in _BOOLEANS


def _to_boolean(text: str) -> bool:
    return _BOOLEANS[text.lower()]


def _is_integer_literal(text: str) -> bool:
    return not any(marker in text for marker in ".eE")


def _is_number(text: str) -> bool:
    if _NUMBER_PATTERN.fullmatch(text) is None:
        return False
    if not math.isfinite(float(text)):
        return False
    if _is_integer_literal(text):
        # int() refuses literals longer than the interpreter digit limit.
        limit = sys.get_int_max_str_digits()
        return limit == 0 or len(text.lstrip("+-")) <= limit
    return True


def _to_number(text: str) -> int | float:
    if _is_integer_literal(text):
        return int(text)
    return float(text)


def _looks_structured(text: str) -> bool:
    return (text.startswith("{") and text.endswith("}")) or (
        text.startswith("[") and text.endswith("]")
    )


def _reject_constant(name: str) -> object:
    raise ValueError(f"non-standard JSON constant: {name}")


def load_strict_json(text: str) -> object:
    """Parse *text* as standard JSON, rejecting NaN and Infinity literals.

    Raises:
        ValueError: if *text* is not valid JSON or nests too deeply to decode.
    """
    try:
        return json.loads(text, parse_constant=_reject_constant)
    except RecursionError as exc:
        raise ValueError("JSON nesting too deep to decode") from exc


def _is_structured(text: str) -> bool:
    if not _looks_structured(text):
        return False
    try:
        load_strict_json(text)
    except ValueError:
        return False
    return True


def _to_structured(text: str) -> Structured:
    return load_strict_json(text)  # type: ignore[return-value]


def _identity(text: str) -> str:
    return text


VALUE_RULES: tuple[ValueRule, ...] = (
    ValueRule(name="empty", matches=_is_empty, convert=_identity),
    ValueRule(name="boolean", matches=_is_boolean, convert=_to_boolean),
    ValueRule(name="number", matches=_is_number, convert=_to_number),
    ValueRule(name="structured", matches=_is_structured, convert=_to_structured),
    ValueRule(name="text", matches=lambda text: True, convert=_identity),
)


def normalize_value(text: str) -> Value:
    """Return the typed value for *text* using the first matching rule."""
    trimmed = text.strip()
    for rule in VALUE_RULES:
        if rule.matches(trimmed):
            return rule.convert(trimmed)
    # The text rule accepts everything, so the loop always returns.
    raise AssertionError("value rule cascade exhausted")
