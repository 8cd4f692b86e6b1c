"""
Coercion helpers for raw questionnaire answers.

Answer sets come from a form: keys may be missing, numbers arrive as strings
("5,00,000"), multi-selects may collapse to a single string and rating grids
may contain blanks. None of these helpers raise; absent or malformed values
become 0, "", [] or {}. Numbers are clamped to +/- MAX_ANSWER_NUMBER so later
float arithmetic cannot overflow.
"""

import math
import re
from typing import Any, Iterable, Mapping

from fundraising_advisor.constants import MAX_ANSWER_NUMBER

_INT_PREFIX = re.compile(r"^([+-]?)0*(\d+)")
_FLOAT_PREFIX = re.compile(r"^[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?")
_MAX_DIGITS = len(str(MAX_ANSWER_NUMBER))

Answers = Mapping[str, Any]


def _numeric_text(value: Any) -> str:
    return str(value).strip().replace(",", "").replace("_", "")


def _clamp(value):
    return max(-MAX_ANSWER_NUMBER, min(MAX_ANSWER_NUMBER, value))


def parse_int(value: Any) -> int:
    """Parse the leading integer of a value ("12 staff" -> 12, "abc" -> 0)."""
    if value is None or isinstance(value, bool):
        return 0
    if isinstance(value, int):
        return _clamp(value)
    if isinstance(value, float):
        if math.isnan(value):
            return 0
        return int(_clamp(value))
    match = _INT_PREFIX.match(_numeric_text(value))
    if not match:
        return 0
    sign, digits = match.groups()
    # Skip int() on long digit runs; it is both pointless and size-limited.
    if len(digits) > _MAX_DIGITS:
        return -MAX_ANSWER_NUMBER if sign == "-" else MAX_ANSWER_NUMBER
    return _clamp(int(sign + digits))


def parse_float(value: Any) -> float:
    """Parse the leading decimal number of a value ("12.5%" -> 12.5, "" -> 0.0)."""
    if value is None or isinstance(value, bool):
        return 0.0
    if isinstance(value, (int, float)):
        if isinstance(value, int):
            value = _clamp(value)
        value = float(value)
    else:
        match = _FLOAT_PREFIX.match(_numeric_text(value))
        if not match:
            return 0.0
        value = float(match.group(0))
    if math.isnan(value):
        return 0.0
    return float(_clamp(value))


def as_str(value: Any) -> str:
    """Scalar answer as a stripped string; non-scalars become ""."""
    if value is None or isinstance(value, (list, tuple, set, dict)):
        return ""
    if isinstance(value, bool):
        return "yes" if value else "no"
    return str(value).strip()


def as_list(value: Any) -> list[str]:
    """Multi-select answer as a list of strings.

    A bare string is treated as a one-element selection.
    """
    if value is None:
        return []
    if isinstance(value, str):
        value = value.strip()
        return [value] if value else []
    if isinstance(value, (list, tuple, set, frozenset)):
        items = [as_str(v) for v in value]
        return [v for v in items if v]
    return []


def as_ratings(value: Any) -> dict[str, int]:
    """Rating-grid answer (sub-id -> 1-5) with every value parsed as an int."""
    if not isinstance(value, Mapping):
        return {}
    return {str(k): parse_int(v) for k, v in value.items()}


def is_yes(value: Any) -> bool:
    return as_str(value).lower() == "yes"


def rating_average(ratings: Mapping[str, int], keys: Iterable[str]) -> float:
    """Mean of the named ratings; unrated keys count as 0."""
    keys = list(keys)
    if not keys:
        return 0.0
    return sum(ratings.get(k, 0) for k in keys) / len(keys)
