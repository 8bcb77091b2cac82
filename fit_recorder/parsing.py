"""Parsing of user-entered dates, counts, weights and numbers."""

from __future__ import annotations

import math
import re
from datetime import datetime
from typing import Optional

_EU_DATE_RE = re.compile(r"[0-9]{2}-[0-9]{2}-[0-9]{2}")
_INT_RE = re.compile(r"[+-]?[0-9]+")
_FLOAT_RE = re.compile(r"[+-]?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")
_SPECIAL_FLOAT_RE = re.compile(r"[+-]?(?:inf|infinity|nan)", re.IGNORECASE)

_INT64_MIN = -(2**63)
_INT64_MAX = 2**63 - 1


def _atoi(text: str) -> Optional[int]:
    """Parse a plain signed decimal integer; None if it is not one."""
    if not _INT_RE.fullmatch(text):
        return None
    value = int(text)
    if not _INT64_MIN <= value <= _INT64_MAX:
        return None
    return value


def _parse_float(text: str) -> Optional[float]:
    """Parse a decimal float (or inf/nan); None if it is not one or overflows."""
    if _FLOAT_RE.fullmatch(text):
        value = float(text)
        return None if math.isinf(value) else value
    if _SPECIAL_FLOAT_RE.fullmatch(text):
        return float(text)
    return None


def parse_eu_date(date_str: str) -> datetime:
    """Parse a date written as DD-MM-YY."""
    if not _EU_DATE_RE.fullmatch(date_str):
        raise ValueError(f'cannot parse "{date_str}" as DD-MM-YY')
    try:
        return datetime.strptime(date_str, "%d-%m-%y")
    except ValueError as exc:
        raise ValueError(f'cannot parse "{date_str}" as DD-MM-YY: {exc}') from exc


def parse_exercise_count(count_str: str) -> int:
    """Parse the number of exercises to generate, which must lie in 1..20."""
    count = _atoi(count_str)
    if count is None:
        raise ValueError("invalid exercise count. Must be a number between 1 and 20")
    if count < 1 or count > 20:
        raise ValueError(f"exercise count must be between 1 and 20, got {count}")
    return count


def parse_weight(weight: str) -> int:
    """Convert a weight such as "100", "100kg" or "bodyweight" to whole kilograms."""
    weight = weight.lower().strip()
    if weight in ("", "bodyweight", "-"):
        return 0
    weight = weight.removesuffix("kg").strip()
    whole = _atoi(weight)
    if whole is not None:
        return whole
    value = _parse_float(weight)
    if value is None or not math.isfinite(value):
        return 0
    return int(value)


def parse_int(s: str) -> int:
    """Parse an integer, giving 0 for empty, "-" or invalid input."""
    s = s.strip()
    if s in ("", "-"):
        return 0
    value = _atoi(s)
    return 0 if value is None else value