"""Numeric literal resolution for user-typed amounts."""

from __future__ import annotations

import math
import re
from typing import List

SCALE_FACTORS = {
    "": 1.0,
    "k": 1e3,
    "m": 1e6,
    "million": 1e6,
    "b": 1e9,
    "bn": 1e9,
    "billion": 1e9,
}

_STRIP_PATTERN = re.compile(r"[$€£¥,\s]")
_SCALED_PATTERN = re.compile(
    r"([+-]?(?:\d+(?:\.\d*)?|\.\d+))(k|m|bn|b|million|billion)?",
    re.IGNORECASE,
)
_PLAIN_PATTERN = re.compile(r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:e[+-]?\d+)?", re.IGNORECASE)


def parse_number(token: str) -> float:
    """
    Resolve an amount token such as ``$1,234.56``, ``10k`` or ``5 million``.

    Returns ``nan`` when the token is not a number; never raises.
    """
    if token is None:
        return math.nan
    cleaned = _STRIP_PATTERN.sub("", str(token))
    if not cleaned:
        return math.nan

    match = _SCALED_PATTERN.fullmatch(cleaned)
    if match:
        suffix = (match.group(2) or "").lower()
        return float(match.group(1)) * SCALE_FACTORS[suffix]

    if _PLAIN_PATTERN.fullmatch(cleaned):
        return float(cleaned)

    return math.nan


def is_valid_amount(value: float) -> bool:
    return not math.isnan(value) and not math.isinf(value) and value > 0


def looks_numeric(token: str) -> bool:
    return not math.isnan(parse_number(token))


def parse_csv_line(line: str) -> List[str]:
    """Split a comma-separated line; double quotes toggle quoting and are dropped."""
    result: List[str] = []
    current: List[str] = []
    in_quotes = False

    for char in line:
        if char == '"':
            in_quotes = not in_quotes
        elif char == ',' and not in_quotes:
            result.append("".join(current).strip())
            current = []
        else:
            current.append(char)
    result.append("".join(current).strip())
    return result
