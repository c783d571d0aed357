from __future__ import annotations

import math
import re
from decimal import ROUND_HALF_UP, Decimal, localcontext
from typing import Optional

from .numbers import parse_number
from .schema import Comparison

INVALID_COMPARISON_TOKENS = frozenset({"nan", "null", "undefined", "n/a", "na", "none", "-", "--"})

_LETTER_PATTERN = re.compile(r"[a-zA-Z]")


def sanitize_comparison_label(token: Optional[str]) -> Optional[str]:
    if not isinstance(token, str):
        return None
    trimmed = token.strip()
    if not trimmed or trimmed.lower() in INVALID_COMPARISON_TOKENS:
        return None
    return trimmed


def is_formatted_label(token: str) -> bool:
    return token.startswith("+") or token.startswith("-") or token.endswith("%")


def percent_change(current: float, previous: float) -> Optional[int]:
    """Whole-number percentage change, halves rounded away from zero.

    ``None`` when the ratio overflows a float.
    """
    ratio = (current - previous) / previous * 100
    if not math.isfinite(ratio):
        return None
    with localcontext() as ctx:
        # a float holds at most 309 integer digits
        ctx.prec = 400
        return int(Decimal(repr(ratio)).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def format_delta_label(current: float, previous: float) -> Optional[str]:
    percent = percent_change(current, previous)
    if percent is None:
        return None
    sign = "+" if current - previous >= 0 else ""
    return f"{sign}{percent}%"


def resolve_comparison(current: float, token: Optional[str]) -> Comparison:
    """
    Interpret the optional second token of a flow declaration.

    A numeric token is a previous-period amount and yields a computed
    ``+N%`` label; ``+``/``-``/``%`` tokens are kept as labels; free text
    with letters is kept verbatim; anything else is dropped.
    """
    comparison = sanitize_comparison_label(token)
    if comparison is None:
        return Comparison()

    if is_formatted_label(comparison):
        return Comparison(comparison_label=comparison)

    previous = parse_number(comparison)
    if not math.isnan(previous) and not math.isinf(previous) and previous != 0:
        label = format_delta_label(current, previous)
        if label is None:
            return Comparison()
        return Comparison(previous_value=previous, comparison_label=label)

    if _LETTER_PATTERN.search(comparison):
        return Comparison(comparison_label=comparison)

    return Comparison()
