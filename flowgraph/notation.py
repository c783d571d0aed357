"""
Per-line flow notations.

Each notation is a separate function that returns ``None`` when the line
does not have its shape, so they can be tried in priority order by
``parse_line``. Recognized shapes:

    Revenue :#4ade80                 color directive
    Revenue [100, 80] Gross Profit   bracket (canonical)
    Revenue -> Gross Profit 100 80   arrow
    Revenue<TAB>Gross Profit<TAB>100 delimited (tab, comma or 2+ spaces)
"""

from __future__ import annotations

import logging
import re
from typing import Callable, List, Optional, Sequence

from .comparison import resolve_comparison
from .numbers import is_valid_amount, looks_numeric, parse_csv_line, parse_number
from .schema import ColorDirective, DiscardedLine, FlowCandidate, LineResult

logger = logging.getLogger(__name__)

COMMENT_PREFIXES = ("//", "#")

_LINE_BREAK_PATTERN = re.compile(r"\r\n|\r|\n")
_HEX_COLOR_PATTERN = re.compile(r"#?([0-9a-fA-F]{6}|[0-9a-fA-F]{3})")
_COLOR_ATTEMPT_PATTERN = re.compile(r"#\w+")
WIDE_GAP_PATTERN = re.compile(r"\s{2,}")

Notation = Callable[[str], Optional[LineResult]]


def split_lines(text: str) -> List[str]:
    return _LINE_BREAK_PATTERN.split(text or "")


def is_comment(line: str) -> bool:
    return line.startswith(COMMENT_PREFIXES)


def _build_candidate(
    source: str,
    target: str,
    value_token: str,
    comparison_token: Optional[str],
) -> Optional[FlowCandidate]:
    source = source.strip()
    target = target.strip()
    value = parse_number(value_token or "")
    if not source or not target or not is_valid_amount(value):
        return None

    comparison = resolve_comparison(value, comparison_token)
    return FlowCandidate(
        source_name=source,
        target_name=target,
        value=value,
        previous_value=comparison.previous_value,
        comparison_label=comparison.comparison_label,
    )


def _has_bracket_shape(text: str) -> bool:
    open_at = text.find("[")
    return open_at > 0 and text.find("]", open_at + 1) != -1


def parse_color_directive(line: str) -> Optional[LineResult]:
    name, sep, tail = line.rpartition(":")
    if not sep:
        return None
    name = name.strip()
    tail = tail.strip()
    if not name:
        return None
    # "Revenue [10] Tax: Fed" is a flow whose target holds a colon
    if _has_bracket_shape(name):
        return None

    match = _HEX_COLOR_PATTERN.fullmatch(tail)
    if match:
        return ColorDirective(name=name, color=f"#{match.group(1)}")

    # "Name :#12345" is a color attempt; it is dropped rather than read as a flow
    if "[" not in name and _COLOR_ATTEMPT_PATTERN.fullmatch(tail):
        return DiscardedLine(f"invalid color {tail!r} for {name!r}")
    return None


def split_bracket_content(content: str) -> Sequence[Optional[str]]:
    """Split ``value, comparison`` on the first comma only."""
    value_token, sep, comparison_token = content.partition(",")
    return value_token, (comparison_token if sep else None)


def parse_bracket_line(line: str) -> Optional[LineResult]:
    open_at = line.find("[")
    if open_at <= 0:
        return None
    close_at = line.find("]", open_at + 1)
    if close_at == -1:
        return None

    source = line[:open_at].strip()
    content = line[open_at + 1:close_at].strip()
    target = line[close_at + 1:].strip()
    if not source or not content or not target:
        return None

    value_token, comparison_token = split_bracket_content(content)
    candidate = _build_candidate(source, target, value_token, comparison_token)
    if candidate is None:
        return DiscardedLine(f"non-positive or unparseable amount {value_token.strip()!r}")
    return candidate


def parse_arrow_line(line: str) -> Optional[LineResult]:
    source, sep, rest = line.partition("->")
    if not sep or not source.strip():
        return None

    tokens = rest.split()
    if len(tokens) < 2:
        return None

    if len(tokens) >= 3 and looks_numeric(tokens[-2]):
        target_tokens, value_token, comparison_token = tokens[:-2], tokens[-2], tokens[-1]
    else:
        target_tokens, value_token, comparison_token = tokens[:-1], tokens[-1], None

    return _build_candidate(source, " ".join(target_tokens), value_token, comparison_token)


def split_columns(line: str) -> Optional[List[str]]:
    if "\t" in line:
        columns = [column.strip() for column in line.split("\t")]
        if len(columns) >= 3:
            return columns

    if "," in line:
        columns = parse_csv_line(line)
        if len(columns) >= 3:
            return columns

    columns = [column.strip() for column in WIDE_GAP_PATTERN.split(line) if column.strip()]
    if len(columns) >= 3:
        return columns
    return None


def parse_delimited_line(line: str) -> Optional[LineResult]:
    columns = split_columns(line)
    if not columns:
        return None
    comparison_token = columns[3] if len(columns) > 3 else None
    return _build_candidate(columns[0], columns[1], columns[2], comparison_token)


NOTATIONS: Sequence[Notation] = (
    parse_color_directive,
    parse_bracket_line,
    parse_arrow_line,
    parse_delimited_line,
)


def parse_line(raw_line: str) -> Optional[LineResult]:
    """Classify one physical line; ``None`` for blank lines and comments."""
    line = raw_line.strip()
    if not line or is_comment(line):
        return None

    for notation in NOTATIONS:
        result = notation(line)
        if result is not None:
            return result
    return DiscardedLine("no flow notation matched")
