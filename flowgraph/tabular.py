"""
Whole-document parsing for pasted spreadsheet ranges and CSV files.

The delimiter is chosen once for the document (tab, then comma, then runs
of two or more spaces). A first row such as ``From,To,Amount,Previous`` is
treated as a header and columns are mapped by role; otherwise columns are
positional.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence

from .comparison import resolve_comparison
from .notation import WIDE_GAP_PATTERN, split_lines
from .numbers import is_valid_amount, looks_numeric, parse_csv_line, parse_number
from .parser import add_candidate, finalize_graph
from .registry import NodeRegistry
from .schema import FlowCandidate, FlowGraph, FlowLink

logger = logging.getLogger(__name__)

SOURCE_HEADERS = frozenset({"from", "source", "from node", "source node"})
TARGET_HEADERS = frozenset({"to", "target", "to node", "target node"})
VALUE_HINTS = ("amount", "value", "current")
COMPARISON_HINTS = ("comparison", "previous", "prior")


@dataclass(frozen=True)
class ColumnMap:
    source_index: int
    target_index: int
    value_index: int
    comparison_index: Optional[int] = None


def split_rows(text: str) -> List[List[str]]:
    lines = [line.strip() for line in split_lines(text) if line.strip()]
    if any("\t" in line for line in lines):
        return [[column.strip() for column in line.split("\t")] for line in lines]
    if any("," in line for line in lines):
        return [parse_csv_line(line) for line in lines]
    return [[c.strip() for c in WIDE_GAP_PATTERN.split(line) if c.strip()] for line in lines]


def _first_index(columns: Sequence[str], predicate) -> Optional[int]:
    for idx, column in enumerate(columns):
        if predicate(column):
            return idx
    return None


def detect_columns(header: Sequence[str]) -> Optional[ColumnMap]:
    normalized = [column.strip().lower() for column in header]

    source_index = _first_index(normalized, lambda c: c in SOURCE_HEADERS)
    target_index = _first_index(normalized, lambda c: c in TARGET_HEADERS)
    value_candidates = [i for i, c in enumerate(normalized) if any(hint in c for hint in VALUE_HINTS)]
    comparison_index = _first_index(normalized, lambda c: any(hint in c for hint in COMPARISON_HINTS))

    if source_index is None or target_index is None or not value_candidates:
        return None

    # "Current Value, Previous Value": the comparison column is not the amount
    preferred = [i for i in value_candidates if i != comparison_index]
    value_index = preferred[0] if preferred else value_candidates[0]
    if comparison_index == value_index:
        comparison_index = None

    return ColumnMap(
        source_index=source_index,
        target_index=target_index,
        value_index=value_index,
        comparison_index=comparison_index,
    )


def looks_like_header(row: Sequence[str]) -> bool:
    return detect_columns(row) is not None


def _column(columns: Sequence[str], index: Optional[int]) -> str:
    if index is None or index >= len(columns):
        return ""
    return columns[index] or ""


def positional_columns(columns: Sequence[str]) -> ColumnMap:
    """Best-effort guess for headerless rows.

    ``Revenue, 100, Profit`` reads as source/value/target because the second
    column is numeric; a node literally named like a number defeats this.
    """
    if looks_numeric(columns[1]):
        return ColumnMap(source_index=0, target_index=2, value_index=1, comparison_index=3)
    return ColumnMap(source_index=0, target_index=1, value_index=2, comparison_index=3)


def row_to_candidate(columns: Sequence[str], column_map: Optional[ColumnMap]) -> Optional[FlowCandidate]:
    if len(columns) < 3:
        return None
    mapping = column_map or positional_columns(columns)

    source = _column(columns, mapping.source_index).strip()
    target = _column(columns, mapping.target_index).strip()
    value = parse_number(_column(columns, mapping.value_index))
    if not source or not target or not is_valid_amount(value):
        return None

    comparison = resolve_comparison(value, _column(columns, mapping.comparison_index))
    return FlowCandidate(
        source_name=source,
        target_name=target,
        value=value,
        previous_value=comparison.previous_value,
        comparison_label=comparison.comparison_label,
    )


def parse_tabular(text: str) -> Optional[FlowGraph]:
    """Parse CSV/TSV/pasted rows with optional header into a flow graph."""
    rows = split_rows(text)
    if not rows:
        return None

    column_map = detect_columns(rows[0])
    data_rows = rows[1:] if column_map else rows

    registry = NodeRegistry()
    links: List[FlowLink] = []
    for row_no, columns in enumerate(data_rows, start=2 if column_map else 1):
        candidate = row_to_candidate(columns, column_map)
        if candidate is None:
            logger.debug(f"Row {row_no} skipped: {columns}")
            continue
        add_candidate(registry, links, candidate)

    return finalize_graph(registry, links)
