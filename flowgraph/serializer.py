from __future__ import annotations

import math
from decimal import Decimal
from typing import Dict, List

from .schema import FlowGraph


def format_number(value: float) -> str:
    """Shortest positional text that parses back to ``value`` (``100``, ``29.998``)."""
    if math.isnan(value) or math.isinf(value):
        return repr(value)
    if float(value).is_integer():
        return str(int(value))
    text = format(Decimal(repr(float(value))), "f")
    return text.rstrip("0").rstrip(".") if "." in text else text


def format_color(color: str) -> str:
    return color if color.startswith("#") else f"#{color}"


def serialize(graph: FlowGraph) -> str:
    """Render a graph back into bracket notation, color directives first."""
    lines: List[str] = []

    for node in graph.nodes:
        if node.color:
            lines.append(f"{node.name} :{format_color(node.color)}")

    if lines:
        lines.append("")

    names: Dict[str, str] = {}
    for node in graph.nodes:
        names.setdefault(node.id, node.name)

    for link in graph.links:
        source_name = names.get(link.source, link.source)
        target_name = names.get(link.target, link.target)
        value = format_number(link.value)

        # A raw previous value is preferred so the label is recomputed on parse
        if link.previous_value is not None:
            content = f"{value}, {format_number(link.previous_value)}"
        elif link.comparison_label:
            content = f"{value}, {link.comparison_label}"
        else:
            content = value
        lines.append(f"{source_name} [{content}] {target_name}")

    return "\n".join(lines)
