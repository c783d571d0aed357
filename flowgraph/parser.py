from __future__ import annotations

import logging
from typing import List, Optional

from .aggregate import aggregate_links
from .dag import enforce_dag
from .notation import parse_line, split_lines
from .registry import NodeRegistry
from .schema import ColorDirective, DiscardedLine, FlowCandidate, FlowGraph, FlowLink

logger = logging.getLogger(__name__)


def add_candidate(registry: NodeRegistry, links: List[FlowLink], candidate: FlowCandidate) -> None:
    source = registry.get_or_create(candidate.source_name)
    target = registry.get_or_create(candidate.target_name)
    links.append(
        FlowLink(
            source=source.id,
            target=target.id,
            value=candidate.value,
            previous_value=candidate.previous_value,
            comparison_label=candidate.comparison_label,
        )
    )


def finalize_graph(registry: NodeRegistry, links: List[FlowLink]) -> Optional[FlowGraph]:
    """Aggregate duplicates and drop cycle-closing links.

    Returns ``None`` when nothing usable was declared. The check runs before
    cycle removal, so a lone self-loop still yields its node.
    """
    if len(registry) == 0 or not links:
        return None

    merged = aggregate_links(links)
    safe_links = enforce_dag(merged)
    if len(safe_links) < len(merged):
        logger.info(f"Dropped {len(merged) - len(safe_links)} flow(s) that would create a cycle")

    return FlowGraph(nodes=registry.nodes(), links=safe_links)


def parse(text: str) -> Optional[FlowGraph]:
    """Parse line-oriented flow text (bracket, arrow or column notation)."""
    registry = NodeRegistry()
    links: List[FlowLink] = []

    for line_no, raw_line in enumerate(split_lines(text), start=1):
        result = parse_line(raw_line)
        if result is None:
            continue
        if isinstance(result, ColorDirective):
            registry.register_color(result.name, result.color)
        elif isinstance(result, FlowCandidate):
            add_candidate(registry, links, result)
        elif isinstance(result, DiscardedLine):
            logger.debug(f"Line {line_no} skipped: {result.reason}")

    graph = finalize_graph(registry, links)
    if graph is None:
        logger.debug("No flows found in input")
    return graph
