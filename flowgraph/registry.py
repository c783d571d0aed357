from __future__ import annotations

import logging
import re
from typing import Dict, Iterator, List, Optional, Tuple

from .schema import FlowNode, NodeCategory

logger = logging.getLogger(__name__)

_WHITESPACE_PATTERN = re.compile(r"\s+")

# Checked in order; the first group with a matching keyword wins.
EXPENSE_KEYWORDS: Tuple[str, ...] = ("cost", "expense", "cogs", "tax", "depreciation", "amortization")
REVENUE_KEYWORDS: Tuple[str, ...] = ("revenue", "sales")
PROFIT_KEYWORDS: Tuple[str, ...] = ("profit", "net income", "earnings", "ebit", "ebitda")


def slugify(name: str) -> str:
    return _WHITESPACE_PATTERN.sub("_", name.lower())


def categorize_node(name: str) -> NodeCategory:
    lower = name.lower()

    if any(keyword in lower for keyword in EXPENSE_KEYWORDS):
        return NodeCategory.EXPENSE

    if any(keyword in lower for keyword in REVENUE_KEYWORDS) or ("income" in lower and "net" not in lower):
        return NodeCategory.REVENUE

    if any(keyword in lower for keyword in PROFIT_KEYWORDS):
        return NodeCategory.PROFIT

    return NodeCategory.NEUTRAL


class NodeRegistry:
    """Insertion-ordered node table for a single parse call.

    - Nodes are keyed by ``slugify(name)``; the first spelling seen becomes
      the display name
    - Color directives are held as pending colors until the node is created;
      the first directive for a node wins
    """

    def __init__(self) -> None:
        self._nodes: Dict[str, FlowNode] = {}
        self._pending_colors: Dict[str, str] = {}

    def __len__(self) -> int:
        return len(self._nodes)

    def __contains__(self, node_id: str) -> bool:
        return node_id in self._nodes

    def __iter__(self) -> Iterator[FlowNode]:
        return iter(self._nodes.values())

    def register_color(self, name: str, color: str) -> bool:
        node_id = slugify(name)
        if node_id in self._nodes:
            logger.debug(f"Ignoring color {color} for '{name}': node already created")
            return False
        if node_id in self._pending_colors:
            logger.debug(f"Ignoring color {color} for '{name}': already set to {self._pending_colors[node_id]}")
            return False
        self._pending_colors[node_id] = color
        return True

    def get(self, node_id: str) -> Optional[FlowNode]:
        return self._nodes.get(node_id)

    def get_or_create(self, name: str) -> FlowNode:
        node_id = slugify(name)
        existing = self._nodes.get(node_id)
        if existing is not None:
            return existing

        node = FlowNode(
            id=node_id,
            name=name,
            color=self._pending_colors.get(node_id),
            category=categorize_node(name),
        )
        self._nodes[node_id] = node
        return node

    def nodes(self) -> List[FlowNode]:
        return list(self._nodes.values())
