from __future__ import annotations

from collections import deque
from typing import Dict, List

import networkx as nx

from .schema import CycleDetectionResult


def kahn_toposort(g: nx.DiGraph) -> CycleDetectionResult:
    """Kahn's algorithm over the flow graph, ties broken by insertion order.

    Start nodes only send flow and end nodes only receive it; a node with
    no links at all is neither.
    """
    remaining: Dict[str, int] = {n: g.in_degree(n) for n in g.nodes()}
    start_nodes = [n for n in g.nodes() if g.in_degree(n) == 0 and g.out_degree(n) > 0]
    end_nodes = [n for n in g.nodes() if g.out_degree(n) == 0 and g.in_degree(n) > 0]

    ready = deque(n for n, count in remaining.items() if count == 0)
    order: List[str] = []
    while ready:
        node = ready.popleft()
        order.append(node)
        for successor in g.successors(node):
            remaining[successor] -= 1
            if remaining[successor] == 0:
                ready.append(successor)

    success = len(order) == g.number_of_nodes()
    return CycleDetectionResult(
        success=success,
        order=order,
        cyclic_nodes=[] if success else [n for n, count in remaining.items() if count > 0],
        start_nodes=start_nodes,
        end_nodes=end_nodes,
    )


def node_levels(g: nx.DiGraph) -> Dict[str, int]:
    """Column index per node: the longest hop count from any start node.

    Nodes left unordered by a cycle are omitted.
    """
    result = kahn_toposort(g)
    levels: Dict[str, int] = {}
    for node in result.order:
        levels[node] = max((levels[p] + 1 for p in g.predecessors(node) if p in levels), default=0)
    return levels
