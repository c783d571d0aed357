from __future__ import annotations

from typing import Any, Dict

import networkx as nx

from .schema import FlowGraph


def build_nx_graph(graph: FlowGraph) -> nx.DiGraph:
    g: nx.DiGraph = nx.DiGraph()

    # add nodes
    for node in graph.nodes:
        attrs: Dict[str, Any] = {
            "name": node.name,
            "color": node.color,
            "category": node.category.value,
        }
        g.add_node(node.id, **attrs)

    # add edges
    for link in graph.links:
        g.add_edge(
            link.source,
            link.target,
            value=link.value,
            previous_value=link.previous_value,
            comparison_label=link.comparison_label,
        )

    return g
