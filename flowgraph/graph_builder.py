from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

import networkx as nx

from .builder import build_nx_graph
from .parser import parse
from .schema import FlowGraph, ValidationReport
from .serializer import serialize
from .tabular import parse_tabular
from .toposort import kahn_toposort, node_levels
from .validator import validate_graph

logger = logging.getLogger(__name__)

TABULAR_SUFFIXES = {".csv", ".tsv"}


class GraphBuilder:
    """Holds one parsed flow document for the CLI, loader and API."""

    def __init__(self) -> None:
        self.flow_graph: Optional[FlowGraph] = None
        self.graph: nx.DiGraph = nx.DiGraph()

    def load_text(self, text: str, tabular: bool = False) -> bool:
        self.flow_graph = parse_tabular(text) if tabular else parse(text)
        if self.flow_graph is None:
            logger.warning("No flows could be parsed from the input")
            self.graph = nx.DiGraph()
            return False

        self.graph = build_nx_graph(self.flow_graph)
        logger.info(
            f"Parsed {self.graph.number_of_nodes()} nodes and {self.graph.number_of_edges()} flows"
        )
        return True

    def load_file(self, path: str, tabular: Optional[bool] = None) -> bool:
        file_path = Path(path)
        text = file_path.read_text(encoding="utf-8")
        if tabular is None:
            tabular = file_path.suffix.lower() in TABULAR_SUFFIXES
        logger.debug(f"Loading {file_path} as {'tabular' if tabular else 'flow text'}")
        return self.load_text(text, tabular=tabular)

    def validate(self) -> Optional[ValidationReport]:
        if self.flow_graph is None:
            return None
        report = validate_graph(self.flow_graph)
        for w in report.warnings:
            logger.warning(w)
        for e in report.errors:
            logger.error(e)
        return report

    def detect_cycles(self) -> Dict[str, Any]:
        result = kahn_toposort(self.graph)
        if result.success:
            logger.debug("Topological order: " + " -> ".join(result.order))
        else:
            logger.error(f"Cycle detected among nodes: {sorted(result.cyclic_nodes)}")
        return {
            "success": result.success,
            "order": result.order,
            "cyclic_nodes": result.cyclic_nodes,
        }

    def export_graph_info(self) -> Dict[str, Any]:
        if self.flow_graph is None:
            return {}

        cycle_result = kahn_toposort(self.graph)
        graph_stats = {
            "nodes": self.graph.number_of_nodes(),
            "links": self.graph.number_of_edges(),
            "is_dag": cycle_result.success,
            "total_value": sum(link.value for link in self.flow_graph.links),
        }

        category_groups: Dict[str, List[str]] = {}
        for node in self.flow_graph.nodes:
            category_groups.setdefault(node.category.value, []).append(node.id)

        return {
            **self.flow_graph.to_dict(),
            "graph_stats": graph_stats,
            "category_groups": category_groups,
            "levels": node_levels(self.graph),
        }

    def to_dsl(self) -> str:
        if self.flow_graph is None:
            return ""
        return serialize(self.flow_graph)

    def get_predecessors(self, node_id: str) -> List[str]:
        if node_id not in self.graph:
            return []
        return list(self.graph.predecessors(node_id))

    def get_successors(self, node_id: str) -> List[str]:
        if node_id not in self.graph:
            return []
        return list(self.graph.successors(node_id))
