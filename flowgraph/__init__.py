"""
Flow graph parsing: informal flow text in, cycle-free weighted graph out
"""

from .schema import (
    FlowNode, FlowLink, FlowGraph, NodeCategory,
    ColorDirective, FlowCandidate, DiscardedLine, Comparison,
    CycleDetectionResult, NodeBalance, ValidationReport,
)
from .numbers import parse_number, parse_csv_line
from .comparison import sanitize_comparison_label, resolve_comparison
from .notation import parse_line
from .registry import NodeRegistry, slugify, categorize_node
from .aggregate import aggregate_links
from .dag import DagEnforcer, enforce_dag
from .parser import parse
from .tabular import parse_tabular
from .serializer import serialize
from .builder import build_nx_graph
from .toposort import kahn_toposort, node_levels
from .validator import validate_graph
from .graph_builder import GraphBuilder

__all__ = [
    'FlowNode', 'FlowLink', 'FlowGraph', 'NodeCategory',
    'ColorDirective', 'FlowCandidate', 'DiscardedLine', 'Comparison',
    'CycleDetectionResult', 'NodeBalance', 'ValidationReport',
    'parse_number', 'parse_csv_line',
    'sanitize_comparison_label', 'resolve_comparison',
    'parse_line',
    'NodeRegistry', 'slugify', 'categorize_node',
    'aggregate_links',
    'DagEnforcer', 'enforce_dag',
    'parse', 'parse_tabular', 'serialize',
    'build_nx_graph', 'kahn_toposort', 'node_levels', 'validate_graph',
    'GraphBuilder',
]
