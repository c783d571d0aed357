from __future__ import annotations

from typing import Dict, List

import networkx as nx

from .builder import build_nx_graph
from .schema import FlowGraph, NodeBalance, ValidationReport
from .toposort import kahn_toposort

BALANCE_TOLERANCE = 0.01


def validate_graph(graph: FlowGraph) -> ValidationReport:
    warnings: List[str] = []
    errors: List[str] = []

    g = build_nx_graph(graph)
    topos = kahn_toposort(g)
    start_nodes = topos.start_nodes
    end_nodes = topos.end_nodes

    if not topos.success:
        errors.append(f"Cycle detected among: {sorted(topos.cyclic_nodes)}")

    if g.number_of_edges() and not start_nodes:
        errors.append("No start node (in_degree=0) found.")

    isolated = [n for n in g.nodes() if g.in_degree(n) == 0 and g.out_degree(n) == 0]
    if isolated:
        warnings.append(f"Isolated nodes: {sorted(isolated)}")

    balances = compute_balances(g)
    for balance in balances:
        if not balance.is_balanced:
            warnings.append(
                f"'{balance.name}' is imbalanced: in {balance.total_in:g}, "
                f"out {balance.total_out:g} (delta {balance.delta:g})"
            )

    return ValidationReport(
        ok=len(errors) == 0,
        warnings=warnings,
        errors=errors,
        start_nodes=start_nodes,
        end_nodes=end_nodes,
        isolated_nodes=isolated,
        balances=balances,
    )


def compute_balances(g: nx.DiGraph) -> List[NodeBalance]:
    """Inflow vs outflow per node; only pass-through nodes can be imbalanced."""
    totals_in: Dict[str, float] = {n: 0.0 for n in g.nodes()}
    totals_out: Dict[str, float] = {n: 0.0 for n in g.nodes()}
    for u, v, value in g.edges(data="value", default=0.0):
        totals_out[u] += value
        totals_in[v] += value

    balances: List[NodeBalance] = []
    for n, attrs in g.nodes(data=True):
        total_in = totals_in[n]
        total_out = totals_out[n]
        delta = total_in - total_out
        is_balanced = abs(delta) < BALANCE_TOLERANCE or total_in == 0 or total_out == 0
        balances.append(
            NodeBalance(
                node_id=n,
                name=attrs.get("name") or n,
                total_in=total_in,
                total_out=total_out,
                delta=delta,
                is_balanced=is_balanced,
            )
        )
    return balances
