from __future__ import annotations

from flowgraph.schema import FlowGraph, FlowLink, FlowNode, ValidationReport

from .models import GraphModel, LinkModel, NodeBalanceModel, NodeModel, ReportModel


def build_graph_model(graph: FlowGraph) -> GraphModel:
    nodes = [
        NodeModel(id=node.id, name=node.name, color=node.color, category=node.category)
        for node in graph.nodes
    ]
    links = [
        LinkModel(
            source=link.source,
            target=link.target,
            value=link.value,
            previous_value=link.previous_value,
            comparison_label=link.comparison_label,
        )
        for link in graph.links
    ]
    return GraphModel(nodes=nodes, links=links)


def graph_from_model(model: GraphModel) -> FlowGraph:
    return FlowGraph(
        nodes=[
            FlowNode(id=node.id, name=node.name, color=node.color, category=node.category)
            for node in model.nodes
        ],
        links=[
            FlowLink(
                source=link.source,
                target=link.target,
                value=link.value,
                previous_value=link.previous_value,
                comparison_label=link.comparison_label,
            )
            for link in model.links
        ],
    )


def build_report_model(report: ValidationReport) -> ReportModel:
    return ReportModel(
        ok=report.ok,
        warnings=report.warnings,
        errors=report.errors,
        start_nodes=report.start_nodes,
        end_nodes=report.end_nodes,
        isolated_nodes=report.isolated_nodes,
        imbalanced=[
            NodeBalanceModel(
                node_id=b.node_id,
                name=b.name,
                total_in=b.total_in,
                total_out=b.total_out,
                delta=b.delta,
                is_balanced=b.is_balanced,
            )
            for b in report.imbalanced
        ],
    )
