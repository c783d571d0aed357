"""Tests for GraphBuilder and FlowLoader."""

from __future__ import annotations

import io

import pytest

from flowgraph import GraphBuilder
from flowgraph.schema import FlowGraph
from loaders.flow_loader import FlowLoader, load_flows

DOCUMENT = "Revenue :#4ade80\nRevenue [100, 80] Gross Profit\nGross Profit [60] Net Income\n"


def test_load_text_builds_both_graphs() -> None:
    builder = GraphBuilder()

    assert builder.load_text(DOCUMENT)
    assert builder.graph.number_of_nodes() == 3
    assert builder.get_successors("revenue") == ["gross_profit"]
    assert builder.get_predecessors("net_income") == ["gross_profit"]
    assert builder.get_successors("missing") == []


def test_load_text_without_flows() -> None:
    builder = GraphBuilder()

    assert not builder.load_text("// nothing here")
    assert builder.flow_graph is None
    assert builder.validate() is None
    assert builder.export_graph_info() == {}
    assert builder.to_dsl() == ""


def test_export_graph_info() -> None:
    builder = GraphBuilder()
    builder.load_text(DOCUMENT)

    info = builder.export_graph_info()

    assert info["graph_stats"] == {"nodes": 3, "links": 2, "is_dag": True, "total_value": 160}
    assert info["category_groups"] == {"revenue": ["revenue"], "profit": ["gross_profit", "net_income"]}
    assert info["links"][0] == {
        "source": "revenue",
        "target": "gross_profit",
        "value": 100,
        "previousValue": 80,
        "comparisonLabel": "+25%",
    }
    assert info["nodes"][0]["color"] == "#4ade80"
    assert info["levels"] == {"revenue": 0, "gross_profit": 1, "net_income": 2}


def test_detect_cycles_and_dsl() -> None:
    builder = GraphBuilder()
    builder.load_text(DOCUMENT)

    assert builder.detect_cycles()["success"]
    assert builder.to_dsl().splitlines()[0] == "Revenue :#4ade80"


def test_flow_graph_dict_round_trip() -> None:
    builder = GraphBuilder()
    builder.load_text(DOCUMENT)
    payload = builder.flow_graph.to_dict()

    assert FlowGraph.from_dict(payload).to_dict() == payload


@pytest.mark.parametrize("payload", [[], {"nodes": [{"name": "x"}]}, {"links": [{"source": "a", "target": "b", "value": "x"}]}])
def test_from_dict_rejects_bad_payloads(payload) -> None:
    with pytest.raises(ValueError):
        FlowGraph.from_dict(payload)


def test_loader_detects_csv_by_suffix(tmp_path) -> None:
    path = tmp_path / "flows.csv"
    path.write_text("From,To,Value\nRevenue,Profit,100\n", encoding="utf-8")

    graph = FlowLoader().load_from_file(str(path))

    assert [node.id for node in graph.nodes] == ["revenue", "profit"]


def test_loader_reads_flow_text(tmp_path) -> None:
    path = tmp_path / "flows.txt"
    path.write_text(DOCUMENT, encoding="utf-8")

    graph = load_flows(str(path))

    assert len(graph.links) == 2


def test_loader_format_override(tmp_path) -> None:
    path = tmp_path / "flows.txt"
    path.write_text("Revenue,100,Profit\n", encoding="utf-8")

    assert FlowLoader().load_from_file(str(path), tabular=True).links[0].value == 100


def test_loader_returns_none_without_flows(tmp_path) -> None:
    path = tmp_path / "empty.txt"
    path.write_text("# nothing\n", encoding="utf-8")

    assert FlowLoader().load_from_file(str(path)) is None


def test_loader_missing_file(tmp_path) -> None:
    with pytest.raises(FileNotFoundError):
        FlowLoader().load_from_file(str(tmp_path / "missing.txt"))


def test_loader_reads_stdin(monkeypatch) -> None:
    monkeypatch.setattr("sys.stdin", io.StringIO("A [1] B\n"))

    graph = FlowLoader().load_from_file("-")

    assert len(graph.links) == 1
