"""Tests for serialize() and parse/serialize round trips."""

from __future__ import annotations

import pytest

from flowgraph import parse, parse_tabular, serialize
from flowgraph.schema import FlowGraph, FlowLink, FlowNode, NodeCategory
from flowgraph.serializer import format_color, format_number


def _graph(links, colors=None) -> FlowGraph:
    colors = colors or {}
    names = {"revenue": "Revenue", "profit": "Profit", "a": "A", "b": "B"}
    nodes = [FlowNode(id=k, name=v, color=colors.get(k)) for k, v in names.items()]
    return FlowGraph(nodes=nodes, links=links)


def test_simple_flow() -> None:
    text = serialize(_graph([FlowLink("revenue", "profit", 100)]))

    assert text == "Revenue [100] Profit"


def test_colors_come_first_with_blank_separator() -> None:
    text = serialize(_graph([FlowLink("revenue", "profit", 100)], colors={"revenue": "#4ade80"}))

    assert text.splitlines() == ["Revenue :#4ade80", "", "Revenue [100] Profit"]


def test_color_without_hash_is_prefixed() -> None:
    assert format_color("4ade80") == "#4ade80"


def test_previous_value_is_preferred_over_label() -> None:
    text = serialize(_graph([FlowLink("a", "b", 100, previous_value=80, comparison_label="+25%")]))

    assert text == "A [100, 80] B"


def test_label_only() -> None:
    text = serialize(_graph([FlowLink("a", "b", 100, comparison_label="+7%")]))

    assert text == "A [100, +7%] B"


def test_unknown_node_id_falls_back_to_id() -> None:
    graph = FlowGraph(nodes=[], links=[FlowLink("x", "y", 1)])

    assert serialize(graph) == "x [1] y"


@pytest.mark.parametrize(
    ("value", "expected"),
    [(100.0, "100"), (29.998, "29.998"), (0.1, "0.1"), (1e-7, "0.0000001"), (2.5e9, "2500000000")],
)
def test_format_number(value: float, expected: str) -> None:
    assert format_number(value) == expected


def test_round_trip_reproduces_graph() -> None:
    original = parse(
        "Revenue :#4ade80\n"
        "Revenue [1000, 800] Gross Profit\n"
        "Gross Profit [600, +5%] Net Income\n"
        "Gross Profit [400] Operating Expenses\n"
        "Net Income [29.998] Retained Earnings"
    )

    reparsed = parse(serialize(original))

    assert reparsed.to_dict() == original.to_dict()


def test_round_trip_of_constructed_graph() -> None:
    graph = FlowGraph(
        nodes=[
            FlowNode(id="sales", name="Sales", color="#60a5fa", category=NodeCategory.REVENUE),
            FlowNode(id="cogs", name="COGS", category=NodeCategory.EXPENSE),
        ],
        links=[FlowLink("sales", "cogs", 12.5, previous_value=10, comparison_label="+25%")],
    )

    assert parse(serialize(graph)).to_dict() == graph.to_dict()


@pytest.mark.parametrize(
    "text",
    [
        "Revenue -> Tax: Fed 10",
        "Revenue -> Gross Profit 100 80\nGross Profit -> Net Income 60 +5%",
        "Net income\tCash from operations\t29.998\tNaN\nCash from operations\tFree cash: Q1\t12\t10",
        "Revenue    Cost of sales    40",
    ],
)
def test_round_trip_from_other_notations(text: str) -> None:
    original = parse(text)

    assert parse(serialize(original)).to_dict() == original.to_dict()


def test_round_trip_from_tabular_input() -> None:
    original = parse_tabular(
        'From,To,Value,Comparison\n"Sales, EMEA",Revenue,"1,200",1000\nRevenue,Tax: State,300,flat\n'
    )

    text = serialize(original)

    assert "Sales, EMEA [1200, 1000] Revenue" in text
    assert parse(text).to_dict() == original.to_dict()


def test_comment_prefixed_name_is_lost_on_round_trip() -> None:
    original = parse_tabular("#1 Store,Revenue,100\nRevenue,Profit,40")

    reparsed = parse(serialize(original))

    assert [node.id for node in reparsed.nodes] == ["revenue", "profit"]
