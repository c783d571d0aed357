"""Tests for the HTTP API."""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

import cli.api as api


@pytest.fixture
def client() -> TestClient:
    return TestClient(api.app)


def test_health(client: TestClient) -> None:
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"ok": True}


def test_parse_flow_text(client: TestClient) -> None:
    response = client.post("/parse", json={"text": "Revenue [100, 80] Profit"})

    assert response.status_code == 200
    body = response.json()
    assert body["message"] is None
    assert [node["id"] for node in body["graph"]["nodes"]] == ["revenue", "profit"]
    link = body["graph"]["links"][0]
    assert link["value"] == 100
    assert link["previousValue"] == 80
    assert link["comparisonLabel"] == "+25%"


def test_parse_tabular(client: TestClient) -> None:
    response = client.post("/parse", json={"text": "From,To,Value\nRevenue,Profit,100", "format": "tabular"})

    assert response.status_code == 200
    assert len(response.json()["graph"]["links"]) == 1


def test_parse_without_flows(client: TestClient) -> None:
    response = client.post("/parse", json={"text": "// nothing"})

    assert response.status_code == 200
    assert response.json()["graph"] is None
    assert response.json()["message"] == api.EMPTY_GRAPH_MESSAGE


def test_parse_rejects_oversized_text(client: TestClient, monkeypatch) -> None:
    monkeypatch.setattr(api, "MAX_INPUT_CHARS", 10)

    response = client.post("/parse", json={"text": "Revenue [100] Profit"})

    assert response.status_code == 413


def test_serialize(client: TestClient) -> None:
    graph = {
        "nodes": [
            {"id": "revenue", "name": "Revenue", "color": "#4ade80", "category": "revenue"},
            {"id": "profit", "name": "Profit", "category": "profit"},
        ],
        "links": [{"source": "revenue", "target": "profit", "value": 100, "previousValue": 80}],
    }

    response = client.post("/serialize", json={"graph": graph})

    assert response.status_code == 200
    assert response.json()["text"] == "Revenue :#4ade80\n\nRevenue [100, 80] Profit"


def test_serialize_rejects_non_positive_value(client: TestClient) -> None:
    graph = {"nodes": [], "links": [{"source": "a", "target": "b", "value": 0}]}

    assert client.post("/serialize", json={"graph": graph}).status_code == 422


def test_report(client: TestClient) -> None:
    response = client.post("/report", json={"text": "Revenue [100] Gross Profit\nGross Profit [70] Net Income"})

    assert response.status_code == 200
    body = response.json()
    assert body["ok"] is True
    assert [b["node_id"] for b in body["imbalanced"]] == ["gross_profit"]


def test_report_without_flows(client: TestClient) -> None:
    assert client.post("/report", json={"text": ""}).status_code == 422
