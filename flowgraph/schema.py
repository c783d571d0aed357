from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Union


class NodeCategory(str, Enum):
    """Semantic role of a node, used for default coloring by consumers"""
    REVENUE = "revenue"
    EXPENSE = "expense"
    PROFIT = "profit"
    NEUTRAL = "neutral"

    @classmethod
    def from_string(cls, value: Optional[str]) -> 'NodeCategory':
        try:
            return cls(str(value or "").lower())
        except ValueError:
            return cls.NEUTRAL


@dataclass
class FlowNode:
    id: str
    name: str
    color: Optional[str] = None
    category: NodeCategory = NodeCategory.NEUTRAL

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "id": self.id,
            "name": self.name,
            "category": self.category.value,
        }
        if self.color:
            payload["color"] = self.color
        return payload


@dataclass
class FlowLink:
    source: str
    target: str
    value: float
    previous_value: Optional[float] = None
    comparison_label: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "source": self.source,
            "target": self.target,
            "value": self.value,
        }
        if self.previous_value is not None:
            payload["previousValue"] = self.previous_value
        if self.comparison_label:
            payload["comparisonLabel"] = self.comparison_label
        return payload


@dataclass
class FlowGraph:
    nodes: List[FlowNode] = field(default_factory=list)
    links: List[FlowLink] = field(default_factory=list)

    def node_by_id(self, node_id: str) -> Optional[FlowNode]:
        for node in self.nodes:
            if node.id == node_id:
                return node
        return None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "nodes": [node.to_dict() for node in self.nodes],
            "links": [link.to_dict() for link in self.links],
        }

    @classmethod
    def from_dict(cls, raw: Dict[str, Any]) -> 'FlowGraph':
        """Rebuild a graph from the shape produced by ``to_dict``."""
        if not isinstance(raw, dict):
            raise ValueError("graph payload must be a dictionary")

        nodes: List[FlowNode] = []
        for entry in raw.get("nodes") or []:
            if not isinstance(entry, dict) or not entry.get("id"):
                raise ValueError(f"invalid node entry: {entry!r}")
            nodes.append(
                FlowNode(
                    id=str(entry["id"]),
                    name=str(entry.get("name") or entry["id"]),
                    color=entry.get("color") or None,
                    category=NodeCategory.from_string(entry.get("category")),
                )
            )

        links: List[FlowLink] = []
        for entry in raw.get("links") or []:
            if not isinstance(entry, dict) or not entry.get("source") or not entry.get("target"):
                raise ValueError(f"invalid link entry: {entry!r}")
            try:
                value = float(entry["value"])
                previous = entry.get("previousValue")
                previous_value = float(previous) if previous is not None else None
            except (KeyError, TypeError, ValueError) as e:
                raise ValueError(f"invalid link value in {entry!r}: {e}") from e
            links.append(
                FlowLink(
                    source=str(entry["source"]),
                    target=str(entry["target"]),
                    value=value,
                    previous_value=previous_value,
                    comparison_label=entry.get("comparisonLabel") or None,
                )
            )

        return cls(nodes=nodes, links=links)


# Per-line parse results

@dataclass(frozen=True)
class ColorDirective:
    name: str
    color: str


@dataclass(frozen=True)
class FlowCandidate:
    source_name: str
    target_name: str
    value: float
    previous_value: Optional[float] = None
    comparison_label: Optional[str] = None


@dataclass(frozen=True)
class DiscardedLine:
    reason: str


LineResult = Union[ColorDirective, FlowCandidate, DiscardedLine]


@dataclass(frozen=True)
class Comparison:
    previous_value: Optional[float] = None
    comparison_label: Optional[str] = None


# Reports

@dataclass
class CycleDetectionResult:
    success: bool
    order: List[str]
    cyclic_nodes: List[str]
    start_nodes: List[str] = field(default_factory=list)
    end_nodes: List[str] = field(default_factory=list)


@dataclass
class NodeBalance:
    node_id: str
    name: str
    total_in: float
    total_out: float
    delta: float
    is_balanced: bool


@dataclass
class ValidationReport:
    ok: bool
    warnings: List[str] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)
    start_nodes: List[str] = field(default_factory=list)
    end_nodes: List[str] = field(default_factory=list)
    isolated_nodes: List[str] = field(default_factory=list)
    balances: List[NodeBalance] = field(default_factory=list)

    @property
    def imbalanced(self) -> List[NodeBalance]:
        return [b for b in self.balances if not b.is_balanced]
