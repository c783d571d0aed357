from __future__ import annotations

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from flowgraph.schema import NodeCategory


class InputFormat(str, Enum):
    DSL = "dsl"
    TABULAR = "tabular"


class NodeModel(BaseModel):
    id: str
    name: str
    color: Optional[str] = None
    category: NodeCategory = NodeCategory.NEUTRAL


class LinkModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    source: str
    target: str
    value: float = Field(gt=0)
    previous_value: Optional[float] = Field(default=None, alias="previousValue")
    comparison_label: Optional[str] = Field(default=None, alias="comparisonLabel")


class GraphModel(BaseModel):
    nodes: List[NodeModel] = Field(default_factory=list)
    links: List[LinkModel] = Field(default_factory=list)


class ParseRequest(BaseModel):
    text: str
    format: Optional[InputFormat] = None


class ParseResponse(BaseModel):
    graph: Optional[GraphModel] = None
    message: Optional[str] = None


class SerializeRequest(BaseModel):
    graph: GraphModel


class SerializeResponse(BaseModel):
    text: str


class NodeBalanceModel(BaseModel):
    node_id: str
    name: str
    total_in: float
    total_out: float
    delta: float
    is_balanced: bool


class ReportModel(BaseModel):
    ok: bool
    warnings: List[str] = Field(default_factory=list)
    errors: List[str] = Field(default_factory=list)
    start_nodes: List[str] = Field(default_factory=list)
    end_nodes: List[str] = Field(default_factory=list)
    isolated_nodes: List[str] = Field(default_factory=list)
    imbalanced: List[NodeBalanceModel] = Field(default_factory=list)
