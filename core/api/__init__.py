from __future__ import annotations

from .models import (
    InputFormat, NodeModel, LinkModel, GraphModel,
    ParseRequest, ParseResponse, SerializeRequest, SerializeResponse,
    NodeBalanceModel, ReportModel,
)
from .builders import build_graph_model, graph_from_model, build_report_model

__all__ = [
    'InputFormat', 'NodeModel', 'LinkModel', 'GraphModel',
    'ParseRequest', 'ParseResponse', 'SerializeRequest', 'SerializeResponse',
    'NodeBalanceModel', 'ReportModel',
    'build_graph_model', 'graph_from_model', 'build_report_model',
]
