from __future__ import annotations

import logging
import os
from typing import Any, Dict, Optional

from dotenv import load_dotenv
from fastapi import FastAPI, HTTPException
from fastapi.responses import RedirectResponse

from core.api import (
    InputFormat,
    ParseRequest,
    ParseResponse,
    ReportModel,
    SerializeRequest,
    SerializeResponse,
    build_graph_model,
    build_report_model,
    graph_from_model,
)
from flowgraph import parse, parse_tabular, serialize, validate_graph
from flowgraph.schema import FlowGraph

load_dotenv()

MAX_INPUT_CHARS = int(os.getenv("FLOWGRAPH_MAX_INPUT_CHARS", "200000"))
DEFAULT_FORMAT = InputFormat(os.getenv("FLOWGRAPH_DEFAULT_FORMAT", InputFormat.DSL.value))

EMPTY_GRAPH_MESSAGE = "No flows found. Use lines like 'Revenue [100] Profit'."

logger = logging.getLogger(__name__)

app = FastAPI(title="Flow Graph Parser API")


def _parse_request(body: ParseRequest) -> Optional[FlowGraph]:
    if len(body.text) > MAX_INPUT_CHARS:
        raise HTTPException(status_code=413, detail=f"text exceeds {MAX_INPUT_CHARS} characters")
    fmt = body.format or DEFAULT_FORMAT
    if fmt == InputFormat.TABULAR:
        return parse_tabular(body.text)
    return parse(body.text)


@app.get("/", include_in_schema=False)
def root() -> RedirectResponse:
    return RedirectResponse(url="/docs")


@app.post("/parse", response_model=ParseResponse)
def parse_text(body: ParseRequest) -> ParseResponse:
    graph = _parse_request(body)
    if graph is None:
        logger.debug("Parse request produced no graph")
        return ParseResponse(graph=None, message=EMPTY_GRAPH_MESSAGE)
    return ParseResponse(graph=build_graph_model(graph))


@app.post("/serialize", response_model=SerializeResponse)
def serialize_graph(body: SerializeRequest) -> SerializeResponse:
    return SerializeResponse(text=serialize(graph_from_model(body.graph)))


@app.post("/report", response_model=ReportModel)
def report(body: ParseRequest) -> ReportModel:
    graph = _parse_request(body)
    if graph is None:
        raise HTTPException(status_code=422, detail=EMPTY_GRAPH_MESSAGE)
    return build_report_model(validate_graph(graph))


@app.get("/health")
def health() -> Dict[str, Any]:
    return {"ok": True}
