import os
import sys
import logging
from typing import Optional

from flowgraph.graph_builder import GraphBuilder
from flowgraph.schema import FlowGraph

logger = logging.getLogger(__name__)

STDIN_PATH = "-"


class FlowLoader:
    """Flow document loader using GraphBuilder"""

    def __init__(self):
        self.graph_builder = GraphBuilder()

    def load_from_file(self, file_path: str, tabular: Optional[bool] = None,
                       enable_graph_validation: bool = True) -> Optional[FlowGraph]:
        """Load a flow document from a file path, or stdin for '-'"""
        try:
            if file_path == STDIN_PATH:
                loaded = self.graph_builder.load_text(sys.stdin.read(), tabular=bool(tabular))
            else:
                if not os.path.exists(file_path):
                    raise FileNotFoundError(f"Flow document not found: {file_path}")
                loaded = self.graph_builder.load_file(file_path, tabular=tabular)

            if not loaded:
                logger.warning(f"No flows found in {file_path}")
                return None

            if enable_graph_validation:
                report = self.graph_builder.validate()
                if report is not None and not report.ok:
                    logger.warning("Graph validation found issues, but continuing...")

            flow_graph = self.graph_builder.flow_graph
            logger.info(f"Loaded {len(flow_graph.nodes)} nodes and {len(flow_graph.links)} flows from {file_path}")
            return flow_graph

        except Exception as e:
            logger.error(f"Failed to load flows from {file_path}: {e}")
            raise


def load_flows(file_path: str, tabular: Optional[bool] = None) -> Optional[FlowGraph]:
    """Convenience function to load a flow graph"""
    loader = FlowLoader()
    return loader.load_from_file(file_path, tabular=tabular)
