from __future__ import annotations

import logging
from typing import Iterable, List

import networkx as nx

from .schema import FlowLink

logger = logging.getLogger(__name__)


class DagEnforcer:
    """Admits links one at a time, refusing any that would close a cycle.

    Earlier links win over later conflicting ones; a refused link is dropped
    for good and never retried.
    """

    def __init__(self) -> None:
        self.graph: nx.DiGraph = nx.DiGraph()

    def closes_cycle(self, source: str, target: str) -> bool:
        if source == target:
            return True
        if source not in self.graph or target not in self.graph:
            return False
        return nx.has_path(self.graph, target, source)

    def admit(self, link: FlowLink) -> bool:
        if link.source == link.target:
            logger.debug(f"Rejected self-loop on '{link.source}'")
            return False
        if self.closes_cycle(link.source, link.target):
            logger.debug(f"Rejected {link.source} -> {link.target}: would close a cycle")
            return False

        self.graph.add_edge(link.source, link.target)
        return True


def enforce_dag(links: Iterable[FlowLink]) -> List[FlowLink]:
    enforcer = DagEnforcer()
    return [link for link in links if enforcer.admit(link)]
