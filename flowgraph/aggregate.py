from __future__ import annotations

import logging
import math
from dataclasses import replace
from typing import Dict, Iterable, List, Tuple

from .schema import FlowLink

logger = logging.getLogger(__name__)


def merge_links(existing: FlowLink, incoming: FlowLink) -> FlowLink:
    """Sum two declarations of the same flow.

    Previous values are summed only when both sides carry one. The label is
    always dropped since a merged percentage would be stale.
    """
    if existing.previous_value is not None and incoming.previous_value is not None:
        previous_value = existing.previous_value + incoming.previous_value
        if not math.isfinite(previous_value):
            previous_value = None
    else:
        previous_value = None

    return replace(
        existing,
        value=existing.value + incoming.value,
        previous_value=previous_value,
        comparison_label=None,
    )


def aggregate_links(links: Iterable[FlowLink]) -> List[FlowLink]:
    unique: Dict[Tuple[str, str], FlowLink] = {}

    for link in links:
        key = (link.source, link.target)
        if key not in unique:
            unique[key] = link
            continue

        merged = merge_links(unique[key], link)
        if not math.isfinite(merged.value):
            logger.debug(f"Kept {link.source} -> {link.target} unmerged: summed value overflows")
            continue
        unique[key] = merged
        logger.debug(f"Merged duplicate flow {link.source} -> {link.target}")

    return list(unique.values())
