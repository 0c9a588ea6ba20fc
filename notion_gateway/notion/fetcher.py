import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List

from notion_gateway.notion.client import NotionClient

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class TraversalBudget:
    """
    Limits for one recursive walk. The node count is cumulative across the
    whole walk, not per level.
    """
    max_depth: int
    max_nodes: int

    def __post_init__(self):
        if self.max_depth < 0:
            raise ValueError("max_depth must be >= 0")
        if self.max_nodes <= 0:
            raise ValueError("max_nodes must be > 0")


@dataclass(frozen=True)
class ContentNode:
    """One block from the tree, flattened with its depth."""
    id: str
    kind: str
    depth: int
    payload: Dict[str, Any] = field(repr=False)


def fetch_tree(client: NotionClient, root_id: str, budget: TraversalBudget) -> List[ContentNode]:
    """
    Pre-order walk of `root_id`'s descendants.

    Each parent gets a single children listing (first page only). The walk
    stops entirely once `budget.max_nodes` nodes were emitted, and never
    descends below `budget.max_depth`. Upstream or guard errors propagate;
    nothing partial is returned.
    """
    out: List[ContentNode] = []

    def _walk(parent_id: str, depth: int) -> None:
        if len(out) >= budget.max_nodes:
            return
        resp = client.retrieve_block_children(parent_id)
        for block in resp.get("results") or []:
            if len(out) >= budget.max_nodes:
                return
            out.append(ContentNode(
                id=block.get("id"),
                kind=block.get("type"),
                depth=depth,
                payload=block,
            ))
            if block.get("has_children") and depth + 1 <= budget.max_depth:
                _walk(block.get("id"), depth + 1)

    _walk(root_id, 0)
    log.debug("fetched %d node(s) under %s (max_depth=%d, max_nodes=%d)",
              len(out), root_id, budget.max_depth, budget.max_nodes)
    return out
