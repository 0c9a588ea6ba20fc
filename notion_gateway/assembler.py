"""
Assemble fetched Notion data into one NormalizedTarget per requested target.
"""
import json
import logging
from typing import Any, Dict, List

from notion_gateway.normalizers import extract_title, normalize_properties, render_line
from notion_gateway.notion.client import NotionClient
from notion_gateway.notion.fetcher import ContentNode, TraversalBudget, fetch_tree
from notion_gateway.schemas import NormalizedItem, NormalizedTarget, Target, TargetRef

log = logging.getLogger(__name__)

MAX_CONTENT_CHARS = 20_000
TRUNCATION_MARKER = "\n... [truncated]"


def truncate_content(text: str, cap: int = MAX_CONTENT_CHARS) -> str:
    """Cut text to `cap` chars and mark it; shorter text is returned as-is."""
    if len(text) <= cap:
        return text
    return text[:cap] + TRUNCATION_MARKER


def render_nodes(nodes: List[ContentNode]) -> str:
    """Join the non-empty rendered lines of a traversal."""
    lines = (render_line(n) for n in nodes)
    return "\n".join(line for line in lines if line)


def _compact_json(value: Any) -> str:
    return json.dumps(value, ensure_ascii=False, separators=(",", ":"))


def render_items(items: List[NormalizedItem]) -> str:
    """Numbered block per row: title, then one `key: json` line per property."""
    blocks = []
    for i, item in enumerate(items, start=1):
        prop_lines = [
            f"  {k}: {_compact_json(v)}" for k, v in item.properties.items()
        ]
        blocks.append("\n".join([f"{i}. {item.title}", *prop_lines]))
    return "\n\n".join(blocks)


def normalize_page_target(client: NotionClient, page_id: str, budget: TraversalBudget) -> NormalizedTarget:
    page = client.retrieve_page(page_id)
    nodes = fetch_tree(client, page_id, budget)
    log.info("page %s: %d node(s)", page_id, len(nodes))

    return NormalizedTarget(
        target=TargetRef(type="page", id=page_id),
        title=extract_title(page),
        properties=normalize_properties(page.get("properties") or {}),
        content_text=truncate_content(render_nodes(nodes)),
        node_count=len(nodes),
    )


def _to_item(row: Dict[str, Any]) -> NormalizedItem:
    props = row.get("properties") or {}
    return NormalizedItem(
        id=row.get("id"),
        title=extract_title(row),
        properties=normalize_properties(props),
        properties_raw=props,
    )


def normalize_database_target(client: NotionClient, target: Target) -> NormalizedTarget:
    resp = client.query_database(target.id, target.query or {})
    items = [_to_item(row) for row in resp.get("results") or []]
    log.info("database %s: %d row(s)", target.id, len(items))

    return NormalizedTarget(
        target=TargetRef(type="database", id=target.id),
        title=f"Database ({len(items)} items)",
        properties={},
        content_text=truncate_content(render_items(items)),
        node_count=0,
        items=items,
    )


def normalize_target(client: NotionClient, target: Target, budget: TraversalBudget) -> NormalizedTarget:
    if target.type == "page":
        return normalize_page_target(client, target.id, budget)
    return normalize_database_target(client, target)
