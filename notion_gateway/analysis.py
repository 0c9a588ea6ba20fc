"""
Mechanical analysis over normalized targets: to-do extraction, counts and
fixed pointers back into the snapshot. No inference happens here.
"""
import re
from typing import Any, Dict, List, Optional

from notion_gateway.schemas import NormalizedTarget

# Rendered to-do lines look like "[ ] task" or "[x] task".
TODO_RE = re.compile(r"\[[ x]\]\s+(.+)")
SAMPLE_SIZE = 10


def _totals(targets: List[NormalizedTarget]) -> tuple[int, int]:
    nodes = sum(t.node_count for t in targets)
    items = sum(len(t.items or []) for t in targets)
    return nodes, items


def _item_status(properties: Dict[str, Any]) -> Any:
    for key in ("Status", "status"):
        if properties.get(key) is not None:
            return properties[key]
    return "unknown"


def extract_todos(content: str) -> List[Dict[str, Any]]:
    return [
        {"task": m.group(1), "done": m.group(0).startswith("[x]")}
        for m in TODO_RE.finditer(content)
    ]


def build_analysis(
    targets: List[NormalizedTarget],
    focus: List[str],
    instructions: Optional[str] = None,
) -> Dict[str, Any]:
    all_content = "\n".join(t.content_text for t in targets)
    all_items = [item for t in targets for item in (t.items or [])]
    total_nodes, total_items = _totals(targets)

    result: Dict[str, Any] = {
        "status": f"Analyzed {len(targets)} target(s): {total_nodes} blocks, {total_items} database items",
    }

    if "tasks" in focus or "sprint" in focus:
        tasks = extract_todos(all_content)
        db_tasks = [
            {
                "title": item.title,
                "status": _item_status(item.properties),
            }
            for item in all_items
        ]
        result["tasks_found"] = len(tasks) + len(db_tasks)
        result["tasks_sample"] = tasks[:SAMPLE_SIZE] + db_tasks[:SAMPLE_SIZE]

    if "risks" in focus:
        result["risks"] = [
            "Review the notion_snapshot for full context to identify project risks.",
            f"Content includes {total_nodes} blocks and {total_items} database items to analyze.",
        ]

    if "open_questions" in focus:
        result["open_questions"] = [
            "See notion_snapshot.targets for full content — use this data to identify open questions.",
        ]

    if "next_actions" in focus:
        result["next_actions"] = [
            "Review the tasks and content in notion_snapshot to determine next actions.",
        ]

    result["suggested_updates_for_humans_to_apply"] = [
        "Analyze the notion_snapshot content to generate specific update suggestions.",
    ]

    if instructions:
        result["custom_instructions"] = instructions

    return result


def build_summary(targets: List[NormalizedTarget], mode: str) -> str:
    titles = ", ".join(t.title for t in targets)
    total_nodes, total_items = _totals(targets)

    parts = [f"{mode} analysis of: {titles}"]
    if total_nodes > 0:
        parts.append(f"{total_nodes} blocks")
    if total_items > 0:
        parts.append(f"{total_items} database items")
    return " | ".join(parts)
