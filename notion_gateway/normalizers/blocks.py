from typing import Any, Callable, Dict

from .rich_text import rich_text_to_plain

Block = Dict[str, Any]

HEADING_MARKS = {"heading_1": "#", "heading_2": "##", "heading_3": "###"}
MEDIA_TYPES = {"image", "video", "file", "pdf"}


# --- Per-type renderers: (indent, type, content, text) -> line ---

def _paragraph(indent, kind, content, text):
    return f"{indent}{text}" if text else ""

def _heading(indent, kind, content, text):
    return f"{indent}{HEADING_MARKS[kind]} {text}"

def _prefixed(prefix: str) -> Callable:
    def render(indent, kind, content, text):
        return f"{indent}{prefix}{text}"
    return render

def _to_do(indent, kind, content, text):
    checked = "x" if content.get("checked") else " "
    return f"{indent}[{checked}] {text}"

def _callout(indent, kind, content, text):
    icon = content.get("icon")
    emoji = ""
    if isinstance(icon, dict) and icon.get("type") == "emoji" and icon.get("emoji"):
        emoji = f"{icon['emoji']} "
    return f"{indent}{emoji}{text}"

def _code(indent, kind, content, text):
    lang = content.get("language") or ""
    return f"{indent}```{lang}\n{indent}{text}\n{indent}```"

def _divider(indent, kind, content, text):
    return f"{indent}---"

def _table_row(indent, kind, content, text):
    cells = content.get("cells")
    if not isinstance(cells, list):
        return f"{indent}[table_row]"
    return f"{indent}| " + " | ".join(rich_text_to_plain(c) for c in cells) + " |"

def _titled(icon: str, fallback: str) -> Callable:
    def render(indent, kind, content, text):
        title = content.get("title")
        return f"{indent}{icon} {title if title is not None else fallback}"
    return render

def _media(indent, kind, content, text):
    return f"{indent}[{kind}]"

def _bookmark(indent, kind, content, text):
    return f"{indent}🔗 {content.get('url') or '[bookmark]'}"

def _embed(indent, kind, content, text):
    return f"{indent}[embed: {content.get('url') or 'unknown'}]"


BLOCK_RENDERERS: Dict[str, Callable] = {
    "paragraph": _paragraph,
    "heading_1": _heading,
    "heading_2": _heading,
    "heading_3": _heading,
    "bulleted_list_item": _prefixed("• "),
    "numbered_list_item": _prefixed("1. "),
    "to_do": _to_do,
    "toggle": _prefixed("▸ "),
    "quote": _prefixed("> "),
    "callout": _callout,
    "code": _code,
    "divider": _divider,
    "table_row": _table_row,
    "child_page": _titled("📄", "Untitled"),
    "child_database": _titled("🗃️", "Untitled DB"),
    "bookmark": _bookmark,
    "embed": _embed,
    **{t: _media for t in MEDIA_TYPES},
}


def block_to_text(block: Block, depth: int = 0) -> str:
    """
    Render one block as a text line, indented two spaces per depth level.
    Code blocks span several lines; empty paragraphs render as "".
    """
    indent = "  " * depth
    kind = block.get("type") if isinstance(block, dict) else None
    content = block.get(kind) if isinstance(kind, str) else None
    if not isinstance(content, dict):
        return f"{indent}[{kind}]"

    text = rich_text_to_plain(content.get("rich_text"))
    render = BLOCK_RENDERERS.get(kind)
    if render is None:
        # unknown type: its own text if it has any
        return f"{indent}{text}" if text else f"{indent}[{kind}]"
    return render(indent, kind, content, text)


def render_line(node) -> str:
    """Render a fetched ContentNode at its own depth."""
    return block_to_text(node.payload, node.depth)
