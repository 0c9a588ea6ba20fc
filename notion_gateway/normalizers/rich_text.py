from typing import Any


def rich_text_to_plain(rich_text: Any) -> str:
    """Concatenate the plain text of a rich-text array, in order."""
    if not isinstance(rich_text, list):
        return ""
    parts = []
    for rt in rich_text:
        if not isinstance(rt, dict):
            continue
        plain = rt.get("plain_text")
        if plain is None:
            text = rt.get("text")
            plain = text.get("content") if isinstance(text, dict) else None
        parts.append(plain if isinstance(plain, str) else "")
    return "".join(parts)
