from .rich_text import rich_text_to_plain
from .properties import (
    normalize_property,
    normalize_properties,
    extract_title,
    PROPERTY_HANDLERS,
    UNTITLED,
)
from .blocks import block_to_text, render_line, BLOCK_RENDERERS

__all__ = [
    "rich_text_to_plain",
    "normalize_property",
    "normalize_properties",
    "extract_title",
    "PROPERTY_HANDLERS",
    "UNTITLED",
    "block_to_text",
    "render_line",
    "BLOCK_RENDERERS",
]
