import logging
from typing import Any, Callable, Dict, Optional

from .rich_text import rich_text_to_plain

log = logging.getLogger(__name__)

Property = Dict[str, Any]

# Property names conventionally holding a record's title, checked first.
TITLE_PROPERTY_NAMES = ("title", "Title", "Name", "name")
UNTITLED = "Untitled"


# --- Individual variant helpers ---

def _named(obj: Any) -> Optional[str]:
    """`name` of an option/user object, or None."""
    if isinstance(obj, dict):
        return obj.get("name")
    return None

def _items(value: Any) -> list:
    return value if isinstance(value, list) else []

def _text(prop: Property) -> str:
    return rich_text_to_plain(prop.get(prop["type"]))

def _scalar(prop: Property) -> Any:
    return prop.get(prop["type"])

def _option(prop: Property) -> Optional[str]:
    return _named(prop.get(prop["type"]))

def _multi_select(prop: Property) -> list:
    return [_named(o) for o in _items(prop.get("multi_select"))]

def _date(prop: Property) -> Optional[dict]:
    d = prop.get("date")
    if not isinstance(d, dict):
        return None
    return {"start": d.get("start"), "end": d.get("end")}

def _people(prop: Property) -> list:
    return [_named(p) or "Unknown" for p in _items(prop.get("people"))]

def _relation(prop: Property) -> list:
    return [r.get("id") for r in _items(prop.get("relation")) if isinstance(r, dict)]

def _computed(prop: Property) -> Any:
    """formula / rollup: the value stored under the record's own sub-type."""
    inner = prop.get(prop["type"])
    if not isinstance(inner, dict):
        return None
    sub = inner.get("type")
    if not isinstance(sub, str):
        return None
    return inner.get(sub)


PROPERTY_HANDLERS: Dict[str, Callable[[Property], Any]] = {
    "title": _text,
    "rich_text": _text,
    "number": _scalar,
    "checkbox": _scalar,
    "url": _scalar,
    "email": _scalar,
    "phone_number": _scalar,
    "created_time": _scalar,
    "last_edited_time": _scalar,
    "select": _option,
    "status": _option,
    "created_by": _option,
    "last_edited_by": _option,
    "multi_select": _multi_select,
    "date": _date,
    "people": _people,
    "relation": _relation,
    "formula": _computed,
    "rollup": _computed,
}


def normalize_property(prop: Any) -> Any:
    """
    Map one typed property to a JSON-safe value. Unknown or malformed
    variants become the placeholder "[<type>]"; this never raises.
    """
    kind = prop.get("type") if isinstance(prop, dict) else None
    handler = PROPERTY_HANDLERS.get(kind) if isinstance(kind, str) else None
    if handler is None:
        return f"[{kind if kind is not None else 'unknown'}]"
    try:
        return handler(prop)
    except (AttributeError, KeyError, TypeError) as e:
        log.debug("malformed %s property: %s", kind, e)
        return f"[{kind}]"


def normalize_properties(props: Any) -> Dict[str, Any]:
    """Normalize every property of a record; no key is ever dropped."""
    if not isinstance(props, dict):
        return {}
    return {key: normalize_property(val) for key, val in props.items()}


def _title_text(prop: Any) -> str:
    if isinstance(prop, dict) and prop.get("type") == "title":
        return rich_text_to_plain(prop.get("title"))
    return ""

def extract_title(record: Any) -> str:
    """
    Title of a page or database row: conventional names first, then any
    title-typed property, else "Untitled".
    """
    props = record.get("properties") if isinstance(record, dict) else None
    if not isinstance(props, dict):
        return UNTITLED

    for key in TITLE_PROPERTY_NAMES:
        title = _title_text(props.get(key))
        if title:
            return title

    for prop in props.values():
        title = _title_text(prop)
        if title:
            return title

    return UNTITLED
