import json
import logging
from typing import Any

from notion_gateway.errors import WriteIntentDetected

log = logging.getLogger(__name__)

# Write-suggestive vocabulary refused anywhere in an inbound request.
WRITE_KEYWORDS = ["commit", "create", "update", "delete", "append", "write", "remove", "insert"]


def find_write_keyword(payload: Any) -> str | None:
    """
    Return the first keyword that appears as a quoted JSON token
    (`"delete"`) in the serialized, lower-cased payload, else None.

    This is a textual pre-filter only. It also matches free-text fields
    such as `instructions`, so `{"focus": ["delete"]}` is refused while
    `"tasks to delete"` is not; the Notion client's write guard is the
    real barrier.
    """
    body = json.dumps(payload, ensure_ascii=False).lower()
    for keyword in WRITE_KEYWORDS:
        if f'"{keyword}"' in body:
            return keyword
    return None


def check_write_intent(payload: Any) -> None:
    """Raise WriteIntentDetected if the payload carries write vocabulary."""
    keyword = find_write_keyword(payload)
    if keyword is not None:
        log.warning("request refused by keyword guard: %r", keyword)
        raise WriteIntentDetected(keyword)
