# notion_gateway/schemas.py
from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, Field, StrictStr

TargetType = Literal["page", "database"]
Mode       = Literal["project", "generic"]

DEFAULT_FOCUS = ["sprint", "tasks", "risks", "next_actions"]


# -----------------------------
# Request
# -----------------------------
class Target(BaseModel):
    type: TargetType
    id: StrictStr = Field(min_length=1)
    query: Optional[Dict[str, Any]] = None   # database targets only


class AnalyzeRequest(BaseModel):
    targets: List[Target] = Field(min_length=1)
    mode: Mode = "project"
    instructions: Optional[StrictStr] = None
    focus: Optional[List[StrictStr]] = None


# -----------------------------
# Snapshot output
# -----------------------------
class TargetRef(BaseModel):
    type: TargetType
    id: str


class NormalizedItem(BaseModel):
    """One row of a queried database."""
    id: Optional[str] = None
    title: str
    properties: Dict[str, Any]
    properties_raw: Dict[str, Any]


class NormalizedTarget(BaseModel):
    target: TargetRef
    title: str
    properties: Dict[str, Any] = {}
    content_text: str = ""
    node_count: int = 0
    items: Optional[List[NormalizedItem]] = None

    def to_json(self) -> Dict[str, Any]:
        out = self.model_dump()
        if self.items is None:
            out.pop("items")  # page targets carry no rows
        return out


# -----------------------------
# Validation helpers
# -----------------------------
_TARGET_FIELD_MESSAGES = {
    "type": 'must be "page" or "database"',
    "id": "must be a non-empty string",
    "query": "must be an object",
}

_TOP_FIELD_MESSAGES = {
    "targets": '"targets" must be a non-empty array',
    "mode": '"mode" must be "project" or "generic"',
    "instructions": '"instructions" must be a string',
    "focus": '"focus" must be an array of strings',
}


def describe_error(loc: tuple) -> str:
    """Turn a pydantic error location into a field-level message."""
    if loc and loc[0] == "targets" and len(loc) >= 2 and isinstance(loc[1], int):
        where = f"targets[{loc[1]}]"
        if len(loc) == 2:
            return f"{where} must be an object"
        field = loc[2]
        if field in _TARGET_FIELD_MESSAGES:
            return f"{where}.{field} {_TARGET_FIELD_MESSAGES[field]}"
        return f"{where}.{field} is invalid"
    if loc and loc[0] in _TOP_FIELD_MESSAGES:
        return _TOP_FIELD_MESSAGES[loc[0]]
    return "Invalid request body"
