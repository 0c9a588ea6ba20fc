import logging
import re
from dataclasses import dataclass
from typing import Any, Dict, Optional

import requests

from notion_gateway.errors import BlockedOperation, ConfigurationError, UpstreamError
from notion_gateway.settings import Settings

log = logging.getLogger(__name__)

# ---------------------------------------------------------------------
# Write guard
# ---------------------------------------------------------------------

# PATCH and DELETE are refused on any path.
ALWAYS_BLOCKED_METHODS = {"PATCH", "DELETE"}

# POST is a read for query/search, but these paths create records.
BLOCKED_POST_PATTERNS = [
    re.compile(r"^/v1/pages/?$"),       # create page
    re.compile(r"^/v1/databases/?$"),   # create database
    re.compile(r"^/v1/comments/?$"),    # create comment
]


@dataclass
class CallCheck:
    """Result of classifying a (method, path) pair."""
    ok: bool
    reason: str | None = None


def check_call(method: str, path: str) -> CallCheck:
    """
    Classify a call by method and path only; the body is never inspected.
    """
    upper = method.upper()
    if upper in ALWAYS_BLOCKED_METHODS:
        return CallCheck(False, f"{upper} is never allowed")
    if upper == "POST":
        bare = path.split("?", 1)[0]
        for pattern in BLOCKED_POST_PATTERNS:
            if pattern.match(bare):
                return CallCheck(False, f"POST {bare} creates a record")
    return CallCheck(True)


def is_write_call(method: str, path: str) -> bool:
    return not check_call(method, path).ok


# ---------------------------------------------------------------------
# Client
# ---------------------------------------------------------------------

class NotionClient:
    """
    Read-only Notion API client. `call` is the only method that touches
    the network, and it refuses anything `check_call` flags.
    """

    def __init__(self, settings: Settings, session: Optional[requests.Session] = None):
        self.settings = settings
        self.session = session or requests.Session()

    def close(self) -> None:
        self.session.close()

    def call(
        self,
        method: str,
        path: str,
        body: Optional[Dict[str, Any]] = None,
        params: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]:
        method = method.upper()

        check = check_call(method, path)
        if not check.ok:
            log.warning("blocked upstream call: %s %s (%s)", method, path, check.reason)
            raise BlockedOperation(method, path)

        token = self.settings.notion_token
        if not token:
            raise ConfigurationError("Server misconfiguration: NOTION_TOKEN not set")

        headers = {
            "Authorization": f"Bearer {token}",
            "Notion-Version": self.settings.notion_version,
            "Content-Type": "application/json",
        }
        url = f"{self.settings.notion_base_url}{path}"

        r = self.session.request(
            method,
            url,
            headers=headers,
            json=body,
            params=params,
            timeout=self.settings.notion_timeout,
        )
        if not r.ok:
            log.warning("upstream error: %s %s -> %s", method, path, r.status_code)
            raise UpstreamError(r.status_code, r.text)
        return r.json()

    # --- High-level read operations ---

    def retrieve_page(self, page_id: str) -> Dict[str, Any]:
        return self.call("GET", f"/v1/pages/{page_id}")

    def retrieve_block_children(self, block_id: str) -> Dict[str, Any]:
        """First page of a block's children; cursors are not followed."""
        return self.call(
            "GET",
            f"/v1/blocks/{block_id}/children",
            params={"page_size": self.settings.children_page_size},
        )

    def query_database(self, database_id: str, query: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        # caller's query keys win over the default page size
        body = {"page_size": self.settings.db_page_limit, **(query or {})}
        return self.call("POST", f"/v1/databases/{database_id}/query", body=body)

    def search(self, query: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        return self.call("POST", "/v1/search", body=dict(query or {}))

