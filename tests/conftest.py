# tests/conftest.py
import pytest
from fastapi import Depends
from fastapi.testclient import TestClient

from notion_gateway.main import app
from notion_gateway.notion.client import NotionClient
from notion_gateway.routers.analyze import get_notion_client
from notion_gateway.settings import Settings, get_settings

API_KEY = "test-key"
BASE = "https://notion.test"


# --- In-memory stand-in for requests.Session ---
class FakeResponse:
    def __init__(self, status_code: int, payload):
        self.status_code = status_code
        self._payload = payload

    @property
    def ok(self):
        return 200 <= self.status_code < 400

    @property
    def text(self):
        return str(self._payload)

    def json(self):
        return self._payload


class FakeNotion:
    """
    Records every outbound call and answers from a route table keyed by
    (METHOD, path). Unknown routes answer 404 like the real API.
    """
    def __init__(self):
        self.routes = {}
        self.calls = []
        self.closed = False

    # session interface
    def request(self, method, url, headers=None, json=None, params=None, timeout=None):
        path = url[len(BASE):] if url.startswith(BASE) else url
        self.calls.append({"method": method, "path": path, "headers": headers,
                           "json": json, "params": params})
        status, payload = self.routes.get((method, path), (404, {"object": "error", "code": "object_not_found"}))
        return FakeResponse(status, payload)

    def close(self):
        self.closed = True

    # route helpers
    def on(self, method, path, payload, status=200):
        self.routes[(method, path)] = (status, payload)

    def page(self, page_id, properties=None):
        self.on("GET", f"/v1/pages/{page_id}", {"object": "page", "id": page_id,
                                                 "properties": properties or {}})

    def children(self, parent_id, blocks):
        self.on("GET", f"/v1/blocks/{parent_id}/children",
                {"object": "list", "results": blocks, "has_more": False, "next_cursor": None})

    def database(self, db_id, rows):
        self.on("POST", f"/v1/databases/{db_id}/query",
                {"object": "list", "results": rows, "has_more": False})

    def listed(self):
        """Ids whose children were listed, in call order."""
        return [c["path"].split("/")[3] for c in self.calls if c["path"].endswith("/children")]


# --- Builders for Notion-shaped records ---
def rt(text):
    return [{"type": "text", "plain_text": text, "text": {"content": text}}]


def block(block_id, kind="paragraph", text="", has_children=False, **content):
    body = {"rich_text": rt(text) if text else []}
    body.update(content)
    return {"object": "block", "id": block_id, "type": kind, "has_children": has_children, kind: body}


def title_prop(text):
    return {"id": "title", "type": "title", "title": rt(text)}


@pytest.fixture
def settings():
    return Settings(
        gateway_api_key=API_KEY,
        notion_token="secret_test",
        notion_version="2022-06-28",
        notion_base_url=BASE,
        max_depth=2,
        max_blocks=400,
        db_page_limit=50,
        children_page_size=100,
    )


@pytest.fixture
def notion():
    return FakeNotion()


@pytest.fixture
def notion_client(settings, notion):
    return NotionClient(settings, session=notion)


# --- Override the app's settings and upstream client ---
@pytest.fixture(autouse=True)
def override_dependencies(settings, notion):
    app.dependency_overrides[get_settings] = lambda: settings

    def _client(s: Settings = Depends(get_settings)):
        c = NotionClient(s, session=notion)
        try:
            yield c
        finally:
            c.close()
    app.dependency_overrides[get_notion_client] = _client
    yield
    app.dependency_overrides.clear()


@pytest.fixture
def client():
    with TestClient(app) as c:
        yield c


@pytest.fixture
def auth():
    return {"Authorization": f"Bearer {API_KEY}"}
