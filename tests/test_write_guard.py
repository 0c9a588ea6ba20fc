import pytest

from notion_gateway.errors import BlockedOperation, ConfigurationError, UpstreamError
from notion_gateway.notion.client import NotionClient, check_call, is_write_call
from notion_gateway.settings import Settings


@pytest.mark.parametrize("method", ["PATCH", "DELETE", "patch", "delete"])
@pytest.mark.parametrize("path", ["/v1/pages/abc", "/v1/blocks/abc", "/v1/blocks/abc/children",
                                  "/v1/databases/abc/query", "/v1/search", "/anything"])
def test_patch_and_delete_always_blocked(method, path):
    assert is_write_call(method, path)


@pytest.mark.parametrize("path", ["/v1/pages", "/v1/pages/", "/v1/comments", "/v1/databases"])
def test_post_to_create_paths_blocked(path):
    check = check_call("POST", path)
    assert not check.ok
    assert "creates a record" in check.reason


@pytest.mark.parametrize("method,path", [
    ("GET", "/v1/pages/abc"),
    ("GET", "/v1/blocks/abc/children"),
    ("POST", "/v1/databases/abc/query"),
    ("POST", "/v1/search"),
])
def test_reads_permitted(method, path):
    assert check_call(method, path).ok


def test_blocked_call_never_reaches_session(notion_client, notion):
    with pytest.raises(BlockedOperation) as exc:
        notion_client.call("PATCH", "/v1/pages/abc", body={"archived": True})
    assert exc.value.method == "PATCH"
    assert exc.value.path == "/v1/pages/abc"
    assert "BLOCKED" in exc.value.message
    assert notion.calls == []


def test_page_creation_blocked_even_with_query_string(notion_client, notion):
    with pytest.raises(BlockedOperation):
        notion_client.call("POST", "/v1/pages?x=1", body={})
    assert notion.calls == []


def test_forwarded_call_carries_credentials(notion_client, notion):
    notion.page("abc")
    out = notion_client.retrieve_page("abc")
    assert out["id"] == "abc"
    call = notion.calls[0]
    assert call["method"] == "GET"
    assert call["path"] == "/v1/pages/abc"
    assert call["headers"]["Authorization"] == "Bearer secret_test"
    assert call["headers"]["Notion-Version"] == "2022-06-28"


def test_children_listing_sends_page_size(notion_client, notion):
    notion.children("abc", [])
    notion_client.retrieve_block_children("abc")
    assert notion.calls[0]["params"] == {"page_size": 100}


def test_query_database_merges_caller_query(notion_client, notion):
    notion.database("db1", [])
    notion_client.query_database("db1", {"filter": {"property": "Done", "checkbox": {"equals": False}}})
    body = notion.calls[0]["json"]
    assert body["page_size"] == 50
    assert body["filter"]["property"] == "Done"

    notion_client.query_database("db1", {"page_size": 5})
    assert notion.calls[1]["json"]["page_size"] == 5


def test_search_is_a_read(notion_client, notion):
    notion.on("POST", "/v1/search", {"results": []})
    assert notion_client.search({"query": "roadmap"}) == {"results": []}


def test_upstream_error_carries_status_and_body(notion_client, notion):
    notion.on("GET", "/v1/pages/gone", {"message": "Could not find page"}, status=404)
    with pytest.raises(UpstreamError) as exc:
        notion_client.retrieve_page("gone")
    assert exc.value.status == 404
    assert "Could not find page" in exc.value.body
    assert exc.value.message.startswith("Notion API error 404")


def test_missing_token_is_configuration_error(notion):
    c = NotionClient(Settings(notion_token=None, notion_base_url="https://notion.test"), session=notion)
    with pytest.raises(ConfigurationError):
        c.retrieve_page("abc")
    assert notion.calls == []
