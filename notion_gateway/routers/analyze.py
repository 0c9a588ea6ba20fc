import logging
from typing import Any, Dict, List

import requests
from fastapi import APIRouter, Body, Depends, HTTPException, Response
from pydantic import ValidationError as PydanticValidationError

from notion_gateway.analysis import build_analysis, build_summary
from notion_gateway.assembler import normalize_target
from notion_gateway.auth import require_api_key
from notion_gateway.errors import GatewayError, MethodNotAllowed, ValidationError
from notion_gateway.guard import check_write_intent
from notion_gateway.notion.client import NotionClient
from notion_gateway.notion.fetcher import TraversalBudget
from notion_gateway.schemas import DEFAULT_FOCUS, AnalyzeRequest, NormalizedTarget, describe_error
from notion_gateway.settings import Settings, get_settings

log = logging.getLogger(__name__)

# --------------------------------------------------------------------
# Router setup
# --------------------------------------------------------------------
router = APIRouter(prefix="", tags=["analyze"])


def get_notion_client(settings: Settings = Depends(get_settings)):
    """One read-only client per request; its HTTP session is closed afterwards."""
    client = NotionClient(settings)
    try:
        yield client
    finally:
        client.close()


def parse_request(payload: Any) -> AnalyzeRequest:
    """
    Screen and validate a raw /analyze body.
    The keyword guard runs before schema validation, so a refused body
    never reaches the pipeline.
    """
    if not isinstance(payload, dict):
        raise ValidationError("Request body must be a JSON object")
    check_write_intent(payload)
    try:
        return AnalyzeRequest.model_validate(payload)
    except PydanticValidationError as e:
        first = e.errors()[0]
        raise ValidationError(describe_error(tuple(first["loc"])))


@router.options("/analyze")
def analyze_preflight():
    return Response(status_code=200)


@router.api_route("/analyze", methods=["GET", "PUT", "PATCH", "DELETE"])
def analyze_wrong_method():
    raise MethodNotAllowed()


@router.post("/analyze", dependencies=[Depends(require_api_key)])
def analyze(
    payload: Any = Body(None),
    settings: Settings = Depends(get_settings),
    client: NotionClient = Depends(get_notion_client),
) -> Dict[str, Any]:
    """
    Fetch and normalize each target, then derive a summary and analysis.

    Request body:
      {"targets": [{"type": "page", "id": "..."}], "mode": "project",
       "instructions": "...", "focus": ["tasks", "risks"]}

    Response JSON:
      {
        "ok": True,
        "summary": "...",
        "analysis": {...},
        "notion_snapshot": {"targets": [NormalizedTarget, ...]}
      }

    Targets are processed one after another; the first failure aborts the
    whole request and nothing partial is returned.
    """
    req = parse_request(payload)

    try:
        budget = TraversalBudget(max_depth=settings.max_depth, max_nodes=settings.max_blocks)

        targets: List[NormalizedTarget] = []
        for target in req.targets:
            targets.append(normalize_target(client, target, budget))

        focus = req.focus if req.focus is not None else DEFAULT_FOCUS
        return {
            "ok": True,
            "summary": build_summary(targets, req.mode),
            "analysis": build_analysis(targets, focus, req.instructions),
            "notion_snapshot": {"targets": [t.to_json() for t in targets]},
        }

    # ------------------------------------------------------------
    # Global error handling
    # ------------------------------------------------------------
    except GatewayError:
        raise
    except requests.RequestException as e:
        log.exception("analyze: upstream request failed")
        raise HTTPException(500, f"Notion API request failed: {e}")
    except Exception as e:
        log.exception("analyze failed")
        raise HTTPException(500, f"Analyze failed: {e}")
