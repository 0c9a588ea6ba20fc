import logging

from fastapi import FastAPI, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from notion_gateway.errors import GatewayError
from notion_gateway.routers.analyze import router as analyze_router
from notion_gateway.setup_logging import setup_logging

# --------------------------------------------------------------------
# App bootstrap
# --------------------------------------------------------------------
setup_logging() # Init Logging

log = logging.getLogger(__name__)

# Create the FastAPI app instance
app = FastAPI(title="Notion Read-Only Analysis Gateway")


# --------------------------------------------------------------------
# Error envelope: every failure renders as {"ok": false, "error": ...}
# --------------------------------------------------------------------
def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"ok": False, "error": message})


@app.exception_handler(GatewayError)
async def gateway_error_handler(request: Request, exc: GatewayError):
    if exc.status_code >= 500:
        log.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    else:
        log.info("%s %s rejected (%d): %s", request.method, request.url.path, exc.status_code, exc.message)
    return _error(exc.status_code, exc.message)


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    return _error(exc.status_code, str(exc.detail))


@app.exception_handler(RequestValidationError)
async def body_error_handler(request: Request, exc: RequestValidationError):
    # only reachable when the body is not parseable JSON
    return _error(400, "Request body must be valid JSON")


# --------------------------------------------------------------------
# Routes
# --------------------------------------------------------------------
@app.get("/health")
def health():
    """Liveness probe; no auth."""
    return {"ok": True}


@app.options("/health")
def health_preflight():
    return Response(status_code=200)


# Register API routers:
app.include_router(analyze_router)
