import hmac
import re

from fastapi import Depends, Header

from notion_gateway.errors import AuthenticationError, ConfigurationError
from notion_gateway.settings import Settings, get_settings

BEARER_RE = re.compile(r"^Bearer\s+(.+)$", re.I)


def authenticate(authorization: str | None, api_key: str | None) -> None:
    """Check an Authorization header against the server secret."""
    if not api_key:
        raise ConfigurationError("Server misconfiguration: GATEWAY_API_KEY not set")
    if not authorization:
        raise AuthenticationError("Missing Authorization header")
    m = BEARER_RE.match(authorization)
    if not m:
        raise AuthenticationError("Invalid Authorization header format. Expected: Bearer <token>")
    if not hmac.compare_digest(m.group(1).encode(), api_key.encode()):
        raise AuthenticationError("Invalid API key")


def require_api_key(
    authorization: str | None = Header(None),
    settings: Settings = Depends(get_settings),
) -> None:
    """FastAPI dependency guarding /analyze."""
    authenticate(authorization, settings.gateway_api_key)
