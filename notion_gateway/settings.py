# notion_gateway/settings.py
import logging
import os
from dataclasses import dataclass

from dotenv import load_dotenv

load_dotenv()

log = logging.getLogger(__name__)

NOTION_BASE_URL = "https://api.notion.com"
NOTION_VERSION = "2022-06-28"

# Traversal budget defaults
MAX_DEPTH = 2
MAX_BLOCKS = 400

# Page sizes sent upstream (single page only, no cursor following)
DB_PAGE_LIMIT = 50
CHILDREN_PAGE_SIZE = 100


def _env_int(name: str, default: int) -> int:
    """Read an integer env var, falling back to the default on junk."""
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw.strip())
    except ValueError:
        log.warning("ignoring non-integer %s=%r, using %s", name, raw, default)
        return default


def _env_float(name: str) -> float | None:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return None
    try:
        return float(raw.strip())
    except ValueError:
        log.warning("ignoring non-numeric %s=%r", name, raw)
        return None


@dataclass(frozen=True)
class Settings:
    """Snapshot of the environment, taken once per request."""
    gateway_api_key: str | None = None
    notion_token: str | None = None
    notion_version: str = NOTION_VERSION
    notion_base_url: str = NOTION_BASE_URL
    max_depth: int = MAX_DEPTH
    max_blocks: int = MAX_BLOCKS
    db_page_limit: int = DB_PAGE_LIMIT
    children_page_size: int = CHILDREN_PAGE_SIZE
    notion_timeout: float | None = None

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            gateway_api_key=os.getenv("GATEWAY_API_KEY") or None,
            notion_token=os.getenv("NOTION_TOKEN") or None,
            notion_version=os.getenv("NOTION_VERSION") or NOTION_VERSION,
            notion_base_url=(os.getenv("NOTION_BASE_URL") or NOTION_BASE_URL).rstrip("/"),
            max_depth=_env_int("MAX_DEPTH", MAX_DEPTH),
            max_blocks=_env_int("MAX_BLOCKS", MAX_BLOCKS),
            db_page_limit=_env_int("DB_PAGE_LIMIT", DB_PAGE_LIMIT),
            children_page_size=_env_int("CHILDREN_PAGE_SIZE", CHILDREN_PAGE_SIZE),
            notion_timeout=_env_float("NOTION_TIMEOUT"),
        )


def get_settings() -> Settings:
    """FastAPI dependency; overridden in tests."""
    return Settings.from_env()
