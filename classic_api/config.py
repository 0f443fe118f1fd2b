"""Backend config: read-only settings snapshot built from YAML + environment."""
from __future__ import annotations

import os
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from .config_loader import get_config


class ApiSettings(BaseModel):
    """Immutable configuration snapshot handed to the encoder and the request normalizers."""

    model_config = ConfigDict(frozen=True)

    product_version: str = "1.0"
    api_json_response_exception_included: bool = False
    api_jsonp_enabled: bool = False
    paging_search_page_start: int = 0
    paging_search_page_size: int = Field(default=20, gt=0)
    paging_search_page_max_size: int = Field(default=100, gt=0)
    api_json_mime_type: str = "application/json"
    api_jsonp_mime_type: str = "application/javascript"
    api_access_tokens: frozenset[str] = frozenset()
    cors_origins: tuple[str, ...] = ()
    log_level: str = "INFO"


def get_api_access_tokens() -> frozenset[str]:
    """Comma-separated API_ACCESS_TOKENS. Empty means no token check."""
    raw = os.environ.get("API_ACCESS_TOKENS", "")
    return frozenset(x.strip() for x in raw.split(",") if x.strip())


def get_cors_origins() -> List[str]:
    raw = os.environ.get("CORS_ORIGINS", "http://localhost:3000,http://localhost:5173")
    return [x.strip() for x in raw.split(",") if x.strip()]


def load_settings(env: Optional[str] = None) -> ApiSettings:
    """Build the settings snapshot for ENV (default: $ENV or dev)."""
    values = {k: v for k, v in get_config(env).items() if k in ApiSettings.model_fields}
    values["api_access_tokens"] = get_api_access_tokens()
    values["cors_origins"] = tuple(get_cors_origins())
    return ApiSettings(**values)
