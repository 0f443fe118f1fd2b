"""Load YAML config by environment (ENV=dev|staging|prod)."""
from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any, Optional

import yaml

logger = logging.getLogger(__name__)

CONFIG_DIR = Path(os.environ.get("CLASSIC_API_CONFIG_DIR") or Path(__file__).resolve().parent.parent / "config")
_config: dict[str, Any] | None = None

# Keys that may be overridden from the environment (upper-cased name)
_INT_KEYS = ("paging_search_page_start", "paging_search_page_size", "paging_search_page_max_size")
_BOOL_KEYS = ("api_json_response_exception_included", "api_jsonp_enabled")
_STR_KEYS = ("product_version", "api_json_mime_type", "api_jsonp_mime_type", "log_level")


def _load_yaml(path: Path) -> dict:
    try:
        with open(path, encoding="utf-8") as f:
            return yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        logger.warning("Could not read config %s: %s", path, e)
        return {}


def _as_bool(val: str) -> bool:
    return val.strip().lower() in ("1", "true", "yes", "on")


def get_config(env: Optional[str] = None) -> dict[str, Any]:
    global _config
    if _config is not None and env is None:
        return _config
    path = CONFIG_DIR / f"{env or os.environ.get('ENV', 'dev')}.yaml"
    config = _load_yaml(path) if path.exists() else {}
    # Override from env
    for key in _INT_KEYS:
        val = os.environ.get(key.upper())
        if val is not None:
            try:
                config[key] = int(val)
            except ValueError:
                logger.warning("Ignoring non-integer %s=%r", key.upper(), val)
    for key in _BOOL_KEYS:
        val = os.environ.get(key.upper())
        if val is not None:
            config[key] = _as_bool(val)
    for key in _STR_KEYS:
        val = os.environ.get(key.upper())
        if val is not None:
            config[key] = val
    if env is None:
        _config = config
    return config


def reset_config() -> None:
    """Drop the cached config so the next get_config() re-reads file and env."""
    global _config
    _config = None
