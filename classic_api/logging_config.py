"""
Central logging configuration for the API.
- One line per record: timestamp, level, logger name, message.
- Level from settings.log_level, else LOG_LEVEL (default INFO). uvicorn loggers share the handler.
- Disclosure logs (classic_api.envelope) follow the root level: at DEBUG they carry the
  escaped traceback keyed by error_code, otherwise only the short message.
- REQUEST_LOG=0 silences the per-request access line from RequestLogMiddleware.
"""
from __future__ import annotations

import logging
import os
import sys
from typing import Optional

LOG_FORMAT = "%(asctime)s | %(levelname)-7s | %(name)s | %(message)s"
REQUEST_LOGGER = "classic_api.middleware.request_log"


class StderrHandler(logging.StreamHandler):
    """Writes to the current sys.stderr (looked up per record) and flushes after each one."""

    def __init__(self):
        super().__init__(sys.stderr)

    def emit(self, record: logging.LogRecord) -> None:
        # uvicorn reload / test capture may swap sys.stderr after configure_logging()
        self.stream = sys.stderr
        super().emit(record)
        self.flush()


def _env_flag(name: str, default: str = "1") -> bool:
    return os.environ.get(name, default).lower() in ("1", "true", "yes")


def configure_logging(level_name: Optional[str] = None) -> logging.Handler:
    """Install the API handler on root and uvicorn loggers. Call once at startup; returns the handler."""
    level_name = (level_name or os.environ.get("LOG_LEVEL") or "INFO").upper()
    level = getattr(logging, level_name, logging.INFO)

    handler = StderrHandler()
    handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))

    root = logging.getLogger()
    root.handlers = [handler]
    root.setLevel(level)

    for name in ("uvicorn", "uvicorn.error", "uvicorn.access"):
        log = logging.getLogger(name)
        log.handlers = [handler]
        log.propagate = False
        log.setLevel(level)

    # RequestLogMiddleware already writes one line per request
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    if not _env_flag("REQUEST_LOG"):
        logging.getLogger(REQUEST_LOGGER).setLevel(logging.WARNING)
    return handler
