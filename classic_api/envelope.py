"""
Classic response envelope: {"response":{"version":..., "status":..., ...body}}.
Optionally JSONP-wrapped. Error messages go through the disclosure policy: either the full
diagnostic (dev) or an opaque error_code whose diagnostic is only written to the log.
"""
from __future__ import annotations

import io
import logging
import traceback
import uuid
from dataclasses import dataclass, field
from typing import Optional

from .config import ApiSettings
from .errors import InvalidAccessTokenError
from .json_escape import escape_callback_name, escape_json

logger = logging.getLogger(__name__)

# Envelope status for a successful request; anything else is an error status
STATUS_OK = 0
STATUS_ERROR = 1


@dataclass
class ResponseMeta:
    """Transport-level status and headers the encoder may change (auth failures only)."""

    status_code: int = 200
    headers: dict[str, str] = field(default_factory=dict)


def _is_blank(value: Optional[str]) -> bool:
    return value is None or not value.strip()


def _class_name(error: BaseException) -> str:
    cls = type(error)
    if cls.__module__ == "builtins":
        return cls.__qualname__
    return f"{cls.__module__}.{cls.__qualname__}"


def stacktrace_message(error: BaseException) -> str:
    """Message (or class name when blank) followed by ' [ <traceback> ]'."""
    message = str(error)
    head = _class_name(error) if _is_blank(message) else message
    with io.StringIO() as buf:
        traceback.print_exception(type(error), error, error.__traceback__, file=buf)
        trace = buf.getvalue()
    return f"{head} [ {trace} ]"


def detailed_message(error: Optional[BaseException]) -> str:
    """One-line summary of an error and its causes: 'Name[msg] nested: Cause[msg]'. 'Unknown' for None."""
    if error is None:
        return "Unknown"
    parts = []
    seen = set()
    current: Optional[BaseException] = error
    while current is not None and id(current) not in seen:
        seen.add(id(current))
        parts.append(f"{type(current).__name__}[{current}]")
        current = current.__cause__ or (None if current.__suppress_context__ else current.__context__)
    return " nested: ".join(parts)


class JsonResponseEncoder:
    """Builds the final response text for one request. Holds no per-request state."""

    def __init__(self, settings: ApiSettings, mime_type: Optional[str] = None):
        self.settings = settings
        self.mime_type = mime_type or settings.api_json_mime_type

    def is_jsonp(self, callback: Optional[str]) -> bool:
        return self.settings.api_jsonp_enabled and not _is_blank(callback)

    def content_type(self, callback: Optional[str] = None) -> str:
        return self.settings.api_jsonp_mime_type if self.is_jsonp(callback) else self.mime_type

    def encode_success(self, status: int, body: Optional[str], callback: Optional[str] = None) -> str:
        """Status 0 embeds body only when non-blank; any other status always embeds it."""
        if status == STATUS_OK and _is_blank(body):
            body = None
        return self.wrap_envelope(status, body, callback=callback)

    def encode_failure(
        self,
        status: int,
        body: Optional[str],
        error: Optional[BaseException],
        meta: ResponseMeta,
        callback: Optional[str] = None,
    ) -> str:
        """Encode an error envelope. Auth failures also force 401 + WWW-Authenticate on `meta`."""
        if error is None:
            return self.encode_message(status, body, None, callback=callback)
        if isinstance(error, InvalidAccessTokenError):
            meta.status_code = 401
            meta.headers["WWW-Authenticate"] = f'Bearer error="{error.type}"'
        return self.encode_message(status, body, self.disclosure_message(error), callback=callback)

    def encode_message(
        self, status: int, body: Optional[str], message: Optional[str], callback: Optional[str] = None
    ) -> str:
        if status == STATUS_OK:
            return self.encode_success(status, body, callback=callback)
        return self.wrap_envelope(status, '"message":' + escape_json(message), callback=callback)

    def disclosure_message(self, error: BaseException) -> str:
        if self.settings.api_json_response_exception_included:
            return stacktrace_message(error)
        error_code = str(uuid.uuid4())
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("[%s] %s", error_code, stacktrace_message(error).replace("\n", "\\n"))
        else:
            logger.warning("[%s] %s", error_code, error)
        return "error_code:" + error_code

    def wrap_envelope(self, status: int, body: Optional[str], callback: Optional[str] = None) -> str:
        parts = ['{"response":{"version":', escape_json(self.settings.product_version), ',"status":', str(status)]
        if not _is_blank(body):
            parts.append(",")
            parts.append(body)
        parts.append("}}")
        envelope = "".join(parts)
        if self.is_jsonp(callback):
            return f"{escape_callback_name(callback)}({envelope})"
        return envelope
