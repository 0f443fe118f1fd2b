"""Error types raised by the classic API layer."""
from __future__ import annotations

from typing import Optional


class ClassicApiError(Exception):
    """Base class for errors raised by this package."""


class InvalidAccessTokenError(ClassicApiError):
    """Authentication failed. `type` is the machine-readable reason sent in WWW-Authenticate."""

    def __init__(self, type: str, message: Optional[str] = None):
        super().__init__(message or f"Invalid access token: {type}")
        self.type = type


class UnsupportedCapabilityError(ClassicApiError):
    """A request-parameter view was asked for something its flavor does not carry.

    This is a caller bug, not bad input: the suggest flavor has no sort, paging, etc.
    """

    def __init__(self, capability: str, request_type: str):
        super().__init__(f"{capability} is not supported for {request_type} requests")
        self.capability = capability
        self.request_type = request_type
