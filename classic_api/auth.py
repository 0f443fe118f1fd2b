"""Bearer access-token check. Off when no tokens are configured."""
from __future__ import annotations

from starlette.requests import Request

from .config import ApiSettings
from .errors import InvalidAccessTokenError


def verify_access_token(request: Request, settings: ApiSettings) -> None:
    """Raise InvalidAccessTokenError unless the Authorization header carries a known token."""
    if not settings.api_access_tokens:
        return
    auth = request.headers.get("Authorization") or ""
    if not auth.startswith("Bearer "):
        raise InvalidAccessTokenError("invalid_request", "Bearer token is required.")
    if auth[len("Bearer "):].strip() not in settings.api_access_tokens:
        raise InvalidAccessTokenError("invalid_token")
