"""Shared helpers for the classic endpoints: turning encoder output into a transport response."""
from __future__ import annotations

from typing import Optional

from starlette.requests import Request
from starlette.responses import Response

from ..envelope import JsonResponseEncoder, ResponseMeta
from ..request_params import first_value


def get_encoder(request: Request) -> JsonResponseEncoder:
    return request.app.state.encoder


def get_callback(request: Request) -> Optional[str]:
    return first_value(request.query_params, "callback")


def envelope_response(text: str, meta: ResponseMeta, media_type: str) -> Response:
    return Response(
        content=text,
        status_code=meta.status_code,
        headers=meta.headers,
        media_type=media_type,
    )
