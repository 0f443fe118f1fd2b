"""
Full search endpoint (/json). Every outcome is a classic envelope: failures are reported with
a non-zero envelope status and a message, never as a bare 500.
"""
from __future__ import annotations

import logging

from fastapi import APIRouter, Request
from starlette.responses import Response

from ..auth import verify_access_token
from ..envelope import STATUS_ERROR, STATUS_OK, ResponseMeta, detailed_message
from ..json_escape import escape_json
from ..request_params import JsonRequestParams, request_attributes
from ..search_engine import SearchResult
from .responses import envelope_response, get_callback, get_encoder

router = APIRouter(tags=["json"])
logger = logging.getLogger(__name__)


def search_body(params: JsonRequestParams, result: SearchResult) -> str:
    """Body fragment (no surrounding braces) for a search response."""
    page_size = params.page_size
    record_count = max(result.record_count, 0)
    page_count = (record_count + page_size - 1) // page_size
    page_number = params.start_position // page_size + 1
    fields = [
        ("q", params.query),
        ("exec_time", result.exec_time),
        ("page_size", page_size),
        ("page_number", page_number),
        ("record_count", record_count),
        ("page_count", page_count),
        ("next_page", page_number < page_count),
        ("prev_page", page_number > 1),
        ("result", result.documents),
    ]
    return ",".join(f"{escape_json(name)}:{escape_json(value)}" for name, value in fields)


@router.get("/json")
def json_search(request: Request) -> Response:
    state = request.app.state
    encoder = get_encoder(request)
    callback = get_callback(request)
    meta = ResponseMeta()
    try:
        verify_access_token(request, state.settings)
        params = JsonRequestParams(request.query_params, state.settings, request_attributes(request.state))
        result = state.engine.search(params)
        text = encoder.encode_success(STATUS_OK, search_body(params, result), callback=callback)
    except Exception as e:
        logger.info("Failed to process a search request: %s", detailed_message(e))
        text = encoder.encode_failure(STATUS_ERROR, None, e, meta, callback=callback)
    return envelope_response(text, meta, encoder.content_type(callback))
