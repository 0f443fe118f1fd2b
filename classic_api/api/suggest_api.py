"""Suggest endpoint (/suggest)."""
from __future__ import annotations

import logging

from fastapi import APIRouter, Request
from starlette.responses import Response

from ..auth import verify_access_token
from ..envelope import STATUS_ERROR, STATUS_OK, ResponseMeta, detailed_message
from ..json_escape import escape_json
from ..search_engine import SuggestResult
from ..suggest_params import SuggestRequestParams
from .responses import envelope_response, get_callback, get_encoder

router = APIRouter(tags=["suggest"])
logger = logging.getLogger(__name__)


def suggest_body(params: SuggestRequestParams, result: SuggestResult) -> str:
    hits = [{"text": hit.text, "tags": hit.tags} for hit in result.hits[: max(params.num, 0)]]
    return '"result":' + escape_json(
        {"took": result.took_ms, "total": result.total, "num": len(hits), "hits": hits}
    )


@router.get("/suggest")
def suggest(request: Request) -> Response:
    state = request.app.state
    encoder = get_encoder(request)
    callback = get_callback(request)
    meta = ResponseMeta()
    try:
        verify_access_token(request, state.settings)
        params = SuggestRequestParams.parse(request.query_params)
        result = state.engine.suggest(params)
        text = encoder.encode_success(STATUS_OK, suggest_body(params, result), callback=callback)
    except Exception as e:
        logger.info("Failed to process a suggest request: %s", detailed_message(e))
        text = encoder.encode_failure(STATUS_ERROR, None, e, meta, callback=callback)
    return envelope_response(text, meta, encoder.content_type(callback))
