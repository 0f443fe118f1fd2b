"""
FastAPI app for the classic search API: /json (full search) and /suggest (suggest only).
Responses are classic envelopes built by JsonResponseEncoder; request params are normalized
by JsonRequestParams / SuggestRequestParams. Settings are loaded once and injected via app.state.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from . import __version__
from .api.json_api import router as json_router
from .api.responses import envelope_response, get_callback
from .api.suggest_api import router as suggest_router
from .config import ApiSettings, load_settings
from .envelope import STATUS_ERROR, JsonResponseEncoder, ResponseMeta
from .logging_config import configure_logging
from .middleware.request_log import CorrelationIdMiddleware, RequestLogMiddleware
from .search_engine import EmptySearchEngine, SearchEngine

logger = logging.getLogger(__name__)


def _load_env() -> None:
    # repo root first, then cwd
    root = Path(__file__).resolve().parents[1]
    if not load_dotenv(root / ".env") and Path.cwd() != root:
        load_dotenv(Path.cwd() / ".env")


def create_app(settings: Optional[ApiSettings] = None, engine: Optional[SearchEngine] = None) -> FastAPI:
    """Build the app. Without arguments, settings come from config/<ENV>.yaml + env and no engine is wired."""
    if settings is None:
        _load_env()
        settings = load_settings()
        configure_logging(settings.log_level)

    app = FastAPI(title="Classic Search API", version=__version__)
    app.state.settings = settings
    app.state.engine = engine or EmptySearchEngine()
    app.state.encoder = JsonResponseEncoder(settings)

    @app.exception_handler(Exception)
    def unhandled_exception_handler(request: Request, exc: Exception):
        """Log full traceback; the client still gets an envelope (disclosure policy applies)."""
        logger.exception("Unhandled exception: %s %s -> %s", request.method, request.url.path, type(exc).__name__)
        encoder: JsonResponseEncoder = request.app.state.encoder
        callback = get_callback(request)
        meta = ResponseMeta(status_code=500)
        text = encoder.encode_failure(STATUS_ERROR, None, exc, meta, callback=callback)
        return envelope_response(text, meta, encoder.content_type(callback))

    if settings.cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=list(settings.cors_origins),
            allow_credentials=True,
            allow_methods=["GET"],
            allow_headers=["*"],
        )
    app.add_middleware(RequestLogMiddleware)
    # Outermost so the log line can see the correlation id
    app.add_middleware(CorrelationIdMiddleware)

    app.include_router(json_router)
    app.include_router(suggest_router)

    @app.get("/health")
    def health():
        return JSONResponse(status_code=200, content={"status": "ok"})

    return app


app = create_app()
