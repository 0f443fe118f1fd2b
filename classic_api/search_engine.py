"""Search execution seam. The engine itself lives elsewhere; the API only needs this protocol."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Protocol

from .request_params import SearchRequestParams
from .suggest_params import SuggestRequestParams


@dataclass
class SearchResult:
    documents: list[dict[str, Any]] = field(default_factory=list)
    record_count: int = 0
    exec_time: float = 0.0


@dataclass
class SuggestHit:
    text: str
    tags: list[str] = field(default_factory=list)


@dataclass
class SuggestResult:
    hits: list[SuggestHit] = field(default_factory=list)
    total: int = 0
    took_ms: int = 0


class SearchEngine(Protocol):
    def search(self, params: SearchRequestParams) -> SearchResult: ...

    def suggest(self, params: SuggestRequestParams) -> SuggestResult: ...


class EmptySearchEngine:
    """Default engine when none is wired: always zero hits."""

    def search(self, params: SearchRequestParams) -> SearchResult:
        return SearchResult()

    def suggest(self, params: SuggestRequestParams) -> SuggestResult:
        return SuggestResult()
