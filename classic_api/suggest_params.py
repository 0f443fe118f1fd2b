"""Suggest-only request flavor: query, suggest fields, tags, num and languages. Nothing else."""
from __future__ import annotations

from types import MappingProxyType
from typing import Any, Mapping, NoReturn, Optional

from .errors import UnsupportedCapabilityError
from .request_params import (
    FacetInfo,
    GeoInfo,
    QueryParamsLike,
    SearchRequestParams,
    SearchRequestType,
    first_value,
    parse_int,
    split_comma,
)

DEFAULT_SUGGEST_NUM = 10

_EMPTY: Mapping[str, tuple[str, ...]] = MappingProxyType({})


class SuggestRequestParams(SearchRequestParams):
    """Restricted flavor for /suggest. Full-search accessors raise UnsupportedCapabilityError."""

    def __init__(
        self,
        query: Optional[str],
        suggest_fields: tuple[str, ...] = (),
        tags: tuple[str, ...] = (),
        num: int = DEFAULT_SUGGEST_NUM,
        languages: tuple[str, ...] = (),
    ):
        self._query = query
        self._suggest_fields = suggest_fields
        self._tags = tags
        self._num = num
        self._languages = languages

    @classmethod
    def parse(cls, params: QueryParamsLike) -> "SuggestRequestParams":
        return cls(
            query=first_value(params, "query"),
            suggest_fields=split_comma(first_value(params, "fields")),
            tags=split_comma(first_value(params, "tags")),
            num=parse_int(first_value(params, "num"), DEFAULT_SUGGEST_NUM),
            languages=tuple(params.getlist("lang")),
        )

    def _unsupported(self, capability: str) -> NoReturn:
        raise UnsupportedCapabilityError(capability, self.type.value)

    @property
    def type(self) -> SearchRequestType:
        return SearchRequestType.SUGGEST

    @property
    def query(self) -> Optional[str]:
        return self._query

    @property
    def suggest_fields(self) -> tuple[str, ...]:
        return self._suggest_fields

    @property
    def tags(self) -> tuple[str, ...]:
        return self._tags

    @property
    def num(self) -> int:
        return self._num

    @property
    def languages(self) -> tuple[str, ...]:
        return self._languages

    @property
    def fields(self) -> Mapping[str, tuple[str, ...]]:
        return _EMPTY

    @property
    def conditions(self) -> Mapping[str, tuple[str, ...]]:
        return _EMPTY

    @property
    def extra_queries(self) -> tuple[str, ...]:
        self._unsupported("extra_queries")

    @property
    def page_size(self) -> int:
        self._unsupported("page_size")

    @property
    def start_position(self) -> int:
        self._unsupported("start_position")

    @property
    def offset(self) -> int:
        self._unsupported("offset")

    @property
    def sort(self) -> Optional[str]:
        self._unsupported("sort")

    @property
    def similar_doc_hash(self) -> Optional[str]:
        self._unsupported("similar_doc_hash")

    @property
    def track_total_hits(self) -> Optional[str]:
        self._unsupported("track_total_hits")

    @property
    def facet_info(self) -> Optional[FacetInfo]:
        self._unsupported("facet_info")

    @property
    def geo_info(self) -> Optional[GeoInfo]:
        self._unsupported("geo_info")

    @property
    def locale(self) -> str:
        self._unsupported("locale")

    def get_attribute(self, name: str) -> Any:
        self._unsupported("get_attribute")
