"""
Request parameter views. Raw query params are multi-valued and untrusted; each view parses
them once at construction and exposes read-only, bounded values.
JsonRequestParams carries the full search interface; see suggest_params for the restricted flavor.
"""
from __future__ import annotations

import re
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Any, Callable, Mapping, Optional, Protocol

from .config import ApiSettings

FIELDS_PREFIX = "fields."
CONDITIONS_PREFIX = "as."
FACET_FIELD = "facet.field"
FACET_QUERY = "facet.query"
GEO_PREFIX = "geo."

_INT_PATTERN = re.compile(r"[+-]?[0-9]+")
INT_MIN = -(2**31)
INT_MAX = 2**31 - 1

# The neutral locale: no per-request negotiation happens in this layer
ROOT_LOCALE = ""


class QueryParamsLike(Protocol):
    """What we need from starlette's QueryParams / any multi-dict."""

    def getlist(self, key: str) -> list[str]: ...

    def keys(self): ...


class SearchRequestType(str, Enum):
    JSON = "json"
    SUGGEST = "suggest"


@dataclass(frozen=True)
class FacetInfo:
    field: tuple[str, ...] = ()
    query: tuple[str, ...] = ()
    size: Optional[int] = None
    min_doc_count: Optional[int] = None


@dataclass(frozen=True)
class GeoInfo:
    # geo.<field>.<key> -> values, prefix stripped
    conditions: Mapping[str, tuple[str, ...]]


def first_value(params: QueryParamsLike, name: str) -> Optional[str]:
    """First value of a repeated param (multi-dict .get() would return the last one)."""
    values = params.getlist(name)
    return values[0] if values else None


def parse_int(value: Optional[str], default: int) -> int:
    """Signed decimal digits within 32-bit range, else default. No "1_0", no "+ 1"."""
    if value is None or not _INT_PATTERN.fullmatch(value.strip()):
        return default
    number = int(value.strip())
    if number < INT_MIN or number > INT_MAX:
        return default
    return number


def parse_non_negative_int(value: Optional[str], default: int) -> int:
    number = parse_int(value, default)
    return number if number >= 0 else default


def split_comma(value: Optional[str]) -> tuple[str, ...]:
    """'a,b' -> ('a', 'b'); empty or missing -> (). Items are not trimmed."""
    if not value:
        return ()
    return tuple(value.split(","))


def prefixed_params(params: QueryParamsLike, prefix: str) -> Mapping[str, tuple[str, ...]]:
    """{suffix: all values} for every param named '<prefix><suffix>', in request order."""
    result = {}
    for name in params.keys():
        if name.startswith(prefix):
            result[name[len(prefix):]] = tuple(params.getlist(name))
    return MappingProxyType(result)


class SearchRequestParams(ABC):
    """Capability interface shared by every request flavor."""

    @property
    @abstractmethod
    def type(self) -> SearchRequestType: ...

    @property
    @abstractmethod
    def query(self) -> Optional[str]: ...

    @property
    @abstractmethod
    def fields(self) -> Mapping[str, tuple[str, ...]]: ...

    @property
    @abstractmethod
    def conditions(self) -> Mapping[str, tuple[str, ...]]: ...

    @property
    @abstractmethod
    def languages(self) -> tuple[str, ...]: ...

    @property
    @abstractmethod
    def extra_queries(self) -> tuple[str, ...]: ...

    @property
    @abstractmethod
    def page_size(self) -> int: ...

    @property
    @abstractmethod
    def start_position(self) -> int: ...

    @property
    @abstractmethod
    def offset(self) -> int: ...

    @property
    @abstractmethod
    def sort(self) -> Optional[str]: ...

    @property
    @abstractmethod
    def similar_doc_hash(self) -> Optional[str]: ...

    @property
    @abstractmethod
    def track_total_hits(self) -> Optional[str]: ...

    @property
    @abstractmethod
    def facet_info(self) -> Optional[FacetInfo]: ...

    @property
    @abstractmethod
    def geo_info(self) -> Optional[GeoInfo]: ...

    @property
    @abstractmethod
    def locale(self) -> str: ...

    @abstractmethod
    def get_attribute(self, name: str) -> Any: ...


class JsonRequestParams(SearchRequestParams):
    """Full search flavor for the /json endpoint."""

    def __init__(
        self,
        params: QueryParamsLike,
        settings: ApiSettings,
        attributes: Optional[Callable[[str], Any]] = None,
    ):
        self._attributes = attributes
        self._query = first_value(params, "q")
        self._page_size = self._parse_page_size(first_value(params, "num"), settings)
        self._start_position = parse_non_negative_int(first_value(params, "start"), settings.paging_search_page_start)
        self._offset = parse_non_negative_int(first_value(params, "offset"), 0)
        self._extra_queries = tuple(params.getlist("ex_q"))
        self._fields = prefixed_params(params, FIELDS_PREFIX)
        self._conditions = prefixed_params(params, CONDITIONS_PREFIX)
        self._languages = tuple(params.getlist("lang"))
        self._sort = first_value(params, "sort")
        self._similar_doc_hash = first_value(params, "sdh")
        self._track_total_hits = first_value(params, "track_total_hits")
        self._facet_info = self._parse_facet_info(params)
        geo = prefixed_params(params, GEO_PREFIX)
        self._geo_info = GeoInfo(conditions=geo) if geo else None

    @staticmethod
    def _parse_page_size(value: Optional[str], settings: ApiSettings) -> int:
        # Missing/garbage -> default size; a parsed but out-of-range number -> max size
        size = parse_int(value, settings.paging_search_page_size)
        if size <= 0 or size > settings.paging_search_page_max_size:
            return settings.paging_search_page_max_size
        return size

    @staticmethod
    def _parse_facet_info(params: QueryParamsLike) -> Optional[FacetInfo]:
        fields = tuple(params.getlist(FACET_FIELD))
        queries = tuple(params.getlist(FACET_QUERY))
        if not fields and not queries:
            return None
        size = first_value(params, "facet.size")
        min_doc_count = first_value(params, "facet.minDocCount")
        return FacetInfo(
            field=fields,
            query=queries,
            size=parse_non_negative_int(size, 0) if size is not None else None,
            min_doc_count=parse_non_negative_int(min_doc_count, 0) if min_doc_count is not None else None,
        )

    @property
    def type(self) -> SearchRequestType:
        return SearchRequestType.JSON

    @property
    def query(self) -> Optional[str]:
        return self._query

    @property
    def fields(self) -> Mapping[str, tuple[str, ...]]:
        return self._fields

    @property
    def conditions(self) -> Mapping[str, tuple[str, ...]]:
        return self._conditions

    @property
    def languages(self) -> tuple[str, ...]:
        return self._languages

    @property
    def extra_queries(self) -> tuple[str, ...]:
        return self._extra_queries

    @property
    def page_size(self) -> int:
        return self._page_size

    @property
    def start_position(self) -> int:
        return self._start_position

    @property
    def offset(self) -> int:
        return self._offset

    @property
    def sort(self) -> Optional[str]:
        return self._sort

    @property
    def similar_doc_hash(self) -> Optional[str]:
        return self._similar_doc_hash

    @property
    def track_total_hits(self) -> Optional[str]:
        return self._track_total_hits

    @property
    def facet_info(self) -> Optional[FacetInfo]:
        return self._facet_info

    @property
    def geo_info(self) -> Optional[GeoInfo]:
        return self._geo_info

    @property
    def locale(self) -> str:
        return ROOT_LOCALE

    def get_attribute(self, name: str) -> Any:
        if self._attributes is None:
            return None
        return self._attributes(name)


def request_attributes(state: Any) -> Callable[[str], Any]:
    """Attribute lookup backed by starlette's request.state."""
    return lambda name: getattr(state, name, None)
