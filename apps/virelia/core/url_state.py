"""Mapping between listing state and the page query string.

The codec half (``parse_*`` / ``build_query_string``) is pure. The
``FilterController`` half owns the filter and sort state for one page view
and keeps the address bar in step with it through an explicit ``Navigator``.
"""

from __future__ import annotations

import logging
from typing import Dict, List, Mapping, Optional, Protocol, Sequence, Tuple, Union
from urllib.parse import parse_qs, urlencode

from ..schemas import CatalogView, Facets, Product
from .filters import (
    MOQ_BUCKETS,
    FilterState,
    SortOption,
    active_filter_count,
    apply_filters,
    apply_sorting,
    extract_facets,
)

logger = logging.getLogger(__name__)

QueryValue = Union[None, str, Sequence[str]]

# query parameter -> FilterState field, in serialization order
QUERY_KEYS: Tuple[Tuple[str, str], ...] = (
    ("packaging", "packaging"),
    ("origin", "origin"),
    ("moq", "moq_bucket"),
    ("certifications", "certifications"),
)
SORT_KEY = "sort"

_ALLOWED_SORTS = {SortOption.NAME_ASC.value, SortOption.NAME_DESC.value, SortOption.MOQ_ASC.value}


def normalize_query_value(value: QueryValue) -> Optional[str]:
    """Collapse a raw query value to one string; repeated params keep the first."""
    if value is None:
        return None
    if isinstance(value, str):
        return value
    for item in value:
        return item
    return None


def query_from_string(query_string: str) -> Dict[str, List[str]]:
    return parse_qs(query_string.lstrip("?"), keep_blank_values=True)


def parse_filters_from_query(query: Mapping[str, QueryValue]) -> FilterState:
    values = {}
    for param, field in QUERY_KEYS:
        raw = normalize_query_value(query.get(param))
        values[field] = tuple(token for token in raw.split(",") if token) if raw else ()
    return FilterState(**values)


def parse_sort_from_query(query: Mapping[str, QueryValue]) -> SortOption:
    raw = normalize_query_value(query.get(SORT_KEY))
    if raw in _ALLOWED_SORTS:
        return SortOption(raw)
    return SortOption.DEFAULT


def build_query_string(filters: FilterState, sort: SortOption) -> str:
    """Serialize state as ``?key=a,b&...``, or ``""`` when nothing is set.

    Values containing commas do not survive a round trip; facet values offered
    by the UI never contain them.
    """
    params = []
    for param, field in QUERY_KEYS:
        selected = getattr(filters, field)
        if selected:
            params.append((param, ",".join(selected)))
    if sort != SortOption.DEFAULT:
        params.append((SORT_KEY, SortOption(sort).value))
    encoded = urlencode(params)
    return f"?{encoded}" if encoded else ""


class Navigator(Protocol):
    """The hosting page: its current location and a history-replacing navigation."""

    @property
    def as_path(self) -> str:
        ...

    def replace(self, path: str) -> None:
        ...


class MemoryNavigator:
    """Navigator backed by a plain string; records every replace call."""

    def __init__(self, as_path: str = "/") -> None:
        self._as_path = as_path
        self.history: List[str] = []

    @property
    def as_path(self) -> str:
        return self._as_path

    def replace(self, path: str) -> None:
        self.history.append(path)
        self._as_path = path


class FilterController:
    """Single owner of the filter/sort state for one page view.

    ``initialize`` reads the location once. Mutations made before that only
    change memory, so a deep link with filters is never overwritten by the
    page's default state. After it, every mutation replaces the current URL
    unless the URL would not change.
    """

    def __init__(self, products: Sequence[Product], navigator: Navigator) -> None:
        self._products = list(products)
        self._navigator: Optional[Navigator] = navigator
        self._filters = FilterState()
        self._sort = SortOption.DEFAULT
        self._initialized = False
        self._facets = extract_facets(self._products)

    def __enter__(self) -> "FilterController":
        self.initialize()
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    @property
    def initialized(self) -> bool:
        return self._initialized

    @property
    def filters(self) -> FilterState:
        return self._filters

    @property
    def sort(self) -> SortOption:
        return self._sort

    @property
    def facets(self) -> Facets:
        return self._facets

    @property
    def active_filter_count(self) -> int:
        return active_filter_count(self._filters)

    @property
    def filtered_products(self) -> List[Product]:
        return apply_sorting(apply_filters(self._products, self._filters), self._sort)

    def initialize(self) -> None:
        if self._initialized or self._navigator is None:
            return
        query = query_from_string(_split_path(self._navigator.as_path)[1])
        self._filters = parse_filters_from_query(query)
        self._sort = parse_sort_from_query(query)
        self._initialized = True

    def close(self) -> None:
        self._navigator = None
        self._initialized = False

    def update_filters(self, filters: FilterState) -> None:
        self._filters = filters
        self._sync_url()

    def update_sort(self, sort: SortOption) -> None:
        self._sort = SortOption(sort)
        self._sync_url()

    def toggle_filter(self, facet: str, value: str) -> None:
        self.update_filters(self._filters.toggled(facet, value))

    def clear_filters(self) -> None:
        self.update_filters(FilterState())

    def target_path(self) -> Optional[str]:
        if self._navigator is None:
            return None
        path = _split_path(self._navigator.as_path)[0]
        return f"{path}{build_query_string(self._filters, self._sort)}"

    def view(self) -> CatalogView:
        return build_catalog_view(self._products, self._filters, self._sort)

    def _sync_url(self) -> None:
        if not self._initialized or self._navigator is None:
            return
        target = self.target_path()
        if target is None or target == self._navigator.as_path:
            return
        logger.debug("url_state: replace %s -> %s", self._navigator.as_path, target)
        self._navigator.replace(target)


def _split_path(as_path: str) -> Tuple[str, str]:
    path, _, query = as_path.partition("?")
    return path, query


def build_catalog_view(products: Sequence[Product], filters: FilterState, sort: SortOption) -> CatalogView:
    """Filter, sort and describe ``products`` for a listing response."""
    results = apply_sorting(apply_filters(products, filters), sort)
    return CatalogView(
        products=results,
        total=len(products),
        facets=extract_facets(products),
        moq_buckets=list(MOQ_BUCKETS),
        filters=filters.to_selection(),
        sort=SortOption(sort).value,
        active_filter_count=active_filter_count(filters),
        query=build_query_string(filters, sort),
    )
