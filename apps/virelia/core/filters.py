"""Facet extraction, filtering and sorting for catalog listings.

All functions here are pure: they take a product list, never mutate it, and
return new lists. The same inputs always produce the same output, which is
what lets a listing rebuilt from a shared URL match the one the sender saw.
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass, fields, replace
from enum import Enum
from typing import Iterable, List, Optional, Sequence, Tuple

from ..schemas import Facets, FilterSelection, MoqBucket, Product


class SortOption(str, Enum):
    DEFAULT = "default"
    NAME_ASC = "name-asc"
    NAME_DESC = "name-desc"
    MOQ_ASC = "moq-asc"


# Bucket boundaries are business policy, not something derived from data.
MOQ_BUCKETS: Tuple[MoqBucket, ...] = (
    MoqBucket(key="lte5", label="≤5 pallets"),
    MoqBucket(key="lte10", label="≤10 pallets"),
    MoqBucket(key="gt10", label=">10 pallets"),
)

_DIGITS = re.compile(r"\d+")


@dataclass(frozen=True)
class FilterState:
    """Selected facet values; an empty tuple means the facet is inactive."""

    packaging: Tuple[str, ...] = ()
    origin: Tuple[str, ...] = ()
    moq_bucket: Tuple[str, ...] = ()
    certifications: Tuple[str, ...] = ()

    @classmethod
    def of(cls, **facets: Iterable[str]) -> "FilterState":
        return cls(**{name: tuple(values) for name, values in facets.items()})

    def with_facet(self, facet: str, values: Iterable[str]) -> "FilterState":
        if facet not in FACET_NAMES:
            raise KeyError(f"unknown facet: {facet}")
        return replace(self, **{facet: tuple(values)})

    def toggled(self, facet: str, value: str) -> "FilterState":
        if facet not in FACET_NAMES:
            raise KeyError(f"unknown facet: {facet}")
        current = getattr(self, facet)
        if value in current:
            return self.with_facet(facet, [v for v in current if v != value])
        return self.with_facet(facet, [*current, value])

    def to_selection(self) -> FilterSelection:
        return FilterSelection(
            packaging=list(self.packaging),
            origin=list(self.origin),
            moq_bucket=list(self.moq_bucket),
            certifications=list(self.certifications),
        )


FACET_NAMES: Tuple[str, ...] = tuple(f.name for f in fields(FilterState))


def parse_leading_integer(text: Optional[str]) -> Optional[int]:
    """Return the first maximal run of digits in ``text`` as an int.

    ``"5-10 pallets"`` parses to 5: only the first number counts.
    """
    if not text:
        return None
    match = _DIGITS.search(text)
    return int(match.group()) if match else None


def moq_bucket(moq: Optional[str]) -> Optional[str]:
    value = parse_leading_integer(moq)
    if value is None:
        return None
    if value <= 5:
        return "lte5"
    if value <= 10:
        return "lte10"
    return "gt10"


def _packaging_tokens(packaging: Optional[str]) -> List[str]:
    if not packaging:
        return []
    return [token.strip() for token in packaging.split(",")]


def extract_facets(products: Iterable[Product]) -> Facets:
    packaging = set()
    origin = set()
    certifications = set()
    for product in products:
        packaging.update(token for token in _packaging_tokens(product.packaging) if token)
        if product.origin:
            origin.add(product.origin)
        certifications.update(product.certifications or [])
    return Facets(
        packaging=sorted(packaging),
        origin=sorted(origin),
        certifications=sorted(certifications),
    )


def apply_filters(products: Iterable[Product], filters: FilterState) -> List[Product]:
    """Keep products matching every active facet (any selected value per facet)."""

    def match(product: Product) -> bool:
        if filters.packaging:
            tokens = [token.lower() for token in _packaging_tokens(product.packaging)]
            if not tokens:
                return False
            if not any(selected.lower() in token for selected in filters.packaging for token in tokens):
                return False
        if filters.origin:
            if not product.origin or product.origin not in filters.origin:
                return False
        if filters.moq_bucket:
            bucket = moq_bucket(product.moq)
            if bucket is None or bucket not in filters.moq_bucket:
                return False
        if filters.certifications:
            if not product.certifications:
                return False
            if not set(filters.certifications) & set(product.certifications):
                return False
        return True

    return [product for product in products if match(product)]


def _title_key(product: Product) -> Tuple[str, str]:
    return (product.title.casefold(), product.title)


def _moq_key(product: Product) -> float:
    value = parse_leading_integer(product.moq)
    return math.inf if value is None else value


def apply_sorting(products: Sequence[Product], sort: SortOption) -> List[Product]:
    if sort == SortOption.NAME_ASC:
        return sorted(products, key=_title_key)
    if sort == SortOption.NAME_DESC:
        return sorted(products, key=_title_key, reverse=True)
    if sort == SortOption.MOQ_ASC:
        return sorted(products, key=_moq_key)
    # featured first, then alphabetical inside each group
    return sorted(products, key=lambda product: (not product.featured, _title_key(product)))


def active_filter_count(filters: FilterState) -> int:
    return sum(len(getattr(filters, name)) for name in FACET_NAMES)
