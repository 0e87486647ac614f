"""Catalog endpoints: listings with filter/sort state, detail, and search.

Listing endpoints accept the same query string the site keeps in its address
bar (``?packaging=..&origin=..&moq=..&certifications=..&sort=..``) so a shared
link renders the same result set on the server.
"""

from __future__ import annotations

from typing import Dict, List

from fastapi import APIRouter, HTTPException, Request

from ..core import provider
from ..core.search import search_products
from ..core.url_state import (
    QUERY_KEYS,
    SORT_KEY,
    build_catalog_view,
    parse_filters_from_query,
    parse_sort_from_query,
)
from ..schemas import CatalogView, Category, CategoryPage, Product, ProductDetail, SearchResponse

router = APIRouter()


def _query_values(request: Request) -> Dict[str, List[str]]:
    keys = [param for param, _ in QUERY_KEYS] + [SORT_KEY]
    return {key: request.query_params.getlist(key) for key in keys if key in request.query_params}


def _catalog_view(request: Request, products: List[Product]) -> CatalogView:
    query = _query_values(request)
    return build_catalog_view(products, parse_filters_from_query(query), parse_sort_from_query(query))


@router.get("/products", response_model=CatalogView)
def list_products(request: Request) -> CatalogView:
    return _catalog_view(request, provider.fetch_catalog())


@router.get("/featured", response_model=List[Product])
def featured_products() -> List[Product]:
    return provider.fetch_featured()


@router.get("/categories", response_model=List[Category])
def list_categories() -> List[Category]:
    return provider.fetch_categories()


@router.get("/categories/{slug}", response_model=CategoryPage)
def category_page(slug: str, request: Request) -> CategoryPage:
    category = provider.fetch_category(slug)
    if category is None:
        raise HTTPException(status_code=404, detail="Category not found")
    return CategoryPage(category=category, catalog=_catalog_view(request, provider.fetch_catalog(slug)))


@router.get("/products/{slug}", response_model=ProductDetail)
def product_detail(slug: str) -> ProductDetail:
    product = provider.fetch_product(slug)
    if product is None:
        raise HTTPException(status_code=404, detail="Product not found")
    return ProductDetail(product=product, related=provider.related_products(product))


@router.get("/search", response_model=SearchResponse)
def search(q: str = "") -> SearchResponse:
    """Match ``q`` against the catalog; clients debounce with ``SearchDebouncer``."""
    return SearchResponse(query=q, results=search_products(provider.fetch_catalog(), q))
