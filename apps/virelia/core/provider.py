"""Catalog resolution: Sanity first, embedded data when Sanity has nothing.

Callers never see whether data came from the CMS or the fallback dataset. A
remote that is unconfigured, unreachable, erroring, or simply empty all lead
to the same local data. There is no retry: one failed attempt falls back for
the rest of the request.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, List, Optional

from pydantic import ValidationError

from ..config import PLACEHOLDER_IMAGE
from ..schemas import Category, Product, SitemapSlugs
from . import dataset, sanity

logger = logging.getLogger(__name__)


def product_from_sanity(doc: Dict[str, Any]) -> Product:
    """Map a Sanity product projection into the Product shape."""
    return Product(
        slug=doc.get("slug") or "",
        title=doc.get("title") or "",
        short_description=doc.get("shortDescription") or "",
        long_description=doc.get("longDescription"),
        category=doc.get("category") or "",
        category_slug=doc.get("categorySlug"),
        image=doc.get("image") or PLACEHOLDER_IMAGE,
        packaging=doc.get("packaging"),
        moq=doc.get("moq"),
        origin=doc.get("origin"),
        certifications=list(doc.get("certifications") or []),
        featured=bool(doc.get("featured")),
        shelf_life=doc.get("shelfLife"),
        hs_code=doc.get("hsCode"),
    )


def category_from_sanity(doc: Dict[str, Any]) -> Category:
    return Category(
        name=doc.get("title") or "",
        slug=doc.get("slug") or "",
        description=doc.get("description") or "",
    )


def _map_products(docs: Optional[Iterable[Dict[str, Any]]]) -> List[Product]:
    products: List[Product] = []
    for doc in docs or []:
        if not isinstance(doc, dict) or not doc.get("slug"):
            continue
        try:
            products.append(product_from_sanity(doc))
        except ValidationError:
            logger.warning("provider: skipping malformed Sanity product %s", doc.get("slug"))
    return products


def fetch_catalog(category_slug: Optional[str] = None) -> List[Product]:
    """Products for the whole catalog or one category.

    Without a Sanity project id no request is attempted and the embedded
    dataset is returned as is.
    """
    if category_slug is None:
        remote = _map_products(sanity.fetch_products())
    else:
        remote = _map_products(sanity.fetch_products_by_category(category_slug))
    if remote:
        return remote

    logger.info("provider: using local catalog (category=%s)", category_slug)
    if category_slug is None:
        return dataset.load_products()
    category = dataset.get_category_by_slug(category_slug)
    if category is None:
        return []
    return dataset.get_products_by_category(category.name)


def fetch_categories() -> List[Category]:
    docs = sanity.fetch_categories()
    remote = [category_from_sanity(doc) for doc in docs or [] if isinstance(doc, dict) and doc.get("slug")]
    if remote:
        return remote
    return dataset.load_categories()


def fetch_category(slug: str) -> Optional[Category]:
    doc = sanity.fetch_category_by_slug(slug)
    if isinstance(doc, dict) and doc.get("slug"):
        return category_from_sanity(doc)
    return dataset.get_category_by_slug(slug)


def fetch_product(slug: str) -> Optional[Product]:
    doc = sanity.fetch_product_by_slug(slug)
    remote = _map_products([doc] if doc else [])
    if remote:
        return remote[0]
    return dataset.get_product_by_slug(slug)


def fetch_featured() -> List[Product]:
    remote = _map_products(sanity.fetch_featured_products())
    if remote:
        return remote
    return [product for product in dataset.load_products() if product.featured]


def related_products(product: Product, limit: int = 3) -> List[Product]:
    """Other products from the same category, resolved like the category page."""
    if product.category_slug:
        candidates = fetch_catalog(product.category_slug)
    else:
        candidates = dataset.get_products_by_category(product.category)
    return [item for item in candidates if item.slug != product.slug][:limit]


def fetch_sitemap_slugs() -> SitemapSlugs:
    """Slugs for the sitemap; each list falls back to local data on its own."""
    remote = sanity.fetch_all_slugs()
    products = [item["slug"] for item in remote.get("products", []) if isinstance(item, dict) and item.get("slug")]
    categories = [
        item["slug"] for item in remote.get("categories", []) if isinstance(item, dict) and item.get("slug")
    ]
    if not products:
        products = [product.slug for product in dataset.load_products()]
    if not categories:
        categories = [category.slug for category in dataset.load_categories()]
    return SitemapSlugs(products=products, categories=categories)
