"""Build Sanity documents from the local dataset.

Document ids are derived from slugs (``category-<slug>``, ``product-<slug>``)
so seeding with ``createOrReplace`` can be re-run without duplicates.
"""

from __future__ import annotations

import re
from typing import Any, Dict, Iterable, List

from ..schemas import Category, Product


def to_kebab_case(value: str) -> str:
    value = value.lower().replace("&", "and")
    return re.sub(r"[^a-z0-9]+", "-", value).strip("-")


def category_id(slug: str) -> str:
    return f"category-{slug}"


def product_id(slug: str) -> str:
    return f"product-{slug}"


def slug_object(value: str) -> Dict[str, str]:
    return {"_type": "slug", "current": value}


def category_document(category: Category) -> Dict[str, Any]:
    return {
        "_id": category_id(category.slug),
        "_type": "category",
        "title": category.name,
        "slug": slug_object(category.slug),
        "description": category.description,
    }


def product_document(product: Product, category_slug: str) -> Dict[str, Any]:
    doc: Dict[str, Any] = {
        "_id": product_id(product.slug),
        "_type": "product",
        "title": product.title,
        "slug": slug_object(product.slug),
        "shortDescription": product.short_description,
        "longDescription": product.long_description or product.short_description,
        "category": {"_type": "reference", "_ref": category_id(category_slug)},
        "featured": product.featured,
    }
    optional = {
        "packaging": product.packaging,
        "shelfLife": product.shelf_life,
        "moq": product.moq,
        "origin": product.origin,
        "hsCode": product.hs_code,
    }
    doc.update({key: value for key, value in optional.items() if value})
    if product.certifications:
        doc["certifications"] = list(product.certifications)
    return doc


def build_seed_documents(categories: Iterable[Category], products: Iterable[Product]) -> List[Dict[str, Any]]:
    """Categories first, then products referencing them by deterministic id."""
    categories = list(categories)
    slug_by_name = {category.name: category.slug for category in categories}
    documents = [category_document(category) for category in categories]
    for product in products:
        category_slug = product.category_slug or slug_by_name.get(product.category) or to_kebab_case(product.category)
        documents.append(product_document(product, category_slug))
    return documents


def seed_mutations(documents: Iterable[Dict[str, Any]]) -> List[Dict[str, Any]]:
    return [{"createOrReplace": doc} for doc in documents]
