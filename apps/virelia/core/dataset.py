"""Utility helpers for loading the embedded fallback catalog into memory."""

from __future__ import annotations

import json
import os
from functools import lru_cache
from importlib import resources
from pathlib import Path
from typing import List, Optional, Tuple

from ..schemas import Category, Product

# shipped inside the package so a regular (non-editable) install can read it
PACKAGE_NAME = "virelia"
RESOURCE_NAME = "data/products.json"


def packaged_catalog():
    return resources.files(PACKAGE_NAME).joinpath(RESOURCE_NAME)


def _find_catalog_path():
    override = os.environ.get("CATALOG_DATA_PATH")
    if override:
        return Path(override)
    return packaged_catalog()


CATALOG_PATH = _find_catalog_path()


def parse_catalog(text: str) -> Tuple[Tuple[Category, ...], Tuple[Product, ...]]:
    data = json.loads(text)
    categories = tuple(Category(**item) for item in data.get("categories", []))
    products = tuple(Product(**item) for item in data.get("products", []))
    return categories, products


@lru_cache(maxsize=1)
def _load_dataset() -> Tuple[Tuple[Category, ...], Tuple[Product, ...]]:
    return parse_catalog(CATALOG_PATH.read_text(encoding="utf-8"))


def load_products() -> List[Product]:
    return list(_load_dataset()[1])


def load_categories() -> List[Category]:
    return list(_load_dataset()[0])


def get_category_by_slug(slug: str) -> Optional[Category]:
    return next((category for category in load_categories() if category.slug == slug), None)


def get_product_by_slug(slug: str) -> Optional[Product]:
    return next((product for product in load_products() if product.slug == slug), None)


def get_products_by_category(category_name: str) -> List[Product]:
    return [product for product in load_products() if product.category == category_name]
