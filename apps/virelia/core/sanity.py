"""Thin client for the Sanity HTTP API with graceful failure.

Reads go through the GROQ query endpoint, writes through the mutate endpoint.
Every public ``fetch_*`` helper returns None (never raises) when Sanity is not
configured or the request fails, so callers can substitute local data.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Dict, List, Optional

import requests

from ..config import SanitySettings, sanity_settings

REQUEST_TIMEOUT = 10

_PRODUCT_FIELDS = """
    _id,
    title,
    "slug": slug.current,
    shortDescription,
    longDescription,
    "category": category->title,
    "categorySlug": category->slug.current,
    "image": mainImage.asset->url,
    packaging,
    shelfLife,
    moq,
    origin,
    certifications,
    hsCode,
    featured
"""

_CATEGORY_FIELDS = """
    _id,
    title,
    "slug": slug.current,
    description
"""

QUERIES: Dict[str, str] = {
    "all_products": f'*[_type == "product"] | order(title asc) {{{_PRODUCT_FIELDS}}}',
    "featured_products": f'*[_type == "product" && featured == true] | order(title asc) {{{_PRODUCT_FIELDS}}}',
    "product_by_slug": f'*[_type == "product" && slug.current == $slug][0] {{{_PRODUCT_FIELDS}}}',
    "products_by_category": (
        f'*[_type == "product" && category->slug.current == $categorySlug] | order(title asc) {{{_PRODUCT_FIELDS}}}'
    ),
    "all_categories": f'*[_type == "category"] | order(title asc) {{{_CATEGORY_FIELDS}}}',
    "category_by_slug": f'*[_type == "category" && slug.current == $slug][0] {{{_CATEGORY_FIELDS}}}',
    "all_product_slugs": '*[_type == "product"] { "slug": slug.current }',
    "all_category_slugs": '*[_type == "category"] { "slug": slug.current }',
    "category_ids": '*[_type == "category"] { _id, title }',
}


class SanityError(RuntimeError):
    """Raised by SanityClient when the API returns an unusable response."""


class SanityClient:
    def __init__(self, settings: SanitySettings, session: Optional[requests.Session] = None) -> None:
        self.settings = settings
        self._session = session or requests.Session()

    def _base_url(self, use_cdn: bool) -> str:
        host = "apicdn.sanity.io" if use_cdn else "api.sanity.io"
        return f"https://{self.settings.project_id}.{host}/v{self.settings.api_version}/data"

    def _headers(self, token: Optional[str]) -> Dict[str, str]:
        headers = {"Accept": "application/json"}
        if token:
            headers["Authorization"] = f"Bearer {token}"
        return headers

    def fetch(self, query: str, params: Optional[Dict[str, Any]] = None) -> Any:
        """Run a GROQ query and return its ``result``."""
        url = f"{self._base_url(self.settings.use_cdn)}/query/{self.settings.dataset}"
        request_params = {"query": query}
        # GROQ parameters are passed as $name=<json value>
        for key, value in (params or {}).items():
            request_params[f"${key}"] = json.dumps(value)
        resp = self._session.get(
            url,
            params=request_params,
            headers=self._headers(self.settings.read_token),
            timeout=REQUEST_TIMEOUT,
        )
        resp.raise_for_status()
        data = resp.json()
        if not isinstance(data, dict) or "result" not in data:
            raise SanityError(f"unexpected query response: {type(data).__name__}")
        return data["result"]

    def mutate(self, mutations: List[Dict[str, Any]]) -> Dict[str, Any]:
        if not self.settings.write_token:
            raise SanityError("write token is not configured")
        url = f"{self._base_url(False)}/mutate/{self.settings.dataset}"
        resp = self._session.post(
            url,
            params={"returnIds": "true"},
            json={"mutations": mutations},
            headers=self._headers(self.settings.write_token),
            timeout=REQUEST_TIMEOUT,
        )
        resp.raise_for_status()
        return resp.json()

    def create(self, document: Dict[str, Any]) -> Optional[str]:
        """Create a document and return its id."""
        data = self.mutate([{"create": document}])
        results = data.get("results") or []
        if results:
            return results[0].get("id")
        return None


def get_client() -> Optional[SanityClient]:
    settings = sanity_settings()
    if settings is None:
        return None
    return SanityClient(settings)


def get_write_client() -> Optional[SanityClient]:
    client = get_client()
    if client is None or not client.settings.write_token:
        return None
    return client


def _safe_fetch(name: str, description: str, params: Optional[Dict[str, Any]] = None) -> Any:
    client = get_client()
    if client is None:
        return None
    try:
        return client.fetch(QUERIES[name], params)
    except Exception as exc:
        logging.exception("Error fetching %s from Sanity: %s", description, exc)
        return None


def fetch_products() -> Optional[List[dict]]:
    return _safe_fetch("all_products", "products")


def fetch_featured_products() -> Optional[List[dict]]:
    return _safe_fetch("featured_products", "featured products")


def fetch_product_by_slug(slug: str) -> Optional[dict]:
    return _safe_fetch("product_by_slug", "product", {"slug": slug})


def fetch_products_by_category(category_slug: str) -> Optional[List[dict]]:
    return _safe_fetch("products_by_category", "products by category", {"categorySlug": category_slug})


def fetch_categories() -> Optional[List[dict]]:
    return _safe_fetch("all_categories", "categories")


def fetch_category_by_slug(slug: str) -> Optional[dict]:
    return _safe_fetch("category_by_slug", "category", {"slug": slug})


def fetch_category_ids() -> Optional[List[dict]]:
    return _safe_fetch("category_ids", "category ids")


def fetch_all_slugs() -> Dict[str, List[dict]]:
    """Product and category slugs for the sitemap; empty lists on failure."""
    client = get_client()
    if client is None:
        return {"products": [], "categories": []}
    try:
        products = client.fetch(QUERIES["all_product_slugs"])
        categories = client.fetch(QUERIES["all_category_slugs"])
    except Exception as exc:
        logging.exception("Error fetching slugs from Sanity: %s", exc)
        return {"products": [], "categories": []}
    return {"products": products or [], "categories": categories or []}


def create_document(document: Dict[str, Any]) -> Optional[str]:
    """Create ``document`` with the write client; None if unconfigured or failed."""
    client = get_write_client()
    if client is None:
        return None
    try:
        return client.create(document)
    except Exception as exc:
        # keep submitted personal data out of the log line
        logging.error("Failed to create %s in Sanity: %s", document.get("_type", "document"), exc)
        return None
