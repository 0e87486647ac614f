"""Pydantic schemas for the catalog, inquiry and site endpoints.

Field names are snake_case in Python and camelCase on the wire so the JSON
matches what the site frontend and the Sanity projections use.
"""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from .config import PLACEHOLDER_IMAGE


class CamelModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class Product(CamelModel):
    slug: str
    title: str
    short_description: str = Field(default="", alias="shortDescription")
    category: str = ""
    image: str = PLACEHOLDER_IMAGE
    packaging: Optional[str] = None
    moq: Optional[str] = None
    origin: Optional[str] = None
    certifications: List[str] = Field(default_factory=list)
    featured: bool = False
    # detail page fields
    long_description: Optional[str] = Field(default=None, alias="longDescription")
    category_slug: Optional[str] = Field(default=None, alias="categorySlug")
    shelf_life: Optional[str] = Field(default=None, alias="shelfLife")
    hs_code: Optional[str] = Field(default=None, alias="hsCode")


class Category(CamelModel):
    name: str
    slug: str
    description: str = ""


class MoqBucket(CamelModel):
    key: str
    label: str


class Facets(CamelModel):
    packaging: List[str] = Field(default_factory=list)
    origin: List[str] = Field(default_factory=list)
    certifications: List[str] = Field(default_factory=list)


class FilterSelection(CamelModel):
    packaging: List[str] = Field(default_factory=list)
    origin: List[str] = Field(default_factory=list)
    moq_bucket: List[str] = Field(default_factory=list, alias="moqBucket")
    certifications: List[str] = Field(default_factory=list)


class CatalogView(CamelModel):
    """Everything a listing page needs: results, facet catalog and URL state."""

    products: List[Product] = Field(default_factory=list)
    total: int = 0
    facets: Facets = Field(default_factory=Facets)
    moq_buckets: List[MoqBucket] = Field(default_factory=list, alias="moqBuckets")
    filters: FilterSelection = Field(default_factory=FilterSelection)
    sort: str = "default"
    active_filter_count: int = Field(default=0, alias="activeFilterCount")
    query: str = ""


class CategoryPage(CamelModel):
    category: Category
    catalog: CatalogView


class ProductDetail(CamelModel):
    product: Product
    related: List[Product] = Field(default_factory=list)


class SearchResponse(CamelModel):
    query: str
    results: List[Product] = Field(default_factory=list)


class InquiryRequest(CamelModel):
    # everything optional here: required-field checks happen in the handler so
    # the client gets a 400 with a readable message instead of a 422
    full_name: Optional[str] = Field(default=None, alias="fullName")
    company_name: Optional[str] = Field(default=None, alias="companyName")
    email: Optional[str] = None
    country: Optional[str] = None
    phone: Optional[str] = None
    message: Optional[str] = None
    product_name: Optional[str] = Field(default=None, alias="productName")
    product_slug: Optional[str] = Field(default=None, alias="productSlug")
    product_category: Optional[str] = Field(default=None, alias="productCategory")
    url_path: Optional[str] = Field(default=None, alias="urlPath")


class MessageResponse(CamelModel):
    message: str


class HealthResponse(CamelModel):
    status: str = "ok"
    environment: str
    timestamp: str


class VersionResponse(CamelModel):
    version: str
    commit: Optional[str] = None
    build_time: Optional[str] = Field(default=None, alias="buildTime")


class SitemapSlugs(CamelModel):
    products: List[str] = Field(default_factory=list)
    categories: List[str] = Field(default_factory=list)
