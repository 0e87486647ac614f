"""Bulk product import from a CSV export.

Expected columns (header row, any order)::

    title, slug, category, shortDescription, longDescription, packaging,
    moq, origin, shelfLife, hsCode, certifications, featured, imageUrl

Every row is validated before anything is written. Products and categories get
the same deterministic ids as the seed documents, so an import can be re-run
and replaces what it wrote before. Categories that do not exist yet are
created on demand. ``imageUrl`` is validated but images are not uploaded.
"""

from __future__ import annotations

import csv
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping, Optional
from urllib.parse import urlparse

from .seed import category_id, product_id, slug_object, to_kebab_case

CSV_COLUMNS = (
    "title",
    "slug",
    "category",
    "shortDescription",
    "longDescription",
    "packaging",
    "moq",
    "origin",
    "shelfLife",
    "hsCode",
    "certifications",
    "featured",
    "imageUrl",
)

# data rows start on line 2, after the header
FIRST_ROW_NUMBER = 2

_OPTIONAL_FIELDS = ("packaging", "shelfLife", "moq", "origin", "hsCode")
_TRUTHY = {"true", "1", "yes"}

Row = Dict[str, str]


class CsvValidationError(ValueError):
    """Raised with every row error found; nothing has been imported."""

    def __init__(self, errors: List[str]) -> None:
        super().__init__(f"{len(errors)} validation error(s)")
        self.errors = errors


@dataclass
class ImportPlan:
    mutations: List[Dict[str, Any]] = field(default_factory=list)
    created_categories: List[str] = field(default_factory=list)
    product_ids: List[str] = field(default_factory=list)


def read_rows(path: Path) -> List[Row]:
    """Read ``path`` into dicts with trimmed keys and values; blank lines are skipped."""
    with path.open(newline="", encoding="utf-8-sig") as handle:
        reader = csv.DictReader(handle)
        rows = []
        for raw in reader:
            row = {key.strip(): (value or "").strip() for key, value in raw.items() if key is not None}
            if any(row.values()):
                rows.append(row)
        return rows


def is_valid_image_url(value: str) -> bool:
    if value.startswith("/"):
        return True
    parsed = urlparse(value)
    return bool(parsed.scheme and parsed.netloc)


def validate_row(row: Row, row_number: int) -> List[str]:
    errors = []
    if not row.get("title", "").strip():
        errors.append(f"Row {row_number}: title is required")
    if not row.get("category", "").strip():
        errors.append(f"Row {row_number}: category is required")
    image_url = row.get("imageUrl", "").strip()
    if image_url and not is_valid_image_url(image_url):
        errors.append(f'Row {row_number}: imageUrl "{image_url}" is not a valid URL')
    return errors


def validate_rows(rows: Iterable[Row]) -> List[str]:
    errors: List[str] = []
    for offset, row in enumerate(rows):
        errors.extend(validate_row(row, offset + FIRST_ROW_NUMBER))
    return errors


def parse_certifications(value: Optional[str]) -> List[str]:
    if not value:
        return []
    return [cert.strip() for cert in value.split(",") if cert.strip()]


def parse_featured(value: Optional[str]) -> bool:
    return bool(value) and value.strip().lower() in _TRUTHY


def row_slug(row: Row) -> str:
    slug = row.get("slug", "").strip()
    return slug or to_kebab_case(row["title"])


def new_category_document(name: str) -> Dict[str, Any]:
    slug = to_kebab_case(name)
    return {
        "_id": category_id(slug),
        "_type": "category",
        "title": name,
        "slug": slug_object(slug),
        "description": f"Category for {name} products",
    }


def product_document_from_row(row: Row, category_ref: str) -> Dict[str, Any]:
    slug = row_slug(row)
    doc: Dict[str, Any] = {
        "_id": product_id(slug),
        "_type": "product",
        "title": row["title"].strip(),
        "slug": slug_object(slug),
        "shortDescription": row.get("shortDescription", "").strip(),
        "longDescription": row.get("longDescription", "").strip(),
        "category": {"_type": "reference", "_ref": category_ref},
    }
    for key in _OPTIONAL_FIELDS:
        value = row.get(key, "").strip()
        if value:
            doc[key] = value
    certifications = parse_certifications(row.get("certifications"))
    if certifications:
        doc["certifications"] = certifications
    if parse_featured(row.get("featured")):
        doc["featured"] = True
    return doc


def build_import_plan(rows: List[Row], existing_categories: Optional[Mapping[str, str]] = None) -> ImportPlan:
    """Validate ``rows`` and turn them into ``createOrReplace`` mutations.

    ``existing_categories`` maps category titles already in Sanity to their
    document ids; any other category is created before its first product.
    Raises :class:`CsvValidationError` if any row is invalid.
    """
    errors = validate_rows(rows)
    if errors:
        raise CsvValidationError(errors)

    category_ids = dict(existing_categories or {})
    plan = ImportPlan()
    for row in rows:
        name = row["category"].strip()
        ref = category_ids.get(name)
        if ref is None:
            category = new_category_document(name)
            ref = category["_id"]
            category_ids[name] = ref
            plan.created_categories.append(name)
            plan.mutations.append({"createOrReplace": category})
        product = product_document_from_row(row, ref)
        plan.product_ids.append(product["_id"])
        plan.mutations.append({"createOrReplace": product})
    return plan
