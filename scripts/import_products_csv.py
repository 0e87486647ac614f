"""Import products from a CSV file into Sanity.

All rows are validated first; on any error nothing is written. Categories
missing from Sanity are created on demand. Requires SANITY_PROJECT_ID and
SANITY_WRITE_TOKEN unless --dry-run is given.

    python scripts/import_products_csv.py products.csv --dry-run
    python scripts/import_products_csv.py products.csv
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

import requests

from virelia.core import sanity
from virelia.core.csv_import import CsvValidationError, build_import_plan, read_rows


def main() -> int:
    parser = argparse.ArgumentParser(description="Import products from CSV into Sanity")
    parser.add_argument("csv", type=Path, help="Path to the products CSV")
    parser.add_argument("--dry-run", action="store_true", help="Validate and plan without writing")
    parser.add_argument("--batch-size", type=int, default=50, help="Mutations per request")
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO)
    if not args.csv.is_file():
        print(f"CSV file not found: {args.csv}", file=sys.stderr)
        return 1

    rows = read_rows(args.csv)
    print(f"Found {len(rows)} rows in {args.csv}.")

    client = None
    existing = {}
    if not args.dry_run:
        client = sanity.get_write_client()
        if client is None:
            print("SANITY_PROJECT_ID and SANITY_WRITE_TOKEN must be set.", file=sys.stderr)
            return 1
        for doc in sanity.fetch_category_ids() or []:
            if doc.get("title") and doc.get("_id"):
                existing[doc["title"]] = doc["_id"]
        print(f"Found {len(existing)} existing categories.")

    try:
        plan = build_import_plan(rows, existing)
    except CsvValidationError as exc:
        for error in exc.errors:
            print(f"  {error}", file=sys.stderr)
        print(f"{len(exc.errors)} validation error(s); nothing imported.", file=sys.stderr)
        return 1

    for name in plan.created_categories:
        print(f"New category: {name}")
    if client is None:
        print(f"Dry run: {len(plan.product_ids)} products, {len(plan.mutations)} mutations.")
        return 0

    failed = 0
    for start in range(0, len(plan.mutations), args.batch_size):
        batch = plan.mutations[start : start + args.batch_size]
        try:
            client.mutate(batch)
        except (requests.RequestException, sanity.SanityError) as exc:
            logging.error("Batch starting at %d failed: %s", start, exc)
            failed += len(batch)
            continue
        print(f"Upserted {start + len(batch)}/{len(plan.mutations)}")

    print(f"Products: {len(plan.product_ids)}, categories created: {len(plan.created_categories)}, failed mutations: {failed}")
    return 1 if failed else 0


if __name__ == "__main__":
    sys.exit(main())
