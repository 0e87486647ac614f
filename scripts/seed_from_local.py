"""Seed Sanity with the categories and products from the local dataset.

Documents get deterministic ids, so re-running replaces instead of
duplicating. Requires SANITY_PROJECT_ID and SANITY_WRITE_TOKEN (SANITY_DATASET
defaults to "production").

    python scripts/seed_from_local.py --dry-run
    python scripts/seed_from_local.py
"""

from __future__ import annotations

import argparse
import logging
import sys

from virelia.core import dataset, sanity
from virelia.core.seed import build_seed_documents, seed_mutations


def main() -> int:
    parser = argparse.ArgumentParser(description="Seed Sanity from the local catalog data")
    parser.add_argument("--dry-run", action="store_true", help="Build the documents without sending them")
    parser.add_argument("--batch-size", type=int, default=50, help="Mutations per request")
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO)
    documents = build_seed_documents(dataset.load_categories(), dataset.load_products())
    print(f"Prepared {len(documents)} documents from {dataset.CATALOG_PATH}.")
    if args.dry_run:
        return 0

    client = sanity.get_write_client()
    if client is None:
        print("SANITY_PROJECT_ID and SANITY_WRITE_TOKEN must be set.", file=sys.stderr)
        return 1

    mutations = seed_mutations(documents)
    for start in range(0, len(mutations), args.batch_size):
        batch = mutations[start : start + args.batch_size]
        client.mutate(batch)
        print(f"Upserted {start + len(batch)}/{len(mutations)}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
