"""Backfill structured file lists on mappings saved with only the legacy filename.

Usage:
    python scripts/migrate_mappings.py --table-suffix -dev
"""

from __future__ import annotations

import argparse

from printlink.models.mapping import Mapping
from printlink.persistence.dynamodb_backend import DynamoDBMappingStore


def migrate_mapping(mapping: Mapping) -> Mapping | None:
    """Return the rewritten mapping, or None when it is already current.

    An empty ``file_names`` list is filled from the legacy ``file_name``;
    the legacy field always mirrors the first listed file.
    """
    files = [name for name in mapping.file_names if name.strip()]
    legacy = (mapping.file_name or "").strip()
    if not files and legacy:
        files = [legacy]
    if not files:
        return None
    if files == mapping.file_names and mapping.file_name == files[0]:
        return None
    return mapping.model_copy(update={"file_names": files, "file_name": files[0]})


def migrate_all(store) -> int:
    updated = 0
    for mapping in store.list_all():
        migrated = migrate_mapping(mapping)
        if migrated is not None:
            store.upsert(migrated)
            updated += 1
    return updated


def main() -> None:
    parser = argparse.ArgumentParser(description="Migrate PrintLink mappings to file lists")
    parser.add_argument("--endpoint-url", default=None, help="DynamoDB endpoint (e.g. http://localhost:4566)")
    parser.add_argument("--table-suffix", default="", help="Table name suffix (e.g. -dev)")
    parser.add_argument("--region", default="us-east-1", help="AWS region")
    args = parser.parse_args()

    store = DynamoDBMappingStore(
        table_suffix=args.table_suffix, region=args.region, endpoint_url=args.endpoint_url,
    )
    updated = migrate_all(store)
    print(f"Migration complete. Updated {updated} mapping(s).")


if __name__ == "__main__":
    main()
