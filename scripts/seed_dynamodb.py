"""Create PrintLink DynamoDB tables and optionally seed mappings.

Usage:
    python scripts/seed_dynamodb.py --endpoint-url http://localhost:4566
    python scripts/seed_dynamodb.py --mappings config/mappings.json
"""

from __future__ import annotations

import argparse
import json
from pathlib import Path
from typing import Any

import boto3

TABLE_DEFINITIONS: list[dict[str, Any]] = [
    {"name": "printlink-mappings"},
    {"name": "printlink-unmatched"},
    {"name": "printlink-settings"},
]


def create_tables(ddb: Any, suffix: str = "") -> None:
    """Create all PrintLink tables. Skips if table already exists."""
    client = ddb.meta.client
    existing = client.list_tables().get("TableNames", [])

    for defn in TABLE_DEFINITIONS:
        table_name = f"{defn['name']}{suffix}"
        if table_name in existing:
            print(f"  Table {table_name} already exists, skipping")
            continue
        client.create_table(
            TableName=table_name,
            KeySchema=[
                {"AttributeName": "PK", "KeyType": "HASH"},
                {"AttributeName": "SK", "KeyType": "RANGE"},
            ],
            AttributeDefinitions=[
                {"AttributeName": "PK", "AttributeType": "S"},
                {"AttributeName": "SK", "AttributeType": "S"},
            ],
            BillingMode="PAY_PER_REQUEST",
        )
        print(f"  Created table {table_name}")


def seed_mappings(ddb: Any, mappings: list[dict[str, Any]], suffix: str = "") -> int:
    """Write mapping dicts (``productId``, ``variantId``, ``fileNames``, ``skipQueue``)."""
    tbl = ddb.Table(f"printlink-mappings{suffix}")
    with tbl.batch_writer() as batch:
        for m in mappings:
            files = [str(f) for f in m.get("fileNames", []) if str(f).strip()]
            variant_id = m.get("variantId")
            batch.put_item(Item={
                "PK": f"PRODUCT#{m['productId']}",
                "SK": f"VARIANT#{variant_id or '*'}",
                "product_id": str(m["productId"]),
                "variant_id": str(variant_id) if variant_id else None,
                "file_names": files,
                "file_name": files[0] if files else None,
                "skip_queue": bool(m.get("skipQueue", False)),
            })
    print(f"  Seeded {len(mappings)} mappings")
    return len(mappings)


def main() -> None:
    parser = argparse.ArgumentParser(description="Create DynamoDB tables for PrintLink")
    parser.add_argument("--endpoint-url", default=None, help="DynamoDB endpoint (e.g. http://localhost:4566)")
    parser.add_argument("--table-suffix", default="", help="Table name suffix (e.g. -dev)")
    parser.add_argument("--region", default="us-east-1", help="AWS region")
    parser.add_argument("--mappings", default=None, help="JSON file with a list of mappings to seed")
    args = parser.parse_args()

    kwargs: dict[str, Any] = {"region_name": args.region}
    if args.endpoint_url:
        kwargs["endpoint_url"] = args.endpoint_url

    ddb = boto3.resource("dynamodb", **kwargs)

    print("Creating tables...")
    create_tables(ddb, suffix=args.table_suffix)

    if args.mappings:
        print("Seeding mappings...")
        seed_mappings(ddb, json.loads(Path(args.mappings).read_text()), suffix=args.table_suffix)

    print("Done!")


if __name__ == "__main__":
    main()
