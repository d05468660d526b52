"""DynamoDB backends for mappings, unmatched line items and settings."""

from __future__ import annotations

from decimal import Decimal
from typing import Any, TypeVar

import boto3
import pydantic
from botocore.exceptions import ClientError

from printlink.core.exceptions import StorageError
from printlink.models.mapping import Mapping
from printlink.models.unmatched import UnmatchedLineItem

MAPPINGS_TABLE = "printlink-mappings"
UNMATCHED_TABLE = "printlink-unmatched"
SETTINGS_TABLE = "printlink-settings"

PRODUCT_LEVEL = "*"
UNMATCHED_PK = "UNMATCHED"

M = TypeVar("M", bound=pydantic.BaseModel)


def _decode_decimals(item: dict[str, Any]) -> dict[str, Any]:
    """Convert Decimal values in a DynamoDB item to int/float."""
    out: dict[str, Any] = {}
    for k, v in item.items():
        if isinstance(v, Decimal):
            out[k] = int(v) if v == int(v) else float(v)
        elif isinstance(v, dict):
            out[k] = _decode_decimals(v)
        else:
            out[k] = v
    return out


def _strip_keys(item: dict[str, Any]) -> dict[str, Any]:
    return {k: v for k, v in _decode_decimals(item).items() if k not in ("PK", "SK")}


def _load(model: type[M], item: dict[str, Any], table_name: str) -> M:
    """Validate a stored row; a row of the wrong shape is a StorageError."""
    try:
        return model.model_validate(item)
    except pydantic.ValidationError as exc:
        raise StorageError(f"Malformed {model.__name__} row in {table_name}: {exc}") from exc


class _DynamoDBTable:
    """Shared boto3 resource wiring and PK/SK helpers."""

    def __init__(self, table_base: str, table_suffix: str = "", region: str = "us-east-1",
                 endpoint_url: str | None = None) -> None:
        self._table_name = f"{table_base}{table_suffix}"
        self._region = region
        self._endpoint_url = endpoint_url
        kwargs: dict = {"region_name": region}
        if endpoint_url:
            kwargs["endpoint_url"] = endpoint_url
        self._ddb = boto3.resource("dynamodb", **kwargs)
        self._table = self._ddb.Table(self._table_name)

    def _get_item(self, pk: str, sk: str) -> dict[str, Any] | None:
        """Get a single item by PK + SK. Returns None if not found."""
        try:
            resp = self._table.get_item(Key={"PK": pk, "SK": sk})
        except ClientError as exc:
            raise StorageError(f"DynamoDB get {self._table_name} {pk}/{sk} failed: {exc}") from exc
        item = resp.get("Item")
        return _strip_keys(item) if item else None

    def _query_pk(self, pk: str) -> list[dict[str, Any]]:
        """Query all items with a given partition key, following pagination."""
        items: list[dict[str, Any]] = []
        kwargs: dict[str, Any] = {
            "KeyConditionExpression": "PK = :pk",
            "ExpressionAttributeValues": {":pk": pk},
        }
        try:
            while True:
                resp = self._table.query(**kwargs)
                items.extend(_strip_keys(i) for i in resp.get("Items", []))
                if "LastEvaluatedKey" not in resp:
                    return items
                kwargs["ExclusiveStartKey"] = resp["LastEvaluatedKey"]
        except ClientError as exc:
            raise StorageError(f"DynamoDB query {self._table_name} {pk} failed: {exc}") from exc

    def _scan(self) -> list[dict[str, Any]]:
        items: list[dict[str, Any]] = []
        kwargs: dict[str, Any] = {}
        try:
            while True:
                resp = self._table.scan(**kwargs)
                items.extend(_strip_keys(i) for i in resp.get("Items", []))
                if "LastEvaluatedKey" not in resp:
                    return items
                kwargs["ExclusiveStartKey"] = resp["LastEvaluatedKey"]
        except ClientError as exc:
            raise StorageError(f"DynamoDB scan {self._table_name} failed: {exc}") from exc

    def _put(self, pk: str, sk: str, attrs: dict[str, Any]) -> None:
        try:
            self._table.put_item(Item={"PK": pk, "SK": sk, **attrs})
        except ClientError as exc:
            raise StorageError(f"DynamoDB put {self._table_name} {pk}/{sk} failed: {exc}") from exc

    def _delete(self, pk: str, sk: str) -> None:
        try:
            self._table.delete_item(Key={"PK": pk, "SK": sk})
        except ClientError as exc:
            raise StorageError(f"DynamoDB delete {self._table_name} {pk}/{sk} failed: {exc}") from exc


class DynamoDBMappingStore(_DynamoDBTable):
    """Production IMappingStore. One item per (product, variant); ``*`` is product level."""

    def __init__(self, table_suffix: str = "", region: str = "us-east-1",
                 endpoint_url: str | None = None) -> None:
        super().__init__(MAPPINGS_TABLE, table_suffix, region, endpoint_url)

    @staticmethod
    def _keys(product_id: str, variant_id: str | None) -> tuple[str, str]:
        return f"PRODUCT#{product_id}", f"VARIANT#{variant_id or PRODUCT_LEVEL}"

    def get(self, product_id: str, variant_id: str | None) -> Mapping | None:
        item = self._get_item(*self._keys(product_id, variant_id))
        return _load(Mapping, item, self._table_name) if item else None

    def upsert(self, mapping: Mapping) -> Mapping:
        self._put(*self._keys(mapping.product_id, mapping.variant_id),
                  mapping.model_dump(mode="json"))
        return mapping

    def delete(self, product_id: str, variant_id: str | None) -> None:
        self._delete(*self._keys(product_id, variant_id))

    def list_all(self) -> list[Mapping]:
        mappings = [_load(Mapping, i, self._table_name) for i in self._scan()]
        return sorted(mappings, key=lambda m: (m.product_id, m.variant_id or ""))


class DynamoDBUnmatchedStore(_DynamoDBTable):
    """Production IUnmatchedStore. All records share one partition."""

    def __init__(self, table_suffix: str = "", region: str = "us-east-1",
                 endpoint_url: str | None = None) -> None:
        super().__init__(UNMATCHED_TABLE, table_suffix, region, endpoint_url)

    @staticmethod
    def _sk(item_id: str) -> str:
        return f"ITEM#{item_id}"

    def create(self, item: UnmatchedLineItem) -> UnmatchedLineItem:
        self._put(UNMATCHED_PK, self._sk(item.id), item.model_dump(mode="json"))
        return item

    def get(self, item_id: str) -> UnmatchedLineItem | None:
        item = self._get_item(UNMATCHED_PK, self._sk(item_id))
        return _load(UnmatchedLineItem, item, self._table_name) if item else None

    def list_all(self) -> list[UnmatchedLineItem]:
        return [_load(UnmatchedLineItem, i, self._table_name)
                for i in self._query_pk(UNMATCHED_PK)]

    def update(self, item: UnmatchedLineItem) -> UnmatchedLineItem:
        return self.create(item)

    def delete(self, item_id: str) -> None:
        self._delete(UNMATCHED_PK, self._sk(item_id))


class DynamoDBSettingsStore(_DynamoDBTable):
    """Production ISettingsStore."""

    def __init__(self, table_suffix: str = "", region: str = "us-east-1",
                 endpoint_url: str | None = None) -> None:
        super().__init__(SETTINGS_TABLE, table_suffix, region, endpoint_url)

    def get(self, key: str) -> str | None:
        item = self._get_item(f"SETTING#{key}", "VALUE")
        return str(item["value"]) if item and "value" in item else None

    def set(self, key: str, value: str) -> None:
        self._put(f"SETTING#{key}", "VALUE", {"value": value})

    def delete(self, key: str) -> None:
        self._delete(f"SETTING#{key}", "VALUE")
