"""Pluggable persistence backends behind Protocol interfaces."""

from __future__ import annotations

from printlink.core.config import AppSettings
from printlink.persistence.dynamodb_backend import (
    DynamoDBMappingStore,
    DynamoDBSettingsStore,
    DynamoDBUnmatchedStore,
)
from printlink.persistence.redis_backend import RedisSettingsStore


def create_persistence(settings: AppSettings | None = None):
    """Create wired-up persistence backends from application settings.

    Returns:
        Tuple of (mapping_store, unmatched_store, settings_store).
    """
    if settings is None:
        settings = AppSettings()

    ddb = settings.dynamodb
    mapping_store = DynamoDBMappingStore(
        table_suffix=ddb.table_suffix, region=ddb.region, endpoint_url=ddb.endpoint_url,
    )
    unmatched_store = DynamoDBUnmatchedStore(
        table_suffix=ddb.table_suffix, region=ddb.region, endpoint_url=ddb.endpoint_url,
    )

    if settings.settings_backend == "redis":
        settings_store = RedisSettingsStore(
            host=settings.redis.host,
            port=settings.redis.port,
            db=settings.redis.db,
        )
    else:
        settings_store = DynamoDBSettingsStore(
            table_suffix=ddb.table_suffix, region=ddb.region, endpoint_url=ddb.endpoint_url,
        )

    return mapping_store, unmatched_store, settings_store
