"""Application configuration using pydantic-settings with grouped env prefixes."""

from __future__ import annotations

from typing import Literal

from pydantic_settings import BaseSettings


class SimplyPrintConfig(BaseSettings):
    """SimplyPrint print-queue service configuration."""

    model_config = {"env_prefix": "PRINTLINK_SIMPLYPRINT_"}

    company_id: str = ""
    api_key: str = ""
    base_url: str = "https://api.simplyprint.io"
    queue_group_name: str = "Shopify"
    timeout: float = 10.0
    queue_group_ttl: int = 300  # seconds
    suggest_fan_out: int = 4
    suggest_limit: int = 8


class DynamoDBConfig(BaseSettings):
    """DynamoDB configuration."""

    model_config = {"env_prefix": "PRINTLINK_DYNAMO_"}

    table_suffix: str = ""  # "-dev", "-uat", or "" for prod
    region: str = "us-east-1"
    endpoint_url: str | None = None  # LocalStack override


class RedisConfig(BaseSettings):
    """Redis settings-store configuration."""

    model_config = {"env_prefix": "PRINTLINK_REDIS_"}

    host: str = "localhost"
    port: int = 6379
    db: int = 0


class AppSettings(BaseSettings):
    """Root application settings aggregating all sub-configs."""

    model_config = {"env_prefix": "PRINTLINK_"}

    environment: Literal["dev", "uat", "prod"] = "dev"
    log_level: str = "INFO"
    json_logs: bool = False
    settings_backend: Literal["dynamodb", "redis"] = "dynamodb"

    simplyprint: SimplyPrintConfig = SimplyPrintConfig()
    dynamodb: DynamoDBConfig = DynamoDBConfig()
    redis: RedisConfig = RedisConfig()
