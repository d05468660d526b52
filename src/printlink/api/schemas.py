"""Request/response bodies for the HTTP API (camelCase on the wire)."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class ApiModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class QueueUnmatchedRequest(ApiModel):
    file_name: str = Field(min_length=1)
    save_mapping: bool = False


class ValidateFilesRequest(ApiModel):
    file_names: list[str] = Field(min_length=1)
    dry_run: bool = True
    quantity: int = Field(default=1, ge=1)


class QueueGroupSetting(ApiModel):
    group_id: Optional[int] = None
