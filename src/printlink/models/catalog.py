"""SimplyPrint catalog response schemas and transient match candidates."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field, field_validator


class CatalogFile(BaseModel):
    """A file entry from SimplyPrint ``files/GetFiles``."""

    id: str
    name: str
    ext: str | None = None
    type: str | None = None

    @field_validator("id", mode="before")
    @classmethod
    def _id_to_str(cls, value: Any) -> str:
        return str(value)

    @property
    def full_name(self) -> str:
        return f"{self.name}.{self.ext}" if self.ext else self.name


class QueueGroup(BaseModel):
    """A destination group from SimplyPrint ``queue/groups/Get``."""

    id: int
    name: str


class GetFilesResponse(BaseModel):
    status: bool = True
    message: str | None = None
    files: list[CatalogFile] = Field(default_factory=list)


class GetGroupsResponse(BaseModel):
    model_config = {"populate_by_name": True}

    status: bool = True
    message: str | None = None
    groups: list[QueueGroup] = Field(default_factory=list, alias="list")


class AddItemResponse(BaseModel):
    status: bool
    message: str | None = None


class FileCandidate(BaseModel):
    """Scored suggestion; built per request and never persisted."""

    id: str
    name: str
    extension: str | None = None
    full_name: str
    score: int = 0

    @classmethod
    def from_file(cls, file: CatalogFile, score: int) -> FileCandidate:
        return cls(
            id=file.id,
            name=file.name,
            extension=file.ext,
            full_name=file.full_name,
            score=score,
        )
