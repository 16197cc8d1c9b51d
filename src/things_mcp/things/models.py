"""Pydantic models for records read back from Things."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class ThingsRecord(BaseModel):
    """Base for parsed records; serializes with camelCase keys, unset omitted."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str
    name: str

    def to_json_dict(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)


class TodoRecord(ThingsRecord):
    area: str | None = None
    tags: list[str] = Field(default_factory=list)


class ProjectRecord(ThingsRecord):
    area: str | None = None
    tags: list[str] = Field(default_factory=list)


class AreaRecord(ThingsRecord):
    pass


class TagRecord(ThingsRecord):
    parent: str | None = None


class TodoDetails(ThingsRecord):
    area: str | None = None
    tags: list[str] = Field(default_factory=list)
    deadline: str | None = None
    scheduled_date: str | None = None
    status: str = "open"
    creation_date: str | None = None
    completion_date: str | None = None
    project: str | None = None
    notes: str | None = None
