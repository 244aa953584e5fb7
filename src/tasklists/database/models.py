"""
Record types for the documents stored in each collection
"""

from datetime import datetime
from typing import Any

from bson import ObjectId
from pydantic import BaseModel, ConfigDict, Field, field_validator


def _stringify_id(value: Any) -> Any:
    if isinstance(value, ObjectId):
        return str(value)
    return value


class Record(BaseModel):
    """Base record: maps the Mongo ``_id`` to a string ``id``."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore", frozen=True)

    id: str = Field(alias="_id")

    @field_validator("id", mode="before")
    @classmethod
    def _coerce_id(cls, value: Any) -> Any:
        return _stringify_id(value)


class UserRecord(Record):
    """A document from the Users collection."""

    name: str
    email: str
    hashed_password: str = Field(alias="hashedPassword")
    avatar: str | None = None


class TaskListRecord(Record):
    """A document from the Tasks collection."""

    title: str
    created_at: datetime = Field(alias="createdAt")
    member_ids: list[str] = Field(alias="memberIds", min_length=1)

    @field_validator("member_ids", mode="before")
    @classmethod
    def _coerce_member_ids(cls, value: Any) -> Any:
        if isinstance(value, list):
            return [_stringify_id(item) for item in value]
        return value


class TodoRecord(Record):
    """A document from the Todos collection."""

    content: str
    is_completed: bool = Field(alias="isCompleted", default=False)
    task_list_id: str = Field(alias="taskListId")

    @field_validator("task_list_id", mode="before")
    @classmethod
    def _coerce_task_list_id(cls, value: Any) -> Any:
        return _stringify_id(value)
