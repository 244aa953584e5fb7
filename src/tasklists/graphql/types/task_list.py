"""
TaskList GraphQL type definitions
"""

from datetime import UTC, datetime
from typing import TYPE_CHECKING, Annotated

import strawberry

if TYPE_CHECKING:
    from ...database import TaskListRecord
    from .todo import Todo
    from .user import User


def format_timestamp(value: datetime) -> str:
    """Render a stored timestamp as ISO-8601 UTC with millisecond precision."""
    # Mongo hands back naive datetimes that are already UTC
    if value.tzinfo is None:
        value = value.replace(tzinfo=UTC)
    return value.astimezone(UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")


@strawberry.type
class TaskList:
    """TaskList type for GraphQL API."""

    id: strawberry.ID
    created_at: str
    title: str
    member_ids: strawberry.Private[list[str]]

    @classmethod
    def from_record(cls, record: "TaskListRecord") -> "TaskList":
        return cls(
            id=strawberry.ID(record.id),
            created_at=format_timestamp(record.created_at),
            title=record.title,
            member_ids=list(record.member_ids),
        )

    @strawberry.field
    async def progress(self, info: strawberry.Info) -> float:
        """Fraction of this list's todos that are completed."""
        from ..resolvers.task_list import resolve_task_list_progress

        return await resolve_task_list_progress(self, info)

    @strawberry.field
    async def users(
        self, info: strawberry.Info
    ) -> list[Annotated["User", strawberry.lazy(".user")]]:
        """Members of this list, in the order they were added."""
        from ..resolvers.task_list import resolve_task_list_users

        return await resolve_task_list_users(self, info)

    @strawberry.field
    async def todos(
        self, info: strawberry.Info
    ) -> list[Annotated["Todo", strawberry.lazy(".todo")]]:
        """Todos that belong to this list."""
        from ..resolvers.task_list import resolve_task_list_todos

        return await resolve_task_list_todos(self, info)
