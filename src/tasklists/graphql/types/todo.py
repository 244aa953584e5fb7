"""
Todo GraphQL type definitions
"""

from typing import TYPE_CHECKING, Annotated

import strawberry

if TYPE_CHECKING:
    from ...database import TodoRecord
    from .task_list import TaskList


@strawberry.type
class Todo:
    """Todo type for GraphQL API."""

    id: strawberry.ID
    content: str
    is_completed: bool
    task_list_id: strawberry.Private[str]

    @classmethod
    def from_record(cls, record: "TodoRecord") -> "Todo":
        return cls(
            id=strawberry.ID(record.id),
            content=record.content,
            is_completed=record.is_completed,
            task_list_id=record.task_list_id,
        )

    @strawberry.field
    async def task_list(
        self, info: strawberry.Info
    ) -> Annotated["TaskList", strawberry.lazy(".task_list")]:
        """The list this todo belongs to."""
        from ..resolvers.task_list import resolve_todo_task_list

        return await resolve_todo_task_list(self, info)
