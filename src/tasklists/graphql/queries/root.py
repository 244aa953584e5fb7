"""
Root GraphQL query definitions
"""

import strawberry

from ..types.task_list import TaskList


@strawberry.type
class Query:
    """Root GraphQL query type."""

    @strawberry.field(name="myTaskLists")
    async def my_task_lists(self, info: strawberry.Info) -> list[TaskList]:
        """Get task lists the current user is a member of."""
        from ..resolvers.task_list import resolve_my_task_lists

        return await resolve_my_task_lists(info)

    @strawberry.field(name="getTaskList")
    async def get_task_list(self, info: strawberry.Info, id: strawberry.ID) -> TaskList:
        """Get a task list by ID."""
        from ..resolvers.task_list import resolve_task_list_by_id

        return await resolve_task_list_by_id(info, str(id))
