"""
Root GraphQL mutation definitions
"""

import strawberry

from ..types.task_list import TaskList
from ..types.user import AuthUser


# Input types for mutations
@strawberry.input
class SignUpInput:
    """Input for creating an account."""

    email: str
    password: str
    name: str
    avatar: str | None = None


@strawberry.input
class SignInInput:
    """Input for signing in."""

    email: str
    password: str


@strawberry.type
class Mutation:
    """Root GraphQL mutation type."""

    # Account mutations
    @strawberry.mutation(name="signUp")
    async def sign_up(self, info: strawberry.Info, input: SignUpInput) -> AuthUser:
        """Create an account and start a session."""
        from ..resolvers.auth import sign_up

        return await sign_up(info, input)

    @strawberry.mutation(name="signIn")
    async def sign_in(self, info: strawberry.Info, input: SignInInput) -> AuthUser:
        """Start a session for an existing account."""
        from ..resolvers.auth import sign_in

        return await sign_in(info, input)

    # Task list mutations
    @strawberry.mutation(name="createTaskList")
    async def create_task_list(self, info: strawberry.Info, title: str) -> TaskList:
        """Create a new task list."""
        from ..resolvers.task_list import create_task_list

        return await create_task_list(info, title)

    @strawberry.mutation(name="updateTaskList")
    async def update_task_list(
        self, info: strawberry.Info, id: strawberry.ID, title: str
    ) -> TaskList:
        """Rename a task list."""
        from ..resolvers.task_list import update_task_list

        return await update_task_list(info, str(id), title)

    @strawberry.mutation(name="deleteTaskList")
    async def delete_task_list(self, info: strawberry.Info, id: strawberry.ID) -> bool:
        """Delete a task list."""
        from ..resolvers.task_list import delete_task_list

        return await delete_task_list(info, str(id))

    @strawberry.mutation(name="addUserToTaskList")
    async def add_user_to_task_list(
        self, info: strawberry.Info, task_list_id: strawberry.ID, user_id: strawberry.ID
    ) -> TaskList | None:
        """Add a member to a task list."""
        from ..resolvers.task_list import add_user_to_task_list

        return await add_user_to_task_list(info, str(task_list_id), str(user_id))
