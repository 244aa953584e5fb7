from __future__ import annotations

from datetime import UTC, datetime
from typing import TYPE_CHECKING

import strawberry

from ...errors import MalformedInput, NotFound
from ...logging import get_logger
from ..access_control import get_loaders, get_store, require_user

if TYPE_CHECKING:
    from ...database import TodoRecord
    from ..types.task_list import TaskList
    from ..types.todo import Todo
    from ..types.user import User

logger = get_logger(__name__)


def _require_title(title: str) -> str:
    title = title.strip()
    if not title:
        raise MalformedInput("'title' must not be blank")
    return title


# Query resolvers
async def resolve_my_task_lists(info: strawberry.Info) -> list[TaskList]:
    """Resolve every task list the authenticated user is a member of."""
    from ..types.task_list import TaskList

    user = require_user(info)
    store = get_store(info)

    records = await store.task_lists.find_many({"memberIds": store.parse_id(user.id)})
    return [TaskList.from_record(record) for record in records]


async def resolve_task_list_by_id(info: strawberry.Info, id: str) -> TaskList:
    """
    Resolve a task list by its ID.

    Raises:
        MalformedInput: If the id is not a valid identifier
        NotFound: If no task list has that id
    """
    from ..types.task_list import TaskList

    require_user(info)
    store = get_store(info)

    record = await store.task_lists.find_by_id(id)
    if record is None:
        logger.info("Task list not found", task_list_id=id)
        raise NotFound(f"Task list not found: {id}")

    return TaskList.from_record(record)


# Mutation resolvers
async def create_task_list(info: strawberry.Info, title: str) -> TaskList:
    """Create a task list whose only member is the authenticated user."""
    from ..types.task_list import TaskList

    user = require_user(info)
    title = _require_title(title)
    store = get_store(info)

    inserted_id = await store.task_lists.insert_one(
        {
            "title": title,
            "createdAt": datetime.now(UTC),
            "memberIds": [store.parse_id(user.id)],
        }
    )
    record = await store.task_lists.find_by_id(inserted_id)
    if record is None:
        raise NotFound(f"Task list {store.format_id(inserted_id)} was not found after insert")

    logger.info("Task list created", task_list_id=record.id)
    return TaskList.from_record(record)


async def update_task_list(info: strawberry.Info, id: str, title: str) -> TaskList:
    """
    Rename a task list and return it as updated.

    Raises:
        NotFound: If no task list has that id
    """
    from ..types.task_list import TaskList

    require_user(info)
    store = get_store(info)
    task_list_id = store.parse_id(id)
    title = _require_title(title)

    record = await store.task_lists.find_one_and_update(
        {"_id": task_list_id}, {"$set": {"title": title}}
    )
    if record is None:
        logger.info("Task list not found for update", task_list_id=id)
        raise NotFound(f"Task list not found: {id}")

    logger.info("Task list updated", task_list_id=record.id)
    return TaskList.from_record(record)


async def delete_task_list(info: strawberry.Info, id: str) -> bool:
    """Delete a task list. Succeeds whether or not it existed."""
    require_user(info)
    store = get_store(info)

    deleted = await store.task_lists.delete_one({"_id": store.parse_id(id)})
    logger.info("Task list delete requested", task_list_id=id, deleted=deleted)
    return True


async def add_user_to_task_list(
    info: strawberry.Info, task_list_id: str, user_id: str
) -> TaskList | None:
    """
    Add a member to a task list.

    Adding an existing member leaves the list unchanged. Returns None when the
    task list does not exist.
    """
    from ..types.task_list import TaskList

    require_user(info)
    store = get_store(info)
    list_oid = store.parse_id(task_list_id)
    member_oid = store.parse_id(user_id)

    record = await store.task_lists.find_one_and_update(
        {"_id": list_oid}, {"$addToSet": {"memberIds": member_oid}}
    )
    if record is None:
        logger.info("Task list not found for member add", task_list_id=task_list_id)
        return None

    logger.info("Task list member ensured", task_list_id=record.id, member_id=user_id)
    return TaskList.from_record(record)


# Field resolvers
async def resolve_task_list_users(task_list: TaskList, info: strawberry.Info) -> list[User]:
    """Resolve the members of a task list, preserving member order."""
    from ..types.user import User

    users = await get_loaders(info).user_loader.load_many(task_list.member_ids)

    resolved = []
    for member_id, user in zip(task_list.member_ids, users):
        if user is None:
            logger.warning(
                "Task list references a missing user",
                task_list_id=str(task_list.id),
                member_id=member_id,
            )
            continue
        resolved.append(User.from_record(user))
    return resolved


async def _load_todos(task_list: TaskList, info: strawberry.Info) -> list[TodoRecord]:
    store = get_store(info)
    return await store.todos.find_many({"taskListId": store.parse_id(task_list.id)})


async def resolve_task_list_todos(task_list: TaskList, info: strawberry.Info) -> list[Todo]:
    from ..types.todo import Todo

    return [Todo.from_record(record) for record in await _load_todos(task_list, info)]


async def resolve_task_list_progress(task_list: TaskList, info: strawberry.Info) -> float:
    """Fraction of completed todos; 0.0 for a list without todos."""
    todos = await _load_todos(task_list, info)
    if not todos:
        return 0.0
    return sum(1 for todo in todos if todo.is_completed) / len(todos)


async def resolve_todo_task_list(todo: Todo, info: strawberry.Info) -> TaskList:
    from ..types.task_list import TaskList

    record = await get_store(info).task_lists.find_by_id(todo.task_list_id)
    if record is None:
        raise NotFound(f"Task list not found: {todo.task_list_id}")
    return TaskList.from_record(record)
