"""
Collection-scoped access to the document store
"""

from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from typing import Any, Generic, TypeVar

from bson import ObjectId
from bson.errors import InvalidId
from motor.motor_asyncio import AsyncIOMotorCollection, AsyncIOMotorDatabase
from pymongo import ASCENDING, ReturnDocument
from pymongo.errors import ConnectionFailure

from ..errors import MalformedInput, UpstreamUnavailable
from ..logging import get_logger
from .models import Record, TaskListRecord, TodoRecord, UserRecord

logger = get_logger(__name__)

RecordT = TypeVar("RecordT", bound=Record)

Filter = Mapping[str, Any]

USERS_COLLECTION = "Users"
TASKS_COLLECTION = "Tasks"
TODOS_COLLECTION = "Todos"


def parse_id(value: str | ObjectId) -> ObjectId:
    """Convert an id string to an ObjectId, raising MalformedInput when it is not one."""
    if isinstance(value, ObjectId):
        return value
    try:
        return ObjectId(value)
    except (InvalidId, TypeError) as e:
        raise MalformedInput(f"Invalid id: {value!r}") from e


def format_id(value: ObjectId | str) -> str:
    return str(value)


@contextmanager
def _upstream_errors(collection: str, operation: str) -> Iterator[None]:
    try:
        yield
    except ConnectionFailure as e:
        logger.error(
            "Document store unavailable",
            collection=collection,
            operation=operation,
            error=str(e),
        )
        raise UpstreamUnavailable(f"Document store unavailable: {e}") from e


class Collection(Generic[RecordT]):
    """A motor collection whose documents are returned as validated records."""

    def __init__(self, collection: AsyncIOMotorCollection, record_type: type[RecordT]):
        self._collection = collection
        self.record_type = record_type

    @property
    def name(self) -> str:
        return self._collection.name

    def _to_record(self, document: Mapping[str, Any] | None) -> RecordT | None:
        if document is None:
            return None
        return self.record_type.model_validate(document)

    async def find_by_id(self, id: str | ObjectId) -> RecordT | None:
        """Find a document by id. Invalid id strings raise MalformedInput."""
        return await self.find_one({"_id": parse_id(id)})

    async def find_one(self, filter: Filter) -> RecordT | None:
        with _upstream_errors(self.name, "find_one"):
            document = await self._collection.find_one(dict(filter))
        return self._to_record(document)

    async def find_many(self, filter: Filter | None = None) -> list[RecordT]:
        """Find all matching documents in the store's natural order."""
        with _upstream_errors(self.name, "find_many"):
            cursor = self._collection.find(dict(filter or {}))
            documents = await cursor.to_list(length=None)
        return [self.record_type.model_validate(document) for document in documents]

    async def insert_one(self, document: Mapping[str, Any]) -> ObjectId:
        """Insert a document and return its generated id."""
        with _upstream_errors(self.name, "insert_one"):
            result = await self._collection.insert_one(dict(document))
        return result.inserted_id

    async def update_one(self, filter: Filter, update: Mapping[str, Any]) -> bool:
        """Apply ``update`` to the first match. Returns True if a document matched."""
        with _upstream_errors(self.name, "update_one"):
            result = await self._collection.update_one(dict(filter), dict(update))
        return result.matched_count > 0

    async def delete_one(self, filter: Filter) -> bool:
        """Delete the first match. Returns True if a document was deleted."""
        with _upstream_errors(self.name, "delete_one"):
            result = await self._collection.delete_one(dict(filter))
        return result.deleted_count > 0

    async def find_one_and_update(
        self, filter: Filter, update: Mapping[str, Any]
    ) -> RecordT | None:
        """Atomically update the first match and return it as it is after the update."""
        with _upstream_errors(self.name, "find_one_and_update"):
            document = await self._collection.find_one_and_update(
                dict(filter),
                dict(update),
                return_document=ReturnDocument.AFTER,
            )
        return self._to_record(document)


class DataStore:
    """
    Handle shared by all requests.

    Resolvers go through the collections here and never build ObjectIds
    themselves: use ``parse_id`` / ``format_id``.
    """

    def __init__(self, database: AsyncIOMotorDatabase):
        self.database = database
        self.users: Collection[UserRecord] = Collection(database[USERS_COLLECTION], UserRecord)
        self.task_lists: Collection[TaskListRecord] = Collection(
            database[TASKS_COLLECTION], TaskListRecord
        )
        self.todos: Collection[TodoRecord] = Collection(database[TODOS_COLLECTION], TodoRecord)

    parse_id = staticmethod(parse_id)
    format_id = staticmethod(format_id)

    async def ping(self) -> None:
        with _upstream_errors(self.database.name, "ping"):
            await self.database.command("ping")

    async def ensure_indexes(self) -> None:
        """Create the indexes the resolvers rely on (idempotent)."""
        with _upstream_errors(self.database.name, "ensure_indexes"):
            await self.database[USERS_COLLECTION].create_index(
                [("email", ASCENDING)], unique=True, name="email_unique"
            )
            await self.database[TASKS_COLLECTION].create_index(
                [("memberIds", ASCENDING)], name="member_ids"
            )
            await self.database[TODOS_COLLECTION].create_index(
                [("taskListId", ASCENDING)], name="task_list_id"
            )
        logger.debug("Indexes ensured", database=self.database.name)
