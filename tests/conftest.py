"""
Shared pytest fixtures and configuration for all tests.
"""

import copy
import sys
from pathlib import Path
from types import SimpleNamespace
from typing import Any
from unittest.mock import MagicMock

import pytest
from bson import ObjectId
from pymongo import ReturnDocument
from pymongo.errors import DuplicateKeyError

# Add src directory to path so imports work without an install
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from tasklists.auth.tokens import TokenService  # noqa: E402
from tasklists.database import DataStore  # noqa: E402

TEST_SECRET = "test-secret-key-for-testing-only"


def _matches(document: dict[str, Any], filter: dict[str, Any]) -> bool:
    for key, expected in filter.items():
        actual = document.get(key)
        if isinstance(expected, dict) and "$in" in expected:
            candidates = expected["$in"]
            if isinstance(actual, list):
                if not any(item in candidates for item in actual):
                    return False
            elif actual not in candidates:
                return False
        elif isinstance(actual, list) and not isinstance(expected, list):
            if expected not in actual:
                return False
        elif actual != expected:
            return False
    return True


def _apply_update(document: dict[str, Any], update: dict[str, Any]) -> None:
    for operator, fields in update.items():
        for key, value in fields.items():
            if operator == "$set":
                document[key] = value
            elif operator == "$push":
                document.setdefault(key, []).append(value)
            elif operator == "$addToSet":
                values = document.setdefault(key, [])
                if value not in values:
                    values.append(value)
            else:
                raise NotImplementedError(f"Unsupported update operator: {operator}")


class FakeCursor:
    def __init__(self, documents: list[dict[str, Any]]):
        self._documents = documents

    async def to_list(self, length: int | None = None) -> list[dict[str, Any]]:
        return self._documents if length is None else self._documents[:length]


class FakeCollection:
    """In-memory stand-in for the subset of AsyncIOMotorCollection the gateway uses."""

    def __init__(self, name: str):
        self.name = name
        self.documents: list[dict[str, Any]] = []
        self.unique_fields: set[str] = set()
        self.indexes: dict[str, list[tuple[str, int]]] = {}

    def _first(self, filter: dict[str, Any]) -> dict[str, Any] | None:
        return next((doc for doc in self.documents if _matches(doc, filter)), None)

    async def find_one(self, filter: dict[str, Any]) -> dict[str, Any] | None:
        document = self._first(filter)
        return copy.deepcopy(document) if document is not None else None

    def find(self, filter: dict[str, Any]) -> FakeCursor:
        return FakeCursor([copy.deepcopy(doc) for doc in self.documents if _matches(doc, filter)])

    async def insert_one(self, document: dict[str, Any]) -> SimpleNamespace:
        document = copy.deepcopy(document)
        document.setdefault("_id", ObjectId())
        for field in self.unique_fields:
            if any(doc.get(field) == document.get(field) for doc in self.documents):
                raise DuplicateKeyError(f"E11000 duplicate key error collection: {self.name}")
        self.documents.append(document)
        return SimpleNamespace(inserted_id=document["_id"])

    async def update_one(self, filter: dict[str, Any], update: dict[str, Any]) -> SimpleNamespace:
        document = self._first(filter)
        if document is None:
            return SimpleNamespace(matched_count=0, modified_count=0)
        _apply_update(document, update)
        return SimpleNamespace(matched_count=1, modified_count=1)

    async def delete_one(self, filter: dict[str, Any]) -> SimpleNamespace:
        document = self._first(filter)
        if document is None:
            return SimpleNamespace(deleted_count=0)
        self.documents.remove(document)
        return SimpleNamespace(deleted_count=1)

    async def find_one_and_update(
        self,
        filter: dict[str, Any],
        update: dict[str, Any],
        return_document: bool = ReturnDocument.BEFORE,
    ) -> dict[str, Any] | None:
        document = self._first(filter)
        if document is None:
            return None
        before = copy.deepcopy(document)
        _apply_update(document, update)
        return copy.deepcopy(document) if return_document == ReturnDocument.AFTER else before

    async def create_index(self, keys, unique: bool = False, name: str | None = None) -> str:
        index_name = name or "_".join(f"{field}_{direction}" for field, direction in keys)
        self.indexes[index_name] = list(keys)
        if unique:
            self.unique_fields.update(field for field, _ in keys)
        return index_name


class FakeDatabase:
    """In-memory stand-in for AsyncIOMotorDatabase."""

    def __init__(self, name: str = "tasklists_test"):
        self.name = name
        self.client = MagicMock()
        self._collections: dict[str, FakeCollection] = {}

    def __getitem__(self, name: str) -> FakeCollection:
        if name not in self._collections:
            self._collections[name] = FakeCollection(name)
        return self._collections[name]

    async def command(self, name: str) -> dict[str, Any]:
        return {"ok": 1.0}


class GraphQLTestClient:
    """Executes documents against the schema with a freshly built request context."""

    def __init__(self, store: DataStore, tokens: TokenService):
        self.store = store
        self.tokens = tokens

    async def execute(
        self,
        query: str,
        variables: dict[str, Any] | None = None,
        token: str | None = None,
    ):
        from tasklists.graphql.schema import build_context, schema

        context = await build_context(token, self.store, self.tokens)
        return await schema.execute(query, variable_values=variables, context_value=context)

    async def sign_up(self, email: str, password: str = "pw", name: str = "User") -> dict[str, Any]:
        result = await self.execute(
            """
            mutation SignUp($input: SignUpInput!) {
              signUp(input: $input) { token user { id name email avatar } }
            }
            """,
            {"input": {"email": email, "password": password, "name": name}},
        )
        assert result.errors is None, result.errors
        return result.data["signUp"]


@pytest.fixture
def fake_db() -> FakeDatabase:
    return FakeDatabase()


@pytest.fixture
def store(fake_db: FakeDatabase) -> DataStore:
    return DataStore(fake_db)


@pytest.fixture
def tokens() -> TokenService:
    return TokenService(secret_key=TEST_SECRET)


@pytest.fixture
def graphql_client(store: DataStore, tokens: TokenService) -> GraphQLTestClient:
    return GraphQLTestClient(store, tokens)


# Test markers
def pytest_configure(config: Any) -> None:
    """Register custom markers."""
    config.addinivalue_line("markers", "integration: mark test as integration test")
    config.addinivalue_line("markers", "unit: mark test as unit test")
