"""Tests for resolving the authenticated user from an Authorization header."""

from datetime import UTC, datetime, timedelta

import jwt
import pytest
import structlog

from tasklists.auth.context import extract_token, resolve_auth_context
from tasklists.logging import clear_request_context


@pytest.fixture(autouse=True)
def clean_log_context():
    clear_request_context()
    yield
    clear_request_context()


async def _insert_user(store) -> str:
    inserted_id = await store.users.insert_one(
        {"name": "Ada", "email": "ada@example.com", "hashedPassword": "x"}
    )
    return str(inserted_id)


class TestExtractToken:
    def test_missing_header(self):
        assert extract_token(None) is None
        assert extract_token("") is None

    def test_bare_token(self):
        assert extract_token("abc.def.ghi") == "abc.def.ghi"

    def test_bearer_prefix_is_stripped(self):
        assert extract_token("Bearer abc.def.ghi") == "abc.def.ghi"
        assert extract_token("bearer  abc.def.ghi ") == "abc.def.ghi"

    def test_bearer_without_token(self):
        assert extract_token("Bearer ") is None
        assert extract_token("bearer") is None
        assert extract_token("   ") is None


class TestResolveAuthContext:
    @pytest.mark.asyncio
    async def test_no_header_is_anonymous(self, store, tokens):
        auth = await resolve_auth_context(None, store, tokens)
        assert auth.user is None
        assert auth.is_authenticated is False

    @pytest.mark.asyncio
    async def test_invalid_token_is_anonymous(self, store, tokens):
        auth = await resolve_auth_context("not-a-token", store, tokens)
        assert auth.user is None

    @pytest.mark.asyncio
    async def test_expired_token_is_anonymous(self, store, tokens):
        user_id = await _insert_user(store)
        past = datetime.now(UTC) - timedelta(days=10)
        token = jwt.encode(
            {"sub": user_id, "iat": past, "exp": past + timedelta(days=7)},
            tokens.secret_key,
            algorithm="HS256",
        )

        auth = await resolve_auth_context(token, store, tokens)
        assert auth.user is None

    @pytest.mark.asyncio
    async def test_valid_token_resolves_user(self, store, tokens):
        user_id = await _insert_user(store)

        auth = await resolve_auth_context(tokens.issue(user_id), store, tokens)

        assert auth.is_authenticated is True
        assert auth.user_id == user_id
        assert auth.user.email == "ada@example.com"
        assert structlog.contextvars.get_contextvars()["user_id"] == user_id

    @pytest.mark.asyncio
    async def test_bearer_header_resolves_user(self, store, tokens):
        user_id = await _insert_user(store)

        auth = await resolve_auth_context(f"Bearer {tokens.issue(user_id)}", store, tokens)

        assert auth.user_id == user_id

    @pytest.mark.asyncio
    async def test_deleted_user_is_anonymous(self, store, tokens):
        token = tokens.issue("65f0c0ffee0000000000beef")

        auth = await resolve_auth_context(token, store, tokens)
        assert auth.user is None

    @pytest.mark.asyncio
    async def test_malformed_subject_is_anonymous(self, store, tokens):
        auth = await resolve_auth_context(tokens.issue("not-an-object-id"), store, tokens)
        assert auth.user is None
