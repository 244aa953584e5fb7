"""Authentication context for request handling."""

from __future__ import annotations

from dataclasses import dataclass

from ..database import DataStore, UserRecord
from ..errors import MalformedInput
from ..logging import bind_user_id, get_logger
from .tokens import TokenService

logger = get_logger(__name__)

BEARER_SCHEME = "bearer"


@dataclass(frozen=True)
class AuthContext:
    """Runtime authentication context for a request."""

    user: UserRecord | None
    token: str | None

    @property
    def is_authenticated(self) -> bool:
        """Check if the request is authenticated."""
        return self.user is not None

    @property
    def user_id(self) -> str | None:
        return self.user.id if self.user else None


ANONYMOUS = AuthContext(user=None, token=None)


def extract_token(authorization: str | None) -> str | None:
    """
    Pull the session token out of an Authorization header value.

    The header normally carries the bare token; a ``Bearer`` prefix is
    accepted and stripped.
    """
    if not authorization:
        return None
    parts = authorization.split(None, 1)
    if not parts:
        return None
    if parts[0].lower() == BEARER_SCHEME:
        return parts[1].strip() if len(parts) == 2 else None
    return authorization.strip()


async def resolve_auth_context(
    authorization: str | None,
    store: DataStore,
    tokens: TokenService,
) -> AuthContext:
    """
    Resolve the user behind an Authorization header.

    This function:
    1. Extracts the token from the header (absent -> anonymous)
    2. Verifies it with the TokenService (invalid or expired -> anonymous)
    3. Loads the user from the Users collection (gone -> anonymous)

    Anonymous requests are not rejected here; resolvers that need a user
    raise AuthenticationRequired themselves.
    """
    token = extract_token(authorization)
    if token is None:
        return ANONYMOUS

    payload = tokens.verify(token)
    if payload is None:
        return ANONYMOUS

    try:
        user = await store.users.find_by_id(payload.user_id)
    except MalformedInput:
        logger.warning("Session token carries a malformed user id", user_id=payload.user_id)
        return ANONYMOUS

    if user is None:
        logger.info("Session token refers to a missing user", user_id=payload.user_id)
        return ANONYMOUS

    bind_user_id(user.id)
    return AuthContext(user=user, token=token)
