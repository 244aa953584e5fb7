"""
Shared access helpers for GraphQL resolvers
"""

from typing import TYPE_CHECKING

import strawberry

from ..errors import AuthenticationRequired
from ..logging import get_logger

if TYPE_CHECKING:
    from ..auth.context import AuthContext
    from ..auth.tokens import TokenService
    from ..database import DataStore, UserRecord
    from .loaders import Loaders

logger = get_logger(__name__)


def get_auth_context_from_info(info: strawberry.Info) -> "AuthContext | None":
    """Return the AuthContext built for this request, if any."""
    return info.context.get("auth")


def get_store(info: strawberry.Info) -> "DataStore":
    return info.context["store"]


def get_tokens(info: strawberry.Info) -> "TokenService":
    return info.context["tokens"]


def get_loaders(info: strawberry.Info) -> "Loaders":
    return info.context["loaders"]


def require_user(info: strawberry.Info) -> "UserRecord":
    """
    Return the authenticated user or raise AuthenticationRequired.

    Protected resolvers call this before touching the store.
    """
    auth_context = get_auth_context_from_info(info)
    if auth_context is None or auth_context.user is None:
        logger.info("Unauthenticated access to protected field", field=info.field_name)
        raise AuthenticationRequired()
    return auth_context.user
