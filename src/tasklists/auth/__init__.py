"""Authentication for the Task Lists backend."""

from .context import AuthContext, extract_token, resolve_auth_context
from .passwords import hash_password, verify_password
from .tokens import TokenPayload, TokenService

__all__ = [
    "AuthContext",
    "TokenPayload",
    "TokenService",
    "extract_token",
    "hash_password",
    "resolve_auth_context",
    "verify_password",
]
