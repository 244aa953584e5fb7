"""Signed session tokens for self-issued authentication."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta

import jwt
from jwt.exceptions import InvalidTokenError

from ..errors import ConfigurationError
from ..logging import get_logger

logger = get_logger(__name__)

DEFAULT_TOKEN_EXPIRY = timedelta(days=7)


@dataclass(frozen=True)
class TokenPayload:
    """Claims extracted from a verified session token."""

    user_id: str
    expires_at: datetime


class TokenService:
    """Issues and verifies HMAC-signed JWT session tokens."""

    def __init__(
        self,
        secret_key: str,
        algorithm: str = "HS256",
        expiry: timedelta = DEFAULT_TOKEN_EXPIRY,
    ):
        if not secret_key:
            raise ConfigurationError("Token signing secret must not be empty")
        self.secret_key = secret_key
        self.algorithm = algorithm
        self.expiry = expiry

    def issue(self, user_id: str) -> str:
        """Issue a token for ``user_id`` that expires after the configured window."""
        now = datetime.now(UTC)
        payload = {
            "sub": str(user_id),
            "iat": now,
            "exp": now + self.expiry,
        }
        return jwt.encode(payload, self.secret_key, algorithm=self.algorithm)

    def verify(self, token: str | None) -> TokenPayload | None:
        """
        Verify a token and return its payload.

        Returns None instead of raising when the token is missing, malformed,
        signed with another secret, expired, or lacks a subject.
        """
        if not token:
            return None

        try:
            payload = jwt.decode(
                token,
                self.secret_key,
                algorithms=[self.algorithm],
                options={"require": ["sub", "exp"], "verify_exp": True},
            )
        except InvalidTokenError as e:
            logger.warning("Session token rejected", error=str(e))
            return None

        subject = payload.get("sub")
        if not isinstance(subject, str) or not subject:
            logger.warning("Session token has no usable subject")
            return None

        return TokenPayload(
            user_id=subject,
            expires_at=datetime.fromtimestamp(payload["exp"], UTC),
        )
