"""
User GraphQL type definitions
"""

from typing import TYPE_CHECKING

import strawberry

if TYPE_CHECKING:
    from ...database import UserRecord


@strawberry.type
class User:
    """User type for GraphQL API."""

    id: strawberry.ID
    name: str
    email: str
    avatar: str | None

    @classmethod
    def from_record(cls, record: "UserRecord") -> "User":
        return cls(
            id=strawberry.ID(record.id),
            name=record.name,
            email=record.email,
            avatar=record.avatar,
        )


@strawberry.type
class AuthUser:
    """A user together with a freshly issued session token."""

    user: User
    token: str
