from __future__ import annotations

from typing import TYPE_CHECKING

import strawberry
from pymongo.errors import DuplicateKeyError

from ...auth.passwords import dummy_password_hash, hash_password_async, verify_password_async
from ...errors import EmailAlreadyInUse, InvalidCredentials, MalformedInput, NotFound
from ...logging import get_logger
from ..access_control import get_store, get_tokens

if TYPE_CHECKING:
    from ..mutations.root import SignInInput, SignUpInput
    from ..types.user import AuthUser

logger = get_logger(__name__)


def normalize_email(email: str) -> str:
    return email.strip().lower()


def _require_text(value: str | None, field: str) -> str:
    if value is None or not value.strip():
        raise MalformedInput(f"'{field}' must not be blank")
    return value


async def sign_up(info: strawberry.Info, input: SignUpInput) -> AuthUser:
    """
    Create an account and return it with a session token.

    Raises:
        MalformedInput: If email, password or name is blank
        EmailAlreadyInUse: If the email already has an account
    """
    from ..types.user import AuthUser, User

    email = normalize_email(_require_text(input.email, "email"))
    password = _require_text(input.password, "password")
    name = _require_text(input.name, "name").strip()

    store = get_store(info)
    if await store.users.find_one({"email": email}) is not None:
        raise EmailAlreadyInUse(email)

    document = {
        "name": name,
        "email": email,
        "hashedPassword": await hash_password_async(password),
    }
    if input.avatar:
        document["avatar"] = input.avatar

    try:
        inserted_id = await store.users.insert_one(document)
    except DuplicateKeyError as e:
        # Lost a race against a concurrent sign-up with the same email
        raise EmailAlreadyInUse(email) from e

    user = await store.users.find_by_id(inserted_id)
    if user is None:
        raise NotFound(f"User {store.format_id(inserted_id)} was not found after insert")

    logger.info("User signed up", new_user_id=user.id)
    return AuthUser(user=User.from_record(user), token=get_tokens(info).issue(user.id))


async def sign_in(info: strawberry.Info, input: SignInInput) -> AuthUser:
    """
    Authenticate with email and password.

    Raises:
        InvalidCredentials: If no account has the email or the password does not match
    """
    from ..types.user import AuthUser, User

    store = get_store(info)
    user = await store.users.find_one({"email": normalize_email(input.email)})
    hashed = user.hashed_password if user is not None else dummy_password_hash()
    password_ok = await verify_password_async(input.password, hashed)

    if user is None or not password_ok:
        logger.info("Sign-in rejected")
        raise InvalidCredentials()

    logger.info("User signed in", signed_in_user_id=user.id)
    return AuthUser(user=User.from_record(user), token=get_tokens(info).issue(user.id))
