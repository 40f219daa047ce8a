"""Account Service — registration, login and the caller's own user record.

Invariants:
    - E-mail uniqueness checked before insert AND enforced by the unique index;
      both paths surface ConflictError("User already exist") and create no user
    - Unknown e-mail and wrong password produce the same InvalidCredentialsError
    - Tokens are issued only after the user row is committed
"""

import logging
from uuid import UUID

from devlink.core.errors import ConflictError, InvalidCredentialsError, ResourceNotFoundError
from devlink.core.repository_protocols import DocumentStore, UserLike
from devlink.infrastructure.passwords import avatar_url_for, hash_password, verify_password
from devlink.infrastructure.tokens import TokenService

logger = logging.getLogger(__name__)

USER_EXISTS_MESSAGE = "User already exist"


class AccountService:
    """User registration and authentication."""

    def __init__(self, store: DocumentStore, tokens: TokenService):
        self.store = store
        self.tokens = tokens

    async def register(self, name: str, email: str, password: str) -> str:
        email = email.strip().lower()
        if await self.store.users.get_by_email(email):
            raise ConflictError(USER_EXISTS_MESSAGE, code="USER_EXISTS")

        user = await self.store.users.add(
            name=name.strip(),
            email=email,
            password_hash=hash_password(password),
            avatar=avatar_url_for(email),
        )
        try:
            await self.store.commit()
        except ConflictError:
            raise ConflictError(USER_EXISTS_MESSAGE, code="USER_EXISTS")

        logger.info("User registered", extra={"user_id": user.id})
        return self.tokens.issue(user.id)

    async def login(self, email: str, password: str) -> str:
        user = await self.store.users.get_by_email(email.strip().lower())
        if user is None or not verify_password(user.password_hash, password):
            raise InvalidCredentialsError()
        logger.info("User logged in", extra={"user_id": user.id})
        return self.tokens.issue(user.id)

    async def get_me(self, user_id: UUID) -> UserLike:
        user = await self.store.users.get(user_id)
        if user is None:
            raise ResourceNotFoundError("User", str(user_id), message="User not found")
        return user
