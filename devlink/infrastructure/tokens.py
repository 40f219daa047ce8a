"""Bearer Tokens — signs and verifies the credential that carries caller identity.

Invariants:
    - Payload shape is {"user": {"id": "<uuid>"}, "iat": ..., "exp": ...}
    - verify_token returns a UUID or raises UnauthenticatedError; never returns None
    - Bad signature, malformed payload, missing/invalid user id and expiry are
      indistinguishable to the caller ("Token is not valid")

Design Decisions:
    - PyJWT HS256 with a shared secret from settings
    - TokenService is a small value object so tests can issue tokens with a short or
      negative lifetime without touching global settings
"""

import logging
from datetime import datetime, timedelta, timezone
from uuid import UUID

import jwt

from devlink.core.errors import UnauthenticatedError

logger = logging.getLogger(__name__)

INVALID_TOKEN_MESSAGE = "Token is not valid"


class TokenService:
    """Issues and verifies signed bearer tokens."""

    def __init__(self, secret: str, algorithm: str = "HS256", expires_seconds: int = 36_000):
        self.secret = secret
        self.algorithm = algorithm
        self.expires_seconds = expires_seconds

    def issue(self, user_id: UUID) -> str:
        now = datetime.now(timezone.utc)
        payload = {
            "user": {"id": str(user_id)},
            "iat": now,
            "exp": now + timedelta(seconds=self.expires_seconds),
        }
        return jwt.encode(payload, self.secret, algorithm=self.algorithm)

    def verify(self, token: str) -> UUID:
        try:
            payload = jwt.decode(token, self.secret, algorithms=[self.algorithm])
        except jwt.ExpiredSignatureError:
            logger.info("Rejected expired token")
            raise UnauthenticatedError(INVALID_TOKEN_MESSAGE)
        except jwt.InvalidTokenError as e:
            logger.info(f"Rejected invalid token: {e}")
            raise UnauthenticatedError(INVALID_TOKEN_MESSAGE)

        user = payload.get("user")
        raw_id = user.get("id") if isinstance(user, dict) else None
        try:
            return UUID(str(raw_id))
        except ValueError:
            logger.info("Rejected token without a valid user id")
            raise UnauthenticatedError(INVALID_TOKEN_MESSAGE)
