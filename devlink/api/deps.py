"""Request Dependencies — validated bodies, caller identity, and service wiring.

Invariants:
    - validated_body runs ALL rules and raises RequestValidationFailed before any
      handler code executes, then hands the route a typed model from schemas/requests.py;
      routes declare it ahead of get_current_user_id
    - get_current_user_id admits a request only with a verifiable token
    - Token lookup order: x-auth-token header, then Authorization: Bearer
    - Services are built per request over the request's AsyncSession

Design Decisions:
    - Plain FastAPI Depends over middleware: public routes simply omit the dependency
"""

import json
import logging
from typing import Any, Callable, Coroutine, TypeVar
from uuid import UUID

from fastapi import Depends, Header, Request
from pydantic import BaseModel, ValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from devlink.config import get_settings
from devlink.core.errors import RequestValidationFailed, UnauthenticatedError
from devlink.core.request_rules import FieldRule, validate_payload
from devlink.infrastructure.database import get_db
from devlink.infrastructure.github_client import GitHubClient
from devlink.infrastructure.repositories import SqlDocumentStore
from devlink.infrastructure.tokens import TokenService
from devlink.services.accounts import AccountService
from devlink.services.post_engine import PostInteractionEngine
from devlink.services.profile_engine import ProfileMutationEngine

logger = logging.getLogger(__name__)

MISSING_TOKEN_MESSAGE = "No token, authorization denied"

RequestModel = TypeVar("RequestModel", bound=BaseModel)


def _violations_from(exc: ValidationError) -> list[dict]:
    return [
        {"field": ".".join(str(part) for part in e["loc"]), "message": e["msg"]}
        for e in exc.errors()
    ]


def validated_body(
    rules: tuple[FieldRule, ...], model: type[RequestModel],
) -> Callable[[Request], Coroutine[Any, Any, RequestModel]]:
    """Build a dependency that parses the JSON body, enforces rules, returns model."""

    async def dependency(request: Request) -> RequestModel:
        raw = await request.body()
        try:
            payload = json.loads(raw) if raw else {}
        except ValueError:
            payload = {}
        if not isinstance(payload, dict):
            payload = {}
        violations = validate_payload(payload, rules)
        if violations:
            raise RequestValidationFailed([v.to_dict() for v in violations])
        try:
            return model.model_validate(payload)
        except ValidationError as e:
            logger.warning(f"{model.__name__} rejected a payload the rules accepted")
            raise RequestValidationFailed(_violations_from(e))

    return dependency


def get_token_service() -> TokenService:
    settings = get_settings()
    return TokenService(
        settings.jwt_secret, settings.jwt_algorithm, settings.jwt_expires_seconds,
    )


def _extract_token(x_auth_token: str | None, authorization: str | None) -> str | None:
    if x_auth_token:
        return x_auth_token.strip()
    if authorization:
        scheme, _, credential = authorization.partition(" ")
        if scheme.lower() == "bearer" and credential.strip():
            return credential.strip()
    return None


async def get_current_user_id(
    x_auth_token: str | None = Header(None),
    authorization: str | None = Header(None),
    tokens: TokenService = Depends(get_token_service),
) -> UUID:
    """Identity gate: caller's user id or UnauthenticatedError."""
    token = _extract_token(x_auth_token, authorization)
    if not token:
        raise UnauthenticatedError(MISSING_TOKEN_MESSAGE)
    return tokens.verify(token)


def get_store(db: AsyncSession = Depends(get_db)) -> SqlDocumentStore:
    return SqlDocumentStore(db, get_settings().storage_timeout_seconds)


def get_account_service(
    store: SqlDocumentStore = Depends(get_store),
    tokens: TokenService = Depends(get_token_service),
) -> AccountService:
    return AccountService(store, tokens)


def get_profile_engine(
    store: SqlDocumentStore = Depends(get_store),
) -> ProfileMutationEngine:
    return ProfileMutationEngine(store)


def get_post_engine(
    store: SqlDocumentStore = Depends(get_store),
) -> PostInteractionEngine:
    return PostInteractionEngine(store)


def get_github_client() -> GitHubClient:
    settings = get_settings()
    return GitHubClient(
        settings.github_client_id,
        settings.github_client_secret,
        settings.github_timeout_seconds,
    )
