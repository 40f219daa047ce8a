"""Auth Routes — login and the authenticated caller's user record.

Invariants:
    - POST /api/auth validates the body before touching storage
    - GET /api/auth never returns the password hash
"""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends

from devlink.api.deps import get_account_service, get_current_user_id, validated_body
from devlink.core.request_rules import LOGIN_RULES
from devlink.schemas.auth import TokenResponse, UserResponse
from devlink.schemas.requests import LoginRequest
from devlink.services.accounts import AccountService

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.get("", response_model=UserResponse)
async def get_authenticated_user(
    user_id: UUID = Depends(get_current_user_id),
    accounts: AccountService = Depends(get_account_service),
):
    """Caller's own user record."""
    return UserResponse.model_validate(await accounts.get_me(user_id))


@router.post("", response_model=TokenResponse)
async def login(
    body: LoginRequest = Depends(validated_body(LOGIN_RULES, LoginRequest)),
    accounts: AccountService = Depends(get_account_service),
):
    """Authenticate with e-mail and password, returns a signed token."""
    token = await accounts.login(body.email, body.password)
    return TokenResponse(token=token)
