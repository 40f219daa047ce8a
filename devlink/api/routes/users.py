"""User Routes — registration."""

from fastapi import APIRouter, Depends

from devlink.api.deps import get_account_service, validated_body
from devlink.core.request_rules import REGISTER_RULES
from devlink.schemas.auth import TokenResponse
from devlink.schemas.requests import RegisterRequest
from devlink.services.accounts import AccountService

router = APIRouter(prefix="/api/users", tags=["users"])


@router.post("", response_model=TokenResponse)
async def register(
    body: RegisterRequest = Depends(validated_body(REGISTER_RULES, RegisterRequest)),
    accounts: AccountService = Depends(get_account_service),
):
    """Register a user and return a signed token."""
    token = await accounts.register(body.name, body.email, body.password)
    return TokenResponse(token=token)
