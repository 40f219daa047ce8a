"""Auth Schemas — public-facing user and token shapes.

Invariants:
    - UserResponse never carries the password hash
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict


class TokenResponse(BaseModel):
    token: str


class UserResponse(BaseModel):
    """Authenticated user's own record."""
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str
    email: str
    avatar: str
    date: datetime


class OwnerSummary(BaseModel):
    """Owner fields populated into profile responses."""
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str
    avatar: str
