"""Profile Schemas — response shape for profile documents.

Invariants:
    - user is the owner summary looked up by user_id, or None when the owner is gone
    - experience/education entries are returned as stored (JSON keys include "from")
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field

from devlink.core.repository_protocols import ProfileLike, UserLike
from devlink.schemas.auth import OwnerSummary


class ProfileResponse(BaseModel):
    id: UUID
    user: OwnerSummary | None
    company: str | None = None
    website: str | None = None
    location: str | None = None
    bio: str | None = None
    status: str
    githubusername: str | None = None
    skills: list[str] = Field(default_factory=list)
    social: dict[str, str] = Field(default_factory=dict)
    experience: list[dict] = Field(default_factory=list)
    education: list[dict] = Field(default_factory=list)
    date: datetime

    @classmethod
    def from_document(
        cls, profile: ProfileLike, owner: UserLike | None,
    ) -> "ProfileResponse":
        return cls(
            id=profile.id,
            user=OwnerSummary.model_validate(owner) if owner else None,
            company=profile.company,
            website=profile.website,
            location=profile.location,
            bio=profile.bio,
            status=profile.status,
            githubusername=profile.githubusername,
            skills=list(profile.skills or []),
            social=dict(profile.social or {}),
            experience=list(profile.experience or []),
            education=list(profile.education or []),
            date=profile.date,
        )
