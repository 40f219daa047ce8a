"""Profile Routes — profile reads, upsert, sub-record edits, account deletion, GitHub repos.

Invariants:
    - Mutating routes declare validated_body (when they take a body) before the identity gate
    - Public routes: GET /api/profile, GET /api/profile/user/{user_id}, GET /api/profile/github/{username}
    - Routes never contain business logic (delegate to ProfileMutationEngine)
"""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends

from devlink.api.deps import (
    get_current_user_id, get_github_client, get_profile_engine, validated_body,
)
from devlink.core.domain_types import ProfileSection
from devlink.core.request_rules import EDUCATION_RULES, EXPERIENCE_RULES, PROFILE_RULES
from devlink.infrastructure.github_client import GitHubClient
from devlink.schemas.post import MessageResponse
from devlink.schemas.profile import ProfileResponse
from devlink.schemas.requests import EducationRequest, ExperienceRequest, ProfileRequest
from devlink.services.profile_engine import ProfileMutationEngine

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/profile", tags=["profile"])


@router.get("/me", response_model=ProfileResponse)
async def get_my_profile(
    user_id: UUID = Depends(get_current_user_id),
    engine: ProfileMutationEngine = Depends(get_profile_engine),
):
    return await engine.get_own_profile(user_id)


@router.post("", response_model=ProfileResponse)
async def upsert_profile(
    body: ProfileRequest = Depends(validated_body(PROFILE_RULES, ProfileRequest)),
    user_id: UUID = Depends(get_current_user_id),
    engine: ProfileMutationEngine = Depends(get_profile_engine),
):
    """Create the caller's profile, or update only the supplied fields."""
    return await engine.upsert_profile(user_id, body)


@router.get("", response_model=list[ProfileResponse])
async def list_profiles(
    engine: ProfileMutationEngine = Depends(get_profile_engine),
):
    return await engine.list_profiles()


@router.get("/user/{user_id}", response_model=ProfileResponse)
async def get_profile_by_user(
    user_id: str, engine: ProfileMutationEngine = Depends(get_profile_engine),
):
    return await engine.get_profile_by_user(user_id)


@router.delete("", response_model=MessageResponse)
async def delete_profile_and_user(
    user_id: UUID = Depends(get_current_user_id),
    engine: ProfileMutationEngine = Depends(get_profile_engine),
):
    """Delete the caller's profile and user. Posts are kept."""
    await engine.delete_profile_and_user(user_id)
    return MessageResponse(msg="User deleted")


@router.put("/experience", response_model=ProfileResponse)
async def add_experience(
    body: ExperienceRequest = Depends(
        validated_body(EXPERIENCE_RULES, ExperienceRequest),
    ),
    user_id: UUID = Depends(get_current_user_id),
    engine: ProfileMutationEngine = Depends(get_profile_engine),
):
    return await engine.add_entry(user_id, ProfileSection.EXPERIENCE, body)


@router.delete("/experience/{exp_id}", response_model=ProfileResponse)
async def remove_experience(
    exp_id: str,
    user_id: UUID = Depends(get_current_user_id),
    engine: ProfileMutationEngine = Depends(get_profile_engine),
):
    return await engine.remove_entry(user_id, ProfileSection.EXPERIENCE, exp_id)


@router.put("/education", response_model=ProfileResponse)
async def add_education(
    body: EducationRequest = Depends(
        validated_body(EDUCATION_RULES, EducationRequest),
    ),
    user_id: UUID = Depends(get_current_user_id),
    engine: ProfileMutationEngine = Depends(get_profile_engine),
):
    return await engine.add_entry(user_id, ProfileSection.EDUCATION, body)


@router.delete("/education/{edu_id}", response_model=ProfileResponse)
async def remove_education(
    edu_id: str,
    user_id: UUID = Depends(get_current_user_id),
    engine: ProfileMutationEngine = Depends(get_profile_engine),
):
    return await engine.remove_entry(user_id, ProfileSection.EDUCATION, edu_id)


@router.get("/github/{username}")
async def get_github_repos(
    username: str, github: GitHubClient = Depends(get_github_client),
):
    """Five most recent public repositories of a GitHub user."""
    return await github.list_recent_repos(username)
