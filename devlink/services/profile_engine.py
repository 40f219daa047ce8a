"""Profile Mutation Engine — upsert profiles and edit their ordered sub-records.

Invariants:
    - Every mutation targets the caller's own profile (owner_id comes from the token)
    - Upsert writes only supplied fields; omitted fields keep their stored value
    - New experience/education entries get a fresh id and go to index 0
    - Removing an unknown entry id is a no-op, not an error
    - Deleting a profile also deletes its user in the same commit; posts are kept

Design Decisions:
    - Pure transforms in core/ (profile_fields, sub_records), IO here; typed request
      models are dumped to plain mappings before they reach core/
    - Writes are version-checked by the ORM (Profile.version); a lost race surfaces
      as ConcurrencyError from DocumentStore.commit()
"""

import logging
import uuid
from uuid import UUID

from devlink.core.domain_types import ProfileSection
from devlink.core.errors import ResourceNotFoundError
from devlink.core.profile_fields import (
    build_entry, build_profile_fields, merge_profile_fields,
)
from devlink.core.repository_protocols import DocumentStore, ProfileLike
from devlink.core.sub_records import prepend, remove_by_id
from devlink.schemas.profile import ProfileResponse
from devlink.schemas.requests import EducationRequest, ExperienceRequest, ProfileRequest

logger = logging.getLogger(__name__)

NO_PROFILE_MESSAGE = "There is no profile for this user"
PROFILE_NOT_FOUND_MESSAGE = "Profile not found"


def parse_user_id(raw: str | UUID) -> UUID | None:
    if isinstance(raw, UUID):
        return raw
    try:
        return UUID(raw)
    except ValueError:
        return None


class ProfileMutationEngine:
    """Profile reads and mutations over a DocumentStore."""

    def __init__(self, store: DocumentStore):
        self.store = store

    async def _respond(self, profile: ProfileLike) -> ProfileResponse:
        owner = await self.store.users.get(profile.user_id)
        return ProfileResponse.from_document(profile, owner)

    async def _own_profile(self, owner_id: UUID) -> ProfileLike:
        profile = await self.store.profiles.get_by_user(owner_id)
        if profile is None:
            raise ResourceNotFoundError(
                "Profile", str(owner_id), message=NO_PROFILE_MESSAGE,
            )
        return profile

    # ─── Reads ───────────────────────────────────────────────────

    async def get_own_profile(self, owner_id: UUID) -> ProfileResponse:
        return await self._respond(await self._own_profile(owner_id))

    async def list_profiles(self) -> list[ProfileResponse]:
        profiles = await self.store.profiles.list_all()
        owners = await self.store.users.get_many([p.user_id for p in profiles])
        return [
            ProfileResponse.from_document(p, owners.get(p.user_id))
            for p in profiles
        ]

    async def get_profile_by_user(self, user_id: str | UUID) -> ProfileResponse:
        uid = parse_user_id(user_id)
        profile = await self.store.profiles.get_by_user(uid) if uid else None
        if profile is None:
            raise ResourceNotFoundError(
                "Profile", str(user_id), message=PROFILE_NOT_FOUND_MESSAGE,
            )
        return await self._respond(profile)

    # ─── Mutations ───────────────────────────────────────────────

    async def upsert_profile(
        self, owner_id: UUID, request: ProfileRequest,
    ) -> ProfileResponse:
        owner = await self.store.users.get(owner_id)
        if owner is None:
            raise ResourceNotFoundError("User", str(owner_id), message="User not found")

        fields = build_profile_fields(request.model_dump(exclude_none=True))
        profile = await self.store.profiles.get_by_user(owner_id)
        if profile is None:
            profile = await self.store.profiles.add(owner_id, fields)
            action = "created"
        else:
            for name, value in merge_profile_fields(profile.social, fields).items():
                setattr(profile, name, value)
            action = "updated"

        await self.store.commit()
        logger.info(f"Profile {action}", extra={"user_id": owner_id})
        return ProfileResponse.from_document(profile, owner)

    async def add_entry(
        self,
        owner_id: UUID,
        section: ProfileSection,
        request: ExperienceRequest | EducationRequest,
    ) -> ProfileResponse:
        profile = await self._own_profile(owner_id)
        entry = build_entry(
            section,
            request.model_dump(by_alias=True, exclude_none=True),
            str(uuid.uuid4()),
        )
        setattr(
            profile, section.value, prepend(getattr(profile, section.value), entry),
        )
        await self.store.commit()
        logger.info(
            f"Added {section.value} entry {entry['id']}",
            extra={"user_id": owner_id},
        )
        return await self._respond(profile)

    async def remove_entry(
        self, owner_id: UUID, section: ProfileSection, entry_id: str,
    ) -> ProfileResponse:
        profile = await self._own_profile(owner_id)
        entries = getattr(profile, section.value)
        remaining = remove_by_id(entries, entry_id)
        if len(remaining) != len(entries):
            setattr(profile, section.value, remaining)
            await self.store.commit()
            logger.info(
                f"Removed {section.value} entry {entry_id}",
                extra={"user_id": owner_id},
            )
        return await self._respond(profile)

    async def delete_profile_and_user(self, owner_id: UUID) -> None:
        """Remove profile and user. The user's posts are intentionally left in place."""
        await self.store.profiles.delete_by_user(owner_id)
        await self.store.users.delete(owner_id)
        await self.store.commit()
        logger.info("Profile and user deleted", extra={"user_id": owner_id})
