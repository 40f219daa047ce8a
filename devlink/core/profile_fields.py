"""Profile Field Sanitizing — turns raw submissions into document fragments.

Invariants:
    - All functions are PURE: no IO, no async, no DB, no side effects
    - Absent or empty input fields are omitted, never written as null
    - skills: comma-split, each element trimmed, empty fragments dropped, order preserved
    - social links nested under a single "social" mapping; unsupplied links omitted
    - Sub-record entries carry only the keys their section allows; current is True
      only when the caller sent a real boolean true

Design Decisions:
    - merge_profile_fields merges "social" key-by-key: a partial social update must not
      drop links that were stored earlier
"""

from typing import Any, Mapping

from devlink.core.domain_types import ProfileSection, SocialPlatform

PROFILE_SCALAR_FIELDS = (
    "company", "website", "location", "bio", "status", "githubusername",
)

SECTION_FIELDS: dict[ProfileSection, tuple[str, ...]] = {
    ProfileSection.EXPERIENCE: (
        "title", "company", "location", "from", "to", "current", "description",
    ),
    ProfileSection.EDUCATION: (
        "school", "degree", "fieldofstudy", "from", "to", "current", "description",
    ),
}


def _supplied(value: Any) -> bool:
    if value is None:
        return False
    if isinstance(value, str):
        return value.strip() != ""
    return True


def parse_skills(raw: str | list[str]) -> list[str]:
    """'go, rust, c++' -> ['go', 'rust', 'c++']. Lists are trimmed element-wise."""
    items = raw.split(",") if isinstance(raw, str) else raw
    return [s for s in (item.strip() for item in items) if s]


def build_profile_fields(payload: Mapping[str, Any]) -> dict[str, Any]:
    """Sanitized field mapping containing only what the caller supplied."""
    fields: dict[str, Any] = {}
    for name in PROFILE_SCALAR_FIELDS:
        value = payload.get(name)
        if _supplied(value):
            fields[name] = value.strip() if isinstance(value, str) else value

    skills = payload.get("skills")
    if _supplied(skills):
        fields["skills"] = parse_skills(skills)

    social = {
        platform.value: payload[platform.value].strip()
        for platform in SocialPlatform
        if isinstance(payload.get(platform.value), str)
        and _supplied(payload[platform.value])
    }
    if social:
        fields["social"] = social
    return fields


def merge_profile_fields(
    current_social: Mapping[str, str] | None, fields: Mapping[str, Any],
) -> dict[str, Any]:
    """Fields to write onto an existing profile. Only supplied keys appear."""
    merged = dict(fields)
    if "social" in fields:
        merged["social"] = {**(current_social or {}), **fields["social"]}
    return merged


def build_entry(
    section: ProfileSection, payload: Mapping[str, Any], entry_id: str,
) -> dict[str, Any]:
    """Experience/education sub-record with a caller-provided id."""
    entry: dict[str, Any] = {"id": entry_id}
    for name in SECTION_FIELDS[section]:
        value = payload.get(name)
        if _supplied(value):
            entry[name] = value
    entry["current"] = payload.get("current") is True
    return entry
