"""Request Schemas — typed request bodies handed to services once the rules pass.

Invariants:
    - Built only after core/request_rules.validate_payload found no violation, so a
      ValidationError here means the two disagree (reported as 400 all the same)
    - strict: no silent coercion ("false" is not a bool, 7 is not a str)
    - max_length mirrors the storage column sizes in models/
    - Text fields are stripped; passwords are kept verbatim

Design Decisions:
    - "from" is a Python keyword: the attribute is from_, aliased to the wire name
    - Unknown keys are ignored, as with any JSON client talking to the API
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator

from devlink.core.profile_fields import parse_skills


def _strip(v: str | None) -> str | None:
    return v.strip() if isinstance(v, str) else v


class _Request(BaseModel):
    model_config = ConfigDict(strict=True, populate_by_name=True)


class RegisterRequest(_Request):
    name: str = Field(min_length=1, max_length=100)
    email: str = Field(max_length=255)
    password: str = Field(min_length=6)

    @field_validator("name", "email", mode="before")
    @classmethod
    def strip_text(cls, v):
        return _strip(v)


class LoginRequest(_Request):
    email: str
    password: str

    @field_validator("email", mode="before")
    @classmethod
    def strip_email(cls, v):
        return _strip(v)


class ProfileRequest(_Request):
    """Profile upsert. Omitted optional fields stay None and are not written."""
    status: str = Field(min_length=1, max_length=200)
    skills: list[str] = Field(min_length=1)
    company: str | None = Field(None, max_length=200)
    website: str | None = Field(None, max_length=500)
    location: str | None = Field(None, max_length=200)
    githubusername: str | None = Field(None, max_length=100)
    bio: str | None = None
    youtube: str | None = Field(None, max_length=500)
    twitter: str | None = Field(None, max_length=500)
    facebook: str | None = Field(None, max_length=500)
    linkedin: str | None = Field(None, max_length=500)
    instagram: str | None = Field(None, max_length=500)

    @field_validator("skills", mode="before")
    @classmethod
    def split_skills(cls, v):
        if isinstance(v, (str, list)):
            return parse_skills(v)
        return v

    @field_validator(
        "status", "company", "website", "location", "githubusername", "bio",
        "youtube", "twitter", "facebook", "linkedin", "instagram",
        mode="before",
    )
    @classmethod
    def strip_text(cls, v):
        return _strip(v)


class _EntryRequest(_Request):
    from_: str = Field(alias="from", min_length=1)
    to: str | None = None
    current: bool = False
    description: str | None = None


class ExperienceRequest(_EntryRequest):
    title: str = Field(min_length=1)
    company: str = Field(min_length=1)
    location: str | None = None

    @field_validator(
        "title", "company", "location", "from_", "to", "description", mode="before",
    )
    @classmethod
    def strip_text(cls, v):
        return _strip(v)


class EducationRequest(_EntryRequest):
    school: str = Field(min_length=1)
    degree: str = Field(min_length=1)
    fieldofstudy: str = Field(min_length=1)

    @field_validator(
        "school", "degree", "fieldofstudy", "from_", "to", "description",
        mode="before",
    )
    @classmethod
    def strip_text(cls, v):
        return _strip(v)


class TextRequest(_Request):
    """Post or comment body."""
    text: str = Field(min_length=1)

    @field_validator("text", mode="before")
    @classmethod
    def strip_text(cls, v):
        return _strip(v)
