"""Request Rules — declarative field checks evaluated before any mutation runs.

Invariants:
    - All functions are PURE: no IO, no async, no DB, no side effects
    - validate_payload evaluates EVERY rule and returns all violations in rule order,
      at most one violation per field
    - A field of the wrong JSON type is a violation, never passed on to an engine
    - max_length mirrors the column the value is stored in: an over-long value is
      reported here instead of failing at commit
    - Optional fields that are absent, null or blank strings are skipped
    - Violation list is built fresh per call and returned; never accumulated globally

Design Decisions:
    - Rule sets are module-level tuples of FieldRule: order is the reporting order
    - Messages are the ones existing clients already display
    - email format delegated to email-validator (same library behind pydantic's EmailStr),
      deliverability lookup disabled: validation must stay IO-free
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Mapping

from email_validator import EmailNotValidError, validate_email

from devlink.core.domain_types import SocialPlatform


class RuleFormat(str, Enum):
    """Type and format constraint applied to a present field."""
    PRESENT = "present"          # any string, may be empty
    NON_EMPTY = "non_empty"      # string with non-whitespace content
    EMAIL = "email"
    MIN_LENGTH = "min_length"    # string of at least min_length characters
    SKILLS = "skills"            # comma string or list of strings, something non-blank
    BOOL = "bool"


@dataclass(frozen=True)
class FieldRule:
    """One declarative check: field presence plus a type/format."""
    field: str
    message: str
    required: bool = True
    format: RuleFormat = RuleFormat.NON_EMPTY
    min_length: int = 0
    max_length: int | None = None


@dataclass(frozen=True)
class Violation:
    field: str
    message: str

    def to_dict(self) -> dict:
        return {"field": self.field, "message": self.message}


def _is_valid_email(value: str) -> bool:
    try:
        validate_email(value, check_deliverability=False)
    except EmailNotValidError:
        return False
    return True


def _skills_ok(value: Any) -> bool:
    if isinstance(value, str):
        return any(part.strip() for part in value.split(","))
    if isinstance(value, list):
        return (
            all(isinstance(item, str) for item in value)
            and any(item.strip() for item in value)
        )
    return False


def _absent(value: Any, rule: FieldRule) -> bool:
    if value is None:
        return True
    return not rule.required and isinstance(value, str) and value.strip() == ""


def check_field(payload: Mapping[str, Any], rule: FieldRule) -> Violation | None:
    """Evaluate a single rule. Returns a violation or None."""
    value = payload.get(rule.field)
    if _absent(value, rule):
        return Violation(rule.field, rule.message) if rule.required else None

    if rule.format == RuleFormat.BOOL:
        if isinstance(value, bool):
            return None
        return Violation(rule.field, f"{rule.field} must be true or false")
    if rule.format == RuleFormat.SKILLS:
        return None if _skills_ok(value) else Violation(rule.field, rule.message)

    if not isinstance(value, str):
        if rule.format == RuleFormat.NON_EMPTY:
            return Violation(rule.field, f"{rule.field} must be text")
        return Violation(rule.field, rule.message)

    if rule.format == RuleFormat.NON_EMPTY:
        ok = value.strip() != ""
    elif rule.format == RuleFormat.EMAIL:
        ok = _is_valid_email(value)
    elif rule.format == RuleFormat.MIN_LENGTH:
        ok = len(value) >= rule.min_length
    elif rule.format == RuleFormat.PRESENT:
        ok = True
    else:
        raise ValueError(f"Unknown rule format: {rule.format}")
    if not ok:
        return Violation(rule.field, rule.message)

    if rule.max_length is not None and len(value.strip()) > rule.max_length:
        return Violation(
            rule.field, f"{rule.field} must be at most {rule.max_length} characters",
        )
    return None


def validate_payload(
    payload: Mapping[str, Any] | None, rules: tuple[FieldRule, ...],
) -> list[Violation]:
    """Run every rule against payload. Never short-circuits."""
    data = payload if isinstance(payload, Mapping) else {}
    violations: list[Violation] = []
    for rule in rules:
        violation = check_field(data, rule)
        if violation is not None:
            violations.append(violation)
    return violations


def _optional_text(field: str, max_length: int | None = None) -> FieldRule:
    return FieldRule(
        field, f"{field} must be text", required=False, max_length=max_length,
    )


# ─── Rule Sets ───────────────────────────────────────────────────

REGISTER_RULES = (
    FieldRule("name", "Name shouldn't be empty", max_length=100),
    FieldRule(
        "email", "Email should be valid", format=RuleFormat.EMAIL, max_length=255,
    ),
    FieldRule(
        "password", "Enter a password with 6 or more characters",
        format=RuleFormat.MIN_LENGTH, min_length=6,
    ),
)

LOGIN_RULES = (
    FieldRule("email", "Email should be valid", format=RuleFormat.EMAIL),
    FieldRule("password", "password is required", format=RuleFormat.PRESENT),
)

PROFILE_RULES = (
    FieldRule("status", "Status is required!", max_length=200),
    FieldRule("skills", "Skills are required!", format=RuleFormat.SKILLS),
    _optional_text("company", 200),
    _optional_text("website", 500),
    _optional_text("location", 200),
    _optional_text("githubusername", 100),
    _optional_text("bio"),
    *(_optional_text(platform.value, 500) for platform in SocialPlatform),
)

_ENTRY_OPTIONAL_RULES = (
    _optional_text("to"),
    FieldRule("current", "current must be true or false", required=False,
              format=RuleFormat.BOOL),
    _optional_text("description"),
)

EXPERIENCE_RULES = (
    FieldRule("title", "title is required!"),
    FieldRule("company", "company is required!"),
    FieldRule("from", "from date is required!"),
    _optional_text("location"),
    *_ENTRY_OPTIONAL_RULES,
)

EDUCATION_RULES = (
    FieldRule("school", "school is required!"),
    FieldRule("degree", "degree is required!"),
    FieldRule("fieldofstudy", "fieldofstudy is required!"),
    FieldRule("from", "from date is required!"),
    *_ENTRY_OPTIONAL_RULES,
)

POST_RULES = (
    FieldRule("text", "Text is required"),
)

COMMENT_RULES = POST_RULES
