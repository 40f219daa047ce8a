"""Profile Field Sanitizing — tests for pure profile/sub-record builders."""

from devlink.core.domain_types import ProfileSection
from devlink.core.profile_fields import (
    build_entry,
    build_profile_fields,
    merge_profile_fields,
    parse_skills,
)


def test_parse_skills_splits_and_trims_in_order():
    assert parse_skills("go, rust, c++") == ["go", "rust", "c++"]


def test_parse_skills_drops_empty_fragments():
    assert parse_skills("go,, rust ,") == ["go", "rust"]


def test_parse_skills_accepts_list():
    assert parse_skills([" go ", "rust"]) == ["go", "rust"]


def test_build_profile_fields_omits_absent_and_empty_fields():
    fields = build_profile_fields({
        "status": "Developer", "skills": "go", "company": "", "bio": None,
    })
    assert fields == {"status": "Developer", "skills": ["go"]}


def test_build_profile_fields_nests_supplied_social_links():
    fields = build_profile_fields({
        "status": "Dev", "skills": "go",
        "twitter": "https://twitter.com/a", "linkedin": "  ",
    })
    assert fields["social"] == {"twitter": "https://twitter.com/a"}


def test_build_profile_fields_without_social_has_no_social_key():
    assert "social" not in build_profile_fields({"status": "Dev", "skills": "go"})


def test_build_profile_fields_ignores_unknown_keys():
    fields = build_profile_fields({"status": "Dev", "skills": "go", "user_id": "x"})
    assert "user_id" not in fields


def test_merge_keeps_stored_social_links():
    merged = merge_profile_fields(
        {"twitter": "t", "youtube": "y"}, {"social": {"youtube": "y2"}},
    )
    assert merged["social"] == {"twitter": "t", "youtube": "y2"}


def test_merge_without_social_leaves_social_untouched():
    merged = merge_profile_fields({"twitter": "t"}, {"status": "Lead"})
    assert merged == {"status": "Lead"}


def test_build_experience_entry():
    entry = build_entry(
        ProfileSection.EXPERIENCE,
        {"title": "Eng", "company": "Acme", "from": "2020", "school": "MIT"},
        "e1",
    )
    assert entry == {
        "id": "e1", "title": "Eng", "company": "Acme", "from": "2020",
        "current": False,
    }


def test_build_education_entry_keeps_current_flag():
    entry = build_entry(
        ProfileSection.EDUCATION,
        {"school": "MIT", "degree": "BSc", "fieldofstudy": "CS", "from": "2015",
         "current": True},
        "ed1",
    )
    assert entry["current"] is True
    assert entry["fieldofstudy"] == "CS"


def test_build_entry_current_requires_real_boolean():
    entry = build_entry(
        ProfileSection.EXPERIENCE,
        {"title": "Eng", "company": "Acme", "from": "2020", "current": "false"},
        "e2",
    )
    assert entry["current"] is False
