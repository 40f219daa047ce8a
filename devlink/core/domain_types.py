"""Domain Types — enums naming the fixed vocabularies inside profile documents.

Invariants:
    - ProfileSection values are the Profile attribute names of the ordered sub-record lists
    - SocialPlatform values are both the request field names and the keys of Profile.social

Design Decisions:
    - str Enums: serialize to JSON and compare against request keys without conversion
"""

from enum import Enum


class ProfileSection(str, Enum):
    """Ordered sub-record collections inside a Profile document."""
    EXPERIENCE = "experience"
    EDUCATION = "education"


class SocialPlatform(str, Enum):
    """Social links nested under Profile.social. All optional."""
    YOUTUBE = "youtube"
    TWITTER = "twitter"
    FACEBOOK = "facebook"
    LINKEDIN = "linkedin"
    INSTAGRAM = "instagram"
