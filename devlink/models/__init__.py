"""ORM Models — SQLAlchemy declarative documents for users, profiles and posts.

Invariants:
    - All models inherit from Base (db/base.py)
    - Profile and Post reference their owner by user_id; no relationship() objects

Design Decisions:
    - One file per document for locality
    - All models imported here so Base.metadata is complete before create_all/autogenerate
"""

from devlink.models.user import User  # noqa: F401
from devlink.models.profile import Profile  # noqa: F401
from devlink.models.post import Post  # noqa: F401
