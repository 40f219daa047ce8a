"""Password Hashing and Avatars — credential primitives used at registration and login.

Invariants:
    - Plain passwords are never stored or logged
    - avatar_url_for is deterministic for a given e-mail (case/whitespace-insensitive)
"""

import hashlib
from urllib.parse import urlencode

from werkzeug.security import check_password_hash, generate_password_hash

GRAVATAR_BASE_URL = "https://www.gravatar.com/avatar/"


def hash_password(password: str) -> str:
    return generate_password_hash(password)


def verify_password(password_hash: str, password: str) -> bool:
    return check_password_hash(password_hash, password)


def avatar_url_for(email: str) -> str:
    """Gravatar URL: 200px, pg rating, mystery-man fallback."""
    digest = hashlib.md5(email.strip().lower().encode("utf-8")).hexdigest()
    return f"{GRAVATAR_BASE_URL}{digest}?{urlencode({'s': '200', 'r': 'pg', 'd': 'mm'})}"
