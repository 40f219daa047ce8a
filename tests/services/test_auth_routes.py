"""Registration, login and the identity gate — end-to-end over the API.

Invariants:
    - Registering an e-mail already on file returns 400 "User already exist" and creates no user
    - Validation reports every violation at once, before any storage access
    - Missing/forged/expired tokens are rejected with 401
    - GET /api/auth never returns the password hash
"""

from uuid import uuid4

from sqlalchemy import func, select

from devlink.infrastructure.tokens import TokenService
from devlink.models.user import User


async def test_register_returns_token(client):
    res = await client.post(
        "/api/users",
        json={"name": "Alice", "email": "a@x.com", "password": "12345678"},
    )
    assert res.status_code == 200
    assert res.json()["token"]


async def test_register_duplicate_email_conflicts_and_creates_nothing(
    client, register_user, test_db,
):
    await register_user("Alice", "a@x.com", "12345678")

    res = await client.post(
        "/api/users",
        json={"name": "Alice Again", "email": "a@x.com", "password": "87654321"},
    )

    assert res.status_code == 400
    error = res.json()["error"]
    assert error["message"] == "User already exist"
    assert error["category"] == "conflict"
    count = await test_db.scalar(select(func.count()).select_from(User))
    assert count == 1


async def test_register_duplicate_email_is_case_insensitive(client, register_user):
    await register_user("Alice", "a@x.com", "12345678")
    res = await client.post(
        "/api/users",
        json={"name": "Alice", "email": "A@X.COM", "password": "12345678"},
    )
    assert res.status_code == 400


async def test_register_collects_every_violation(client):
    res = await client.post(
        "/api/users", json={"name": "", "email": "not-an-email", "password": "123"},
    )
    assert res.status_code == 400
    details = res.json()["error"]["details"]
    assert [d["field"] for d in details] == ["name", "email", "password"]


async def test_register_with_empty_body_reports_all_fields(client):
    res = await client.post("/api/users", content=b"")
    assert res.status_code == 400
    assert len(res.json()["error"]["details"]) == 3


async def test_register_stores_hashed_password_and_avatar(client, register_user, test_db):
    await register_user("Alice", "a@x.com", "12345678")
    user = (await test_db.execute(select(User))).scalar_one()
    assert user.password_hash != "12345678"
    assert user.avatar.startswith("https://www.gravatar.com/avatar/")


async def test_login_returns_token(client, register_user):
    await register_user("Alice", "a@x.com", "12345678")
    res = await client.post(
        "/api/auth", json={"email": "a@x.com", "password": "12345678"},
    )
    assert res.status_code == 200
    assert res.json()["token"]


async def test_login_wrong_password_is_invalid_credentials(client, register_user):
    await register_user("Alice", "a@x.com", "12345678")
    res = await client.post(
        "/api/auth", json={"email": "a@x.com", "password": "wrong-password"},
    )
    assert res.status_code == 400
    assert res.json()["error"]["message"] == "Invalid credentials"


async def test_login_unknown_email_is_invalid_credentials(client):
    res = await client.post(
        "/api/auth", json={"email": "nobody@x.com", "password": "whatever"},
    )
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "INVALID_CREDENTIALS"


async def test_get_me_returns_user_without_password(client, alice, auth):
    res = await client.get("/api/auth", headers=auth(alice))
    assert res.status_code == 200
    body = res.json()
    assert body["name"] == "Alice"
    assert body["email"] == "a@x.com"
    assert "password_hash" not in body
    assert "password" not in body


async def test_get_me_accepts_bearer_header(client, alice):
    res = await client.get(
        "/api/auth", headers={"Authorization": f"Bearer {alice}"},
    )
    assert res.status_code == 200


async def test_missing_token_is_unauthenticated(client):
    res = await client.get("/api/auth")
    assert res.status_code == 401
    assert res.json()["error"]["message"] == "No token, authorization denied"


async def test_forged_token_is_unauthenticated(client, alice, auth):
    res = await client.get("/api/auth", headers=auth(alice + "tampered"))
    assert res.status_code == 401
    assert res.json()["error"]["message"] == "Token is not valid"


async def test_token_signed_with_other_secret_is_rejected(client, auth):
    token = TokenService("some-other-secret").issue(uuid4())
    res = await client.get("/api/auth", headers=auth(token))
    assert res.status_code == 401


async def test_expired_token_is_rejected(client, auth):
    token = TokenService("test-secret", expires_seconds=-10).issue(uuid4())
    res = await client.get("/api/auth", headers=auth(token))
    assert res.status_code == 401


async def test_token_for_deleted_user_is_not_found(client, alice, auth):
    await client.delete("/api/profile", headers=auth(alice))
    res = await client.get("/api/auth", headers=auth(alice))
    assert res.status_code == 404


async def test_register_rejects_name_longer_than_column(client, test_db):
    res = await client.post(
        "/api/users",
        json={"name": "x" * 101, "email": "a@x.com", "password": "12345678"},
    )
    assert res.status_code == 400
    assert res.json()["error"]["details"] == [
        {"field": "name", "message": "name must be at most 100 characters"},
    ]
    count = await test_db.scalar(select(func.count()).select_from(User))
    assert count == 0


async def test_register_rejects_non_text_email(client):
    res = await client.post(
        "/api/users", json={"name": "Alice", "email": 42, "password": "12345678"},
    )
    assert res.status_code == 400
    assert res.json()["error"]["details"] == [
        {"field": "email", "message": "Email should be valid"},
    ]


async def test_login_rejects_non_text_password(client, register_user):
    await register_user("Alice", "a@x.com", "12345678")
    res = await client.post("/api/auth", json={"email": "a@x.com", "password": 12345678})
    assert res.status_code == 400
    assert res.json()["error"]["details"][0]["field"] == "password"
