import uuid

import pytest

from brandmate.models.user import User


pytestmark = pytest.mark.asyncio


async def register_user(client, username: str, email: str, password: str):
    return await client.post(
        "/api/auth/register",
        json={"username": username, "email": email, "password": password},
    )


async def login_user(client, login: str, password: str):
    return await client.post(
        "/api/auth/login",
        json={"login": login, "password": password},
    )


async def test_register_login_profile_logout_scenario(client):
    reg = await register_user(client, "alice", "alice@x.com", "secret1")
    assert reg.status_code == 201
    body = reg.json()
    assert body["success"] is True
    assert body["message"] == "User registered successfully"
    t1 = body["data"]["token"]
    assert body["data"]["user"]["username"] == "alice"
    assert body["data"]["user"]["role"] == "user"
    assert "password" not in body["data"]["user"]
    assert "password_hash" not in body["data"]["user"]
    assert t1

    login = await login_user(client, "alice", "secret1")
    assert login.status_code == 200
    assert login.json()["message"] == "Login successful"
    t2 = login.json()["data"]["token"]
    assert login.json()["data"]["user"]["lastLogin"] is not None

    profile = await client.get("/api/auth/profile", headers={"Authorization": f"Bearer {t2}"})
    assert profile.status_code == 200
    assert profile.json()["data"]["user"]["username"] == "alice"

    corrupted = t2 + "tampered"
    bad = await client.get("/api/auth/profile", headers={"Authorization": f"Bearer {corrupted}"})
    assert bad.status_code == 401
    assert bad.json()["success"] is False

    logout = await client.post("/api/auth/logout", headers={"Authorization": f"Bearer {t2}"})
    assert logout.status_code == 200
    assert logout.json() == {"success": True, "message": "Logout successful"}


async def test_duplicate_username_is_conflict(client):
    first = await register_user(client, "bob", "bob@x.com", "secret1")
    assert first.status_code == 201

    dup = await register_user(client, "bob", "other@x.com", "secret1")
    assert dup.status_code == 409
    assert dup.json()["error"] == "User exists"
    assert dup.json()["message"] == "Username already taken"


async def test_duplicate_email_is_case_insensitive(client):
    await register_user(client, "carol", "Carol@X.com", "secret1")

    dup = await register_user(client, "carol2", "carol@x.COM", "secret1")
    assert dup.status_code == 409
    assert dup.json()["message"] == "Email already registered"


async def test_username_is_case_sensitive(client):
    await register_user(client, "dave", "dave@x.com", "secret1")

    other = await register_user(client, "Dave", "dave2@x.com", "secret1")
    assert other.status_code == 201

    # The capitalized name is a different account
    assert (await login_user(client, "Dave", "secret1")).json()["data"]["user"]["email"] == "dave2@x.com"


async def test_email_is_stored_lowercase_and_login_by_email(client):
    reg = await register_user(client, "erin", "  Erin@Example.COM ", "secret1")
    assert reg.json()["data"]["user"]["email"] == "erin@example.com"

    by_email = await login_user(client, "ERIN@example.com", "secret1")
    assert by_email.status_code == 200
    assert by_email.json()["data"]["user"]["username"] == "erin"


@pytest.mark.parametrize(
    "payload",
    [
        {"username": "", "email": "a@b.co", "password": "secret1"},
        {"username": "frank", "email": "", "password": "secret1"},
        {"username": "frank", "email": "a@b.co"},
        {"username": "fr", "email": "a@b.co", "password": "secret1"},
        {"username": "frank", "email": "not-an-email", "password": "secret1"},
        {"username": "frank", "email": "a@b.co", "password": "123"},
        {"username": "frank", "email": "f" * 250 + "@x.com", "password": "secret1"},
        {"username": 12, "email": "a@b.co", "password": "secret1"},
    ],
)
async def test_register_validation_errors(client, payload):
    resp = await client.post("/api/auth/register", json=payload)
    assert resp.status_code == 400
    assert resp.json()["success"] is False
    assert resp.json()["error"] == "Validation error"
    assert await User.all().count() == 0


async def test_login_requires_both_fields(client):
    resp = await client.post("/api/auth/login", json={"login": "alice"})
    assert resp.status_code == 400
    assert resp.json()["message"] == "Username/email and password are required"


async def test_wrong_password_and_unknown_user_look_the_same(client, create_user):
    user, _ = await create_user()

    wrong_pwd = await login_user(client, user.username, "not-the-password")
    unknown = await login_user(client, f"ghost_{uuid.uuid4().hex[:6]}", "whatever1")

    assert wrong_pwd.status_code == unknown.status_code == 401
    assert wrong_pwd.json() == unknown.json()
    assert wrong_pwd.json()["message"] == "Invalid credentials"


async def test_deactivated_account_cannot_login(client, create_user):
    user, password = await create_user(is_active=False)

    resp = await login_user(client, user.username, password)
    assert resp.status_code == 401
    assert resp.json()["error"] == "Account deactivated"

    # Without the right password the account state is not revealed
    wrong = await login_user(client, user.username, "bad-password")
    assert wrong.json()["message"] == "Invalid credentials"


async def test_deactivation_rejects_existing_token(client, create_user, auth_header_factory):
    user, password = await create_user()
    headers = await auth_header_factory(user.username, password)
    assert (await client.get("/api/auth/profile", headers=headers)).status_code == 200

    await User.filter(id=user.id).update(is_active=False)

    resp = await client.get("/api/auth/profile", headers=headers)
    assert resp.status_code == 401
    assert resp.json()["message"] == "Your account has been deactivated"


async def test_login_updates_last_login(client, create_user):
    user, password = await create_user()
    assert user.last_login is None

    await login_user(client, user.username, password)

    await user.refresh_from_db()
    assert user.last_login is not None


async def test_protected_routes_require_token(client):
    profile = await client.get("/api/auth/profile")
    assert profile.status_code == 401
    assert profile.json()["message"] == "Access token required"

    logout = await client.post("/api/auth/logout")
    assert logout.status_code == 401

    not_bearer = await client.get("/api/auth/profile", headers={"Authorization": "Basic abc"})
    assert not_bearer.status_code == 401


async def test_token_for_deleted_user_is_invalid(client, create_user, auth_header_factory):
    user, password = await create_user()
    headers = await auth_header_factory(user.username, password)

    await User.filter(id=user.id).delete()

    resp = await client.get("/api/auth/profile", headers=headers)
    assert resp.status_code == 401
    assert resp.json()["message"] == "Invalid token"


async def test_unknown_route_returns_json_404(client):
    resp = await client.get("/api/nope")
    assert resp.status_code == 404
    assert resp.json()["message"] == "Cannot GET /api/nope"
