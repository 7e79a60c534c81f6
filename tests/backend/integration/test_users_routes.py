import base64
import uuid

import pytest


pytestmark = pytest.mark.asyncio


async def register_user(client, email: str, password: str, **extra):
    return await client.post(
        "/api/v1/users",
        json={"email": email, "password": password, **extra},
    )


async def login_user(client, email: str, password: str):
    return await client.post(
        "/api/v1/users/login",
        json={"email": email, "password": password},
    )


def bearer(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


async def test_register_and_login_flow(client):
    email = f"user_{uuid.uuid4().hex[:6]}@example.com"
    password = "StrongPass!23"

    resp = await register_user(client, email, password, firstName="John")
    assert resp.status_code == 201
    assert resp.json() == {"email": email}

    # Duplicate email should fail regardless of password
    dup_resp = await register_user(client, email.upper(), "Different#456")
    assert dup_resp.status_code == 400
    assert dup_resp.json()["detail"]["code"] == "EMAIL_ALREADY_EXIST"

    login_resp = await login_user(client, email, password)
    body = login_resp.json()
    assert login_resp.status_code == 200
    assert body["email"] == email
    assert body["isAdmin"] is False
    assert body["jwt"]
    assert "accessToken" in login_resp.cookies

    bad_login = await login_user(client, email, "wrong-password")
    assert bad_login.status_code == 403


async def test_register_validation_errors(client):
    short = await register_user(client, "short@example.com", "1234567")
    assert short.status_code == 400
    assert short.json()["detail"]["code"] == "VALIDATION_ERROR"

    bad_email = await register_user(client, "not-an-email", "StrongPass!23")
    assert bad_email.status_code == 400


async def test_nicknames_are_unique(client):
    await register_user(client, "a2@x.com", "password1")
    await register_user(client, "a2@y.com", "password1")

    first = await login_user(client, "a2@x.com", "password1")
    second = await login_user(client, "a2@y.com", "password1")
    p1 = await client.get("/api/v1/users/profile", headers=bearer(first.json()["jwt"]))
    p2 = await client.get("/api/v1/users/profile", headers=bearer(second.json()["jwt"]))
    assert p1.json()["nickname"] == "a2"
    assert p2.json()["nickname"] == "a21"


async def test_password_reset_flow(client):
    email, old_password, new_password = "reset@example.com", "OldPass#123", "NewPass#456"
    await register_user(client, email, old_password)

    reset_resp = await client.post("/api/v1/users/reset-password", json={"email": email})
    assert reset_resp.status_code == 200
    token = reset_resp.json()["jwt"]

    # Old password no longer works
    assert (await login_user(client, email, old_password)).status_code == 403

    mismatch = await client.put(
        "/api/v1/users/update-password",
        json={"password": new_password, "confirmPassword": "Other#7890"},
        headers=bearer(token),
    )
    assert mismatch.status_code == 400

    set_resp = await client.put(
        "/api/v1/users/update-password",
        json={"password": new_password, "confirmPassword": new_password},
        headers=bearer(token),
    )
    assert set_resp.status_code == 200
    assert set_resp.json() == {"email": email}

    assert (await login_user(client, email, new_password)).status_code == 200

    # Password already set -> forbidden
    again = await client.put(
        "/api/v1/users/update-password",
        json={"password": new_password, "confirmPassword": new_password},
        headers=bearer(token),
    )
    assert again.status_code == 403
    assert again.json()["detail"]["code"] == "ALREADY_HAVE_PASSWORD"


async def test_reset_unknown_email(client):
    resp = await client.post("/api/v1/users/reset-password", json={"email": "ghost@example.com"})
    assert resp.status_code == 403


async def test_profile_update_and_photo(client, create_user, auth_header_factory, upload_dir):
    user, password = await create_user()
    other, _ = await create_user()
    headers = await auth_header_factory(user.email, password)

    update = await client.put(
        "/api/v1/users/profile",
        json={"nickname": "", "firstName": "John", "address": "street 21"},
        headers=headers,
    )
    assert update.status_code == 200
    assert update.json()["nickname"] == user.nickname
    assert update.json()["firstName"] == "John"
    assert update.json()["lastName"] is None

    taken = await client.put("/api/v1/users/profile", json={"nickname": other.nickname}, headers=headers)
    assert taken.status_code == 400
    assert taken.json()["detail"]["code"] == "NICKNAME_ALREADY_EXIST"

    payload = base64.b64encode(b"png-bytes").decode()
    photo = await client.post(
        "/api/v1/users/profile-photo",
        json={"name": "me.png", "type": "image/png", "size": 9, "file": f"data:image/png;base64,{payload}"},
        headers=headers,
    )
    assert photo.status_code == 200
    body = photo.json()
    assert body["email"] == user.email
    assert body["firstName"] == "John"
    assert body["profilePhotoName"] == "me.png"
    assert body["profilePhotoPath"].startswith("/uploads/USERS/")

    profile = await client.get("/api/v1/users/profile", headers=headers)
    assert profile.json()["profilePhotoPath"] == body["profilePhotoPath"]
    assert "password" not in profile.json()


async def test_protected_routes_require_token(client):
    resp = await client.get("/api/v1/users/profile")
    assert resp.status_code == 401
    assert resp.json()["detail"]["code"] == "AUTH_REQUIRED"
    assert resp.headers["www-authenticate"] == "Bearer"

    bad = await client.get("/api/v1/users/profile", headers=bearer("invalid.token.here"))
    assert bad.status_code == 401
    assert bad.json()["detail"]["code"] == "AUTH_INVALID_TOKEN"

    manage = await client.get("/api/v1/users/manage")
    assert manage.status_code == 401


async def test_token_cookie_is_accepted(client, create_user):
    user, password = await create_user()
    await login_user(client, user.email, password)
    # AsyncClient keeps the accessToken cookie from the login response
    resp = await client.get("/api/v1/users/profile")
    assert resp.status_code == 200
    assert resp.json()["email"] == user.email


async def test_photo_size_comes_from_decoded_bytes(client, create_user, auth_header_factory, upload_dir):
    user, password = await create_user()
    headers = await auth_header_factory(user.email, password)

    payload = base64.b64encode(b"png-bytes").decode()
    photo = await client.post(
        "/api/v1/users/profile-photo",
        json={"name": "me.png", "type": "image/png", "size": 123456, "file": f"data:image/png;base64,{payload}"},
        headers=headers,
    )
    assert photo.status_code == 200
    assert photo.json()["profilePhotoSize"] == len(b"png-bytes")
