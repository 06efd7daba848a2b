import pytest

from app.main import app

API = "/api/v1/auth"


async def _register(async_client, email="member@example.com", password="oldpass1"):
    response = await async_client.post(
        f"{API}/register",
        json={"email": email, "password": password, "full_name": "Sam  Rivera", "user_type": "gym_owner"},
    )
    assert response.status_code == 201
    return response.json()


# ============================================================
# Sign-up / sign-in
# ============================================================

@pytest.mark.asyncio
async def test_register_returns_typed_user(async_client) -> None:
    body = await _register(async_client)

    user = body["user"]
    assert set(user) == {"id", "email", "created_at", "last_sign_in_at", "metadata"}
    assert user["email"] == "member@example.com"
    assert user["metadata"] == {"full_name": "Sam Rivera", "user_type": "gym_owner"}
    assert body["token_type"] == "bearer"


@pytest.mark.asyncio
async def test_register_duplicate_email(async_client) -> None:
    await _register(async_client)
    response = await async_client.post(
        f"{API}/register",
        json={"email": "member@example.com", "password": "another1", "full_name": "Someone Else"},
    )
    assert response.status_code == 400
    assert response.json()["detail"] == "A user with this email already exists"


@pytest.mark.asyncio
async def test_login_and_me(async_client) -> None:
    await _register(async_client)

    response = await async_client.post(
        f"{API}/login", json={"email": "member@example.com", "password": "oldpass1"}
    )
    assert response.status_code == 200
    body = response.json()
    assert body["user"]["last_sign_in_at"] is not None

    me = await async_client.get(
        f"{API}/me", headers={"Authorization": f"Bearer {body['access_token']}"}
    )
    assert me.status_code == 200
    assert me.json()["email"] == "member@example.com"


@pytest.mark.asyncio
async def test_login_wrong_password(async_client) -> None:
    await _register(async_client)
    response = await async_client.post(
        f"{API}/login", json={"email": "member@example.com", "password": "nope"}
    )
    assert response.status_code == 401
    assert response.json()["detail"] == "Invalid email or password"


@pytest.mark.asyncio
async def test_me_rejects_refresh_token(async_client) -> None:
    body = await _register(async_client)
    response = await async_client.get(
        f"{API}/me", headers={"Authorization": f"Bearer {body['refresh_token']}"}
    )
    assert response.status_code == 401


@pytest.mark.asyncio
async def test_refresh_issues_access_token(async_client) -> None:
    body = await _register(async_client)
    response = await async_client.post(
        f"{API}/refresh", json={"refresh_token": body["refresh_token"]}
    )
    assert response.status_code == 200
    assert response.json()["access_token"]


# ============================================================
# Password reset flow
# ============================================================

@pytest.mark.asyncio
async def test_full_password_reset_flow(async_client, email_sender) -> None:
    await _register(async_client)

    requested = await async_client.post(f"{API}/forgot-password", json={"email": "member@example.com"})
    assert requested.status_code == 200
    assert requested.json()["step"] == "otp"
    redirect = requested.json()["redirect_to"]
    assert redirect == "/reset-password?email=member%40example.com"

    entry = await async_client.get(f"{API}/reset-password", params={"email": "member@example.com"})
    assert entry.status_code == 200
    assert entry.json()["step"] == "otp"

    verified = await async_client.post(
        f"{API}/verify-reset-code",
        json={"email": "member@example.com", "code": email_sender.last_code},
    )
    assert verified.status_code == 200
    assert verified.json()["step"] == "password"
    token = verified.json()["reset_token"]

    done = await async_client.post(
        f"{API}/reset-password",
        json={
            "email": "member@example.com",
            "new_password": "newpass1",
            "confirm_password": "newpass1",
            "reset_token": token,
        },
    )
    assert done.status_code == 200
    assert done.json()["step"] == "done"
    assert done.json()["redirect_to"] == "/auth"

    old_login = await async_client.post(
        f"{API}/login", json={"email": "member@example.com", "password": "oldpass1"}
    )
    new_login = await async_client.post(
        f"{API}/login", json={"email": "member@example.com", "password": "newpass1"}
    )
    assert old_login.status_code == 401
    assert new_login.status_code == 200


@pytest.mark.asyncio
async def test_verify_expired_code_over_http(async_client, email_sender, clock) -> None:
    await async_client.post(f"{API}/forgot-password", json={"email": "member@example.com"})
    clock.advance(minutes=11)

    response = await async_client.post(
        f"{API}/verify-reset-code",
        json={"email": "member@example.com", "code": email_sender.last_code},
    )

    assert response.status_code == 400
    body = response.json()
    assert body["success"] is False
    assert body["error"] == "not_found_or_expired"
    assert body["step"] == "otp"


@pytest.mark.asyncio
async def test_forgot_password_validation_error(async_client, email_sender) -> None:
    response = await async_client.post(f"{API}/forgot-password", json={"email": ""})

    assert response.status_code == 400
    assert response.json()["error"] == "validation_error"
    assert email_sender.sent == []


@pytest.mark.asyncio
async def test_forgot_password_email_failure_is_bad_gateway(async_client, email_sender) -> None:
    email_sender.fail_with = RuntimeError("smtp down")

    response = await async_client.post(f"{API}/forgot-password", json={"email": "member@example.com"})

    assert response.status_code == 502
    assert response.json()["error"] == "dependency_error"
    assert "smtp down" in response.json()["message"]


@pytest.mark.asyncio
async def test_reset_password_mismatch_keeps_step(async_client) -> None:
    response = await async_client.post(
        f"{API}/reset-password",
        json={
            "email": "member@example.com",
            "new_password": "newpass1",
            "confirm_password": "newpass2",
            "reset_token": "whatever",
        },
    )

    assert response.status_code == 400
    assert response.json()["step"] == "password"
    assert response.json()["message"] == "Passwords don't match"


@pytest.mark.asyncio
async def test_reset_password_without_token(async_client) -> None:
    await _register(async_client)
    response = await async_client.post(
        f"{API}/reset-password",
        json={"email": "member@example.com", "new_password": "newpass1", "confirm_password": "newpass1"},
    )

    assert response.status_code == 502
    assert response.json()["error"] == "dependency_error"


@pytest.mark.asyncio
async def test_auth_events_reach_app_listeners(async_client) -> None:
    seen = []
    subscription = app.state.auth_events.subscribe(lambda event, user, email: seen.append(event.value))
    try:
        await _register(async_client)
        await async_client.post(
            f"{API}/login", json={"email": "member@example.com", "password": "oldpass1"}
        )
    finally:
        subscription.unsubscribe()

    assert seen == ["SIGNED_UP", "SIGNED_IN"]


@pytest.mark.asyncio
async def test_root(async_client) -> None:
    response = await async_client.get("/")
    assert response.status_code == 200
    assert response.json()["name"] == "FlexiFit"
