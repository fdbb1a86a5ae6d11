from datetime import timedelta

from conftest import ADMIN_EMAIL, ADMIN_PASSWORD, CLOSER_PASSWORD, auth_header, login, register_closer

from closer_crm.security import create_access_token


def test_login_returns_token_and_user(client, admin_token):
    response = client.post(
        "/api/users/login", json={"email": ADMIN_EMAIL, "password": ADMIN_PASSWORD}
    )
    assert response.status_code == 200
    body = response.json()
    assert body["token"]
    assert body["user"]["email"] == ADMIN_EMAIL
    assert body["user"]["role"] == "ADMIN"
    assert "passwordHash" not in body["user"]


def test_login_wrong_password_is_rejected(client, admin_token):
    response = client.post("/api/users/login", json={"email": ADMIN_EMAIL, "password": "nope"})
    assert response.status_code == 401


def test_login_unknown_email_is_rejected(client):
    response = client.post(
        "/api/users/login", json={"email": "ghost@example.com", "password": "whatever"}
    )
    assert response.status_code == 401


def test_protected_route_requires_token(client):
    assert client.get("/api/users/profile").status_code == 401


def test_garbage_token_is_rejected(client):
    response = client.get("/api/users/profile", headers=auth_header("not-a-jwt"))
    assert response.status_code == 401


def test_expired_token_is_rejected(client, closer_a):
    token = create_access_token(closer_a["id"], "CLOSER", expires_delta=timedelta(seconds=-5))
    response = client.get("/api/users/profile", headers=auth_header(token))
    assert response.status_code == 401


def test_profile_returns_current_user(client, closer_a):
    response = client.get("/api/users/profile", headers=auth_header(closer_a["token"]))
    assert response.status_code == 200
    body = response.json()
    assert body["id"] == closer_a["id"]
    assert body["role"] == "CLOSER"
    assert body["percentComplete"] == 0


def test_register_requires_admin(client, closer_a):
    response = client.post(
        "/api/users/register",
        json={"email": "x@example.com", "password": "pw", "name": "X", "role": "CLOSER"},
        headers=auth_header(closer_a["token"]),
    )
    assert response.status_code == 403


def test_register_rejects_unknown_role(client, admin_token):
    response = client.post(
        "/api/users/register",
        json={"email": "x@example.com", "password": "pw", "name": "X", "role": "MANAGER"},
        headers=auth_header(admin_token),
    )
    assert response.status_code == 400


def test_register_duplicate_email_conflicts_regardless_of_role(client, admin_token, closer_a):
    for payload in (
        {"email": "closer.a@example.com", "password": "pw", "name": "Other", "role": "CLOSER"},
        {"email": "closer.a@example.com", "password": "pw2", "name": "Boss", "role": "ADMIN", "groupObjective": 5},
        {"email": ADMIN_EMAIL, "password": "pw", "name": "Clone", "role": "CLOSER", "objective": 100},
    ):
        response = client.post("/api/users/register", json=payload, headers=auth_header(admin_token))
        assert response.status_code == 409


def test_register_admin_ignores_closer_fields(client, admin_token):
    response = client.post(
        "/api/users/register",
        json={
            "email": "boss@example.com",
            "password": "pw",
            "name": "Boss",
            "role": "ADMIN",
            "objective": 999,
            "groupObjective": 5000,
        },
        headers=auth_header(admin_token),
    )
    assert response.status_code == 201
    token = login(client, "boss@example.com", "pw")
    profile = client.get("/api/users/profile", headers=auth_header(token)).json()
    assert profile["objective"] == 0
    assert profile["groupObjective"] == 5000


def test_change_password(client, closer_a):
    headers = auth_header(closer_a["token"])
    response = client.put(
        "/api/users/password",
        json={"currentPassword": CLOSER_PASSWORD, "newPassword": "brand-new"},
        headers=headers,
    )
    assert response.status_code == 200

    assert login(client, "closer.a@example.com", "brand-new")
    old = client.post(
        "/api/users/login", json={"email": "closer.a@example.com", "password": CLOSER_PASSWORD}
    )
    assert old.status_code == 401


def test_change_password_requires_current_password(client, closer_a):
    response = client.put(
        "/api/users/password",
        json={"currentPassword": "wrong", "newPassword": "brand-new"},
        headers=auth_header(closer_a["token"]),
    )
    assert response.status_code == 401


def test_registered_closer_can_log_in(client, admin_token):
    register_closer(client, admin_token, "fresh@example.com")
    assert login(client, "fresh@example.com", CLOSER_PASSWORD)


def test_non_bearer_authorization_is_unauthenticated(client):
    headers = {"Authorization": "Basic dXNlcjpwYXNz"}
    assert client.get("/api/users/profile", headers=headers).status_code == 401
    # Authentication is reported before body validation
    assert client.post("/api/meetings", json={}, headers=headers).status_code == 401
