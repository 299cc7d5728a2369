from __future__ import annotations

from datetime import datetime, timezone


def test_signup_returns_created_user_id(client):
    resp = client.post("/api/auth/signup", json={"name": "A", "email": "a@x.com", "password": "p"})

    assert resp.status_code == 201
    body = resp.get_json()
    assert body["message"] == "User registered successfully"
    assert body["userId"] == 1


def test_signup_missing_fields(client):
    resp = client.post("/api/auth/signup", json={"name": "A", "email": "a@x.com"})

    assert resp.status_code == 400
    assert resp.get_json() == {"error": "All fields required"}


def test_signup_duplicate_email_conflicts(client):
    body = {"name": "A", "email": "a@x.com", "password": "p"}
    assert client.post("/api/auth/signup", json=body).status_code == 201

    resp = client.post("/api/auth/signup", json=body)

    assert resp.status_code == 409
    assert resp.get_json() == {"error": "Email already registered"}


def test_signup_rejects_unknown_role(client):
    resp = client.post("/api/auth/signup", json={"name": "A", "email": "a@x.com", "password": "p", "role": "boss"})
    assert resp.status_code == 400


def test_login_returns_token_and_role(client, signup_and_login):
    signup_and_login(role="admin")

    resp = client.post("/api/auth/login", json={"email": "a@x.com", "password": "secret123"})

    assert resp.status_code == 200
    body = resp.get_json()
    assert body["message"] == "Login success"
    assert body["role"] == "admin"
    assert body["token"].count(".") == 2


def test_login_failures_look_identical(client, signup_and_login):
    signup_and_login()

    wrong_password = client.post("/api/auth/login", json={"email": "a@x.com", "password": "nope"})
    unknown_email = client.post("/api/auth/login", json={"email": "b@x.com", "password": "nope"})

    assert wrong_password.status_code == unknown_email.status_code == 401
    assert wrong_password.get_json() == unknown_email.get_json() == {"error": "Invalid credentials"}


def test_login_with_wrong_role(client, signup_and_login):
    signup_and_login()

    resp = client.post("/api/auth/login", json={"email": "a@x.com", "password": "secret123", "role": "admin"})

    assert resp.status_code == 401
    assert resp.get_json() == {"error": "User is not a admin"}


def test_profile_requires_token(client):
    resp = client.get("/api/auth/profile")

    assert resp.status_code == 401
    assert resp.get_json() == {"error": "No token provided"}


def test_profile_rejects_bad_token(client):
    resp = client.get("/api/auth/profile", headers={"Authorization": "Bearer not.a.token"})

    assert resp.status_code == 401
    assert resp.get_json() == {"error": "Invalid token"}


def test_profile_rejects_expired_token(client, container, users_repo):
    user_id = container.auth_service.register(name="A", email="a@x.com", password="p")
    token = container.token_service.issue(users_repo.get_by_id(user_id), now=datetime(2020, 1, 1, tzinfo=timezone.utc))

    resp = client.get("/api/auth/profile", headers={"Authorization": f"Bearer {token}"})

    assert resp.status_code == 401
    assert resp.get_json() == {"error": "Token expired"}


def test_profile_returns_user_without_password(client, signup_and_login):
    user_id, headers = signup_and_login(name="Ann")

    resp = client.get("/api/auth/profile", headers=headers)

    assert resp.status_code == 200
    user = resp.get_json()["user"]
    assert user["id"] == user_id
    assert user["name"] == "Ann"
    assert user["email"] == "a@x.com"
    assert user["role"] == "employee"
    assert "password" not in user
    assert "passwordHash" not in user
    assert "password_hash" not in user


def test_profile_of_deleted_user_is_not_found(client, signup_and_login, users_repo):
    user_id, headers = signup_and_login()
    users_repo.remove(user_id)

    resp = client.get("/api/auth/profile", headers=headers)

    assert resp.status_code == 404
    assert resp.get_json() == {"error": "User not found"}
