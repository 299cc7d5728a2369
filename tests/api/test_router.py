from __future__ import annotations

import pytest


def test_cors_headers_on_every_response(client):
    resp = client.get("/api/salaries")

    assert resp.headers["Access-Control-Allow-Origin"] == "*"
    assert "DELETE" in resp.headers["Access-Control-Allow-Methods"]
    assert "Authorization" in resp.headers["Access-Control-Allow-Headers"]


@pytest.mark.parametrize("path", ["/api/salaries", "/api/salaries/5", "/api/auth/login", "/api/nowhere"])
def test_preflight_is_answered_without_auth(client, path):
    resp = client.options(path)

    assert resp.status_code == 200
    assert resp.headers["Access-Control-Allow-Origin"] == "*"


@pytest.mark.parametrize(
    "method, path",
    [
        ("get", "/api/auth/login"),
        ("post", "/api/auth/profile"),
        ("get", "/api/auth/unknown"),
    ],
)
def test_unknown_auth_route_is_json_404(client, method, path):
    resp = getattr(client, method)(path)

    assert resp.status_code == 404
    assert resp.get_json() == {"error": "Auth route not found"}


@pytest.mark.parametrize(
    "method, path",
    [
        ("patch", "/api/salaries/1"),
        ("delete", "/api/salaries"),
        ("get", "/api/salaries/1/history"),
    ],
)
def test_unknown_salary_route_is_json_404(client, method, path):
    resp = getattr(client, method)(path)

    assert resp.status_code == 404
    assert resp.get_json() == {"error": "Route not found"}


def test_other_paths_are_not_api_errors(client):
    resp = client.get("/definitely-not-here")

    assert resp.status_code == 404
    assert resp.get_json(silent=True) is None


def test_malformed_json_body(client):
    resp = client.post("/api/auth/signup", data="{oops", content_type="application/json")

    assert resp.status_code == 400
    assert resp.get_json() == {"error": "Invalid JSON body"}


def test_json_array_body_is_rejected(client):
    resp = client.post("/api/auth/login", json=["a@x.com", "p"])

    assert resp.status_code == 400
    assert resp.get_json() == {"error": "Invalid JSON body"}


def test_unexpected_errors_become_500(client, container, monkeypatch):
    def boom(email):
        raise RuntimeError("db down")

    monkeypatch.setattr(container.users_repo, "get_by_email", boom)

    resp = client.post("/api/auth/login", json={"email": "a@x.com", "password": "p"})

    assert resp.status_code == 500
    assert resp.get_json() == {"error": "Internal server error"}
