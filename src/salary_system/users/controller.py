from __future__ import annotations

from flask import Flask, jsonify

from ..common.http import get_json_body
from ..container import Container
from .guards import current_user, token_required


def register(app: Flask, container: Container) -> None:
    auth = container.auth_service
    login_required = token_required(auth)

    @app.route("/api/auth/signup", methods=["POST"], endpoint="auth_signup")
    def signup():
        body = get_json_body()
        user_id = auth.register(
            name=body.get("name"),
            email=body.get("email"),
            password=body.get("password"),
            role=body.get("role"),
        )
        return jsonify({"message": "User registered successfully", "userId": user_id}), 201

    @app.route("/api/auth/login", methods=["POST"], endpoint="auth_login")
    def login():
        body = get_json_body()
        result = auth.login(
            email=body.get("email"),
            password=body.get("password"),
            role=body.get("role"),
        )
        return jsonify({"message": "Login success", "token": result.token, "role": result.role.value})

    @app.route("/api/auth/profile", methods=["GET"], endpoint="auth_profile")
    @login_required
    def profile():
        user = auth.get_profile(current_user())
        return jsonify({"user": user.to_profile()})
