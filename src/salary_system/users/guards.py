from __future__ import annotations

from functools import wraps

from flask import g, request

from .service import AuthService
from .tokens import TokenClaims, extract_bearer


def token_required(auth: AuthService):
    """Decorator factory: the view runs only with a valid bearer token.

    The verified claims are available through ``current_user()``.
    """

    def decorator(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            token = extract_bearer(request.headers.get("Authorization"))
            g.current_user = auth.authenticate_token(token)
            return view(*args, **kwargs)

        return wrapper

    return decorator


def current_user() -> TokenClaims:
    return g.current_user
