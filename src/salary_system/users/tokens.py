from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt

from ..core.constants import DEFAULT_TOKEN_TTL_SECONDS, TOKEN_ALGORITHM
from ..core.enums import Role
from ..core.exceptions import AuthenticationError
from .model import User


@dataclass(frozen=True)
class TokenClaims:
    """Identity carried by a verified session token."""

    user_id: int
    email: str
    role: Role


class TokenService:
    """Issues and verifies signed, time-limited session tokens (HS256 JWT)."""

    def __init__(self, secret: str, *, ttl_seconds: int = DEFAULT_TOKEN_TTL_SECONDS, algorithm: str = TOKEN_ALGORITHM):
        if not secret:
            raise ValueError("Token secret must not be empty")
        self._secret = secret
        self._ttl = timedelta(seconds=int(ttl_seconds))
        self._algorithm = algorithm

    def issue(self, user: User, *, now: Optional[datetime] = None) -> str:
        issued_at = now or datetime.now(timezone.utc)
        payload = {
            "id": user.id,
            "email": user.email,
            "role": user.role.value,
            "iat": issued_at,
            "exp": issued_at + self._ttl,
        }
        return jwt.encode(payload, self._secret, algorithm=self._algorithm)

    def verify(self, token: Optional[str]) -> TokenClaims:
        if not token:
            raise AuthenticationError("No token provided")

        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[self._algorithm],
                options={"require": ["exp", "id"]},
            )
        except jwt.ExpiredSignatureError:
            raise AuthenticationError("Token expired")
        except jwt.InvalidTokenError:
            raise AuthenticationError("Invalid token")

        try:
            return TokenClaims(
                user_id=int(payload["id"]),
                email=str(payload.get("email") or ""),
                role=Role(payload.get("role") or Role.EMPLOYEE.value),
            )
        except (TypeError, ValueError):
            raise AuthenticationError("Invalid token")


def extract_bearer(auth_header: Optional[str]) -> Optional[str]:
    """
    Extract bearer token from Authorization header.
    Returns None if header missing or malformed.
    """
    if not auth_header:
        return None

    parts = auth_header.split()
    if len(parts) != 2 or parts[0].lower() != "bearer":
        return None

    return parts[1]
