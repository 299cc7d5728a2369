from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from werkzeug.security import check_password_hash, generate_password_hash

from ..common.validators import is_blank, require_enum
from ..core.constants import DEFAULT_PASSWORD_HASH_METHOD
from ..core.enums import Role
from ..core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    NotFoundError,
    ValidationError,
)
from .model import User
from .repository import UserRepository
from .tokens import TokenClaims, TokenService

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid credentials"


@dataclass(frozen=True)
class LoginResult:
    """What the login endpoint hands back to the client."""

    token: str
    role: Role
    user_id: int


class AuthService:
    """Use cases: register, login, profile lookup."""

    def __init__(
        self,
        users: UserRepository,
        tokens: TokenService,
        *,
        password_hash_method: str = DEFAULT_PASSWORD_HASH_METHOD,
    ):
        self._users = users
        self._tokens = tokens
        self._hash_method = password_hash_method
        # Checked against when the email is unknown so both failure paths cost the same
        self._dummy_hash = generate_password_hash("dummy-password", method=password_hash_method)

    def register(self, *, name: str, email: str, password: str, role: Optional[str] = None) -> int:
        if is_blank(name) or is_blank(email) or is_blank(password):
            raise ValidationError("All fields required")
        if not all(isinstance(v, str) for v in (name, email, password)):
            raise ValidationError("Name, email and password must be strings")

        user_role = Role.EMPLOYEE if is_blank(role) else require_enum(role, Role, "Role")

        if self._users.get_by_email(email):
            raise ConflictError("Email already registered")

        user_id = self._users.create_user(
            name=name.strip(),
            email=email,
            password_hash=generate_password_hash(password, method=self._hash_method),
            role=user_role,
        )
        logger.info("Registered user id=%s role=%s", user_id, user_role.value)
        return user_id

    def _check_password(self, password_hash: str, password: str) -> bool:
        try:
            return check_password_hash(password_hash, password)
        except (ValueError, TypeError):
            # e.g. placeholder hashes like 'CHANGE_ME' or corrupted values
            return False

    def login(self, *, email: str, password: str, role: Optional[str] = None) -> LoginResult:
        if is_blank(email) or is_blank(password):
            raise ValidationError("Email and password are required")

        user = self._users.get_by_email(email)
        if not user:
            self._check_password(self._dummy_hash, str(password))
            logger.warning("Login failed: unknown email")
            raise AuthenticationError(INVALID_CREDENTIALS)

        if not self._check_password(user.password_hash, str(password)):
            logger.warning("Login failed: bad password for user id=%s", user.id)
            raise AuthenticationError(INVALID_CREDENTIALS)

        if not is_blank(role) and str(role) != user.role.value:
            logger.warning("Login refused: user id=%s is not a %s", user.id, role)
            raise AuthorizationError(f"User is not a {role}")

        token = self._tokens.issue(user)
        logger.info("Login success user id=%s role=%s", user.id, user.role.value)
        return LoginResult(token=token, role=user.role, user_id=user.id)

    def authenticate_token(self, token: Optional[str]) -> TokenClaims:
        return self._tokens.verify(token)

    def get_profile(self, claims: TokenClaims) -> User:
        user = self._users.get_by_id(claims.user_id)
        if not user:
            raise NotFoundError("User not found")
        return user
