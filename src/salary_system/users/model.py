from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..common.datetime_utils import format_datetime
from ..core.enums import Role


@dataclass(frozen=True)
class User:
    """Domain entity: User.

    Plain data object, no DB access code here.
    """

    id: int
    name: str
    email: str
    password_hash: str
    role: Role = Role.EMPLOYEE
    created_at: Optional[datetime] = None

    def to_profile(self) -> dict:
        """Public view of the user (never exposes the password hash)."""
        return {
            "id": self.id,
            "name": self.name,
            "email": self.email,
            "role": self.role.value,
            "createdAt": format_datetime(self.created_at),
        }
