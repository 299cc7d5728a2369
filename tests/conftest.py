from __future__ import annotations

from dataclasses import replace
from datetime import datetime, timedelta
from typing import Optional

import pytest

from salary_system.config import Settings, load_settings
from salary_system.container import build_container
from salary_system.core.enums import Role
from salary_system.core.exceptions import ConflictError
from salary_system.main import create_app
from salary_system.salaries.model import SalaryFields, SalaryFilter, SalaryRecord, SalaryStats
from salary_system.users.model import User


class InMemoryUsers:
    def __init__(self):
        self._by_id: dict[int, User] = {}
        self._next_id = 1

    def get_by_id(self, user_id: int) -> Optional[User]:
        return self._by_id.get(int(user_id))

    def get_by_email(self, email: str) -> Optional[User]:
        for u in self._by_id.values():
            if u.email == email:
                return u
        return None

    def create_user(self, *, name: str, email: str, password_hash: str, role: Role) -> int:
        if self.get_by_email(email):
            raise ConflictError("Email already registered")
        uid = self._next_id
        self._next_id += 1
        self._by_id[uid] = User(
            id=uid,
            name=name,
            email=email,
            password_hash=password_hash,
            role=role,
            created_at=datetime(2024, 1, 1, 9, 0, 0),
        )
        return uid

    def remove(self, user_id: int) -> None:
        self._by_id.pop(int(user_id), None)


class InMemorySalaries:
    def __init__(self):
        self._by_id: dict[int, SalaryRecord] = {}
        self._next_id = 1
        self._clock = datetime(2024, 1, 1, 12, 0, 0)

    def _tick(self) -> datetime:
        self._clock += timedelta(seconds=1)
        return self._clock

    def create(self, *, owner_user_id: int, fields: SalaryFields) -> int:
        sid = self._next_id
        self._next_id += 1
        now = self._tick()
        self._by_id[sid] = SalaryRecord(
            id=sid,
            owner_user_id=int(owner_user_id),
            type=fields.type,
            amount=fields.amount,
            paid_to=fields.paid_to,
            paid_on=fields.paid_on,
            paid_through=fields.paid_through,
            start_date=fields.start_date,
            end_date=fields.end_date,
            remarks=fields.remarks,
            created_at=now,
            updated_at=now,
        )
        return sid

    def get_by_id(self, salary_id: int) -> Optional[SalaryRecord]:
        return self._by_id.get(int(salary_id))

    def update(self, *, salary_id: int, fields: SalaryFields) -> bool:
        rec = self._by_id.get(int(salary_id))
        if not rec:
            return False
        self._by_id[rec.id] = replace(
            rec,
            type=fields.type,
            amount=fields.amount,
            paid_to=fields.paid_to,
            paid_on=fields.paid_on,
            paid_through=fields.paid_through,
            start_date=fields.start_date,
            end_date=fields.end_date,
            remarks=fields.remarks,
            updated_at=self._tick(),
        )
        return True

    def delete(self, salary_id: int) -> bool:
        return self._by_id.pop(int(salary_id), None) is not None

    def list(self, criteria: SalaryFilter):
        items = [r for r in self._by_id.values() if criteria.matches(r)]
        items.sort(key=lambda r: (r.paid_on, r.id), reverse=True)
        return items

    def stats(self, criteria: SalaryFilter) -> SalaryStats:
        items = [r for r in self._by_id.values() if criteria.matches(r)]
        if not items:
            return SalaryStats.empty()
        total = float(sum(r.amount for r in items))
        return SalaryStats(
            total=total,
            count=len(items),
            unique_employees=len({r.paid_to for r in items}),
            average=total / len(items),
        )


SALARY_PAYLOAD = {
    "type": "Monthly",
    "amount": 5000,
    "paidTo": "A",
    "paidOn": "2024-01-05",
    "paidThrough": "Bank Transfer",
    "startDate": "2024-01-01",
    "endDate": "2024-01-31",
}


@pytest.fixture
def salary_payload() -> dict:
    return dict(SALARY_PAYLOAD)


@pytest.fixture
def settings() -> Settings:
    return load_settings("salary_system.config.testing")


@pytest.fixture
def users_repo() -> InMemoryUsers:
    return InMemoryUsers()


@pytest.fixture
def salaries_repo() -> InMemorySalaries:
    return InMemorySalaries()


@pytest.fixture
def container(settings, users_repo, salaries_repo):
    return build_container(settings=settings, users_repo=users_repo, salaries_repo=salaries_repo)


@pytest.fixture
def app(container):
    return create_app(container=container)


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def signup_and_login(client):
    """Register + log in a user, returning (user_id, auth headers)."""

    def _go(email: str = "a@x.com", password: str = "secret123", name: str = "A", role: Optional[str] = None):
        body = {"name": name, "email": email, "password": password}
        if role:
            body["role"] = role
        resp = client.post("/api/auth/signup", json=body)
        assert resp.status_code == 201, resp.get_json()
        user_id = resp.get_json()["userId"]

        resp = client.post("/api/auth/login", json={"email": email, "password": password})
        assert resp.status_code == 200, resp.get_json()
        token = resp.get_json()["token"]
        return user_id, {"Authorization": f"Bearer {token}"}

    return _go
