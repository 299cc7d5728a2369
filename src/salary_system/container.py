from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .config import Settings
from .database.connection import DatabaseConnection, DBConfig
from .salaries.mysql_salary_repository import MySQLSalaryRepository
from .salaries.repository import SalaryRepository
from .salaries.service import SalaryService
from .users.mysql_user_repository import MySQLUserRepository
from .users.repository import UserRepository
from .users.service import AuthService
from .users.tokens import TokenService


@dataclass(frozen=True)
class Container:
    settings: Settings
    conn: Optional[DatabaseConnection]

    users_repo: UserRepository
    salaries_repo: SalaryRepository

    token_service: TokenService
    auth_service: AuthService
    salary_service: SalaryService


def build_container(
    *,
    settings: Settings,
    users_repo: Optional[UserRepository] = None,
    salaries_repo: Optional[SalaryRepository] = None,
) -> Container:
    """Wire repositories and services from settings.

    Repositories passed in (e.g. in-memory ones in tests) replace the MySQL ones.
    """

    conn = None
    if users_repo is None or salaries_repo is None:
        conn = DatabaseConnection(DBConfig.from_dict(settings.db_config))

    users_repo = users_repo or MySQLUserRepository(conn)
    salaries_repo = salaries_repo or MySQLSalaryRepository(conn)

    token_service = TokenService(settings.jwt_secret, ttl_seconds=settings.token_ttl_seconds)
    auth_service = AuthService(users_repo, token_service, password_hash_method=settings.password_hash_method)
    salary_service = SalaryService(salaries_repo)

    return Container(
        settings=settings,
        conn=conn,
        users_repo=users_repo,
        salaries_repo=salaries_repo,
        token_service=token_service,
        auth_service=auth_service,
        salary_service=salary_service,
    )
