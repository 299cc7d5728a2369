from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import SalaryFields, SalaryFilter, SalaryRecord, SalaryStats


class SalaryRepository(Protocol):
    """Repository interface for salary records."""

    def create(self, *, owner_user_id: int, fields: SalaryFields) -> int:
        """Insert a record and return its id."""

        raise NotImplementedError

    def get_by_id(self, salary_id: int) -> Optional[SalaryRecord]:
        raise NotImplementedError

    def update(self, *, salary_id: int, fields: SalaryFields) -> bool:
        """Overwrite the editable fields and refresh updated_at."""

        raise NotImplementedError

    def delete(self, salary_id: int) -> bool:
        raise NotImplementedError

    def list(self, criteria: SalaryFilter) -> Sequence[SalaryRecord]:
        """Matching records ordered by paid_on DESC, id DESC."""

        raise NotImplementedError

    def stats(self, criteria: SalaryFilter) -> SalaryStats:
        raise NotImplementedError
