from __future__ import annotations

import logging
from dataclasses import replace
from datetime import date
from typing import Any, Mapping, Optional, Sequence

from ..common.datetime_utils import coerce_date, optional_date
from ..common.validators import is_blank, missing_fields, parse_amount, require_enum, require_non_empty
from ..core.enums import PaymentMethod, SalaryType
from ..core.exceptions import InternalError, NotFoundError, ValidationError
from .model import SalaryFields, SalaryFilter, SalaryRecord, SalaryStats
from .remarks import serialize_remarks
from .repository import SalaryRepository

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("type", "amount", "paidTo", "paidOn", "paidThrough", "startDate", "endDate")

# request key -> SalaryFields attribute
_FIELD_NAMES = {
    "type": "type",
    "amount": "amount",
    "paidTo": "paid_to",
    "paidOn": "paid_on",
    "paidThrough": "paid_through",
    "startDate": "start_date",
    "endDate": "end_date",
    "remarks": "remarks",
}


def _parse_field(key: str, value: Any) -> Any:
    if key == "type":
        return require_enum(value, SalaryType, "Type")
    if key == "amount":
        return parse_amount(value)
    if key == "paidTo":
        return require_non_empty(value if isinstance(value, str) else str(value), "Paid to")
    if key == "paidThrough":
        return require_enum(value, PaymentMethod, "Paid through")
    if key in ("paidOn", "startDate", "endDate"):
        return coerce_date(value, key)
    if key == "remarks":
        return serialize_remarks(value)
    raise KeyError(key)


def _check_period(fields: SalaryFields) -> None:
    if fields.end_date < fields.start_date:
        raise ValidationError("End date must be after start date")


def parse_salary_id(raw: Any) -> int:
    text = str(raw).strip()
    if not text.isdigit() or int(text) <= 0:
        raise ValidationError("Invalid salary ID")
    return int(text)


class SalaryService:
    """Use cases: salary record CRUD, filtered listing and statistics."""

    def __init__(self, salaries: SalaryRepository):
        self._salaries = salaries

    def create(self, *, owner_user_id: int, data: Mapping[str, Any]) -> SalaryRecord:
        if not isinstance(data, Mapping):
            raise ValidationError("Request body must be a JSON object")

        missing = missing_fields(data, REQUIRED_FIELDS)
        if missing:
            raise ValidationError(f"Missing required fields: {', '.join(missing)}")

        # owner always comes from the caller; any userId/ownerUserId in data is ignored
        values = {_FIELD_NAMES[k]: _parse_field(k, data.get(k)) for k in _FIELD_NAMES if k in data}
        fields = SalaryFields(**values)
        _check_period(fields)

        salary_id = self._salaries.create(owner_user_id=int(owner_user_id), fields=fields)
        record = self._salaries.get_by_id(salary_id)
        if not record:
            raise InternalError("Failed to create salary")

        logger.info("Created salary id=%s owner=%s type=%s", record.id, owner_user_id, fields.type.value)
        return record

    def list(self, criteria: Optional[SalaryFilter] = None) -> Sequence[SalaryRecord]:
        return list(self._salaries.list(criteria or SalaryFilter()))

    def get_by_id(self, salary_id: int, *, owner_user_id: Optional[int] = None) -> SalaryRecord:
        record = self._salaries.get_by_id(int(salary_id))
        # A record owned by someone else answers exactly like a missing one
        if not record or (owner_user_id is not None and record.owner_user_id != int(owner_user_id)):
            raise NotFoundError("Salary record not found")
        return record

    def update(
        self,
        salary_id: int,
        data: Mapping[str, Any],
        *,
        owner_user_id: Optional[int] = None,
    ) -> SalaryRecord:
        existing = self.get_by_id(salary_id, owner_user_id=owner_user_id)

        if not isinstance(data, Mapping):
            raise ValidationError("Request body must be a JSON object")

        changes: dict[str, Any] = {}
        for key, attr in _FIELD_NAMES.items():
            if key not in data:
                continue
            value = data[key]
            if key != "remarks" and is_blank(value):
                raise ValidationError(f"{key} cannot be empty")
            changes[attr] = _parse_field(key, value)

        fields = replace(existing.fields, **changes)
        _check_period(fields)

        if not self._salaries.update(salary_id=existing.id, fields=fields):
            raise NotFoundError("Salary record not found")

        logger.info("Updated salary id=%s fields=%s", existing.id, sorted(changes))
        return self.get_by_id(existing.id)

    def delete(self, salary_id: int, *, owner_user_id: Optional[int] = None) -> dict:
        existing = self.get_by_id(salary_id, owner_user_id=owner_user_id)

        if not self._salaries.delete(existing.id):
            raise NotFoundError("Salary record not found")

        logger.info("Deleted salary id=%s", existing.id)
        return {"message": "Salary record deleted successfully", "id": existing.id}

    def stats(
        self,
        *,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        owner_user_id: Optional[int] = None,
    ) -> SalaryStats:
        criteria = SalaryFilter(start_date=start_date, end_date=end_date, owner_user_id=owner_user_id)
        return self._salaries.stats(criteria)

    @staticmethod
    def build_filter(params: Mapping[str, Any], *, owner_user_id: Optional[int] = None) -> SalaryFilter:
        """Turn query-string parameters into a SalaryFilter; blank values are ignored."""

        type_s = params.get("type")
        paid_through_s = params.get("paidThrough")
        paid_to = (params.get("paidTo") or "").strip()

        return SalaryFilter(
            start_date=optional_date(params.get("startDate"), "startDate"),
            end_date=optional_date(params.get("endDate"), "endDate"),
            type=None if is_blank(type_s) else require_enum(type_s, SalaryType, "Type"),
            paid_to=paid_to or None,
            paid_through=None if is_blank(paid_through_s) else require_enum(paid_through_s, PaymentMethod, "Paid through"),
            owner_user_id=owner_user_id,
        )
