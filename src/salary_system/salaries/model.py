from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from typing import Optional

from ..common.datetime_utils import format_date, format_datetime
from ..core.enums import PaymentMethod, SalaryType
from .remarks import Remarks, parse_remarks


@dataclass(frozen=True)
class SalaryFields:
    """Editable, validated fields of a salary record."""

    type: SalaryType
    amount: Decimal
    paid_to: str
    paid_on: date
    paid_through: PaymentMethod
    start_date: date
    end_date: date
    remarks: Optional[str] = None


@dataclass(frozen=True)
class SalaryRecord:
    id: int
    owner_user_id: int
    type: SalaryType
    amount: Decimal
    paid_to: str
    paid_on: date
    paid_through: PaymentMethod
    start_date: date
    end_date: date
    remarks: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @property
    def fields(self) -> SalaryFields:
        return SalaryFields(
            type=self.type,
            amount=self.amount,
            paid_to=self.paid_to,
            paid_on=self.paid_on,
            paid_through=self.paid_through,
            start_date=self.start_date,
            end_date=self.end_date,
            remarks=self.remarks,
        )

    @property
    def remarks_detail(self) -> Optional[Remarks]:
        return parse_remarks(self.remarks)

    def to_dict(self) -> dict:
        detail = self.remarks_detail
        return {
            "id": self.id,
            "type": self.type.value,
            "amount": float(self.amount),
            "paidTo": self.paid_to,
            "paidOn": format_date(self.paid_on),
            "paidThrough": self.paid_through.value,
            "startDate": format_date(self.start_date),
            "endDate": format_date(self.end_date),
            "remarks": self.remarks,
            "remarksDetail": detail.to_dict() if detail else None,
            "ownerUserId": self.owner_user_id,
            "createdAt": format_datetime(self.created_at),
            "updatedAt": format_datetime(self.updated_at),
        }


@dataclass(frozen=True)
class SalaryFilter:
    """Listing criteria. Every field that is set must match (logical AND).

    ``start_date``/``end_date`` bound ``paid_on`` inclusively, so a range whose
    two ends are the same day matches that whole day.
    """

    start_date: Optional[date] = None
    end_date: Optional[date] = None
    type: Optional[SalaryType] = None
    paid_to: Optional[str] = None
    paid_through: Optional[PaymentMethod] = None
    owner_user_id: Optional[int] = None

    def matches(self, record: SalaryRecord) -> bool:
        if self.start_date is not None and record.paid_on < self.start_date:
            return False
        if self.end_date is not None and record.paid_on > self.end_date:
            return False
        if self.type is not None and record.type != self.type:
            return False
        if self.paid_to and self.paid_to.lower() not in record.paid_to.lower():
            return False
        if self.paid_through is not None and record.paid_through != self.paid_through:
            return False
        if self.owner_user_id is not None and record.owner_user_id != self.owner_user_id:
            return False
        return True


@dataclass(frozen=True)
class SalaryStats:
    total: float
    count: int
    unique_employees: int
    average: float

    @classmethod
    def empty(cls) -> "SalaryStats":
        return cls(total=0, count=0, unique_employees=0, average=0)

    def to_dict(self) -> dict:
        return {
            "total": self.total,
            "count": self.count,
            "uniqueEmployees": self.unique_employees,
            "average": self.average,
        }
