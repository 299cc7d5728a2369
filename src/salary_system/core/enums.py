from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """User role used for login checks."""

    ADMIN = "admin"
    EMPLOYEE = "employee"


class SalaryType(str, Enum):
    MONTHLY = "Monthly"
    WEEKLY = "Weekly"
    BONUS = "Bonus"
    COMMISSION = "Commission"


class PaymentMethod(str, Enum):
    """How a salary was paid out (the ``paidThrough`` field)."""

    BANK_TRANSFER = "Bank Transfer"
    CASH = "Cash"
    CHEQUE = "Cheque"
    UPI = "UPI"
