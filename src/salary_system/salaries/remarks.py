"""Remarks on a salary record.

Remarks are stored as text. Some clients store a plain note, others a JSON
payslip breakdown such as::

    {"breakdown": true,
     "components": {"basic": {"name": "Basic", "value": 4000, "type": "earning"},
                    "pf": {"name": "PF", "value": 200, "type": "deduction"}},
     "totalEarnings": 4000, "totalDeductions": 200, "net": 3800}

``parse_remarks`` turns the stored text into either ``PlainText`` or
``Breakdown`` and never raises: anything that is not a well-formed breakdown
is kept as plain text.
"""
from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Optional, Union


@dataclass(frozen=True)
class PlainText:
    text: str

    def to_dict(self) -> dict:
        return {"kind": "text", "text": self.text}


@dataclass(frozen=True)
class BreakdownComponent:
    name: str
    value: float
    type: str

    @property
    def is_deduction(self) -> bool:
        return self.type.strip().lower().startswith("deduct")

    def to_dict(self) -> dict:
        return {"name": self.name, "value": self.value, "type": self.type}


@dataclass(frozen=True)
class Breakdown:
    components: tuple[BreakdownComponent, ...]
    total_earnings: float
    total_deductions: float
    net: float

    def to_dict(self) -> dict:
        return {
            "kind": "breakdown",
            "components": [c.to_dict() for c in self.components],
            "totalEarnings": self.total_earnings,
            "totalDeductions": self.total_deductions,
            "net": self.net,
        }


Remarks = Union[PlainText, Breakdown]


def _number(value: Any) -> float:
    if isinstance(value, bool):
        raise TypeError("boolean is not a number")
    return float(value)


def _parse_component(raw: Any) -> BreakdownComponent:
    if not isinstance(raw, dict):
        raise TypeError("component must be an object")
    return BreakdownComponent(
        name=str(raw["name"]),
        value=_number(raw["value"]),
        type=str(raw.get("type") or "earning"),
    )


def _parse_breakdown(payload: dict) -> Breakdown:
    raw_components = payload.get("components") or []
    if isinstance(raw_components, dict):
        raw_components = list(raw_components.values())
    if not isinstance(raw_components, list):
        raise TypeError("components must be a list or an object")

    components = tuple(_parse_component(c) for c in raw_components)

    earnings = sum(c.value for c in components if not c.is_deduction)
    deductions = sum(c.value for c in components if c.is_deduction)

    total_earnings = _number(payload["totalEarnings"]) if payload.get("totalEarnings") is not None else earnings
    total_deductions = _number(payload["totalDeductions"]) if payload.get("totalDeductions") is not None else deductions
    net = _number(payload["net"]) if payload.get("net") is not None else total_earnings - total_deductions

    return Breakdown(
        components=components,
        total_earnings=total_earnings,
        total_deductions=total_deductions,
        net=net,
    )


def parse_remarks(raw: Optional[str]) -> Optional[Remarks]:
    if raw is None or not raw.strip():
        return None

    try:
        payload = json.loads(raw)
    except ValueError:
        return PlainText(raw)

    if not isinstance(payload, dict) or not (payload.get("breakdown") or "components" in payload):
        return PlainText(raw)

    try:
        return _parse_breakdown(payload)
    except (KeyError, TypeError, ValueError):
        return PlainText(raw)


def serialize_remarks(value: Any) -> Optional[str]:
    """Normalize client input into the stored text form."""

    if value is None:
        return None
    if isinstance(value, str):
        return value if value.strip() else None
    if isinstance(value, (dict, list)):
        return json.dumps(value)
    return str(value)
