from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from typing import Optional

from ..core.enums import PaymentStatus


@dataclass(frozen=True)
class Payment:
    """Payment obligation linked to a task and an employee.

    Note: ``collected_amount``/``collected_on`` are only meaningful once the
    status is Collected; nothing enforces the pairing.
    """

    id: int
    task_id: int
    assigned_to: int
    amount_due: Decimal
    due_date: date
    status: PaymentStatus
    collected_amount: Optional[Decimal] = None
    collected_on: Optional[date] = None
    notes: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


@dataclass(frozen=True)
class PaymentFields:
    task_id: int
    assigned_to: int
    amount_due: Decimal
    due_date: date
    status: PaymentStatus
    collected_amount: Optional[Decimal]
    collected_on: Optional[date]
    notes: Optional[str]
