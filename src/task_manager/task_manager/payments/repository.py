from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from ..core.enums import PaymentStatus
from .model import Payment, PaymentFields


class PaymentRepository(Protocol):
    def get_by_id(self, id: int) -> Optional[Payment]:
        raise NotImplementedError

    def list_all(self) -> Sequence[Payment]:
        raise NotImplementedError

    def list_filtered(
        self,
        *,
        status: Optional[PaymentStatus] = None,
        from_date: Optional[date] = None,
        to_date: Optional[date] = None,
    ) -> Sequence[Payment]:
        raise NotImplementedError

    def create(self, fields: PaymentFields) -> int:
        raise NotImplementedError

    def update(self, id: int, fields: PaymentFields) -> bool:
        raise NotImplementedError

    def delete_by_id(self, id: int) -> bool:
        raise NotImplementedError

    def count_by_assignee(self, employee_id: int) -> int:
        raise NotImplementedError

    def count_by_task(self, task_id: int) -> int:
        raise NotImplementedError

    def delete_by_assignee(self, employee_id: int) -> int:
        raise NotImplementedError

    def delete_by_task(self, task_id: int) -> int:
        raise NotImplementedError
