"""In-process instrument store, used as the injected fake in tests"""

import itertools
import uuid
from dataclasses import replace
from datetime import datetime, timezone
from typing import Any, Dict, Generic, List, Mapping, Optional, Sequence, Type, TypeVar

from moneydesk.domain.exceptions import PersistenceError, RecordNotFoundError
from moneydesk.domain.models import BudgetCategory, EMIReminder, FixedDeposit, SavingsGoal
from moneydesk.domain.repository import InstrumentStore
from moneydesk.infrastructure.records import field_names

T = TypeVar("T")

_PROTECTED_FIELDS = {"id", "user_id", "created_at"}


class MemoryInstrumentRepository(Generic[T]):
    """Dict-backed repository with the same ownership rules as the real stores"""

    def __init__(self, record_type: Type[T], name: str):
        self.record_type = record_type
        self.name = name
        self.rows: Dict[str, T] = {}
        self._inserted: Dict[str, int] = {}  # insertion sequence breaks ordering ties
        self._sequence = itertools.count()
        self._columns = set(field_names(record_type))

    def _check_column(self, name: str) -> None:
        if name not in self._columns:
            raise PersistenceError(f"Unknown column {name!r} on {self.name}")

    def _get_owned(self, user_id: str, record_id: str) -> T:
        row = self.rows.get(record_id)
        if row is None or row.user_id != user_id:
            raise RecordNotFoundError(f"{self.name} {record_id} not found")
        return row

    async def list(
        self,
        user_id: str,
        filters: Optional[Mapping[str, Any]] = None,
        order_by: str = "created_at",
        descending: bool = False,
    ) -> List[T]:
        filters = filters or {}
        for name in filters:
            self._check_column(name)
        self._check_column(order_by)

        matches = [
            row
            for row in self.rows.values()
            if row.user_id == user_id and all(getattr(row, k) == v for k, v in filters.items())
        ]
        matches.sort(key=lambda row: (getattr(row, order_by), self._inserted[row.id]), reverse=descending)
        return [replace(row) for row in matches]

    async def create(self, record: T) -> T:
        stored = replace(record, id=str(uuid.uuid4()), created_at=datetime.now(timezone.utc))
        self.rows[stored.id] = stored
        self._inserted[stored.id] = next(self._sequence)
        return replace(stored)

    async def update(self, user_id: str, record_id: str, changes: Mapping[str, Any]) -> T:
        row = self._get_owned(user_id, record_id)
        for name in changes:
            self._check_column(name)
        allowed = {k: v for k, v in changes.items() if k not in _PROTECTED_FIELDS}
        stored = replace(row, **allowed)
        self.rows[record_id] = stored
        return replace(stored)

    async def upsert(self, record: T, conflict_keys: Sequence[str]) -> T:
        for name in conflict_keys:
            self._check_column(name)
        for row in self.rows.values():
            if all(getattr(row, k) == getattr(record, k) for k in conflict_keys):
                stored = replace(record, id=row.id, created_at=row.created_at)
                self.rows[row.id] = stored
                return replace(stored)
        return await self.create(record)

    async def delete(self, user_id: str, record_id: str) -> None:
        self._get_owned(user_id, record_id)
        del self.rows[record_id]
        del self._inserted[record_id]


def build_memory_store() -> InstrumentStore:
    return InstrumentStore(
        fixed_deposits=MemoryInstrumentRepository(FixedDeposit, "fixed_deposits"),
        emi_reminders=MemoryInstrumentRepository(EMIReminder, "emi_reminders"),
        budgets=MemoryInstrumentRepository(BudgetCategory, "budget_categories"),
        savings_goals=MemoryInstrumentRepository(SavingsGoal, "savings_goals"),
    )
