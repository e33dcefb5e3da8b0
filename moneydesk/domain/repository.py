"""Contract every instrument store must satisfy

Services depend only on these protocols. Implementations live under
moneydesk.infrastructure (SQL, in-memory, REST) and are injected.
"""

from dataclasses import dataclass
from typing import Any, List, Mapping, Optional, Protocol, Sequence, TypeVar

from moneydesk.domain.models import BudgetCategory, EMIReminder, FixedDeposit, SavingsGoal

T = TypeVar("T")

# Conflict key backing the one-budget-per-category-per-month invariant
BUDGET_CONFLICT_KEYS = ("user_id", "category_name", "month_year")


class InstrumentRepository(Protocol[T]):
    """
    Per-table access scoped to one owning user.

    Every method may fail; failures raise PersistenceError (RecordNotFoundError
    for a missing id) and leave stored state unchanged.
    """

    async def list(
        self,
        user_id: str,
        filters: Optional[Mapping[str, Any]] = None,
        order_by: str = "created_at",
        descending: bool = False,
    ) -> List[T]:
        ...

    async def create(self, record: T) -> T:
        ...

    async def update(self, user_id: str, record_id: str, changes: Mapping[str, Any]) -> T:
        ...

    async def upsert(self, record: T, conflict_keys: Sequence[str]) -> T:
        ...

    async def delete(self, user_id: str, record_id: str) -> None:
        ...


@dataclass
class InstrumentStore:
    """One repository per instrument type, built together by a store factory"""

    fixed_deposits: InstrumentRepository[FixedDeposit]
    emi_reminders: InstrumentRepository[EMIReminder]
    budgets: InstrumentRepository[BudgetCategory]
    savings_goals: InstrumentRepository[SavingsGoal]
