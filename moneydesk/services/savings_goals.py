"""Savings goals: capped progress, deadlines and totals"""

from datetime import date
from typing import Any, Callable, Dict, List, Tuple

from moneydesk.domain.exceptions import InvalidInputError
from moneydesk.domain.models import SAVINGS_CATEGORIES, SavingsGoal, SavingsGoalView, SavingsSummary
from moneydesk.domain.money import DisplayOptions
from moneydesk.domain.progress import SAVINGS_CAP, SavingsStatus, classify_savings_progress, remaining, usage_ratio
from moneydesk.domain.repository import InstrumentRepository
from moneydesk.services.common import require_choice, require_non_negative, require_positive, require_text
from moneydesk.utils.date_utils import days_between

_EDITABLE_FIELDS = ("title", "category", "target_amount", "current_amount", "target_date")


def enrich_savings_goal(record: SavingsGoal, today: date, display: DisplayOptions) -> SavingsGoalView:
    progress = usage_ratio(record.current_amount, record.target_amount, cap=SAVINGS_CAP)
    left = remaining(record.target_amount, record.current_amount)
    days_left = days_between(today, record.target_date)
    return SavingsGoalView(
        id=record.id,
        title=record.title,
        category=record.category,
        target_amount=record.target_amount,
        current_amount=record.current_amount,
        target_date=record.target_date,
        remaining_amount=left,
        progress=progress,
        status=classify_savings_progress(progress).value,
        days_left=days_left,
        deadline_label=f"{days_left} days" if days_left > 0 else "Overdue",
        target_display=display.format(record.target_amount),
        current_display=display.format(record.current_amount),
        remaining_display=display.format(left),
    )


def summarize_savings_goals(views: List[SavingsGoalView], display: DisplayOptions) -> SavingsSummary:
    total_saved = sum(v.current_amount for v in views)
    total_target = sum(v.target_amount for v in views)
    return SavingsSummary(
        total_saved=total_saved,
        total_target=total_target,
        completed_count=sum(1 for v in views if v.status == SavingsStatus.COMPLETED.value),
        overall_progress=usage_ratio(total_saved, total_target, cap=SAVINGS_CAP),
        total_saved_display=display.format(total_saved),
        total_target_display=display.format(total_target),
    )


def _validate_fields(fields: Dict[str, Any]) -> None:
    if "title" in fields:
        require_text("title", fields["title"])
    if "category" in fields:
        require_choice("savings category", fields["category"], SAVINGS_CATEGORIES)
    if "target_amount" in fields:
        require_positive("target_amount", fields["target_amount"])
    if "current_amount" in fields:
        require_non_negative("current_amount", fields["current_amount"])


class SavingsGoalService:
    def __init__(
        self,
        repository: InstrumentRepository[SavingsGoal],
        display: DisplayOptions | None = None,
        today: Callable[[], date] = date.today,
    ):
        self.repository = repository
        self.display = display or DisplayOptions()
        self.today = today

    async def list(self, user_id: str) -> Tuple[List[SavingsGoalView], SavingsSummary]:
        records = await self.repository.list(user_id, order_by="created_at", descending=True)
        today = self.today()
        views = [enrich_savings_goal(r, today, self.display) for r in records]
        return views, summarize_savings_goals(views, self.display)

    async def create(
        self,
        user_id: str,
        title: str,
        category: str,
        target_amount: float,
        target_date: date,
        current_amount: float = 0.0,
    ) -> SavingsGoalView:
        fields = {
            "title": title,
            "category": category,
            "target_amount": target_amount,
            "current_amount": current_amount,
            "target_date": target_date,
        }
        _validate_fields(fields)
        stored = await self.repository.create(SavingsGoal(user_id=user_id, **fields))
        return enrich_savings_goal(stored, self.today(), self.display)

    async def update(self, user_id: str, goal_id: str, changes: Dict[str, Any]) -> SavingsGoalView:
        """Every goal field is editable, including the amount saved so far"""
        unknown = set(changes) - set(_EDITABLE_FIELDS)
        if unknown:
            raise InvalidInputError(f"Fields not editable: {', '.join(sorted(unknown))}")
        _validate_fields(changes)
        stored = await self.repository.update(user_id, goal_id, changes)
        return enrich_savings_goal(stored, self.today(), self.display)

    async def delete(self, user_id: str, goal_id: str) -> None:
        await self.repository.delete(user_id, goal_id)
