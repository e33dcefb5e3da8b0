"""Monthly budget categories: upsert per category and month, usage tracking"""

from datetime import date
from typing import Callable, List, Tuple

from moneydesk.domain.models import BUDGET_CATEGORIES, BudgetCategory, BudgetCategoryView, BudgetSummary
from moneydesk.domain.money import DisplayOptions, percentage
from moneydesk.domain.progress import classify_budget_usage, remaining, usage_ratio
from moneydesk.domain.repository import BUDGET_CONFLICT_KEYS, InstrumentRepository
from moneydesk.services.common import require_choice, require_non_negative
from moneydesk.utils.date_utils import month_key, validate_month_key


def enrich_budget(record: BudgetCategory, display: DisplayOptions) -> BudgetCategoryView:
    # Budgets are uncapped: spending past the budget shows as >100%
    ratio = usage_ratio(record.spent_amount, record.budgeted_amount)
    left = remaining(record.budgeted_amount, record.spent_amount)
    return BudgetCategoryView(
        id=record.id,
        category_name=record.category_name,
        month_year=record.month_year,
        budgeted_amount=record.budgeted_amount,
        spent_amount=record.spent_amount,
        remaining_amount=left,
        usage_ratio=ratio,
        bar_width=min(ratio, 100.0),
        status=classify_budget_usage(ratio).value,
        budgeted_display=display.format(record.budgeted_amount),
        spent_display=display.format(record.spent_amount),
        remaining_display=display.format(left),
    )


def summarize_budgets(month_year: str, views: List[BudgetCategoryView], display: DisplayOptions) -> BudgetSummary:
    total_budgeted = sum(v.budgeted_amount for v in views)
    total_spent = sum(v.spent_amount for v in views)
    left = remaining(total_budgeted, total_spent)
    return BudgetSummary(
        month_year=month_year,
        total_budgeted=total_budgeted,
        total_spent=total_spent,
        remaining=left,
        usage_ratio=percentage(total_spent, total_budgeted),
        total_budgeted_display=display.format(total_budgeted),
        total_spent_display=display.format(total_spent),
        remaining_display=display.format(left),
    )


class BudgetService:
    def __init__(
        self,
        repository: InstrumentRepository[BudgetCategory],
        display: DisplayOptions | None = None,
        today: Callable[[], date] = date.today,
    ):
        self.repository = repository
        self.display = display or DisplayOptions()
        self.today = today

    def current_month(self) -> str:
        return month_key(self.today())

    async def list(self, user_id: str, month_year: str | None = None) -> Tuple[List[BudgetCategoryView], BudgetSummary]:
        month_year = validate_month_key(month_year) if month_year else self.current_month()
        records = await self.repository.list(user_id, filters={"month_year": month_year}, order_by="category_name")
        views = [enrich_budget(r, self.display) for r in records]
        return views, summarize_budgets(month_year, views, self.display)

    async def save(
        self,
        user_id: str,
        category_name: str,
        budgeted_amount: float,
        month_year: str | None = None,
        spent_amount: float | None = None,
    ) -> BudgetCategoryView:
        """
        Create or replace the budget for (user, category, month).

        When spent_amount is omitted, spending already recorded for an existing
        budget is carried over instead of being reset.
        """
        require_choice("budget category", category_name, BUDGET_CATEGORIES)
        require_non_negative("budgeted_amount", budgeted_amount)
        month_year = validate_month_key(month_year) if month_year else self.current_month()

        if spent_amount is None:
            existing = await self.repository.list(
                user_id,
                filters={"category_name": category_name, "month_year": month_year},
                order_by="category_name",
            )
            spent_amount = existing[0].spent_amount if existing else 0.0
        require_non_negative("spent_amount", spent_amount)

        stored = await self.repository.upsert(
            BudgetCategory(
                user_id=user_id,
                category_name=category_name,
                budgeted_amount=budgeted_amount,
                spent_amount=spent_amount,
                month_year=month_year,
            ),
            BUDGET_CONFLICT_KEYS,
        )
        return enrich_budget(stored, self.display)

    async def update_spent(self, user_id: str, budget_id: str, spent_amount: float) -> BudgetCategoryView:
        # Unguarded last-write-wins update
        require_non_negative("spent_amount", spent_amount)
        stored = await self.repository.update(user_id, budget_id, {"spent_amount": spent_amount})
        return enrich_budget(stored, self.display)
