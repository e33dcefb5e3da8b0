"""/v1/budgets - monthly budget planner endpoints"""

from typing import Optional

from fastapi import APIRouter, Depends, Query

from moneydesk.api.dependencies import get_budget_service, get_request_id, get_user_id
from moneydesk.api.v1.schemas import (
    MONTH_KEY_PATTERN,
    BudgetCategoryOut,
    BudgetListResponse,
    BudgetRequest,
    BudgetSummaryOut,
    SpentUpdate,
)
from moneydesk.infrastructure.observability.logging import log_mutation
from moneydesk.infrastructure.observability.metrics import record_mutation
from moneydesk.services.budgets import BudgetService

router = APIRouter()

INSTRUMENT = "budget"


@router.get("/budgets", response_model=BudgetListResponse)
async def list_budgets(
    month_year: Optional[str] = Query(None, pattern=MONTH_KEY_PATTERN, description="YYYY-MM; defaults to this month"),
    user_id: str = Depends(get_user_id),
    service: BudgetService = Depends(get_budget_service),
):
    """Budgets for one month ordered by category, with usage and month totals"""
    views, summary = await service.list(user_id, month_year)
    return BudgetListResponse(
        items=[BudgetCategoryOut.model_validate(v) for v in views],
        summary=BudgetSummaryOut.model_validate(summary),
    )


@router.put("/budgets", response_model=BudgetCategoryOut)
async def save_budget(
    request_body: BudgetRequest,
    user_id: str = Depends(get_user_id),
    request_id: str = Depends(get_request_id),
    service: BudgetService = Depends(get_budget_service),
):
    """Create or replace the budget for a category and month"""
    view = await service.save(
        user_id=user_id,
        category_name=request_body.category_name,
        budgeted_amount=request_body.budgeted_amount,
        month_year=request_body.month_year,
        spent_amount=request_body.spent_amount,
    )

    record_mutation(INSTRUMENT, "upsert")
    log_mutation(request_id, user_id, INSTRUMENT, "upsert", view.id)
    return BudgetCategoryOut.model_validate(view)


@router.patch("/budgets/{budget_id}/spent", response_model=BudgetCategoryOut)
async def update_spent(
    budget_id: str,
    request_body: SpentUpdate,
    user_id: str = Depends(get_user_id),
    request_id: str = Depends(get_request_id),
    service: BudgetService = Depends(get_budget_service),
):
    view = await service.update_spent(user_id, budget_id, request_body.spent_amount)

    record_mutation(INSTRUMENT, "update_spent")
    log_mutation(request_id, user_id, INSTRUMENT, "update_spent", budget_id)
    return BudgetCategoryOut.model_validate(view)
