"""/v1/savings-goals - savings tracker endpoints"""

from fastapi import APIRouter, Depends, Response

from moneydesk.api.dependencies import get_request_id, get_savings_service, get_user_id
from moneydesk.api.v1.schemas import (
    SavingsGoalListResponse,
    SavingsGoalOut,
    SavingsGoalRequest,
    SavingsGoalUpdate,
    SavingsSummaryOut,
)
from moneydesk.infrastructure.observability.logging import log_mutation
from moneydesk.infrastructure.observability.metrics import record_mutation
from moneydesk.services.savings_goals import SavingsGoalService

router = APIRouter()

INSTRUMENT = "savings_goal"


@router.get("/savings-goals", response_model=SavingsGoalListResponse)
async def list_savings_goals(
    user_id: str = Depends(get_user_id),
    service: SavingsGoalService = Depends(get_savings_service),
):
    views, summary = await service.list(user_id)
    return SavingsGoalListResponse(
        items=[SavingsGoalOut.model_validate(v) for v in views],
        summary=SavingsSummaryOut.model_validate(summary),
    )


@router.post("/savings-goals", response_model=SavingsGoalOut, status_code=201)
async def create_savings_goal(
    request_body: SavingsGoalRequest,
    user_id: str = Depends(get_user_id),
    request_id: str = Depends(get_request_id),
    service: SavingsGoalService = Depends(get_savings_service),
):
    view = await service.create(user_id=user_id, **request_body.model_dump())

    record_mutation(INSTRUMENT, "create")
    log_mutation(request_id, user_id, INSTRUMENT, "create", view.id)
    return SavingsGoalOut.model_validate(view)


@router.patch("/savings-goals/{goal_id}", response_model=SavingsGoalOut)
async def update_savings_goal(
    goal_id: str,
    request_body: SavingsGoalUpdate,
    user_id: str = Depends(get_user_id),
    request_id: str = Depends(get_request_id),
    service: SavingsGoalService = Depends(get_savings_service),
):
    view = await service.update(user_id, goal_id, request_body.model_dump(exclude_none=True))

    record_mutation(INSTRUMENT, "update")
    log_mutation(request_id, user_id, INSTRUMENT, "update", goal_id)
    return SavingsGoalOut.model_validate(view)


@router.delete("/savings-goals/{goal_id}", status_code=204)
async def delete_savings_goal(
    goal_id: str,
    user_id: str = Depends(get_user_id),
    request_id: str = Depends(get_request_id),
    service: SavingsGoalService = Depends(get_savings_service),
):
    await service.delete(user_id, goal_id)

    record_mutation(INSTRUMENT, "delete")
    log_mutation(request_id, user_id, INSTRUMENT, "delete", goal_id)
    return Response(status_code=204)
