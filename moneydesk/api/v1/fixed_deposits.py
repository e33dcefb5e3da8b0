"""/v1/fixed-deposits - fixed deposit planner endpoints"""

from fastapi import APIRouter, Depends, Response

from moneydesk.api.dependencies import get_display, get_fixed_deposit_service, get_request_id, get_user_id
from moneydesk.api.v1.schemas import (
    FixedDepositListResponse,
    FixedDepositOut,
    FixedDepositRequest,
    FixedDepositSummaryOut,
    MaturityPreviewRequest,
    MaturityPreviewResponse,
)
from moneydesk.domain.maturity import project_maturity
from moneydesk.domain.money import DisplayOptions
from moneydesk.infrastructure.observability.logging import log_mutation
from moneydesk.infrastructure.observability.metrics import record_mutation
from moneydesk.services.fixed_deposits import FixedDepositService

router = APIRouter()

INSTRUMENT = "fixed_deposit"


@router.get("/fixed-deposits", response_model=FixedDepositListResponse)
async def list_fixed_deposits(
    user_id: str = Depends(get_user_id),
    service: FixedDepositService = Depends(get_fixed_deposit_service),
):
    """List deposits newest first, with maturity recomputed and portfolio totals"""
    views, summary = await service.list(user_id)

    return FixedDepositListResponse(
        items=[FixedDepositOut.model_validate(v) for v in views],
        summary=FixedDepositSummaryOut.model_validate(summary),
    )


@router.post("/fixed-deposits/preview", response_model=MaturityPreviewResponse)
def preview_maturity(
    request_body: MaturityPreviewRequest,
    display: DisplayOptions = Depends(get_display),
):
    """
    Live maturity preview for the entry form.

    Uses the same projection as creation, so the previewed amount is exactly
    what gets stored. Runs without touching the instrument store.
    """
    projection = project_maturity(
        request_body.principal_amount,
        request_body.interest_rate,
        request_body.term_months,
        request_body.start_date,
    )
    return MaturityPreviewResponse(
        maturity_amount=projection.maturity_amount,
        maturity_date=projection.maturity_date,
        interest_earned=projection.interest_earned,
        maturity_display=display.format(projection.maturity_amount),
        interest_display=display.format(projection.interest_earned),
    )


@router.post("/fixed-deposits", response_model=FixedDepositOut, status_code=201)
async def create_fixed_deposit(
    request_body: FixedDepositRequest,
    user_id: str = Depends(get_user_id),
    request_id: str = Depends(get_request_id),
    service: FixedDepositService = Depends(get_fixed_deposit_service),
):
    view = await service.create(
        user_id=user_id,
        bank_name=request_body.bank_name,
        principal=request_body.principal_amount,
        annual_rate=request_body.interest_rate,
        term_months=request_body.term_months,
        start_date=request_body.start_date,
    )

    record_mutation(INSTRUMENT, "create")
    log_mutation(request_id, user_id, INSTRUMENT, "create", view.id)
    return FixedDepositOut.model_validate(view)


@router.delete("/fixed-deposits/{deposit_id}", status_code=204)
async def delete_fixed_deposit(
    deposit_id: str,
    user_id: str = Depends(get_user_id),
    request_id: str = Depends(get_request_id),
    service: FixedDepositService = Depends(get_fixed_deposit_service),
):
    await service.delete(user_id, deposit_id)

    record_mutation(INSTRUMENT, "delete")
    log_mutation(request_id, user_id, INSTRUMENT, "delete", deposit_id)
    return Response(status_code=204)
