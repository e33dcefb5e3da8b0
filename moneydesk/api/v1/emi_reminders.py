"""/v1/emi-reminders - loan instalment reminder endpoints"""

from fastapi import APIRouter, Depends, Response

from moneydesk.api.dependencies import get_emi_service, get_request_id, get_user_id
from moneydesk.api.v1.schemas import (
    EMIReminderListResponse,
    EMIReminderOut,
    EMIReminderRequest,
    EMIReminderUpdate,
    EMISummaryOut,
)
from moneydesk.infrastructure.observability.logging import log_mutation
from moneydesk.infrastructure.observability.metrics import record_mutation
from moneydesk.services.emi_reminders import EMIReminderService

router = APIRouter()

INSTRUMENT = "emi_reminder"


@router.get("/emi-reminders", response_model=EMIReminderListResponse)
async def list_emi_reminders(
    user_id: str = Depends(get_user_id),
    service: EMIReminderService = Depends(get_emi_service),
):
    """
    List reminders by next due date with live status.

    Returns:
        Reminders plus totals: monthly outflow, due within 3 days, overdue
    """
    views, summary = await service.list(user_id)
    return EMIReminderListResponse(
        items=[EMIReminderOut.model_validate(v) for v in views],
        summary=EMISummaryOut.model_validate(summary),
    )


@router.post("/emi-reminders", response_model=EMIReminderOut, status_code=201)
async def create_emi_reminder(
    request_body: EMIReminderRequest,
    user_id: str = Depends(get_user_id),
    request_id: str = Depends(get_request_id),
    service: EMIReminderService = Depends(get_emi_service),
):
    view = await service.create(user_id=user_id, **request_body.model_dump())

    record_mutation(INSTRUMENT, "create")
    log_mutation(request_id, user_id, INSTRUMENT, "create", view.id)
    return EMIReminderOut.model_validate(view)


@router.patch("/emi-reminders/{reminder_id}", response_model=EMIReminderOut)
async def update_emi_reminder(
    reminder_id: str,
    request_body: EMIReminderUpdate,
    user_id: str = Depends(get_user_id),
    request_id: str = Depends(get_request_id),
    service: EMIReminderService = Depends(get_emi_service),
):
    """Edit a reminder; the next due date is recomputed from the due day"""
    view = await service.update(user_id, reminder_id, request_body.model_dump(exclude_none=True))

    record_mutation(INSTRUMENT, "update")
    log_mutation(request_id, user_id, INSTRUMENT, "update", reminder_id)
    return EMIReminderOut.model_validate(view)


@router.post("/emi-reminders/{reminder_id}/paid", response_model=EMIReminderOut)
async def mark_emi_paid(
    reminder_id: str,
    user_id: str = Depends(get_user_id),
    request_id: str = Depends(get_request_id),
    service: EMIReminderService = Depends(get_emi_service),
):
    """Mark the current cycle paid (idempotent)"""
    view = await service.mark_paid(user_id, reminder_id)

    record_mutation(INSTRUMENT, "mark_paid")
    log_mutation(request_id, user_id, INSTRUMENT, "mark_paid", reminder_id)
    return EMIReminderOut.model_validate(view)


@router.post("/emi-reminders/{reminder_id}/next-cycle", response_model=EMIReminderOut)
async def start_next_emi_cycle(
    reminder_id: str,
    user_id: str = Depends(get_user_id),
    request_id: str = Depends(get_request_id),
    service: EMIReminderService = Depends(get_emi_service),
):
    """Reopen a paid reminder for its next monthly cycle"""
    view = await service.start_next_cycle(user_id, reminder_id)

    record_mutation(INSTRUMENT, "next_cycle")
    log_mutation(request_id, user_id, INSTRUMENT, "next_cycle", reminder_id)
    return EMIReminderOut.model_validate(view)


@router.delete("/emi-reminders/{reminder_id}", status_code=204)
async def delete_emi_reminder(
    reminder_id: str,
    user_id: str = Depends(get_user_id),
    request_id: str = Depends(get_request_id),
    service: EMIReminderService = Depends(get_emi_service),
):
    await service.delete(user_id, reminder_id)

    record_mutation(INSTRUMENT, "delete")
    log_mutation(request_id, user_id, INSTRUMENT, "delete", reminder_id)
    return Response(status_code=204)
