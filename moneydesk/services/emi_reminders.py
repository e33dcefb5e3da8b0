"""EMI reminders: due-date scheduling, paid transitions and live status"""

from datetime import date, timedelta
from typing import Any, Callable, Dict, List, Tuple

from moneydesk.domain.exceptions import InvalidInputError
from moneydesk.domain.models import EMI_ACTIVE, EMI_PAID, EMIReminder, EMIReminderView, EMISummary
from moneydesk.domain.money import DisplayOptions
from moneydesk.domain.repository import InstrumentRepository
from moneydesk.domain.scheduler import DueBand, emi_status, next_due_date, validate_due_day
from moneydesk.services.common import get_owned, require_positive, require_text

_EDITABLE_FIELDS = ("loan_name", "bank_name", "loan_amount", "emi_amount", "due_day")


def enrich_emi_reminder(record: EMIReminder, today: date, display: DisplayOptions) -> EMIReminderView:
    # The stored next_due_date is the cycle being tracked; status is always live
    status = emi_status(record.status, record.next_due_date, today)
    return EMIReminderView(
        id=record.id,
        loan_name=record.loan_name,
        bank_name=record.bank_name,
        loan_amount=record.loan_amount,
        emi_amount=record.emi_amount,
        due_day=record.due_day,
        next_due_date=record.next_due_date,
        status=record.status,
        due_band=status.band,
        status_label=status.label,
        days_until_due=status.days_until_due,
        loan_amount_display=display.format(record.loan_amount),
        emi_amount_display=display.format(record.emi_amount),
    )


def summarize_emi_reminders(views: List[EMIReminderView], display: DisplayOptions) -> EMISummary:
    """Paid reminders never count towards the due-soon or overdue totals"""
    total_emi = sum(v.emi_amount for v in views)
    return EMISummary(
        active_count=sum(1 for v in views if v.status != EMI_PAID),
        total_monthly_emi=total_emi,
        due_soon_count=sum(1 for v in views if v.due_band in (DueBand.DUE_TODAY.value, DueBand.DUE_SOON.value)),
        overdue_count=sum(1 for v in views if v.due_band == DueBand.OVERDUE.value),
        total_monthly_emi_display=display.format(total_emi),
    )


def _validate_fields(fields: Dict[str, Any]) -> None:
    for name in ("loan_name", "bank_name"):
        if name in fields:
            require_text(name, fields[name])
    for name in ("loan_amount", "emi_amount"):
        if name in fields:
            require_positive(name, fields[name])
    if "due_day" in fields:
        validate_due_day(fields["due_day"])


class EMIReminderService:
    def __init__(
        self,
        repository: InstrumentRepository[EMIReminder],
        display: DisplayOptions | None = None,
        today: Callable[[], date] = date.today,
    ):
        self.repository = repository
        self.display = display or DisplayOptions()
        self.today = today

    def _enrich(self, record: EMIReminder) -> EMIReminderView:
        return enrich_emi_reminder(record, self.today(), self.display)

    async def list(self, user_id: str) -> Tuple[List[EMIReminderView], EMISummary]:
        records = await self.repository.list(user_id, order_by="next_due_date")
        today = self.today()
        views = [enrich_emi_reminder(r, today, self.display) for r in records]
        return views, summarize_emi_reminders(views, self.display)

    async def create(
        self,
        user_id: str,
        loan_name: str,
        bank_name: str,
        loan_amount: float,
        emi_amount: float,
        due_day: int,
    ) -> EMIReminderView:
        fields = {
            "loan_name": loan_name,
            "bank_name": bank_name,
            "loan_amount": loan_amount,
            "emi_amount": emi_amount,
            "due_day": due_day,
        }
        _validate_fields(fields)

        stored = await self.repository.create(
            EMIReminder(
                user_id=user_id,
                next_due_date=next_due_date(due_day, self.today()),
                status=EMI_ACTIVE,
                **fields,
            )
        )
        return self._enrich(stored)

    async def update(self, user_id: str, reminder_id: str, changes: Dict[str, Any]) -> EMIReminderView:
        """
        Edit reminder fields; any edit re-anchors next_due_date on today.

        Status is not editable here; use mark_paid / start_next_cycle.
        """
        unknown = set(changes) - set(_EDITABLE_FIELDS)
        if unknown:
            raise InvalidInputError(f"Fields not editable: {', '.join(sorted(unknown))}")
        _validate_fields(changes)

        due_day = changes.get("due_day")
        if due_day is None:
            due_day = (await get_owned(self.repository, user_id, reminder_id)).due_day

        stored = await self.repository.update(
            user_id,
            reminder_id,
            {**changes, "next_due_date": next_due_date(due_day, self.today())},
        )
        return self._enrich(stored)

    async def mark_paid(self, user_id: str, reminder_id: str) -> EMIReminderView:
        """Idempotent: marking an already-paid reminder leaves it paid"""
        stored = await self.repository.update(user_id, reminder_id, {"status": EMI_PAID})
        return self._enrich(stored)

    async def start_next_cycle(self, user_id: str, reminder_id: str) -> EMIReminderView:
        """
        Reopen a paid reminder for the cycle after the one that was paid.

        The new due date is the first due_day strictly after the paid cycle and
        not before today, so a long-paid reminder jumps straight to the next
        upcoming date instead of reopening as overdue.
        """
        record = await get_owned(self.repository, user_id, reminder_id)
        if record.status != EMI_PAID:
            raise InvalidInputError("Only a paid reminder can start its next cycle")

        anchor = max(record.next_due_date + timedelta(days=1), self.today())
        stored = await self.repository.update(
            user_id,
            reminder_id,
            {"status": EMI_ACTIVE, "next_due_date": next_due_date(record.due_day, anchor)},
        )
        return self._enrich(stored)

    async def delete(self, user_id: str, reminder_id: str) -> None:
        await self.repository.delete(user_id, reminder_id)
