"""Unit tests for EMI reminder scheduling and status transitions"""

import pytest
from datetime import date, timedelta
from moneydesk.domain.exceptions import InvalidInputError
from moneydesk.domain.models import EMIReminder
from moneydesk.services.emi_reminders import EMIReminderService


@pytest.fixture
def service(memory_store, clock) -> EMIReminderService:
    return EMIReminderService(memory_store.emi_reminders, today=clock)


def _reminder(next_due: date, status: str = "active", emi: float = 5000) -> EMIReminder:
    return EMIReminder(
        user_id="user_a",
        loan_name="Home Loan",
        bank_name="HDFC Bank",
        loan_amount=2500000,
        emi_amount=emi,
        due_day=next_due.day if next_due.day <= 28 else 28,
        next_due_date=next_due,
        status=status,
    )


async def test_create_schedules_next_due_date(service):
    """today is 2024-03-20: day 15 already passed, day 25 still ahead"""
    passed = await service.create("user_a", "Car Loan", "SBI", 800000, 15000, 15)
    ahead = await service.create("user_a", "Home Loan", "HDFC", 2500000, 22000, 25)

    assert passed.next_due_date == date(2024, 4, 15)
    assert passed.status_label == "Due in 26 days"
    assert ahead.next_due_date == date(2024, 3, 25)
    assert ahead.due_band == "upcoming"
    assert ahead.status_label == "Due in 5 days"
    assert ahead.emi_amount_display == "₹22,000"


async def test_create_rejects_bad_due_day(service, memory_store):
    with pytest.raises(InvalidInputError):
        await service.create("user_a", "Car Loan", "SBI", 800000, 15000, 30)
    with pytest.raises(InvalidInputError):
        await service.create("user_a", "Car Loan", "SBI", 800000, 0, 10)

    assert memory_store.emi_reminders.rows == {}


async def test_status_is_recomputed_on_read(service, memory_store, today):
    """A cycle left unpaid past its due date reads back as overdue"""
    await memory_store.emi_reminders.create(_reminder(today - timedelta(days=2)))
    await memory_store.emi_reminders.create(_reminder(today))
    await memory_store.emi_reminders.create(_reminder(today + timedelta(days=3)))
    await memory_store.emi_reminders.create(_reminder(today + timedelta(days=10)))
    await memory_store.emi_reminders.create(_reminder(today - timedelta(days=5), status="paid"))

    views, summary = await service.list("user_a")

    # Ordered by next due date ascending
    assert [v.status_label for v in views] == ["Paid", "Overdue", "Due Today", "Due in 3 days", "Due in 10 days"]
    assert summary.overdue_count == 1
    assert summary.due_soon_count == 2
    assert summary.active_count == 4
    assert summary.total_monthly_emi == 25000
    assert summary.total_monthly_emi_display == "₹25,000"


async def test_mark_paid_is_idempotent(service, memory_store, today):
    created = await memory_store.emi_reminders.create(_reminder(today - timedelta(days=1)))

    first = await service.mark_paid("user_a", created.id)
    second = await service.mark_paid("user_a", created.id)

    assert first.status == second.status == "paid"
    assert second.status_label == "Paid"
    assert second.next_due_date == today - timedelta(days=1)

    _, summary = await service.list("user_a")
    assert summary.overdue_count == 0
    assert summary.due_soon_count == 0


async def test_update_recomputes_next_due_date(service):
    created = await service.create("user_a", "Car Loan", "SBI", 800000, 15000, 25)
    assert created.next_due_date == date(2024, 3, 25)

    moved = await service.update("user_a", created.id, {"due_day": 10})
    assert moved.next_due_date == date(2024, 4, 10)

    renamed = await service.update("user_a", created.id, {"loan_name": "Auto Loan"})
    assert renamed.loan_name == "Auto Loan"
    assert renamed.next_due_date == date(2024, 4, 10)


async def test_update_rejects_status_changes(service):
    created = await service.create("user_a", "Car Loan", "SBI", 800000, 15000, 25)

    with pytest.raises(InvalidInputError):
        await service.update("user_a", created.id, {"status": "paid"})


async def test_start_next_cycle_after_paid(service, memory_store, today):
    """Paid cycle on 2024-03-15 reopens for 2024-04-15"""
    created = await memory_store.emi_reminders.create(_reminder(date(2024, 3, 15), status="paid"))

    reopened = await service.start_next_cycle("user_a", created.id)

    assert reopened.status == "active"
    assert reopened.next_due_date == date(2024, 4, 15)
    assert reopened.due_band == "upcoming"


async def test_start_next_cycle_paid_early(service, memory_store):
    """Paying ahead of the due date moves on to the following month"""
    created = await memory_store.emi_reminders.create(_reminder(date(2024, 3, 25), status="paid"))

    reopened = await service.start_next_cycle("user_a", created.id)

    assert reopened.next_due_date == date(2024, 4, 25)


async def test_start_next_cycle_requires_paid(service):
    created = await service.create("user_a", "Car Loan", "SBI", 800000, 15000, 25)

    with pytest.raises(InvalidInputError):
        await service.start_next_cycle("user_a", created.id)
