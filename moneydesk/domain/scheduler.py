"""Monthly due-date scheduling and EMI status derivation"""

from datetime import date
from enum import Enum

from dateutil.relativedelta import relativedelta

from moneydesk.domain.exceptions import InvalidInputError
from moneydesk.domain.models import DueStatus, EMI_PAID
from moneydesk.utils.date_utils import days_between

# Reminders due within this many days are flagged for attention
NEAR_TERM_DAYS = 3

MIN_DUE_DAY = 1
MAX_DUE_DAY = 28  # every month has a 28th


class DueBand(str, Enum):
    PAID = "paid"
    OVERDUE = "overdue"
    DUE_TODAY = "due_today"
    DUE_SOON = "due_soon"
    UPCOMING = "upcoming"


def validate_due_day(due_day: int) -> None:
    if isinstance(due_day, bool) or not isinstance(due_day, int) or not MIN_DUE_DAY <= due_day <= MAX_DUE_DAY:
        raise InvalidInputError(f"due_day must be an integer in {MIN_DUE_DAY}-{MAX_DUE_DAY}, got {due_day!r}")


def next_due_date(due_day: int, today: date) -> date:
    """
    Next occurrence of a monthly due day on or after today.

    The candidate is due_day of the current month; if it is already behind
    today it moves forward exactly one calendar month.

    Example:
        due_day=15, today=2024-03-20 → 2024-04-15
        due_day=15, today=2024-03-10 → 2024-03-15
    """
    validate_due_day(due_day)
    candidate = date(today.year, today.month, due_day)
    if candidate < today:
        candidate = candidate + relativedelta(months=1)
    return candidate


def days_until(target: date, today: date) -> int:
    """Whole days from today to target (negative when target has passed)"""
    return days_between(today, target)


def classify_due(days_until_due: int) -> DueBand:
    if days_until_due < 0:
        return DueBand.OVERDUE
    elif days_until_due == 0:
        return DueBand.DUE_TODAY
    elif days_until_due <= NEAR_TERM_DAYS:
        return DueBand.DUE_SOON
    else:
        return DueBand.UPCOMING


def emi_status(stored_status: str, due_date: date, today: date) -> DueStatus:
    """
    Derive the live status of a reminder from its stored flag and cycle date.

    Recomputed on every read because today moves independently of writes.
    """
    days_until_due = days_until(due_date, today)

    if stored_status == EMI_PAID:
        return DueStatus(band=DueBand.PAID.value, label="Paid", days_until_due=days_until_due)

    band = classify_due(days_until_due)
    if band == DueBand.OVERDUE:
        label = "Overdue"
    elif band == DueBand.DUE_TODAY:
        label = "Due Today"
    else:
        label = f"Due in {days_until_due} days"

    return DueStatus(band=band.value, label=label, days_until_due=days_until_due)
