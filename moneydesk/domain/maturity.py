"""Fixed deposit maturity projection (monthly compounding)"""

import math
from datetime import date

from dateutil.relativedelta import relativedelta

from moneydesk.domain.exceptions import InvalidInputError
from moneydesk.domain.models import MaturityProjection

# Entry form limits; keep projected values representable and displayable
MAX_PRINCIPAL = 1e12
MAX_ANNUAL_RATE = 50.0
MAX_TERM_MONTHS = 600


def _validate_term(term_months: int) -> None:
    if isinstance(term_months, bool) or not isinstance(term_months, int) or term_months <= 0:
        raise InvalidInputError(f"term_months must be a positive integer, got {term_months!r}")


def calculate_maturity_amount(principal: float, annual_rate_percent: float, term_months: int) -> float:
    """
    Project the value of a deposit compounded monthly.

    monthly_rate = annual_rate_percent / 100 / 12
    maturity     = principal * (1 + monthly_rate) ** term_months

    No rounding is applied; callers round only for presentation.

    Raises:
        InvalidInputError: principal <= 0, rate < 0, term not a positive integer,
            or a projection too large to represent

    Example:
        100000 at 7.5% for 12 months → 100000 * 1.00625 ** 12 ≈ 107763.26
    """
    if not math.isfinite(principal) or principal <= 0:
        raise InvalidInputError(f"principal must be positive, got {principal}")
    if not math.isfinite(annual_rate_percent) or annual_rate_percent < 0:
        raise InvalidInputError(f"annual rate cannot be negative, got {annual_rate_percent}")
    _validate_term(term_months)

    monthly_rate = annual_rate_percent / 100 / 12
    try:
        maturity = principal * (1 + monthly_rate) ** term_months
    except OverflowError as e:
        raise InvalidInputError("maturity amount out of range for the given rate and term") from e
    if not math.isfinite(maturity):
        raise InvalidInputError("maturity amount out of range for the given principal, rate and term")
    return maturity


def calculate_maturity_date(start_date: date, term_months: int) -> date:
    """Add term_months calendar months, clamping to the last day of shorter months"""
    _validate_term(term_months)
    try:
        return start_date + relativedelta(months=term_months)
    except (OverflowError, ValueError) as e:
        raise InvalidInputError(f"maturity date out of range for a {term_months}-month term") from e


def project_maturity(
    principal: float,
    annual_rate_percent: float,
    term_months: int,
    start_date: date,
) -> MaturityProjection:
    """Single entry point for both the live preview and the persisted values"""
    maturity_amount = calculate_maturity_amount(principal, annual_rate_percent, term_months)
    return MaturityProjection(
        maturity_amount=maturity_amount,
        maturity_date=calculate_maturity_date(start_date, term_months),
        interest_earned=maturity_amount - principal,
    )
