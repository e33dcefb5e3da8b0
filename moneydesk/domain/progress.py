"""Actual-vs-target progress evaluation for budgets and savings goals"""

from enum import Enum

from moneydesk.domain.exceptions import InvalidInputError

# Budget usage thresholds, in percent
NEAR_LIMIT_THRESHOLD = 80.0
OVER_BUDGET_THRESHOLD = 100.0

# Savings progress stops at completion
SAVINGS_CAP = 100.0


class BudgetUsageStatus(str, Enum):
    ON_TRACK = "on track"
    NEAR_LIMIT = "near limit"
    OVER_BUDGET = "over budget"


class SavingsStatus(str, Enum):
    IN_PROGRESS = "in progress"
    COMPLETED = "completed"


def usage_ratio(actual: float, target: float, cap: float | None = None) -> float:
    """
    Percentage of target reached by actual.

    Budgets call this uncapped (spending can run past 100%), savings goals
    with cap=100. A zero target yields 0 rather than failing.

    Raises:
        InvalidInputError: actual or target is negative
    """
    if actual < 0:
        raise InvalidInputError(f"actual amount cannot be negative, got {actual}")
    if target < 0:
        raise InvalidInputError(f"target amount cannot be negative, got {target}")
    if target == 0:
        return 0.0

    ratio = actual * 100 / target
    if cap is not None:
        ratio = min(ratio, cap)
    return ratio


def classify_budget_usage(ratio: float) -> BudgetUsageStatus:
    """Strictly above 100% is over budget, strictly above 80% is near the limit"""
    if ratio > OVER_BUDGET_THRESHOLD:
        return BudgetUsageStatus.OVER_BUDGET
    elif ratio > NEAR_LIMIT_THRESHOLD:
        return BudgetUsageStatus.NEAR_LIMIT
    else:
        return BudgetUsageStatus.ON_TRACK


def classify_savings_progress(ratio: float) -> SavingsStatus:
    if ratio >= SAVINGS_CAP:
        return SavingsStatus.COMPLETED
    return SavingsStatus.IN_PROGRESS


def remaining(target: float, actual: float) -> float:
    """target - actual; negative means the target was overshot"""
    return target - actual
