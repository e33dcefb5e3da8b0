"""Domain models - pure Python dataclasses representing business entities"""

from dataclasses import dataclass
from datetime import date, datetime

BUDGET_CATEGORIES = (
    "Food & Dining",
    "Transportation",
    "Shopping",
    "Entertainment",
    "Bills & Utilities",
    "Healthcare",
    "Education",
    "Travel",
    "Groceries",
    "Personal Care",
    "Other",
)

SAVINGS_CATEGORIES = (
    "Emergency Fund",
    "Vacation",
    "Home Down Payment",
    "Car Purchase",
    "Education",
    "Retirement",
    "Other",
)

# Stored EMI status values; "overdue" is derived on read and never stored
EMI_ACTIVE = "active"
EMI_PAID = "paid"


@dataclass
class FixedDeposit:
    """Fixed deposit as stored; maturity fields are a cached projection"""

    user_id: str
    bank_name: str
    principal_amount: float
    interest_rate: float  # annual, percent
    term_months: int
    start_date: date
    maturity_date: date
    maturity_amount: float
    id: str | None = None
    created_at: datetime | None = None


@dataclass
class EMIReminder:
    """Monthly loan instalment reminder"""

    user_id: str
    loan_name: str
    bank_name: str
    loan_amount: float
    emi_amount: float
    due_day: int  # 1-28
    next_due_date: date
    status: str = EMI_ACTIVE
    id: str | None = None
    created_at: datetime | None = None


@dataclass
class BudgetCategory:
    """Budget for one category in one month, unique per (user, category, month)"""

    user_id: str
    category_name: str
    budgeted_amount: float
    month_year: str  # "YYYY-MM"
    spent_amount: float = 0.0
    id: str | None = None
    created_at: datetime | None = None


@dataclass
class SavingsGoal:
    """Savings target; current_amount may exceed target_amount"""

    user_id: str
    title: str
    category: str
    target_amount: float
    target_date: date
    current_amount: float = 0.0
    id: str | None = None
    created_at: datetime | None = None


@dataclass
class MaturityProjection:
    """Output of the maturity calculator"""

    maturity_amount: float
    maturity_date: date
    interest_earned: float


@dataclass
class DueStatus:
    """Live status of an EMI cycle relative to today"""

    band: str
    label: str
    days_until_due: int


# Enriched records handed to the view layer


@dataclass
class FixedDepositView:
    id: str | None
    bank_name: str
    principal_amount: float
    interest_rate: float
    term_months: int
    start_date: date
    maturity_date: date
    maturity_amount: float
    interest_earned: float
    days_to_maturity: int
    is_matured: bool
    term_progress: float
    principal_display: str
    maturity_display: str
    interest_display: str


@dataclass
class FixedDepositSummary:
    total_principal: float
    total_interest: float
    total_maturity_value: float
    active_count: int
    total_principal_display: str
    total_interest_display: str
    total_maturity_value_display: str


@dataclass
class EMIReminderView:
    id: str | None
    loan_name: str
    bank_name: str
    loan_amount: float
    emi_amount: float
    due_day: int
    next_due_date: date
    status: str
    due_band: str
    status_label: str
    days_until_due: int
    loan_amount_display: str
    emi_amount_display: str


@dataclass
class EMISummary:
    active_count: int
    total_monthly_emi: float
    due_soon_count: int
    overdue_count: int
    total_monthly_emi_display: str


@dataclass
class BudgetCategoryView:
    id: str | None
    category_name: str
    month_year: str
    budgeted_amount: float
    spent_amount: float
    remaining_amount: float
    usage_ratio: float
    bar_width: float
    status: str
    budgeted_display: str
    spent_display: str
    remaining_display: str


@dataclass
class BudgetSummary:
    month_year: str
    total_budgeted: float
    total_spent: float
    remaining: float
    usage_ratio: float
    total_budgeted_display: str
    total_spent_display: str
    remaining_display: str


@dataclass
class SavingsGoalView:
    id: str | None
    title: str
    category: str
    target_amount: float
    current_amount: float
    target_date: date
    remaining_amount: float
    progress: float
    status: str
    days_left: int
    deadline_label: str
    target_display: str
    current_display: str
    remaining_display: str


@dataclass
class SavingsSummary:
    total_saved: float
    total_target: float
    completed_count: int
    overall_progress: float
    total_saved_display: str
    total_target_display: str
