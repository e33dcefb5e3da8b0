"""Pydantic schemas for API request/response validation"""

from datetime import date
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

from moneydesk.domain.maturity import MAX_ANNUAL_RATE, MAX_PRINCIPAL, MAX_TERM_MONTHS
from moneydesk.domain.models import BUDGET_CATEGORIES, SAVINGS_CATEGORIES

BudgetCategoryName = Literal[BUDGET_CATEGORIES]
SavingsCategoryName = Literal[SAVINGS_CATEGORIES]

MONTH_KEY_PATTERN = r"^\d{4}-(0[1-9]|1[0-2])$"


class ViewModel(BaseModel):
    """Response models are read straight off the enriched domain views"""

    model_config = ConfigDict(from_attributes=True)


# Fixed deposits


class FixedDepositRequest(BaseModel):
    """Request body for POST /v1/fixed-deposits"""

    bank_name: str = Field(..., min_length=1, description="Issuing bank")
    principal_amount: float = Field(..., gt=0, le=MAX_PRINCIPAL)
    interest_rate: float = Field(..., ge=0, le=MAX_ANNUAL_RATE, description="Annual rate in percent")
    term_months: int = Field(..., gt=0, le=MAX_TERM_MONTHS)
    start_date: date


class MaturityPreviewRequest(BaseModel):
    """Request body for POST /v1/fixed-deposits/preview"""

    principal_amount: float = Field(..., gt=0, le=MAX_PRINCIPAL)
    interest_rate: float = Field(..., ge=0, le=MAX_ANNUAL_RATE)
    term_months: int = Field(..., gt=0, le=MAX_TERM_MONTHS)
    start_date: date


class MaturityPreviewResponse(BaseModel):
    maturity_amount: float
    maturity_date: date
    interest_earned: float
    maturity_display: str
    interest_display: str


class FixedDepositOut(ViewModel):
    id: str
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


class FixedDepositSummaryOut(ViewModel):
    total_principal: float
    total_interest: float
    total_maturity_value: float
    active_count: int
    total_principal_display: str
    total_interest_display: str
    total_maturity_value_display: str


class FixedDepositListResponse(BaseModel):
    items: List[FixedDepositOut]
    summary: FixedDepositSummaryOut


# EMI reminders


class EMIReminderRequest(BaseModel):
    """Request body for POST /v1/emi-reminders"""

    loan_name: str = Field(..., min_length=1)
    bank_name: str = Field(..., min_length=1)
    loan_amount: float = Field(..., gt=0)
    emi_amount: float = Field(..., gt=0)
    due_day: int = Field(..., ge=1, le=28, description="Day of month the EMI falls due")


class EMIReminderUpdate(BaseModel):
    """Request body for PATCH /v1/emi-reminders/{id}"""

    loan_name: Optional[str] = Field(None, min_length=1)
    bank_name: Optional[str] = Field(None, min_length=1)
    loan_amount: Optional[float] = Field(None, gt=0)
    emi_amount: Optional[float] = Field(None, gt=0)
    due_day: Optional[int] = Field(None, ge=1, le=28)


class EMIReminderOut(ViewModel):
    id: str
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


class EMISummaryOut(ViewModel):
    active_count: int
    total_monthly_emi: float
    due_soon_count: int
    overdue_count: int
    total_monthly_emi_display: str


class EMIReminderListResponse(BaseModel):
    items: List[EMIReminderOut]
    summary: EMISummaryOut


# Budgets


class BudgetRequest(BaseModel):
    """Request body for PUT /v1/budgets (upsert)"""

    category_name: BudgetCategoryName
    budgeted_amount: float = Field(..., ge=0)
    month_year: Optional[str] = Field(None, pattern=MONTH_KEY_PATTERN, description="YYYY-MM; defaults to this month")
    spent_amount: Optional[float] = Field(None, ge=0)


class SpentUpdate(BaseModel):
    """Request body for PATCH /v1/budgets/{id}/spent"""

    spent_amount: float = Field(..., ge=0)


class BudgetCategoryOut(ViewModel):
    id: str
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


class BudgetSummaryOut(ViewModel):
    month_year: str
    total_budgeted: float
    total_spent: float
    remaining: float
    usage_ratio: float
    total_budgeted_display: str
    total_spent_display: str
    remaining_display: str


class BudgetListResponse(BaseModel):
    items: List[BudgetCategoryOut]
    summary: BudgetSummaryOut


# Savings goals


class SavingsGoalRequest(BaseModel):
    """Request body for POST /v1/savings-goals"""

    title: str = Field(..., min_length=1)
    category: SavingsCategoryName = "Emergency Fund"
    target_amount: float = Field(..., gt=0)
    current_amount: float = Field(0.0, ge=0)
    target_date: date


class SavingsGoalUpdate(BaseModel):
    """Request body for PATCH /v1/savings-goals/{id}"""

    title: Optional[str] = Field(None, min_length=1)
    category: Optional[SavingsCategoryName] = None
    target_amount: Optional[float] = Field(None, gt=0)
    current_amount: Optional[float] = Field(None, ge=0)
    target_date: Optional[date] = None


class SavingsGoalOut(ViewModel):
    id: str
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


class SavingsSummaryOut(ViewModel):
    total_saved: float
    total_target: float
    completed_count: int
    overall_progress: float
    total_saved_display: str
    total_target_display: str


class SavingsGoalListResponse(BaseModel):
    items: List[SavingsGoalOut]
    summary: SavingsSummaryOut
