"""SQLAlchemy ORM models for instrument tables"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import Column, String, Float, DateTime, Date, Integer, Text, UniqueConstraint
from sqlalchemy.orm import declarative_base

Base = declarative_base()


def _new_id() -> str:
    return str(uuid.uuid4())


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class FixedDepositRow(Base):
    """Fixed deposit with cached maturity projection"""

    __tablename__ = "fixed_deposits"

    id = Column(String(36), primary_key=True, default=_new_id)
    user_id = Column(Text, nullable=False, index=True)
    bank_name = Column(Text, nullable=False)
    principal_amount = Column(Float, nullable=False)
    interest_rate = Column(Float, nullable=False)
    term_months = Column(Integer, nullable=False)
    start_date = Column(Date, nullable=False)
    maturity_date = Column(Date, nullable=False)
    maturity_amount = Column(Float, nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow)


class EMIReminderRow(Base):
    """Monthly EMI reminder"""

    __tablename__ = "emi_reminders"

    id = Column(String(36), primary_key=True, default=_new_id)
    user_id = Column(Text, nullable=False, index=True)
    loan_name = Column(Text, nullable=False)
    bank_name = Column(Text, nullable=False)
    loan_amount = Column(Float, nullable=False)
    emi_amount = Column(Float, nullable=False)
    due_day = Column(Integer, nullable=False)
    next_due_date = Column(Date, nullable=False)
    status = Column(Text, nullable=False, default="active")
    created_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow)


class BudgetCategoryRow(Base):
    """Monthly budget for one spending category"""

    __tablename__ = "budget_categories"
    __table_args__ = (
        UniqueConstraint("user_id", "category_name", "month_year", name="uq_budget_user_category_month"),
    )

    id = Column(String(36), primary_key=True, default=_new_id)
    user_id = Column(Text, nullable=False, index=True)
    category_name = Column(Text, nullable=False)
    budgeted_amount = Column(Float, nullable=False)
    spent_amount = Column(Float, nullable=False, default=0.0)
    month_year = Column(String(7), nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow)


class SavingsGoalRow(Base):
    """Savings goal"""

    __tablename__ = "savings_goals"

    id = Column(String(36), primary_key=True, default=_new_id)
    user_id = Column(Text, nullable=False, index=True)
    title = Column(Text, nullable=False)
    category = Column(Text, nullable=False)
    target_amount = Column(Float, nullable=False)
    current_amount = Column(Float, nullable=False, default=0.0)
    target_date = Column(Date, nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow)
