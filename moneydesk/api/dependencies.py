"""Dependency injection for FastAPI endpoints"""

from typing import Generator

from fastapi import Depends, Header, Request

from moneydesk.config import Settings
from moneydesk.domain.money import DisplayOptions
from moneydesk.domain.repository import InstrumentStore
from moneydesk.infrastructure.clients.rest_store import StoreOptions, build_rest_store
from moneydesk.infrastructure.database.repositories import build_sql_store
from moneydesk.services.budgets import BudgetService
from moneydesk.services.emi_reminders import EMIReminderService
from moneydesk.services.fixed_deposits import FixedDepositService
from moneydesk.services.savings_goals import SavingsGoalService


def get_request_id(request: Request) -> str:
    """Extract request ID from request state"""
    return getattr(request.state, "request_id", "unknown")


def get_user_id(x_user_id: str = Header(..., min_length=1, description="Owning user identifier")) -> str:
    """Owning user, as established by the upstream auth layer"""
    return x_user_id


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_display(settings: Settings = Depends(get_app_settings)) -> DisplayOptions:
    return DisplayOptions(currency=settings.currency_code, locale=settings.currency_locale)


def get_store(request: Request, settings: Settings = Depends(get_app_settings)) -> Generator[InstrumentStore, None, None]:
    """Provide the configured instrument store for one request"""
    if settings.store_backend == "memory":
        yield request.app.state.memory_store
    elif settings.store_backend == "rest":
        yield build_rest_store(
            StoreOptions(
                base_url=settings.rest_store_url,
                api_key=settings.rest_store_api_key,
                timeout=settings.http_timeout_seconds,
            )
        )
    else:
        db = request.app.state.session_factory()
        try:
            yield build_sql_store(db)
        finally:
            db.close()


def get_fixed_deposit_service(
    store: InstrumentStore = Depends(get_store),
    display: DisplayOptions = Depends(get_display),
) -> FixedDepositService:
    return FixedDepositService(store.fixed_deposits, display)


def get_emi_service(
    store: InstrumentStore = Depends(get_store),
    display: DisplayOptions = Depends(get_display),
) -> EMIReminderService:
    return EMIReminderService(store.emi_reminders, display)


def get_budget_service(
    store: InstrumentStore = Depends(get_store),
    display: DisplayOptions = Depends(get_display),
) -> BudgetService:
    return BudgetService(store.budgets, display)


def get_savings_service(
    store: InstrumentStore = Depends(get_store),
    display: DisplayOptions = Depends(get_display),
) -> SavingsGoalService:
    return SavingsGoalService(store.savings_goals, display)
