"""Fixed deposit tracking: live preview, creation and enriched listing"""

from datetime import date
from typing import Callable, List, Tuple

from moneydesk.domain.maturity import project_maturity
from moneydesk.domain.models import FixedDeposit, FixedDepositSummary, FixedDepositView, MaturityProjection
from moneydesk.domain.money import DisplayOptions, percentage
from moneydesk.domain.repository import InstrumentRepository
from moneydesk.services.common import require_text
from moneydesk.utils.date_utils import days_between


def enrich_fixed_deposit(record: FixedDeposit, today: date, display: DisplayOptions) -> FixedDepositView:
    """
    Derive display fields for one deposit.

    Maturity is recomputed from principal, rate and term rather than read from
    the cached columns, so the view always matches the calculator.
    """
    projection = project_maturity(
        record.principal_amount,
        record.interest_rate,
        record.term_months,
        record.start_date,
    )
    days_to_maturity = days_between(today, projection.maturity_date)
    total_days = days_between(record.start_date, projection.maturity_date)
    elapsed_days = days_between(record.start_date, today)
    term_progress = min(max(percentage(elapsed_days, total_days), 0.0), 100.0)

    return FixedDepositView(
        id=record.id,
        bank_name=record.bank_name,
        principal_amount=record.principal_amount,
        interest_rate=record.interest_rate,
        term_months=record.term_months,
        start_date=record.start_date,
        maturity_date=projection.maturity_date,
        maturity_amount=projection.maturity_amount,
        interest_earned=projection.interest_earned,
        days_to_maturity=days_to_maturity,
        is_matured=days_to_maturity <= 0,
        term_progress=term_progress,
        principal_display=display.format(record.principal_amount),
        maturity_display=display.format(projection.maturity_amount),
        interest_display=display.format(projection.interest_earned),
    )


def summarize_fixed_deposits(views: List[FixedDepositView], display: DisplayOptions) -> FixedDepositSummary:
    total_principal = sum(v.principal_amount for v in views)
    total_interest = sum(v.interest_earned for v in views)
    total_maturity = sum(v.maturity_amount for v in views)
    return FixedDepositSummary(
        total_principal=total_principal,
        total_interest=total_interest,
        total_maturity_value=total_maturity,
        active_count=sum(1 for v in views if not v.is_matured),
        total_principal_display=display.format(total_principal),
        total_interest_display=display.format(total_interest),
        total_maturity_value_display=display.format(total_maturity),
    )


class FixedDepositService:
    """Fixed deposits are created and deleted, never edited"""

    def __init__(
        self,
        repository: InstrumentRepository[FixedDeposit],
        display: DisplayOptions | None = None,
        today: Callable[[], date] = date.today,
    ):
        self.repository = repository
        self.display = display or DisplayOptions()
        self.today = today

    def preview(self, principal: float, annual_rate: float, term_months: int, start_date: date) -> MaturityProjection:
        """Projection shown while the user is still typing; same path as create()"""
        return project_maturity(principal, annual_rate, term_months, start_date)

    async def list(self, user_id: str) -> Tuple[List[FixedDepositView], FixedDepositSummary]:
        records = await self.repository.list(user_id, order_by="created_at", descending=True)
        today = self.today()
        views = [enrich_fixed_deposit(r, today, self.display) for r in records]
        return views, summarize_fixed_deposits(views, self.display)

    async def create(
        self,
        user_id: str,
        bank_name: str,
        principal: float,
        annual_rate: float,
        term_months: int,
        start_date: date,
    ) -> FixedDepositView:
        """Validate, project maturity, persist the projection alongside the inputs"""
        require_text("bank_name", bank_name)
        projection = self.preview(principal, annual_rate, term_months, start_date)

        stored = await self.repository.create(
            FixedDeposit(
                user_id=user_id,
                bank_name=bank_name,
                principal_amount=principal,
                interest_rate=annual_rate,
                term_months=term_months,
                start_date=start_date,
                maturity_date=projection.maturity_date,
                maturity_amount=projection.maturity_amount,
            )
        )
        return enrich_fixed_deposit(stored, self.today(), self.display)

    async def delete(self, user_id: str, deposit_id: str) -> None:
        await self.repository.delete(user_id, deposit_id)
