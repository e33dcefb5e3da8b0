"""Data access layer for instrument tables (SQLAlchemy)"""

from typing import Any, Generic, List, Mapping, Optional, Sequence, Type, TypeVar

from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from moneydesk.domain.exceptions import PersistenceError, RecordNotFoundError
from moneydesk.domain.models import BudgetCategory, EMIReminder, FixedDeposit, SavingsGoal
from moneydesk.domain.repository import InstrumentStore
from moneydesk.infrastructure.database.models import (
    Base,
    BudgetCategoryRow,
    EMIReminderRow,
    FixedDepositRow,
    SavingsGoalRow,
)
from moneydesk.infrastructure.records import field_names, record_from_row, record_to_row

T = TypeVar("T")

# Columns the store owns; callers never overwrite them through update()
_PROTECTED_COLUMNS = {"id", "user_id", "created_at"}

# Dialects with a native INSERT ... ON CONFLICT DO UPDATE
_UPSERT_INSERTS = {"postgresql": postgresql.insert, "sqlite": sqlite.insert}


class SqlInstrumentRepository(Generic[T]):
    """
    Repository for one instrument table.

    Each call runs in its own transaction: commit on success, rollback and
    PersistenceError on any database failure.
    """

    def __init__(self, db: Session, row_model: Type[Base], record_type: Type[T]):
        self.db = db
        self.row_model = row_model
        self.record_type = record_type

    def _to_record(self, row: Base) -> T:
        return record_from_row(
            self.record_type,
            {name: getattr(row, name) for name in field_names(self.record_type)},
        )

    def _column(self, name: str):
        column = getattr(self.row_model, name, None)
        if column is None:
            raise PersistenceError(f"Unknown column {name!r} on {self.row_model.__tablename__}")
        return column

    def _get_owned(self, user_id: str, record_id: str) -> Base:
        row = (
            self.db.query(self.row_model)
            .filter(self.row_model.id == record_id, self.row_model.user_id == user_id)
            .first()
        )
        if row is None:
            raise RecordNotFoundError(f"{self.row_model.__tablename__} {record_id} not found")
        return row

    def _commit(self, operation: str) -> None:
        try:
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            raise PersistenceError(f"{operation} on {self.row_model.__tablename__} failed: {e}") from e

    async def list(
        self,
        user_id: str,
        filters: Optional[Mapping[str, Any]] = None,
        order_by: str = "created_at",
        descending: bool = False,
    ) -> List[T]:
        """Fetch the user's rows matching every equality filter, ordered"""
        try:
            query = self.db.query(self.row_model).filter(self.row_model.user_id == user_id)
            for name, value in (filters or {}).items():
                query = query.filter(self._column(name) == value)
            order_column = self._column(order_by)
            query = query.order_by(order_column.desc() if descending else order_column.asc())
            return [self._to_record(row) for row in query.all()]
        except SQLAlchemyError as e:
            raise PersistenceError(f"list on {self.row_model.__tablename__} failed: {e}") from e

    async def create(self, record: T) -> T:
        """Insert a record; id and created_at are assigned by the store"""
        values = {k: v for k, v in record_to_row(record).items() if k not in ("id", "created_at") or v is not None}
        row = self.row_model(**values)
        try:
            self.db.add(row)
            self.db.flush()
        except SQLAlchemyError as e:
            self.db.rollback()
            raise PersistenceError(f"create on {self.row_model.__tablename__} failed: {e}") from e
        self._commit("create")
        return self._to_record(row)

    async def update(self, user_id: str, record_id: str, changes: Mapping[str, Any]) -> T:
        """Apply a partial update to one owned row"""
        for name in changes:
            self._column(name)
        try:
            row = self._get_owned(user_id, record_id)
            for name, value in changes.items():
                if name in _PROTECTED_COLUMNS:
                    continue
                setattr(row, name, value)
            self.db.flush()
        except SQLAlchemyError as e:
            self.db.rollback()
            raise PersistenceError(f"update on {self.row_model.__tablename__} failed: {e}") from e
        self._commit("update")
        return self._to_record(row)

    async def upsert(self, record: T, conflict_keys: Sequence[str]) -> T:
        """
        Insert, or overwrite the row sharing every conflict key value.

        Runs as a single INSERT ... ON CONFLICT DO UPDATE, so concurrent saves
        of the same key merge instead of violating the unique constraint.
        """
        dialect = self.db.get_bind().dialect.name
        insert = _UPSERT_INSERTS.get(dialect)
        if insert is None:
            raise PersistenceError(f"upsert is not supported on {dialect}")

        table = self.row_model.__table__
        values = {k: v for k, v in record_to_row(record).items() if k not in ("id", "created_at") or v is not None}
        for name in values:
            self._column(name)

        statement = insert(table).values(**values)
        statement = statement.on_conflict_do_update(
            index_elements=[table.c[name] for name in conflict_keys],
            set_={
                name: statement.excluded[name]
                for name in values
                if name not in _PROTECTED_COLUMNS and name not in conflict_keys
            },
        )
        try:
            self.db.execute(statement)
            query = self.db.query(self.row_model).populate_existing()
            for name in conflict_keys:
                query = query.filter(self._column(name) == values[name])
            row = query.one()
        except SQLAlchemyError as e:
            self.db.rollback()
            raise PersistenceError(f"upsert on {self.row_model.__tablename__} failed: {e}") from e
        self._commit("upsert")
        return self._to_record(row)

    async def delete(self, user_id: str, record_id: str) -> None:
        try:
            row = self._get_owned(user_id, record_id)
            self.db.delete(row)
            self.db.flush()
        except SQLAlchemyError as e:
            self.db.rollback()
            raise PersistenceError(f"delete on {self.row_model.__tablename__} failed: {e}") from e
        self._commit("delete")


def build_sql_store(db: Session) -> InstrumentStore:
    """Wire one repository per instrument table onto a shared session"""
    return InstrumentStore(
        fixed_deposits=SqlInstrumentRepository(db, FixedDepositRow, FixedDeposit),
        emi_reminders=SqlInstrumentRepository(db, EMIReminderRow, EMIReminder),
        budgets=SqlInstrumentRepository(db, BudgetCategoryRow, BudgetCategory),
        savings_goals=SqlInstrumentRepository(db, SavingsGoalRow, SavingsGoal),
    )
