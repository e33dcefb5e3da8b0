"""HTTP client for a PostgREST-compatible managed table store"""

from dataclasses import dataclass
from typing import Any, Dict, Generic, List, Mapping, Optional, Sequence, Type, TypeVar

import httpx

from moneydesk.domain.exceptions import PersistenceError, RecordNotFoundError
from moneydesk.domain.models import BudgetCategory, EMIReminder, FixedDeposit, SavingsGoal
from moneydesk.domain.repository import InstrumentStore
from moneydesk.infrastructure.records import record_from_row, record_to_row

T = TypeVar("T")

_PROTECTED_COLUMNS = {"id", "user_id", "created_at"}


@dataclass
class StoreOptions:
    """Explicit connection options for the REST store"""

    base_url: str
    api_key: str
    timeout: float = 5.0
    access_token: str | None = None

    def headers(self) -> Dict[str, str]:
        return {
            "apikey": self.api_key,
            "Authorization": f"Bearer {self.access_token or self.api_key}",
            "Content-Type": "application/json",
        }


def _eq(value: Any) -> str:
    return f"eq.{value}"


class RestInstrumentRepository(Generic[T]):
    """
    Repository for one table exposed over PostgREST conventions.

    Filters are sent as ``column=eq.value``, ordering as ``order=column.asc``;
    writes ask for ``Prefer: return=representation`` so the stored row comes
    back in the response body.
    """

    def __init__(
        self,
        options: StoreOptions,
        table: str,
        record_type: Type[T],
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.options = options
        self.table = table
        self.record_type = record_type
        self.transport = transport

    @property
    def url(self) -> str:
        return f"{self.options.base_url.rstrip('/')}/{self.table}"

    async def _request(
        self,
        method: str,
        params: Optional[Dict[str, str]] = None,
        json: Any = None,
        prefer: Optional[str] = None,
    ) -> Any:
        """
        Send one request and return the decoded body.

        Raises:
            PersistenceError: On timeout, transport errors, or HTTP errors
        """
        headers = self.options.headers()
        if prefer:
            headers["Prefer"] = prefer

        async with httpx.AsyncClient(timeout=self.options.timeout, transport=self.transport) as client:
            try:
                response = await client.request(method, self.url, params=params, json=json, headers=headers)
                response.raise_for_status()
                return response.json() if response.content else None

            except httpx.TimeoutException as e:
                raise PersistenceError(f"{self.table} store timeout after {self.options.timeout}s") from e
            except httpx.HTTPStatusError as e:
                raise PersistenceError(f"{self.table} store error: {e.response.status_code}") from e
            except httpx.RequestError as e:
                raise PersistenceError(f"{self.table} store unreachable: {e}") from e
            except ValueError as e:
                raise PersistenceError(f"Invalid response body from {self.table} store: {e}") from e

    def _single(self, body: Any, record_id: str | None = None) -> T:
        if not isinstance(body, list):
            raise PersistenceError(f"Expected a row list from {self.table} store")
        if not body:
            raise RecordNotFoundError(f"{self.table} {record_id} not found")
        return record_from_row(self.record_type, body[0])

    def _insert_payload(self, record: T) -> Dict[str, Any]:
        row = record_to_row(record, mode="json")
        return {k: v for k, v in row.items() if k not in ("id", "created_at") or v is not None}

    async def list(
        self,
        user_id: str,
        filters: Optional[Mapping[str, Any]] = None,
        order_by: str = "created_at",
        descending: bool = False,
    ) -> List[T]:
        params = {"select": "*", "user_id": _eq(user_id)}
        for name, value in (filters or {}).items():
            params[name] = _eq(value)
        params["order"] = f"{order_by}.{'desc' if descending else 'asc'}"

        body = await self._request("GET", params=params)
        if not isinstance(body, list):
            raise PersistenceError(f"Expected a row list from {self.table} store")
        return [record_from_row(self.record_type, row) for row in body]

    async def create(self, record: T) -> T:
        body = await self._request("POST", json=[self._insert_payload(record)], prefer="return=representation")
        return self._single(body)

    async def update(self, user_id: str, record_id: str, changes: Mapping[str, Any]) -> T:
        payload = {k: v for k, v in changes.items() if k not in _PROTECTED_COLUMNS}
        body = await self._request(
            "PATCH",
            params={"id": _eq(record_id), "user_id": _eq(user_id)},
            # Dates in a partial update still need ISO encoding
            json={k: v.isoformat() if hasattr(v, "isoformat") else v for k, v in payload.items()},
            prefer="return=representation",
        )
        return self._single(body, record_id)

    async def upsert(self, record: T, conflict_keys: Sequence[str]) -> T:
        body = await self._request(
            "POST",
            params={"on_conflict": ",".join(conflict_keys)},
            json=[self._insert_payload(record)],
            prefer="resolution=merge-duplicates,return=representation",
        )
        return self._single(body)

    async def delete(self, user_id: str, record_id: str) -> None:
        body = await self._request(
            "DELETE",
            params={"id": _eq(record_id), "user_id": _eq(user_id)},
            prefer="return=representation",
        )
        if isinstance(body, list) and not body:
            raise RecordNotFoundError(f"{self.table} {record_id} not found")


def build_rest_store(options: StoreOptions, transport: httpx.AsyncBaseTransport | None = None) -> InstrumentStore:
    return InstrumentStore(
        fixed_deposits=RestInstrumentRepository(options, "fixed_deposits", FixedDeposit, transport),
        emi_reminders=RestInstrumentRepository(options, "emi_reminders", EMIReminder, transport),
        budgets=RestInstrumentRepository(options, "budget_categories", BudgetCategory, transport),
        savings_goals=RestInstrumentRepository(options, "savings_goals", SavingsGoal, transport),
    )
