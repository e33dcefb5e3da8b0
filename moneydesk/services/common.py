"""Input checks and lookups shared by the instrument services"""

from typing import Iterable, TypeVar

from moneydesk.domain.exceptions import InvalidInputError, RecordNotFoundError
from moneydesk.domain.repository import InstrumentRepository

T = TypeVar("T")


def require_positive(name: str, value: float) -> None:
    if value is None or value <= 0:
        raise InvalidInputError(f"{name} must be positive, got {value}")


def require_non_negative(name: str, value: float) -> None:
    if value is None or value < 0:
        raise InvalidInputError(f"{name} cannot be negative, got {value}")


def require_text(name: str, value: str) -> None:
    if not isinstance(value, str) or not value.strip():
        raise InvalidInputError(f"{name} is required")


def require_choice(name: str, value: str, choices: Iterable[str]) -> None:
    if value not in choices:
        raise InvalidInputError(f"Unknown {name} {value!r}")


async def get_owned(repository: InstrumentRepository[T], user_id: str, record_id: str) -> T:
    """Fetch one record through list(); the adapter contract has no single-row read"""
    matches = await repository.list(user_id, filters={"id": record_id})
    if not matches:
        raise RecordNotFoundError(f"Record {record_id} not found")
    return matches[0]
