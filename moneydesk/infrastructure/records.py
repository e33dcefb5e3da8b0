"""Conversion between domain dataclasses and plain row mappings"""

from dataclasses import fields
from functools import lru_cache
from typing import Any, Dict, Mapping, Type, TypeVar

from pydantic import TypeAdapter, ValidationError

from moneydesk.domain.exceptions import PersistenceError

T = TypeVar("T")


@lru_cache(maxsize=None)
def _adapter(record_type: type) -> TypeAdapter:
    return TypeAdapter(record_type)


def field_names(record_type: type) -> list[str]:
    return [f.name for f in fields(record_type)]


def record_from_row(record_type: Type[T], row: Mapping[str, Any]) -> T:
    """
    Build a domain record from a row, coercing ISO date strings.

    Unknown columns are ignored. Raises PersistenceError for rows that do not
    fit the record type, since they came back from the store malformed.
    """
    known = {name: row[name] for name in field_names(record_type) if name in row}
    try:
        return _adapter(record_type).validate_python(known)
    except ValidationError as e:
        raise PersistenceError(f"Malformed {record_type.__name__} row from store: {e}") from e


def record_to_row(record: Any, mode: str = "python") -> Dict[str, Any]:
    """Serialize a record; mode="json" renders dates as ISO strings"""
    return _adapter(type(record)).dump_python(record, mode=mode)
