"""
In-memory filtering for list endpoints.

Runs after the store round trip, on rows that are already tenant-scoped and
authorization-filtered: the text predicate spans joined rows, which the
query layer cannot combine with the other filters in one request.
"""
from typing import Any, Iterable, List, Mapping, Optional, Sequence, TypeVar, Union

from pydantic import BaseModel, field_validator

T = TypeVar("T")

# Value sent by list screens to mean "do not filter on this field"
ALL = "all"

# Filter name -> attribute path on the listed record
DEFAULT_FIELDS = {"employee_id": "employee_id", "status": "status", "type": "type"}


class FilterSpec(BaseModel):
    employee_id: Optional[Union[int, str]] = None
    status: Optional[str] = None
    type: Optional[str] = None
    department: Optional[str] = None
    search: Optional[str] = None

    @field_validator("employee_id", mode="before")
    @classmethod
    def coerce_employee_id(cls, value):
        if isinstance(value, str) and value.isdigit():
            return int(value)
        return value


def _resolve(record: Any, path: str) -> Any:
    value = record
    for part in path.split("."):
        if value is None:
            return None
        if isinstance(value, dict):
            value = value.get(part)
        else:
            value = getattr(value, part, None)
    return value


def _matches(record: Any, field: str, expected: Any) -> bool:
    if expected is None or expected == ALL:
        return True
    actual = _resolve(record, field)
    if hasattr(actual, "value"):
        actual = actual.value
    return actual == expected


def _matches_text(record: Any, query: str, search_fields: Sequence[str]) -> bool:
    for field in search_fields:
        value = _resolve(record, field)
        if isinstance(value, str) and query in value.lower():
            return True
    return False


def filter_records(
    records: Iterable[T],
    filters: FilterSpec,
    search_fields: Sequence[str] = (),
    fields: Mapping[str, str] = DEFAULT_FIELDS,
) -> List[T]:
    """
    Subset of `records` matching every predicate present in `filters`.
    `search_fields` are dotted attribute paths (e.g. "employee.full_name")
    for the case-insensitive substring match. `fields` maps each filter to
    the attribute it compares; filters missing from it are not applied.
    """
    query = filters.search.strip().lower() if filters.search else ""
    result = []
    for record in records:
        if not all(_matches(record, path, getattr(filters, name)) for name, path in fields.items()):
            continue
        if query and not _matches_text(record, query, search_fields):
            continue
        result.append(record)
    return result
