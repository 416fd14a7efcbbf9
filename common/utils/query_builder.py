"""SQL text for the two variable-shape statements of the catalog.

Sorting only ever uses one of the fixed expressions below, and partial updates
only ever name columns from a table's closed column tuple. Values are always
bound as ``%s`` parameters.
"""
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

from common.utils.exceptions import ValidationError

DEFAULT_MOVIE_ORDER = "rating DESC"

MOVIE_SORTING: Dict[str, str] = {
    "rating": "rating DESC",
    "title": "title ASC",
    "name": "title ASC",
    "release_date": "release_date DESC",
    "release": "release_date DESC",
    "date": "release_date DESC",
}

MOVIE_ORDER_EXPRESSIONS = frozenset(MOVIE_SORTING.values())

# Update order follows these tuples, not the caller's keyword order.
MOVIE_COLUMNS = ("title", "description", "release_date", "rating")
ACTOR_COLUMNS = ("name", "gender", "birthday")


def resolve_movie_sorting(sort_key: Optional[str]) -> str:
    if not sort_key:
        return DEFAULT_MOVIE_ORDER
    return MOVIE_SORTING.get(sort_key, DEFAULT_MOVIE_ORDER)


def build_order_by(order_by: str) -> str:
    if order_by not in MOVIE_ORDER_EXPRESSIONS:
        raise ValueError(f"Unsupported ordering expression: {order_by!r}")
    return f"ORDER BY {order_by}"


def is_specified(value: Any) -> bool:
    """Sentinel policy for partial updates: None, "" and 0 mean "leave as is"."""
    if value is None:
        return False
    if isinstance(value, bool):
        raise ValidationError(f"unsupported field value: {value!r}")
    if isinstance(value, str):
        return value != ""
    if isinstance(value, int):
        return value != 0
    return True


def specified_fields(**fields) -> Dict[str, Any]:
    return {name: value for name, value in fields.items() if is_specified(value)}


def build_update(
    table: str, columns: Sequence[str], fields: Mapping[str, Any]
) -> Tuple[str, List[Any]]:
    """Returns ``(query, values)`` for ``UPDATE <table> SET ... WHERE id = %s``.

    The row id is not part of ``values``; callers append it.
    """
    unknown = set(fields) - set(columns)
    if unknown:
        raise ValueError(f"Unknown columns for {table}: {sorted(unknown)}")
    if not fields:
        raise ValueError("No columns to update")

    assignments = []
    values = []
    for column in columns:
        if column in fields:
            assignments.append(f"{column} = %s")
            values.append(fields[column])

    return f"UPDATE {table} SET {', '.join(assignments)} WHERE id = %s", values
