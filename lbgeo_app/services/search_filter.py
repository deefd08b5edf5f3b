from __future__ import annotations

from typing import Any, Callable, Dict, Iterable, List, Optional, Sequence, Union

FieldGetter = Callable[[Dict[str, Any]], Any]
SearchField = Union[str, FieldGetter]


def _field_value(row: Dict[str, Any], field: SearchField) -> Any:
    if callable(field):
        return field(row)
    return row.get(field)


def normalize_query(query: Optional[str]) -> str:
    return (query or "").strip().casefold()


def matches(row: Dict[str, Any], query: Optional[str], fields: Sequence[SearchField]) -> bool:
    """Case-insensitive substring match of ``query`` against any of ``fields``.

    Fields are either row keys or callables receiving the row (used for
    joined values such as the client name of a sale).
    """
    needle = normalize_query(query)
    if not needle:
        return True
    for field in fields:
        value = _field_value(row, field)
        if value is None:
            continue
        if needle in str(value).casefold():
            return True
    return False


def filter_rows(
    rows: Iterable[Dict[str, Any]],
    query: Optional[str],
    fields: Sequence[SearchField],
) -> List[Dict[str, Any]]:
    needle = normalize_query(query)
    if not needle:
        return list(rows)
    return [row for row in rows if matches(row, needle, fields)]
