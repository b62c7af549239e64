"""
Multi-value field matching.

Catalog fields such as ``ancestry`` and ``class`` may hold a single string, a
comma-joined string or a list. Every facet comparison goes through
``value_matches_field`` so the decomposition rule lives in one place.
"""
from typing import Any, Iterable, List


def _norm(value: Any) -> str:
    return "" if value is None else str(value).strip()


def atomic_values(field_value: Any) -> List[str]:
    """
    Decompose a field value into its trimmed, non-empty atomic values.

    Lists yield each element, comma-joined strings yield each segment and any
    other string yields itself. Unexpected shapes decompose to nothing.
    """
    if field_value is None:
        return []
    if isinstance(field_value, (list, tuple, set, frozenset)):
        parts = [_norm(item) for item in field_value if item is not None]
    elif isinstance(field_value, str):
        parts = [_norm(part) for part in field_value.split(",")]
    else:
        return []
    return [part for part in parts if part]


def value_matches_field(field_value: Any, wanted: Any) -> bool:
    """
    Check whether a multi-value field contains the wanted value.

    Args:
        field_value: Raw field value from a catalog record
        wanted: Value selected by the user; trimmed before comparison

    Returns:
        True when one atomic value of the field equals ``wanted``
    """
    wanted = _norm(wanted)
    if not wanted:
        return False
    return wanted in atomic_values(field_value)


def unique_field_values(records: Iterable[Any], field_name: str) -> List[str]:
    """
    Get the sorted distinct atomic values of a field across records.

    Args:
        records: Feats (or anything exposing ``field_value``)
        field_name: Catalog key of the field, e.g. ``category`` or ``class``

    Returns:
        Sorted list of distinct values
    """
    values = set()
    for record in records:
        values.update(atomic_values(record.field_value(field_name)))
    return sorted(values)
