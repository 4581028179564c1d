"""Dotted-path lookups against raw supplier payloads."""
from __future__ import annotations

from functools import lru_cache
from typing import Any, Iterable, Mapping, Tuple


class _Missing:
    """Marker for a value that could not be located in a record."""

    _instance = None

    def __new__(cls) -> "_Missing":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "MISSING"


MISSING: Any = _Missing()


@lru_cache(maxsize=256)
def _split_path(path: str) -> Tuple[str, ...]:
    return tuple(path.split("."))


def resolve_path(record: Any, path: str) -> Any:
    """Walk ``record`` along ``path`` (``"images.rooms"``) and return the value found.

    Returns :data:`MISSING` when a segment is absent or an intermediate value is
    not a mapping.
    """
    if not path:
        return MISSING
    current = record
    for segment in _split_path(path):
        if not isinstance(current, Mapping) or segment not in current:
            return MISSING
        current = current[segment]
    return current


def is_empty(value: Any) -> bool:
    return value is MISSING or value is None or (isinstance(value, str) and value == "")


def extract_field(record: Any, candidate_paths: Iterable[str]) -> Any:
    """Return the first non-empty value among ``candidate_paths``, in order."""
    for path in candidate_paths:
        value = resolve_path(record, path)
        if not is_empty(value):
            return value
    return MISSING
