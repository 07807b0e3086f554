"""Null-safe collection helpers."""

from typing import Callable, Hashable, Iterable, Optional, TypeVar

T = TypeVar("T")


def is_not_null(value) -> bool:
    return value is not None


def filter_nullable_strings(values: Iterable[Optional[str]]) -> list[str]:
    """Drop None entries from a sequence of strings."""
    return [value for value in values if value is not None]


def get_unique_values(
    values: Iterable[Optional[T]],
    selector: Optional[Callable[[T], Hashable]] = None,
) -> list[T]:
    """
    Remove None entries and duplicates, keeping first-seen order.

    With a selector, two items are duplicates when the selector returns the
    same key for both (e.g. de-duplicating joined rows by id).
    """
    seen = set()
    unique: list[T] = []
    for item in values:
        if not is_not_null(item):
            continue
        key = selector(item) if selector else item
        if key in seen:
            continue
        seen.add(key)
        unique.append(item)
    return unique
