"""Set and sequence helpers used by filtering, search and assembly."""

from collections.abc import Callable, Hashable, Iterable
from typing import Any, TypeVar

T = TypeVar("T")


def is_superset(set_: Iterable[Any], subset: Iterable[Any]) -> bool:
    """True iff every element of ``subset`` is in ``set_``."""
    return set(set_).issuperset(subset)


def intersection(a: Iterable[Any], b: Iterable[Any]) -> set[Any]:
    """Elements present in both ``a`` and ``b``."""
    return set(a).intersection(b)


def dedup_by_key(items: Iterable[T], key: str | Callable[[T], Hashable]) -> list[T]:
    """
    Keep the first item for each key value, preserving order.

    Args:
        items: Items to deduplicate
        key: Callable returning the identity of an item, or the name of a
            mapping field holding it (e.g. "id")

    Returns:
        Items in original order with later duplicates dropped.
    """
    if isinstance(key, str):
        field_name = key

        def key_fn(item: Any) -> Hashable:
            return item.get(field_name)

    else:
        key_fn = key

    seen: set[Hashable] = set()
    unique: list[T] = []
    for item in items:
        identity = key_fn(item)
        if identity in seen:
            continue
        seen.add(identity)
        unique.append(item)
    return unique


def flatten(iterables: Iterable[Iterable[T]]) -> list[T]:
    """Chain nested iterables one level deep."""
    return [item for iterable in iterables for item in iterable]
