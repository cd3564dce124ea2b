"""Structural equality of status payloads and version lists."""

__all__ = ("deep_equal", "versions_differ")

from collections.abc import Mapping, Sequence
from typing import Any


def deep_equal(a: Any, b: Any) -> bool:
    """Compare two values structurally.

    Mappings are equal when they have the same keys and equal values.
    Sequences (other than strings and bytes) are equal when they have the
    same length and are equal element by element, in order. Anything else
    is compared with ``==``.
    """
    if isinstance(a, Mapping) and isinstance(b, Mapping):
        if a.keys() != b.keys():
            return False
        return all(deep_equal(a[key], b[key]) for key in a)

    if _is_sequence(a) and _is_sequence(b):
        if len(a) != len(b):
            return False
        return all(deep_equal(x, y) for x, y in zip(a, b))

    if _is_sequence(a) or _is_sequence(b):
        return False
    if isinstance(a, Mapping) or isinstance(b, Mapping):
        return False
    return type(a) is type(b) and a == b


def versions_differ(
    desired: Sequence[Any], observed: Sequence[Any]
) -> bool:
    """Return `True` if the desired and observed version lists are not
    structurally identical, including their order.
    """
    return not deep_equal(list(desired), list(observed))


def _is_sequence(value: Any) -> bool:
    return isinstance(value, Sequence) and not isinstance(
        value, (str, bytes, bytearray)
    )
