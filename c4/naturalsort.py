"""Natural ordering of strings, where runs of digits compare as numbers."""

from __future__ import annotations

from functools import cmp_to_key
from typing import Iterable

_ZERO = ord("0")
_NINE = ord("9")


def _skip_zeros(text: bytes, pos: int) -> int:
    while pos < len(text) and text[pos] == _ZERO:
        pos += 1
    return pos


def _skip_digits(text: bytes, pos: int) -> int:
    while pos < len(text) and _ZERO <= text[pos] <= _NINE:
        pos += 1
    return pos


def natural_less(left: str, right: str) -> bool:
    """True when `left` sorts before `right` in natural order.

    Digit runs compare by value, ignoring leading zeros; between equal
    values the one with fewer leading zeros sorts first. Characters above
    the digits sort after them, characters below sort before them.
    """
    a = left.encode("utf-8")
    b = right.encode("utf-8")
    l = r = 0
    while l < len(a) and r < len(b):
        x, y = a[l], b[r]
        if x > _NINE:
            if y > _NINE:
                if x == y:
                    l += 1
                    r += 1
                    continue
                return x < y
            return False
        if y > _NINE:
            return True

        if x < _ZERO:
            if y < _ZERO:
                if x == y:
                    l += 1
                    r += 1
                    continue
                return x < y
            return False
        if y < _ZERO:
            return True

        l = _skip_zeros(a, l)
        r = _skip_zeros(b, r)
        left_start, right_start = l, r
        l = _skip_digits(a, l)
        r = _skip_digits(b, r)

        left_len, right_len = l - left_start, r - right_start
        if left_len != right_len:
            return left_len < right_len
        left_digits, right_digits = a[left_start:l], b[right_start:r]
        if left_digits != right_digits:
            return left_digits < right_digits
        if l != r:
            return l < r

    return len(a) < len(b)


def _compare(left: str, right: str) -> int:
    if natural_less(left, right):
        return -1
    if natural_less(right, left):
        return 1
    return 0


def natural_sorted(items: Iterable[str]) -> list[str]:
    """Return the items as a new list in natural order."""
    return sorted(items, key=cmp_to_key(_compare))