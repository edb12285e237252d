"""Sorted lists of paths with separators replaced by zero bytes.

Replacing ``/`` with a zero byte makes plain byte ordering list every
directory's entries before any of its siblings that merely share a prefix,
so a sorted list is a depth-first walk of the tree.
"""

from __future__ import annotations

from typing import Callable, Iterable, Iterator, overload

_NIL = b"\x00"


def from_slash(path: str) -> bytes:
    """Encode a path, replacing every ``/`` with a zero byte."""
    return path.encode("utf-8").replace(b"/", _NIL)


def to_slash(data: bytes) -> str:
    """Decode a path, replacing every zero byte with ``/``."""
    if not data:
        return ""
    return data.replace(_NIL, b"/").decode("utf-8")


def _search(count: int, predicate: Callable[[int], bool]) -> int:
    """Smallest index in [0, count) for which `predicate` holds, else count."""
    low, high = 0, count
    while low < high:
        middle = (low + high) // 2
        if not predicate(middle):
            low = middle + 1
        else:
            high = middle
    return low


class NilList:
    """A sorted, de-duplicated list of zero-separated paths."""

    def __init__(self, paths: Iterable[str] = ()) -> None:
        self._items: list[bytes] = sorted({from_slash(path) for path in paths})

    @classmethod
    def _from_sorted(cls, items: Iterable[bytes]) -> NilList:
        result = cls.__new__(cls)
        result._items = list(items)
        return result

    def __len__(self) -> int:
        return len(self._items)

    @overload
    def __getitem__(self, index: int) -> bytes: ...

    @overload
    def __getitem__(self, index: slice) -> NilList: ...

    def __getitem__(self, index):
        if isinstance(index, slice):
            return NilList._from_sorted(self._items[index])
        return self._items[index]

    def __iter__(self) -> Iterator[bytes]:
        return iter(self._items)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, NilList):
            return NotImplemented
        return self._items == other._items

    def __repr__(self) -> str:
        return f"NilList({self.strings()!r})"

    def strings(self) -> list[str]:
        """The paths with ``/`` separators, in list order."""
        return [to_slash(item) for item in self._items]

    def reverse(self) -> None:
        """Reverse the list in place, giving a post-order walk."""
        self._items.reverse()

    def get(self, index: int) -> str:
        """The path at `index` with ``/`` separators."""
        return to_slash(self._items[index])

    def find(self, key: bytes) -> int:
        """Index of the first entry not less than `key`."""
        return _search(len(self._items), lambda i: self._items[i] >= key)

    def end(self, key: bytes) -> int:
        """Index just past the leading run of entries that start with `key`.

        The list should begin at the first match, as returned by `find`.
        """
        return _search(len(self._items), lambda i: not self._items[i].startswith(key))

    def sublist(self, key: bytes) -> NilList:
        """The entries that start with `key`, the key itself included."""
        start = self.find(key)
        if start == len(self._items):
            return NilList._from_sorted([])
        tail = self[start:]
        return tail[: tail.end(key)]

    def children(self, key: bytes) -> NilList:
        """Unique child paths directly below `key`, in sorted order.

        Collection stops at the first entry that is `key` itself or that
        continues `key` without a separator.
        """
        out: list[bytes] = []
        remaining = self.sublist(key)
        length = len(key)
        while len(remaining):
            first = remaining[0]
            if len(first) == length or first[length] != 0:
                break
            remaining = remaining[1:]
            separator = first.find(_NIL, length + 1)
            child = first if separator < 0 else first[:separator]
            out.append(child)
            remaining = remaining[remaining.end(child + _NIL):]
        return NilList._from_sorted(out)


def diff(a: NilList, b: NilList) -> NilList:
    """Entries of `a` that are not in `b`, in sorted order."""
    excluded = set(b)
    return NilList._from_sorted(item for item in a if item not in excluded)