"""Sorted merkle trees of C4 IDs, used to identify sets of data."""

from __future__ import annotations

from typing import BinaryIO, Iterable

from c4.id import DIGEST_SIZE, ID

_HEAD_SIZE = 3 * DIGEST_SIZE


class InvalidTreeError(ValueError):
    """Raised when data does not hold a valid C4 ID tree."""


class Tree:
    """A C4 ID tree built over the sorted, de-duplicated list of IDs.

    Nodes are stored row by row, the root first and the list last. The
    interior nodes are computed lazily when first needed.
    """

    def __init__(self, ids: Iterable[ID]) -> None:
        unique = sorted(set(ids))
        size = _tree_size(len(unique))
        data = bytearray(size * DIGEST_SIZE)
        offset = (size - len(unique)) * DIGEST_SIZE
        data[offset:] = b"".join(item.digest for item in unique)
        self._data = data

    @classmethod
    def _from_bytes(cls, data: bytes) -> Tree:
        tree = cls.__new__(cls)
        tree._data = bytearray(data)
        return tree

    def _id_at(self, index: int) -> ID:
        start = index * DIGEST_SIZE
        return ID(bytes(self._data[start:start + DIGEST_SIZE]))

    def _put(self, index: int, value: ID) -> None:
        start = index * DIGEST_SIZE
        self._data[start:start + DIGEST_SIZE] = value.digest

    def _is_computed(self) -> bool:
        return any(self._data[:DIGEST_SIZE])

    def _compute(self) -> None:
        bounds = _row_bounds(len(self._data) // DIGEST_SIZE)
        for (parent_start, _), (child_start, child_stop) in zip(
            reversed(bounds[:-1]), reversed(bounds[1:])
        ):
            children = iter([self._id_at(i) for i in range(child_start, child_stop)])
            for index, left in enumerate(children, parent_start):
                right = next(children, None)
                self._put(index, left if right is None else left.sum(right))

    def _ensure_computed(self) -> None:
        if not self._is_computed():
            self._compute()

    def id(self) -> ID:
        """The root ID of the tree, which identifies the whole list."""
        self._ensure_computed()
        return self._id_at(0)

    def to_bytes(self) -> bytes:
        """The binary form of the tree: every node, root first."""
        self._ensure_computed()
        return bytes(self._data)

    def rows(self) -> list[list[ID]]:
        """The rows of the tree from the root down to the list of IDs."""
        self._ensure_computed()
        return [
            [self._id_at(i) for i in range(start, stop)]
            for start, stop in _row_bounds(len(self._data) // DIGEST_SIZE)
        ]

    def __len__(self) -> int:
        return _list_size(len(self._data) // DIGEST_SIZE)

    def __str__(self) -> str:
        self._ensure_computed()
        return "".join(
            str(self._id_at(i)) for i in range(len(self._data) // DIGEST_SIZE)
        )


def read_tree(stream: BinaryIO) -> Tree:
    """Read a tree in binary form, checking that its head is consistent."""
    head = stream.read(_HEAD_SIZE)
    if len(head) != _HEAD_SIZE:
        raise InvalidTreeError("data too short for a c4 id tree")
    root, left, right = (
        ID(head[i:i + DIGEST_SIZE]) for i in range(0, _HEAD_SIZE, DIGEST_SIZE)
    )
    if left.sum(right) != root:
        raise InvalidTreeError("tree root does not match its branches")
    data = head + stream.read()
    if len(data) % DIGEST_SIZE:
        raise InvalidTreeError("tree data is not a whole number of ids")
    _list_size(len(data) // DIGEST_SIZE)
    return Tree._from_bytes(data)


def _tree_size(length: int) -> int:
    """Number of nodes needed to hold a list of `length` IDs and its tree."""
    total = 1
    while length > 1:
        total += length
        length = (length + 1) // 2
    return total


def _list_size(total: int) -> int:
    """Length of the list held by a tree of `total` nodes."""
    high = (total + 1) // 2
    low = high - total.bit_length()
    if _tree_size(low) == total:
        return low
    if _tree_size(high) == total:
        return high
    while high - low > 1:
        middle = (low + high) // 2
        size = _tree_size(middle)
        if size == total:
            return middle
        if size > total:
            high = middle
        else:
            low = middle
    raise InvalidTreeError(f"no tree has {total} nodes")


def _row_bounds(total: int) -> list[tuple[int, int]]:
    """Node index ranges of each row, root first."""
    width = _list_size(total)
    start = total - width
    count = 1
    length = width
    while length > 1:
        count += 1
        length = (length + 1) // 2
    bounds = []
    for _ in range(count):
        bounds.append((start, start + width))
        width = (width + 1) // 2
        start -= width
    bounds.reverse()
    return bounds