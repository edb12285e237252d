"""A store that maps C4 IDs to the paths of files holding their data."""

from __future__ import annotations

import os
from typing import BinaryIO, Iterator

from c4.id import ID
from c4.store.base import Store


class MapStore(Store):
    """Files anywhere on disk, found through a mapping of ID to path.

    An ID with no entry maps to the empty path, so using it fails the way
    opening an empty path does.
    """

    def __init__(self, mapping: dict[ID, str] | None = None) -> None:
        self.mapping: dict[ID, str] = {} if mapping is None else mapping

    def __len__(self) -> int:
        return len(self.mapping)

    def open(self, id: ID) -> BinaryIO:
        """Open the file mapped to `id` read-only."""
        return open(self.load(id), "rb")

    def create(self, id: ID) -> BinaryIO:
        """Open the file mapped to `id` for writing, truncating it."""
        return open(self.load(id), "wb")

    def remove(self, id: ID) -> None:
        """Delete the file mapped to `id`; the mapping itself is kept."""
        os.remove(self.load(id))

    def delete(self, id: ID) -> None:
        """Drop the mapping for `id`, if there is one."""
        self.mapping.pop(id, None)

    def load(self, id: ID) -> str:
        """The path mapped to `id`, or an empty string."""
        return self.mapping.get(id, "")

    def load_or_store(self, id: ID, path: str) -> tuple[str, bool]:
        """Return the existing path and True, or map `path` and return it with False."""
        if id in self.mapping:
            return self.mapping[id], True
        self.mapping[id] = path
        return path, False

    def items(self) -> Iterator[tuple[ID, str]]:
        """Yield each (id, path) pair."""
        yield from list(self.mapping.items())