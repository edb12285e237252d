"""A store that keeps each item as a file named by its C4 ID in a folder."""

from __future__ import annotations

import os
from pathlib import Path
from typing import BinaryIO

from c4.id import ID
from c4.store.base import Store


class Folder(Store):
    """Files in one folder, each named by the C4 ID of its content."""

    def __init__(self, path: str | os.PathLike) -> None:
        self.path = Path(path)

    def __repr__(self) -> str:
        return f"Folder({str(self.path)!r})"

    def _file(self, id: ID) -> Path:
        return self.path / str(id)

    def open(self, id: ID) -> BinaryIO:
        """Open the file named `id` read-only."""
        return open(self._file(id), "rb")

    def create(self, id: ID) -> BinaryIO:
        """Create the file named `id` for writing; FileExistsError if it exists."""
        return open(self._file(id), "xb")

    def remove(self, id: ID) -> None:
        """Delete the file named `id`."""
        os.remove(self._file(id))