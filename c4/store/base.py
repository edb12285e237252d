"""Stores of data addressed by C4 ID.

A store hides how data is kept, so that producers and consumers of C4
identified data can save and fetch it by its ID alone. A store may be an
object storage bucket, a local folder, or a layer over other stores that
adds validation, logging and the like.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from c4.id import ID


class Store(ABC):
    """Data identified by C4 ID, opened to read and created to write."""

    @abstractmethod
    def open(self, id: ID) -> Any:
        """Open the data for `id` for reading; FileNotFoundError if absent."""

    @abstractmethod
    def create(self, id: ID) -> Any:
        """Open new data for `id` for writing; FileExistsError if present."""

    @abstractmethod
    def remove(self, id: ID) -> None:
        """Remove the data for `id`; an OSError if that cannot be done."""


class _Stream:
    """Context manager support for the stream objects stores hand out."""

    def __enter__(self):
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def close(self) -> None:
        raise TypeError(f"{type(self).__name__} must define close()")