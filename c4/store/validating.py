"""A store layer that checks data against its C4 ID as it is read or written."""

from __future__ import annotations

import contextlib
import hashlib
from typing import Any, Callable

from c4.id import ID
from c4.store.base import Store, _Stream


class InvalidIDError(ValueError):
    """Raised when data does not match the C4 ID it is stored under."""

    def __init__(self, message: str = "c4 id does not match data") -> None:
        super().__init__(message)


class _ValidatingReader(_Stream):
    def __init__(self, id: ID, inner: Any) -> None:
        self._id = id
        self._inner = inner
        self._hash = hashlib.sha512()

    def _is_valid(self) -> bool:
        return self._hash.digest() == self._id.digest

    def read(self, size: int | None = -1) -> bytes:
        data = self._inner.read(size)
        self._hash.update(data)
        if not data and size != 0 and not self._is_valid():
            raise InvalidIDError()
        return data

    def close(self) -> None:
        failure = None
        try:
            self._inner.close()
        except Exception as exc:
            failure = exc
        if not self._is_valid():
            raise InvalidIDError() from failure
        if failure is not None:
            raise failure


class _ValidatingWriter(_Stream):
    def __init__(self, id: ID, inner: Any, remove: Callable[[ID], None]) -> None:
        self._id = id
        self._inner = inner
        self._remove = remove
        self._hash = hashlib.sha512()

    def _is_valid(self) -> bool:
        return self._hash.digest() == self._id.digest

    def write(self, data) -> int:
        chunk = bytes(data)
        written = self._inner.write(chunk)
        count = len(chunk) if written is None else written
        self._hash.update(chunk[:count])
        return count

    def close(self) -> None:
        failure = None
        try:
            self._inner.close()
        except Exception as exc:
            failure = exc
        if not self._is_valid():
            with contextlib.suppress(Exception):
                self._remove(self._id)
            raise InvalidIDError() from failure
        if failure is not None:
            raise failure


class Validating(Store):
    """Wraps a store and checks every ID against the data read or written.

    The check happens when a reader reaches the end of its data or is
    closed, and when a writer is closed; data written under the wrong ID is
    removed again. A failed check raises InvalidIDError.
    """

    def __init__(self, store: Store) -> None:
        self._store = store

    def open(self, id: ID) -> _ValidatingReader:
        return _ValidatingReader(id, self._store.open(id))

    def create(self, id: ID) -> _ValidatingWriter:
        return _ValidatingWriter(id, self._store.create(id), self._store.remove)

    def remove(self, id: ID) -> None:
        self._store.remove(id)