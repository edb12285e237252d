"""A store that keeps all data in memory."""

from __future__ import annotations

import errno
import os

from c4.id import ID
from c4.store.base import Store, _Stream


def _not_found(id: ID) -> FileNotFoundError:
    return FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), str(id))


class _RamReader(_Stream):
    """Read-only view of data held in a RAM store."""

    def __init__(self, data: bytes) -> None:
        self._data = data
        self._pos = 0
        self.closed = False

    def readable(self) -> bool:
        return True

    def writable(self) -> bool:
        return False

    def read(self, size: int | None = -1) -> bytes:
        if size is None or size < 0:
            chunk = self._data[self._pos:]
        else:
            chunk = self._data[self._pos:self._pos + size]
        self._pos += len(chunk)
        return chunk

    def write(self, data) -> int:
        raise PermissionError(errno.EACCES, os.strerror(errno.EACCES))

    def close(self) -> None:
        self.closed = True


class _RamWriter(_Stream):
    """Buffer whose content is saved in the RAM store when it is closed."""

    def __init__(self, ram: RAM, id: ID) -> None:
        self._ram = ram
        self._id = id
        self._buffer = bytearray()
        self.closed = False

    def readable(self) -> bool:
        return False

    def writable(self) -> bool:
        return True

    def write(self, data) -> int:
        chunk = bytes(data)
        self._buffer.extend(chunk)
        return len(chunk)

    def close(self) -> None:
        self._ram.data[self._id] = bytes(self._buffer)
        self.closed = True


class RAM(Store):
    """A store whose content lives in the `data` dictionary."""

    def __init__(self) -> None:
        self.data: dict[ID, bytes] = {}

    def __len__(self) -> int:
        return len(self.data)

    def __contains__(self, id: object) -> bool:
        return id in self.data

    def open(self, id: ID) -> _RamReader:
        """Open the data for `id` read-only; FileNotFoundError if absent."""
        try:
            data = self.data[id]
        except KeyError:
            raise _not_found(id) from None
        return _RamReader(data)

    def create(self, id: ID) -> _RamWriter:
        """A writer whose content is stored on close; FileExistsError if present."""
        if id in self.data:
            raise FileExistsError(errno.EEXIST, os.strerror(errno.EEXIST), str(id))
        return _RamWriter(self, id)

    def remove(self, id: ID) -> None:
        """Forget the data for `id`; FileNotFoundError if absent."""
        try:
            del self.data[id]
        except KeyError:
            raise _not_found(id) from None