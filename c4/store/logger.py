"""A store layer that logs calls on a store and on the streams it returns."""

from __future__ import annotations

import enum
from typing import Any, TextIO

from c4.id import ID
from c4.store.base import Store, _Stream
from c4.store.validating import InvalidIDError


class LoggerFlags(enum.IntFlag):
    """Which calls and errors a Logger writes out."""

    OPEN = 1 << 0
    CREATE = 1 << 1
    REMOVE = 1 << 2
    READ = 1 << 3
    WRITE = 1 << 4
    CLOSE = 1 << 5
    ERROR = 1 << 6
    INVALID_ID = 1 << 7
    EOF = 1 << 8


_DEFAULT_FLAGS = (
    LoggerFlags.OPEN
    | LoggerFlags.CREATE
    | LoggerFlags.READ
    | LoggerFlags.WRITE
    | LoggerFlags.CLOSE
    | LoggerFlags.ERROR
    | LoggerFlags.INVALID_ID
    | LoggerFlags.EOF
)


class _LoggingStream(_Stream):
    def __init__(self, inner: Any, out: TextIO, idstr: str, flags: LoggerFlags) -> None:
        self._inner = inner
        self._out = out
        self._idstr = idstr
        self._flags = flags

    def _log(self, text: str) -> None:
        self._out.write(f"{self._idstr} {text}\n")

    def _log_error(self, operation: str, exc: BaseException) -> None:
        flag = LoggerFlags.INVALID_ID if isinstance(exc, InvalidIDError) else LoggerFlags.ERROR
        if self._flags & flag:
            self._log(f"{operation} error {exc}")

    def close(self) -> None:
        if self._flags & LoggerFlags.CLOSE:
            self._log("Close")
        try:
            self._inner.close()
        except Exception as exc:
            self._log_error("Close", exc)
            raise


class _LoggingReader(_LoggingStream):
    def read(self, size: int | None = -1) -> bytes:
        try:
            data = self._inner.read(size)
        except Exception as exc:
            if self._flags & LoggerFlags.READ:
                self._log("Read 0")
            self._log_error("Read", exc)
            raise
        if self._flags & LoggerFlags.READ:
            self._log(f"Read {len(data)}")
        if not data and size != 0 and self._flags & LoggerFlags.EOF:
            self._log("Read error EOF")
        return data


class _LoggingWriter(_LoggingStream):
    def write(self, data) -> int:
        try:
            written = self._inner.write(data)
        except Exception as exc:
            if self._flags & LoggerFlags.WRITE:
                self._log("Write 0")
            self._log_error("Write", exc)
            raise
        count = len(data) if written is None else written
        if self._flags & LoggerFlags.WRITE:
            self._log(f"Write {count}")
        return count


class Logger(Store):
    """Wraps a store and logs its calls, and those on its streams, to `out`.

    Each line is the ID followed by the call, e.g. ``<id> Read 3``. With no
    flags, everything except Remove is logged.
    """

    def __init__(self, store: Store, out: TextIO, flags: int = 0) -> None:
        self._store = store
        self._out = out
        self._flags = LoggerFlags(flags) or _DEFAULT_FLAGS

    def _log(self, idstr: str, text: str) -> None:
        self._out.write(f"{idstr} {text}\n")

    def _log_failure(self, idstr: str, name: str, exc: BaseException) -> None:
        if self._flags & LoggerFlags.ERROR:
            self._log(idstr, f"{name} error {exc}")

    def open(self, id: ID) -> _LoggingReader:
        idstr = str(id)
        if self._flags & LoggerFlags.OPEN:
            self._log(idstr, "Open")
        try:
            reader = self._store.open(id)
        except Exception as exc:
            self._log_failure(idstr, "Open", exc)
            raise
        return _LoggingReader(reader, self._out, idstr, self._flags)

    def create(self, id: ID) -> _LoggingWriter:
        idstr = str(id)
        if self._flags & LoggerFlags.CREATE:
            self._log(idstr, "Create")
        try:
            writer = self._store.create(id)
        except Exception as exc:
            self._log_failure(idstr, "Create", exc)
            raise
        return _LoggingWriter(writer, self._out, idstr, self._flags)

    def remove(self, id: ID) -> None:
        idstr = str(id)
        if self._flags & LoggerFlags.REMOVE:
            self._log(idstr, "Remove")
        try:
            self._store.remove(id)
        except Exception as exc:
            self._log_failure(idstr, "Remove", exc)
            raise