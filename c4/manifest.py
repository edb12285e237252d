"""File manifests: per-path file information with a text serialisation.

A manifest lists one entry per line, indented by one tab per directory
level, and ends with the sorted, unique C4 IDs that the entries refer to.
"""

from __future__ import annotations

import io
import json
import os
import posixpath
import re
import stat
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Iterable, Iterator

from c4.filemode import FileMode, format_file_mode, is_dir, parse_file_mode
from c4.id import ID, ID_LENGTH, parse
from c4.nillist import NilList

_INTEGER = re.compile(r"[+-]?[0-9]+")
_RFC3339 = re.compile(
    r"(\d{4})-(\d{2})-(\d{2})T(\d{2}):(\d{2}):(\d{2})(?:\.(\d+))?(Z|[+-]\d{2}:\d{2})"
)


def _parse_time(text: str) -> datetime:
    """Parse an RFC 3339 timestamp."""
    match = _RFC3339.fullmatch(text)
    if match is None:
        raise ValueError(f"cannot parse {text!r} as an RFC 3339 time")
    year, month, day, hour, minute, second, fraction, zone = match.groups()
    micro = int((fraction or "").ljust(6, "0")[:6])
    if zone == "Z":
        tz = timezone.utc
    else:
        sign = -1 if zone[0] == "-" else 1
        offset = timedelta(hours=int(zone[1:3]), minutes=int(zone[4:6]))
        tz = timezone.utc if not offset else timezone(sign * offset)
    return datetime(
        int(year), int(month), int(day), int(hour), int(minute), int(second),
        micro, tzinfo=tz,
    )


def _format_time(moment: datetime) -> str:
    """Format a time as RFC 3339 with whole seconds; naive times count as UTC."""
    offset = moment.utcoffset() or timedelta(0)
    text = moment.strftime("%Y-%m-%dT%H:%M:%S")
    if not offset:
        return text + "Z"
    sign = "-" if offset < timedelta(0) else "+"
    minutes = abs(int(offset.total_seconds())) // 60
    return f"{text}{sign}{minutes // 60:02d}:{minutes % 60:02d}"


def _to_utc(moment: datetime) -> datetime:
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc)


def _base(path: str) -> str:
    """Last element of a slash separated path."""
    if not path:
        return "."
    stripped = path.rstrip("/")
    if not stripped:
        return "/"
    return stripped.rsplit("/", 1)[-1]


def _join(parts: Iterable[str], name: str) -> str:
    pieces = [piece for piece in (*parts, name) if piece]
    if not pieces:
        return ""
    return posixpath.normpath("/".join(pieces))


def _pad(width: int) -> str:
    """A single space padded to `width`, as a width-formatted field would be."""
    return " " * max(1, abs(width))


def _mode_from_stat(st_mode: int) -> FileMode:
    mode = FileMode(st_mode & 0o777)
    if stat.S_ISDIR(st_mode):
        mode |= FileMode.DIR
    elif stat.S_ISLNK(st_mode):
        mode |= FileMode.SYMLINK
    elif stat.S_ISFIFO(st_mode):
        mode |= FileMode.NAMED_PIPE
    elif stat.S_ISSOCK(st_mode):
        mode |= FileMode.SOCKET
    elif stat.S_ISBLK(st_mode):
        mode |= FileMode.DEVICE
    elif stat.S_ISCHR(st_mode):
        mode |= FileMode.DEVICE | FileMode.CHAR_DEVICE
    elif not stat.S_ISREG(st_mode):
        mode |= FileMode.IRREGULAR
    if st_mode & stat.S_ISUID:
        mode |= FileMode.SETUID
    if st_mode & stat.S_ISGID:
        mode |= FileMode.SETGID
    if st_mode & stat.S_ISVTX:
        mode |= FileMode.STICKY
    return FileMode(mode)


@dataclass
class FileInfo:
    """Mode, size, time and name of a file, with optional content and metadata IDs."""

    mode: FileMode
    size: int
    mtime: datetime
    path: str
    id: ID = field(default_factory=ID)
    metadata: ID = field(default_factory=ID)

    def name(self) -> str:
        """The last element of the stored name."""
        return _base(self.path)

    def is_dir(self) -> bool:
        return is_dir(self.mode)

    def format(self, size_padding: int, name_padding: int) -> str:
        """One manifest line, with the size and ID columns aligned."""
        size_text = str(self.size)
        name = self.name()
        output = format_file_mode(self.mode)
        output += _pad(size_padding + 1 - len(size_text)) + size_text + " "
        output += _format_time(self.mtime) + " "
        output += name
        if self.is_dir():
            output += "/"
        if not self.id.is_nil():
            output += _pad(name_padding - len(name)) + str(self.id) + " "
            if not self.metadata.is_nil():
                output += " " + str(self.metadata)
        return output

    def to_json(self) -> str:
        """The entry as a compact JSON object; nil IDs are left out."""
        record: dict[str, object] = {
            "mode": format_file_mode(self.mode),
            "mod_time": _format_time(self.mtime),
            "size": self.size,
            "name": self.path,
        }
        if not self.id.is_nil():
            record["id"] = str(self.id)
        if not self.metadata.is_nil():
            record["metadata"] = str(self.metadata)
        return json.dumps(record, separators=(",", ":"), ensure_ascii=False)

    @classmethod
    def from_json(cls, data: str | bytes) -> FileInfo:
        """Build an entry from the JSON form written by `to_json`."""
        record = json.loads(data)
        if not isinstance(record, dict):
            raise ValueError("file info JSON must be an object")
        mode = parse_file_mode(str(record.get("mode", "")))
        mtime = _parse_time(str(record.get("mod_time", "")))
        info = cls(mode, int(record.get("size", 0)), mtime, str(record.get("name", "")))
        id_text = record.get("id", "")
        if isinstance(id_text, str) and len(id_text) == ID_LENGTH:
            info.id = parse(id_text)
        meta_text = record.get("metadata", "")
        if isinstance(meta_text, str) and len(meta_text) == ID_LENGTH:
            info.metadata = parse(meta_text)
        return info


def _split_field(line: str, what: str) -> tuple[str, str]:
    index = line.find(" ")
    if index < 0:
        raise ValueError(f"manifest line has no {what} field")
    return line[:index], line[index:].strip()


def parse_file_info(line: str) -> FileInfo:
    """Parse one manifest line into a FileInfo."""
    line = line.strip()
    mode_text, line = _split_field(line, "mode")
    mode = parse_file_mode(mode_text)
    size_text, line = _split_field(line, "size")
    if not _INTEGER.fullmatch(size_text):
        raise ValueError(f"invalid size {size_text!r}")
    mtime_text, line = _split_field(line, "modification time")
    mtime = _parse_time(mtime_text)
    name, _, line = line.partition(" ")
    info = FileInfo(mode, int(size_text), mtime, name.rstrip("/"))

    line = line.strip()
    if len(line) < ID_LENGTH:
        return info
    info.id = parse(line[:ID_LENGTH])
    line = line[ID_LENGTH:].strip()
    if len(line) < ID_LENGTH:
        return info
    info.metadata = parse(line[:ID_LENGTH])
    return info


def make_file_info(
    mode: int, size: int, mtime: datetime, name: str, id: ID, metadata: ID
) -> FileInfo:
    """Build a FileInfo, converting the time to UTC."""
    return FileInfo(FileMode(mode), size, _to_utc(mtime), name, id, metadata)


def _with_ids(info: FileInfo, ids: tuple[ID, ...]) -> FileInfo:
    if ids:
        info.id = ids[0]
        if len(ids) > 1:
            info.metadata = ids[1]
    return info


def _from_stat(result: os.stat_result, name: str) -> FileInfo:
    return FileInfo(
        _mode_from_stat(result.st_mode),
        result.st_size,
        datetime.fromtimestamp(result.st_mtime, timezone.utc),
        name,
    )


def new_file_info(info, *args: ID) -> FileInfo:
    """Copy a FileInfo or an os.DirEntry; optional ids set the ID and metadata."""
    if isinstance(info, FileInfo):
        out = FileInfo(
            info.mode, info.size, _to_utc(info.mtime), info.name(),
            info.id, info.metadata,
        )
    elif isinstance(info, os.DirEntry):
        out = _from_stat(info.stat(follow_symlinks=False), info.name)
    else:
        raise TypeError(f"cannot build file info from {type(info).__name__}")
    return _with_ids(out, args)


def file_info_from_path(path, *args: ID) -> FileInfo:
    """Describe the file at `path` without following a final symlink."""
    text = os.fspath(path)
    name = os.path.basename(os.path.normpath(text))
    return _with_ids(_from_stat(os.lstat(text), name), args)


class Manifest:
    """A mapping of paths to FileInfo entries."""

    def __init__(self) -> None:
        self._entries: dict[str, FileInfo] = {}

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, path: object) -> bool:
        return path in self._entries

    def __iter__(self) -> Iterator[str]:
        return iter(self.paths())

    def set_file_info(self, path: str, info) -> None:
        """Store `info` under `path`, copying it first unless it is a FileInfo."""
        self._entries[path] = info if isinstance(info, FileInfo) else new_file_info(info)

    def _require(self, path: str, what: str) -> FileInfo:
        try:
            return self._entries[path]
        except KeyError:
            raise KeyError(f"cannot set {what} no such path in manifest {path}") from None

    def set_id(self, path: str, id: ID) -> None:
        self._require(path, "id").id = id

    def set_metadata(self, path: str, id: ID) -> None:
        self._require(path, "metadata id").metadata = id

    def get(self, path: str) -> FileInfo | None:
        return self._entries.get(path)

    def paths(self) -> list[str]:
        """All paths, directories before their contents, in byte order."""
        return NilList(self._entries).strings()

    def marshal(self) -> bytes:
        """The manifest in its indented text form."""
        if not self._entries:
            return b""
        max_size = max(len(str(info.size)) for info in self._entries.values())
        max_name = max(len(info.name()) for info in self._entries.values())
        lines = []
        ids: set[ID] = set()
        for path in self.paths():
            info = self._entries[path]
            if not info.id.is_nil():
                ids.add(info.id)
                if not info.metadata.is_nil():
                    ids.add(info.metadata)
            depth = path.count("/")
            lines.append("\t" * depth + info.format(max_size, max_name) + "\n")
        lines.extend(str(id_) + "\n" for id_ in sorted(ids))
        return "".join(lines).encode("utf-8")

    def unmarshal(self, stream) -> None:
        """Add the entries of a manifest read from a stream, bytes or str."""
        if isinstance(stream, bytes):
            stream = io.StringIO(stream.decode("utf-8"))
        elif isinstance(stream, str):
            stream = io.StringIO(stream)
        current: list[str] = []
        for raw in stream:
            line = raw.decode("utf-8") if isinstance(raw, bytes) else raw
            if not line:
                continue
            depth = len(line) - len(line.lstrip("\t"))
            if depth > len(current):
                raise ValueError("manifest line is indented deeper than its parent")
            del current[depth:]

            if len(line) == ID_LENGTH + 1:
                try:
                    parse(line[:-1])
                except ValueError:
                    pass
                else:
                    break

            info = parse_file_info(line)
            self._entries[_join(current, info.name())] = info
            if info.is_dir():
                current.append(info.name())