"""File mode bits and their ``ls``-style text form, as used in manifests."""

from __future__ import annotations

import enum


class FileMode(enum.IntFlag):
    """Type and special bits of a file mode. Permission bits are the low 9."""

    DIR = 1 << 31
    APPEND = 1 << 30
    EXCLUSIVE = 1 << 29
    TEMPORARY = 1 << 28
    SYMLINK = 1 << 27
    DEVICE = 1 << 26
    NAMED_PIPE = 1 << 25
    SOCKET = 1 << 24
    SETUID = 1 << 23
    SETGID = 1 << 22
    CHAR_DEVICE = 1 << 21
    STICKY = 1 << 20
    IRREGULAR = 1 << 19


OS_READ = 0o4
OS_WRITE = 0o2
OS_EX = 0o1
OS_USER_SHIFT = 6
OS_GROUP_SHIFT = 3
OS_OTH_SHIFT = 0

OS_USER_R = OS_READ << OS_USER_SHIFT
OS_USER_W = OS_WRITE << OS_USER_SHIFT
OS_USER_X = OS_EX << OS_USER_SHIFT
OS_USER_RW = OS_USER_R | OS_USER_W
OS_USER_RWX = OS_USER_RW | OS_USER_X

OS_GROUP_R = OS_READ << OS_GROUP_SHIFT
OS_GROUP_W = OS_WRITE << OS_GROUP_SHIFT
OS_GROUP_X = OS_EX << OS_GROUP_SHIFT
OS_GROUP_RW = OS_GROUP_R | OS_GROUP_W
OS_GROUP_RWX = OS_GROUP_RW | OS_GROUP_X

OS_OTH_R = OS_READ << OS_OTH_SHIFT
OS_OTH_W = OS_WRITE << OS_OTH_SHIFT
OS_OTH_X = OS_EX << OS_OTH_SHIFT
OS_OTH_RW = OS_OTH_R | OS_OTH_W
OS_OTH_RWX = OS_OTH_RW | OS_OTH_X

OS_ALL_R = OS_USER_R | OS_GROUP_R | OS_OTH_R
OS_ALL_W = OS_USER_W | OS_GROUP_W | OS_OTH_W
OS_ALL_X = OS_USER_X | OS_GROUP_X | OS_OTH_X
OS_ALL_RW = OS_ALL_R | OS_ALL_W
OS_ALL_RWX = OS_ALL_RW | OS_GROUP_X

PERM_MASK = 0o777

# The text is lower-cased before the type letter is read, so only the lower
# case letters can ever match; an upper case 'L' therefore means exclusive.
_PARSE_TYPE = {
    "d": FileMode.DIR,
    "a": FileMode.APPEND,
    "l": FileMode.EXCLUSIVE,
    "p": FileMode.NAMED_PIPE,
    "u": FileMode.SETUID,
    "g": FileMode.SETGID,
    "c": FileMode.CHAR_DEVICE,
    "t": FileMode.STICKY,
}

_FORMAT_TYPE = (
    ("d", FileMode.DIR),
    ("a", FileMode.APPEND),
    ("l", FileMode.EXCLUSIVE),
    ("T", FileMode.TEMPORARY),
    ("L", FileMode.SYMLINK),
    ("D", FileMode.DEVICE),
    ("p", FileMode.NAMED_PIPE),
    ("S", FileMode.SOCKET),
    ("u", FileMode.SETUID),
    ("g", FileMode.SETGID),
    ("c", FileMode.CHAR_DEVICE),
    ("t", FileMode.STICKY),
    ("?", FileMode.IRREGULAR),
)

_PERMISSIONS = (
    ("r", OS_USER_R),
    ("w", OS_USER_W),
    ("x", OS_USER_X),
    ("r", OS_GROUP_R),
    ("w", OS_GROUP_W),
    ("x", OS_GROUP_X),
    ("r", OS_OTH_R),
    ("w", OS_OTH_W),
    ("x", OS_OTH_X),
)


def parse_file_mode(text: str) -> FileMode:
    """Parse a mode such as ``-rw-r--r--`` or ``drwxr-xr-x``.

    Raises ValueError when the text is shorter than ten characters.
    """
    if len(text) < 10:
        raise ValueError("unable to parse file mode string too short")
    text = text.lower()
    mode = _PARSE_TYPE.get(text[0], FileMode(0))
    for char, (letter, bit) in zip(text[1:10], _PERMISSIONS):
        if char == letter:
            mode |= bit
    return FileMode(mode)


def format_file_mode(mode: int) -> str:
    """Render a mode as type letters followed by nine permission letters."""
    kinds = "".join(char for char, bit in _FORMAT_TYPE if mode & bit)
    perms = "".join(
        letter if mode & bit else "-" for letter, bit in _PERMISSIONS
    )
    return (kinds or "-") + perms


def is_dir(mode: int) -> bool:
    """True when the directory bit is set."""
    return bool(mode & FileMode.DIR)