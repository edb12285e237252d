"""Conversion of C4 IDs written in the character set used before 2016.

The old set placed lower case letters before upper case ones; the current
set places upper case first so that string and digest orders agree.
"""

from __future__ import annotations

import string

from c4.id import CHARSET, ID, PREFIX, parse

OLD_CHARSET = "123456789abcdefghijkmnopqrstuvwxyzABCDEFGHJKLMNPQRSTUVWXYZ"

_OLD_TO_NEW = dict(zip(OLD_CHARSET, CHARSET))
_NEW_TO_OLD = dict(zip(CHARSET, OLD_CHARSET))
_OLD_TO_NEW_TABLE = str.maketrans(OLD_CHARSET, CHARSET)
_NEW_TO_OLD_TABLE = str.maketrans(CHARSET, OLD_CHARSET)
_DIGITS = str.maketrans("", "", string.digits)


def _same_numbers(a: ID | None, b: ID | None) -> bool:
    if a is None or b is None:
        return False
    return all(
        x == y for x, y in zip(str(a), str(b)) if x in string.digits
    )


def check_character_set(a: ID | None, b: ID | None) -> ID:
    """Given one ID in the old and one in the new set, return the new one.

    Raises ValueError if either is missing or they are not two encodings
    of the same ID.
    """
    if not _same_numbers(a, b):
        raise ValueError("not the same id")
    x = str(a)[len(PREFIX):].translate(_DIGITS)
    y = str(b)[len(PREFIX):].translate(_DIGITS)
    newer = 0  # -1: a is newer, 1: b is newer
    for xc, yc in zip(x, y):
        if _OLD_TO_NEW.get(xc) == yc:
            if newer == -1:
                raise ValueError("not the same id")
            newer = 1
            continue
        if _NEW_TO_OLD.get(xc) != yc or newer == 1:
            raise ValueError("not the same id")
        newer = -1
    return a if newer == -1 else b


def _translate(value: ID | None, table: dict[int, int]) -> ID | None:
    if value is None:
        return None
    text = str(value)
    try:
        return parse(PREFIX + text[len(PREFIX):].translate(table))
    except ValueError:
        return None


def old_charset_id_to_new(id: ID | None) -> ID | None:  # noqa: A002
    """Re-encode an ID written in the old character set in the current one.

    This cannot tell whether the ID was really in the old set. Returns None
    for None or when the result is not a valid ID.
    """
    return _translate(id, _OLD_TO_NEW_TABLE)


def new_charset_id_to_old(id: ID | None) -> ID | None:  # noqa: A002
    """Re-encode an ID in the old character set; mainly useful for tests."""
    return _translate(id, _NEW_TO_OLD_TABLE)