"""C4 identifiers: SHA-512 digests with a fixed 90 character base58 form."""

from __future__ import annotations

import hashlib
from dataclasses import dataclass

DIGEST_SIZE = 64
ID_LENGTH = 90
PREFIX = "c4"
CHARSET = "123456789ABCDEFGHJKLMNPQRSTUVWXYZabcdefghijkmnopqrstuvwxyz"

_BASE = len(CHARSET)
_BODY_LENGTH = ID_LENGTH - len(PREFIX)
_VALUES = {char: value for value, char in enumerate(CHARSET)}
_CHUNK_SIZE = 64 * 1024


@dataclass(frozen=True, order=True)
class ID:
    """A C4 ID. Ordering follows the digest bytes, which matches string order."""

    digest: bytes = bytes(DIGEST_SIZE)

    def __post_init__(self) -> None:
        if not isinstance(self.digest, bytes):
            object.__setattr__(self, "digest", bytes(self.digest))
        if len(self.digest) != DIGEST_SIZE:
            raise ValueError(
                f"a c4 id digest is {DIGEST_SIZE} bytes, got {len(self.digest)}"
            )

    def __str__(self) -> str:
        number = int.from_bytes(self.digest, "big")
        chars = []
        while number:
            number, remainder = divmod(number, _BASE)
            chars.append(CHARSET[remainder])
        body = "".join(reversed(chars)).rjust(_BODY_LENGTH, CHARSET[0])
        return PREFIX + body

    def __bytes__(self) -> bytes:
        return self.digest

    def is_nil(self) -> bool:
        """True when every byte of the digest is zero."""
        return not any(self.digest)

    def compare(self, other: ID) -> int:
        """Return -1, 0 or 1 as this ID sorts before, equal to, or after `other`."""
        return (self.digest > other.digest) - (self.digest < other.digest)

    def sum(self, other: ID) -> ID:
        """The ID of the two IDs hashed together in sorted order."""
        low, high = (other, self) if self.digest > other.digest else (self, other)
        return ID(hashlib.sha512(low.digest + high.digest).digest())


def identify(data) -> ID:
    """Compute the C4 ID of a bytes-like object or a binary stream."""
    hasher = hashlib.sha512()
    if isinstance(data, (bytes, bytearray, memoryview)):
        hasher.update(data)
    elif hasattr(data, "read"):
        while chunk := data.read(_CHUNK_SIZE):
            hasher.update(chunk)
    else:
        raise TypeError(f"cannot identify object of type {type(data).__name__}")
    return ID(hasher.digest())


def parse(text: str) -> ID:
    """Parse the 90 character string form of a C4 ID."""
    if len(text) != ID_LENGTH:
        raise ValueError(f"c4 ids are {ID_LENGTH} characters long, got {len(text)}")
    if not text.startswith(PREFIX):
        raise ValueError(f"c4 ids must begin with {PREFIX!r}")
    number = 0
    for position, char in enumerate(text[len(PREFIX):], len(PREFIX)):
        value = _VALUES.get(char)
        if value is None:
            raise ValueError(f"invalid character {char!r} at position {position}")
        number = number * _BASE + value
    if number.bit_length() > DIGEST_SIZE * 8:
        raise ValueError("c4 id value out of range")
    return ID(number.to_bytes(DIGEST_SIZE, "big"))