from __future__ import annotations

import logging
import struct
from typing import Optional

from .errors import DigestFinalizedError
from .siphash import (
    DEFAULT_C,
    DEFAULT_D,
    PendingLane,
    SipState,
    as_bytes,
    check_rounds,
    compress,
    derive_key,
    finalize,
    hash_from_state,
    initial_state,
)

_LOGGER = logging.getLogger(__name__)


def siphash(key: bytes, data: bytes, c: int = DEFAULT_C, d: int = DEFAULT_D) -> int:
    """
    Hash a complete buffer with SipHash-c-d.

    Args:
        key: 16-byte key
        data: Bytes to hash
        c: Compression rounds per block (default: 2)
        d: Finalization rounds (default: 4)

    Returns:
        The unsigned 64-bit hash value.

    Raises:
        TypeError: If key or data is not bytes-like
        InvalidKeyLength: If key is not exactly 16 bytes
        InvalidRoundCount: If c or d is not a positive integer
    """
    state = initial_state(derive_key(key))
    check_rounds(c, d)
    return hash_from_state(state, as_bytes(data, "data"), c, d)


class SipHashContainer:
    """
    Reusable hasher for a single key.

    The key lanes are derived once at construction. The stored state is an
    immutable template, so one container may be shared freely between
    threads and ``hash`` can be called any number of times.
    """

    __slots__ = ("_state", "_c", "_d")

    def __init__(self, key: bytes, c: int = DEFAULT_C, d: int = DEFAULT_D):
        state = initial_state(derive_key(key))
        check_rounds(c, d)
        self._state = state
        self._c = c
        self._d = d
        _LOGGER.debug("Created SipHash-%d-%d container", c, d)

    @property
    def c(self) -> int:
        return self._c

    @property
    def d(self) -> int:
        return self._d

    @property
    def state(self) -> SipState:
        return self._state

    def hash(self, data: bytes, c: Optional[int] = None, d: Optional[int] = None) -> int:
        """Hash data, optionally overriding the container's round counts."""
        if c is None and d is None:
            c, d = self._c, self._d
        else:
            c = self._c if c is None else c
            d = self._d if d is None else d
            check_rounds(c, d)
        return hash_from_state(self._state, as_bytes(data, "data"), c, d)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(c={self._c}, d={self._d})"


class SipHashStream:
    """
    Incremental SipHash-c-d digest.

    Bytes are absorbed one at a time through a pending 8-byte lane, so input
    may arrive in chunks of any size. ``finish`` is terminal: the stream
    cannot be updated afterwards. Instances are not safe to share between
    threads.
    """

    def __init__(self, key: bytes, c: int = DEFAULT_C, d: int = DEFAULT_D):
        state = initial_state(derive_key(key))
        check_rounds(c, d)
        self._state = state
        self._c = c
        self._d = d
        self._pending = PendingLane()
        self._length = 0
        self._result: Optional[int] = None

    @property
    def state(self) -> SipState:
        """Lanes after every complete block absorbed so far."""
        return self._state

    @property
    def pending(self) -> PendingLane:
        return self._pending

    @property
    def length(self) -> int:
        return self._length

    @property
    def finished(self) -> bool:
        return self._result is not None

    def copy(self) -> "SipHashStream":
        if self._result is not None:
            raise DigestFinalizedError("cannot copy a finished stream")
        dup = self.__class__.__new__(self.__class__)
        dup._state = self._state
        dup._c = self._c
        dup._d = self._d
        dup._pending = self._pending.copy()
        dup._length = self._length
        dup._result = None
        return dup

    def update_byte(self, byte: int) -> "SipHashStream":
        if self._result is not None:
            raise DigestFinalizedError("cannot update a finished stream")
        if isinstance(byte, bool) or not isinstance(byte, int):
            raise TypeError(f"byte must be an int, got {type(byte)!r}")
        if not 0 <= byte <= 0xFF:
            raise ValueError(f"byte must be in range 0..255, got {byte}")
        self._absorb_byte(byte)
        return self

    def update(self, data: bytes) -> "SipHashStream":
        if self._result is not None:
            raise DigestFinalizedError("cannot update a finished stream")
        for byte in as_bytes(data, "data"):
            self._absorb_byte(byte)
        return self

    def finish(self) -> int:
        """Finalize the stream and return the unsigned 64-bit hash value."""
        if self._result is None:
            self._result = finalize(
                self._state, self._pending.lane, self._length, self._c, self._d
            )
            _LOGGER.debug("Finished SipHash stream after %d bytes", self._length)
        return self._result

    def intdigest(self) -> int:
        return self.finish()

    def digest(self) -> bytes:
        return struct.pack("<Q", self.finish())

    def hexdigest(self) -> str:
        return self.digest().hex()

    # Internal helpers -------------------------------------------------
    def _absorb_byte(self, byte: int) -> None:
        m = self._pending.push(byte)
        self._length += 1
        if m is not None:
            self._state = compress(self._state, m, self._c)


def container(key: bytes, c: int = DEFAULT_C, d: int = DEFAULT_D) -> SipHashContainer:
    """Convenience constructor for a reusable single-key hasher."""
    return SipHashContainer(key, c, d)


def init(key: bytes, c: int = DEFAULT_C, d: int = DEFAULT_D) -> SipHashStream:
    """Convenience constructor matching hashlib-style usage."""
    return SipHashStream(key, c, d)


__all__ = ["SipHashContainer", "SipHashStream", "container", "init", "siphash"]
