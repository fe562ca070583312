from __future__ import annotations

import struct
from typing import NamedTuple, Optional, Tuple

from .errors import InvalidKeyLength, InvalidRoundCount

_MASK_64 = 0xFFFFFFFFFFFFFFFF

INITIAL_V0 = 0x736F6D6570736575
INITIAL_V1 = 0x646F72616E646F6D
INITIAL_V2 = 0x6C7967656E657261
INITIAL_V3 = 0x7465646279746573

DEFAULT_C = 2
DEFAULT_D = 4

KEY_SIZE = 16
BLOCK_SIZE = 8


class KeyLanes(NamedTuple):
    """The two little-endian 64-bit halves of a 16-byte key."""

    k0: int
    k1: int


class SipState(NamedTuple):
    """Four 64-bit working lanes."""

    v0: int
    v1: int
    v2: int
    v3: int


def _rotl(x: int, b: int) -> int:
    """Rotate left for 64-bit values."""
    return ((x << b) | (x >> (64 - b))) & _MASK_64


def as_bytes(value, name: str) -> bytes:
    if not isinstance(value, (bytes, bytearray, memoryview)):
        raise TypeError(f"{name} must be bytes-like")
    return bytes(value)


def check_rounds(c: int, d: int) -> None:
    """
    Validate a pair of round counts.

    Raises:
        InvalidRoundCount: If c or d is not an integer of at least 1
    """
    for name, value in (("c", c), ("d", d)):
        if isinstance(value, bool) or not isinstance(value, int):
            raise InvalidRoundCount(f"{name} rounds must be an int, got {type(value)!r}")
        if value < 1:
            raise InvalidRoundCount(f"{name} rounds must be positive, got {value}")


def derive_key(key: bytes) -> KeyLanes:
    """
    Split a 16-byte key into its two 64-bit lanes.

    Raises:
        TypeError: If key is not bytes-like
        InvalidKeyLength: If key is not exactly 16 bytes
    """
    key_bytes = as_bytes(key, "key")
    if len(key_bytes) != KEY_SIZE:
        raise InvalidKeyLength(len(key_bytes))
    return KeyLanes(*struct.unpack("<QQ", key_bytes))


def initial_state(lanes: KeyLanes) -> SipState:
    k0, k1 = lanes
    return SipState(
        INITIAL_V0 ^ k0,
        INITIAL_V1 ^ k1,
        INITIAL_V2 ^ k0,
        INITIAL_V3 ^ k1,
    )


def sip_round(v0: int, v1: int, v2: int, v3: int) -> SipState:
    """Apply one add-rotate-xor round to the four lanes."""
    v0 = (v0 + v1) & _MASK_64
    v2 = (v2 + v3) & _MASK_64
    v1 = _rotl(v1, 13)
    v3 = _rotl(v3, 16)

    v1 ^= v0
    v3 ^= v2
    v0 = _rotl(v0, 32)

    v2 = (v2 + v1) & _MASK_64
    v0 = (v0 + v3) & _MASK_64
    v1 = _rotl(v1, 17)
    v3 = _rotl(v3, 21)

    v1 ^= v2
    v3 ^= v0
    v2 = _rotl(v2, 32)

    return SipState(v0, v1, v2, v3)


def compress(state: SipState, m: int, c: int) -> SipState:
    """Fold one 64-bit message lane into the state using c rounds."""
    v0, v1, v2, v3 = state
    v3 ^= m
    for _ in range(c):
        v0, v1, v2, v3 = sip_round(v0, v1, v2, v3)
    v0 ^= m
    return SipState(v0, v1, v2, v3)


def absorb(state: SipState, data: bytes, c: int) -> Tuple[SipState, bytes]:
    """
    Absorb every complete 8-byte block of a buffer.

    Args:
        state: Working lanes to start from
        data: Complete input buffer
        c: Rounds per block

    Returns:
        The updated state and the 0-7 trailing bytes that did not fill a block.
    """
    last = len(data) - (len(data) % BLOCK_SIZE)
    for (m,) in struct.iter_unpack("<Q", data[:last]):
        state = compress(state, m, c)
    return state, bytes(data[last:])


class PendingLane:
    """
    Byte-at-a-time accumulator for a not yet complete 8-byte block.

    ``push`` returns the finished little-endian lane once eight bytes have
    been collected, and ``None`` otherwise.
    """

    __slots__ = ("lane", "index")

    def __init__(self, lane: int = 0, index: int = 0):
        self.lane = lane
        self.index = index

    def push(self, byte: int) -> Optional[int]:
        self.lane |= (byte & 0xFF) << (8 * self.index)
        self.index += 1
        if self.index < BLOCK_SIZE:
            return None
        m = self.lane
        self.lane = 0
        self.index = 0
        return m

    def copy(self) -> "PendingLane":
        return PendingLane(self.lane, self.index)


def final_block(tail_lane: int, length: int) -> int:
    """Tag the padded tail with the input length; only its low byte survives."""
    return tail_lane | ((length & 0xFF) << 56)


def finalize(state: SipState, tail_lane: int, length: int, c: int, d: int) -> int:
    """
    Absorb the length-tagged final block and fold the lanes into the output.

    Args:
        state: Lanes after every complete block has been absorbed
        tail_lane: The 0-7 leftover bytes as a little-endian integer
        length: Total number of bytes hashed
        c: Rounds per block
        d: Finalization rounds

    Returns:
        The unsigned 64-bit hash value.
    """
    v0, v1, v2, v3 = compress(state, final_block(tail_lane, length), c)
    v2 ^= 0xFF
    for _ in range(d):
        v0, v1, v2, v3 = sip_round(v0, v1, v2, v3)
    return (v0 ^ v1 ^ v2 ^ v3) & _MASK_64


def hash_from_state(state: SipState, data: bytes, c: int, d: int) -> int:
    """Run the full batch algorithm from precomputed lanes."""
    state, tail = absorb(state, data, c)
    return finalize(state, int.from_bytes(tail, "little"), len(data), c, d)


__all__ = [
    "DEFAULT_C",
    "DEFAULT_D",
    "KeyLanes",
    "PendingLane",
    "SipState",
    "absorb",
    "check_rounds",
    "compress",
    "derive_key",
    "final_block",
    "finalize",
    "hash_from_state",
    "initial_state",
    "sip_round",
]
