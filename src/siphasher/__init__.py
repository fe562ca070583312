"""
Keyed SipHash-c-d hashing with batch, reusable-key and streaming interfaces.
"""

from .errors import (
    DigestFinalizedError,
    InvalidKeyLength,
    InvalidRoundCount,
    SipHashError,
)
from .formatting import HexCase, to_hex_string, to_signed, to_unsigned
from .hasher import SipHashContainer, SipHashStream, container, init, siphash
from .siphash import DEFAULT_C, DEFAULT_D
from .vectorized import (
    hash_arrow_array,
    hash_pandas_series,
    hash_polars_series,
)

__all__ = [
    "DEFAULT_C",
    "DEFAULT_D",
    "DigestFinalizedError",
    "HexCase",
    "InvalidKeyLength",
    "InvalidRoundCount",
    "SipHashContainer",
    "SipHashError",
    "SipHashStream",
    "container",
    "hash_arrow_array",
    "hash_pandas_series",
    "hash_polars_series",
    "init",
    "siphash",
    "to_hex_string",
    "to_signed",
    "to_unsigned",
]
