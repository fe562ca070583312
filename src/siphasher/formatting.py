from __future__ import annotations

from enum import Enum
from typing import Union

_MASK_64 = 0xFFFFFFFFFFFFFFFF


class HexCase(Enum):
    LOWER = "lower"
    UPPER = "upper"


def to_unsigned(value: int) -> int:
    """Reinterpret a signed 64-bit value as unsigned."""
    return value & _MASK_64


def to_signed(value: int) -> int:
    """Reinterpret a 64-bit hash value as a two's complement signed integer."""
    value &= _MASK_64
    return value - (1 << 64) if value >> 63 else value


def to_hex_string(
    value: int,
    padding: bool = True,
    case: Union[HexCase, str] = HexCase.LOWER,
) -> str:
    """
    Format a 64-bit hash value as hexadecimal.

    Args:
        value: Hash value; signed and unsigned forms of the same bits format identically
        padding: Zero-pad to 16 digits (default: True)
        case: HexCase or "lower"/"upper" (default: lower)

    Returns:
        The hexadecimal representation without a prefix.

    Raises:
        ValueError: If case is not a known HexCase
    """
    hex_case = HexCase(case.lower() if isinstance(case, str) else case)
    text = format(to_unsigned(value), "016x" if padding else "x")
    if hex_case is HexCase.UPPER:
        text = text.upper()
    return text


__all__ = ["HexCase", "to_hex_string", "to_signed", "to_unsigned"]
