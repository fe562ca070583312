"""Exception hierarchy for siphasher."""

from __future__ import annotations


class SipHashError(Exception):
    """Base class for all custom errors raised by siphasher."""


class InvalidKeyLength(SipHashError, ValueError):
    """Raised when a key is not exactly 16 bytes long."""

    def __init__(self, length: int):
        super().__init__(f"SipHash key must be exactly 16 bytes, got {length}")
        self.length = length


class InvalidRoundCount(SipHashError, ValueError):
    """Raised when the c or d round count is not a positive integer."""


class DigestFinalizedError(SipHashError, RuntimeError):
    """Raised when a finished stream is updated again."""
