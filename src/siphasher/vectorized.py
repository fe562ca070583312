from __future__ import annotations

import logging
from typing import Any, Iterable, List

from .hasher import SipHashContainer
from .siphash import DEFAULT_C, DEFAULT_D

_LOGGER = logging.getLogger(__name__)


def _coerce_bytes(value: Any) -> bytes:
    if isinstance(value, (bytes, bytearray, memoryview)):
        return bytes(value)
    if isinstance(value, str):
        return value.encode("utf-8")
    raise TypeError(f"Unsupported value for column hashing: {type(value)!r}")


def _hash_values(values: Iterable[Any], key: bytes, c: int, d: int) -> List[int]:
    hasher = SipHashContainer(key, c, d)
    hashes = [hasher.hash(_coerce_bytes(val)) for val in values]
    _LOGGER.debug("Hashed %d column values with SipHash-%d-%d", len(hashes), c, d)
    return hashes


def hash_pandas_series(series: Any, key: bytes, c: int = DEFAULT_C, d: int = DEFAULT_D):
    """
    Hash a pandas Series of bytes or str values into a uint64 Series.
    """
    try:
        import pandas as pd  # type: ignore
    except ModuleNotFoundError as exc:  # pragma: no cover - optional dependency
        raise ImportError(
            "Install pandas to use hash_pandas_series: pip install pandas"
        ) from exc

    hashes = _hash_values(series, key, c, d)
    return pd.Series(hashes, index=getattr(series, "index", None), dtype="uint64")


def hash_arrow_array(array: Any, key: bytes, c: int = DEFAULT_C, d: int = DEFAULT_D):
    """
    Hash a pyarrow Array (or values coercible to one) into a uint64 Array.
    """
    try:
        import pyarrow as pa  # type: ignore
    except ModuleNotFoundError as exc:  # pragma: no cover - optional dependency
        raise ImportError(
            "Install pyarrow to use hash_arrow_array: pip install pyarrow"
        ) from exc

    arr = array if hasattr(array, "to_pylist") else pa.array(array)
    hashes = _hash_values(arr.to_pylist(), key, c, d)
    return pa.array(hashes, type=pa.uint64())


def hash_polars_series(series: Any, key: bytes, c: int = DEFAULT_C, d: int = DEFAULT_D):
    """
    Hash a polars Series into a UInt64 Series.
    """
    try:
        import polars as pl  # type: ignore
    except ModuleNotFoundError as exc:  # pragma: no cover - optional dependency
        raise ImportError(
            "Install polars to use hash_polars_series: pip install polars"
        ) from exc

    ser = series if hasattr(series, "dtype") else pl.Series(series)
    hashes = _hash_values(ser.to_list(), key, c, d)
    name = getattr(ser, "name", None) or "hash"
    return pl.Series(name=name, values=hashes, dtype=pl.UInt64)


__all__ = ["hash_arrow_array", "hash_pandas_series", "hash_polars_series"]
