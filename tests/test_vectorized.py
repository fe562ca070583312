import sys
import os

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "../src")))

import pytest

from siphasher import (
    hash_arrow_array,
    hash_pandas_series,
    hash_polars_series,
    siphash,
)

KEY = bytes(range(16))
VALUES = [b"", b"alpha", "beta", b"a longer value spanning blocks"]
EXPECTED = [
    siphash(KEY, b""),
    siphash(KEY, b"alpha"),
    siphash(KEY, "beta".encode("utf-8")),
    siphash(KEY, b"a longer value spanning blocks"),
]


def test_pandas_series_hashes_preserve_index():
    pd = pytest.importorskip("pandas")
    series = pd.Series(VALUES, index=["w", "x", "y", "z"])
    result = hash_pandas_series(series, key=KEY)
    assert str(result.dtype) == "uint64"
    assert list(result.index) == ["w", "x", "y", "z"]
    assert [int(v) for v in result] == EXPECTED


def test_pandas_series_rejects_non_bytes():
    pd = pytest.importorskip("pandas")
    with pytest.raises(TypeError):
        hash_pandas_series(pd.Series([1, 2]), key=KEY)


def test_pandas_series_respects_rounds():
    pd = pytest.importorskip("pandas")
    result = hash_pandas_series(pd.Series([b"abc"]), key=KEY, c=1, d=3)
    assert int(result.iloc[0]) == siphash(KEY, b"abc", 1, 3)


def test_arrow_array_hashes():
    pa = pytest.importorskip("pyarrow")
    data = [b"", b"alpha", b"beta"]
    result = hash_arrow_array(pa.array(data, type=pa.binary()), key=KEY)
    assert result.type == pa.uint64()
    assert result.to_pylist() == [siphash(KEY, value) for value in data]


def test_arrow_array_accepts_plain_lists():
    pytest.importorskip("pyarrow")
    result = hash_arrow_array(["beta"], key=KEY)
    assert result.to_pylist() == [EXPECTED[2]]


def test_polars_series_hashes():
    pl = pytest.importorskip("polars")
    data = [b"", b"alpha", b"a longer value spanning blocks"]
    series = pl.Series("payload", data)
    result = hash_polars_series(series, key=KEY)
    assert result.dtype == pl.UInt64
    assert result.name == "payload"
    assert result.to_list() == [siphash(KEY, value) for value in data]


def test_polars_series_from_list_gets_default_name():
    pytest.importorskip("polars")
    result = hash_polars_series(["beta"], key=KEY)
    assert result.name == "hash"
    assert result.to_list() == [EXPECTED[2]]


def test_invalid_key_rejected_before_hashing():
    pd = pytest.importorskip("pandas")
    with pytest.raises(ValueError):
        hash_pandas_series(pd.Series([b"x"]), key=b"short")
