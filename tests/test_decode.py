from __future__ import annotations

import gzip
import io

import numpy as np
import pytest

from winetree.common.errors import (
    DataError,
    DecompressionError,
    EmptyInputError,
    FormatError,
    ParseError,
)
from winetree.datasets import array_from_csv, array_from_csv_gz, decode_table, decode_table_gz


def test_header_row_is_skipped(toy_csv_bytes: bytes, toy_frame) -> None:
    m = array_from_csv(toy_csv_bytes, has_headers=True, delimiter=",")

    n_lines = len(toy_csv_bytes.decode().splitlines())
    assert m.shape == (n_lines - 1, 4)
    assert m.dtype == np.float64
    np.testing.assert_allclose(m, toy_frame.to_numpy(dtype=float))


def test_without_header_every_row_is_data() -> None:
    m = array_from_csv(b"1,2\n3,4\n", has_headers=False)
    np.testing.assert_array_equal(m, [[1.0, 2.0], [3.0, 4.0]])


def test_decode_table_keeps_header_names() -> None:
    t = decode_table(b"a;b;c\n1;2;3\n", has_headers=True, delimiter=";")
    assert t.header == ["a", "b", "c"]
    assert t.shape == (1, 3)


def test_custom_delimiter_and_stream_input() -> None:
    m = array_from_csv(io.BytesIO(b"x\ty\n1.5\t-2e3\n"), delimiter=b"\t")
    np.testing.assert_array_equal(m, [[1.5, -2000.0]])


def test_crlf_and_blank_lines_are_tolerated() -> None:
    m = array_from_csv(b"a,b\r\n1,2\r\n\r\n3,4\r\n")
    assert m.shape == (2, 2)


def test_quoted_numbers_are_unquoted() -> None:
    m = array_from_csv(b'"a","b"\n"1.5","2"\n')
    np.testing.assert_array_equal(m, [[1.5, 2.0]])


def test_quoted_header_may_contain_delimiter() -> None:
    table = decode_table(b'"x,y",b\n1,2\n')
    assert table.header == ["x,y", "b"]
    assert table.shape == (1, 2)


def test_unterminated_quote_raises_format_error() -> None:
    with pytest.raises(FormatError):
        array_from_csv(b'a,b\n"1,2\n')


def test_ragged_rows_raise_format_error() -> None:
    with pytest.raises(FormatError, match="line 3"):
        array_from_csv(b"a,b,c\n1,2,3\n4,5\n")


def test_row_longer_than_header_raises_format_error() -> None:
    with pytest.raises(FormatError):
        array_from_csv(b"a,b\n1,2,3\n")


def test_non_numeric_cell_raises_parse_error() -> None:
    with pytest.raises(ParseError, match="column 2"):
        array_from_csv(b"a,b\n1,2\n3,abc\n")


def test_empty_cell_raises_parse_error() -> None:
    with pytest.raises(ParseError):
        array_from_csv(b"a,b\n1,\n")


@pytest.mark.parametrize("data", [b"", b"\n\n", b"a,b,c\n"])
def test_no_data_rows_raise_empty_input(data: bytes) -> None:
    with pytest.raises(EmptyInputError):
        array_from_csv(data, has_headers=True)


def test_bad_delimiter_is_rejected() -> None:
    with pytest.raises(ValueError):
        array_from_csv(b"a,b\n1,2\n", delimiter=",,")


def test_gzip_matches_plain_decoding(toy_csv_bytes: bytes, toy_csv_gz_bytes: bytes) -> None:
    plain = array_from_csv(toy_csv_bytes)
    packed = array_from_csv_gz(io.BytesIO(toy_csv_gz_bytes))
    np.testing.assert_array_equal(plain, packed)
    assert decode_table_gz(toy_csv_gz_bytes).header == ["f1", "f2", "f3", "label"]


def test_corrupt_gzip_raises_decompression_error(toy_csv_bytes: bytes) -> None:
    with pytest.raises(DecompressionError):
        array_from_csv_gz(toy_csv_bytes)


def test_truncated_gzip_raises_decompression_error(toy_csv_gz_bytes: bytes) -> None:
    with pytest.raises(DecompressionError):
        array_from_csv_gz(toy_csv_gz_bytes[: len(toy_csv_gz_bytes) // 2])


def test_content_errors_inside_gzip_are_not_decompression_errors() -> None:
    data = gzip.compress(b"a,b\n1,2\n3\n")
    with pytest.raises(FormatError) as exc:
        array_from_csv_gz(data)
    assert not isinstance(exc.value, DecompressionError)
    assert isinstance(exc.value, DataError)
