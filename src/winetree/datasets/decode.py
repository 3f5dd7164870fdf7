"""Delimited-text decoding into dense float matrices.

Fields follow the usual CSV quoting rules. The decoder is strict: every row
must carry the same number of fields and every field must be a number in
standard decimal notation. Gzip input is fully decompressed before decoding,
so corrupt framing is reported as :class:`DecompressionError` and never as a
format or parse problem.
"""

from __future__ import annotations

import csv
import gzip
import io
import zlib
from dataclasses import dataclass
from typing import BinaryIO, Union

import numpy as np
import pandas as pd

from winetree.common.errors import (
    DecompressionError,
    EmptyInputError,
    FormatError,
    ParseError,
)

ByteInput = Union[bytes, bytearray, memoryview, BinaryIO]


@dataclass(frozen=True)
class DecodedTable:
    header: list[str] | None
    matrix: np.ndarray

    @property
    def shape(self) -> tuple[int, int]:
        return (int(self.matrix.shape[0]), int(self.matrix.shape[1]))


def _read_all(data: ByteInput) -> bytes:
    if isinstance(data, (bytes, bytearray, memoryview)):
        return bytes(data)
    return data.read()


def _check_delimiter(delimiter: str | bytes) -> str:
    if isinstance(delimiter, (bytes, bytearray)):
        delimiter = bytes(delimiter).decode("ascii", errors="strict")
    if len(delimiter) != 1:
        raise ValueError(f"delimiter must be a single character, got {delimiter!r}")
    if delimiter in "\r\n":
        raise ValueError("delimiter must not be a line break")
    return delimiter


def _tokenize(text: str, sep: str) -> pd.Series:
    """Split text into records, keyed by the physical line each record ends on."""
    reader = csv.reader(io.StringIO(text, newline=""), delimiter=sep, strict=True)
    records: dict[int, list[str]] = {}
    try:
        for row in reader:
            if not row or (len(row) == 1 and not row[0].strip()):
                continue
            records[reader.line_num] = row
    except csv.Error as e:
        raise FormatError(f"line {reader.line_num}: {e}") from e
    return pd.Series(records, dtype=object)


def decode_table(
    data: ByteInput, has_headers: bool = True, delimiter: str | bytes = ","
) -> DecodedTable:
    """Decode delimited text into a header (optional) and a float64 matrix."""
    sep = _check_delimiter(delimiter)
    raw = _read_all(data)
    try:
        text = raw.decode("utf-8-sig")
    except UnicodeDecodeError as e:
        raise ParseError(f"input is not valid UTF-8 text: {e}") from e

    rows = _tokenize(text, sep)
    if rows.empty:
        raise EmptyInputError("input contains no rows")

    widths = rows.map(len)
    expected = int(widths.iloc[0])
    ragged = widths[widths != expected]
    if not ragged.empty:
        line_no = int(ragged.index[0])
        raise FormatError(
            f"line {line_no}: expected {expected} fields, found {int(ragged.iloc[0])}"
        )
    cells = pd.DataFrame(rows.tolist(), index=rows.index, dtype=object)
    cells = cells.apply(lambda col: col.str.strip())

    header: list[str] | None = None
    if has_headers:
        header = [str(v) for v in cells.iloc[0].tolist()]
        cells = cells.iloc[1:]
    if cells.empty:
        raise EmptyInputError("input contains no data rows")

    numeric = cells.apply(pd.to_numeric, errors="coerce").astype(float)
    bad = numeric.isna()
    if bad.to_numpy().any():
        row_pos, col_pos = np.argwhere(bad.to_numpy())[0]
        line_no = int(cells.index[row_pos])
        raw_cell = cells.iat[row_pos, col_pos]
        raise ParseError(
            f"line {line_no}, column {int(col_pos) + 1}: not a number: {raw_cell!r}"
        )

    matrix = np.ascontiguousarray(numeric.to_numpy(dtype=np.float64))
    return DecodedTable(header=header, matrix=matrix)


def array_from_csv(
    data: ByteInput, has_headers: bool = True, delimiter: str | bytes = ","
) -> np.ndarray:
    return decode_table(data, has_headers=has_headers, delimiter=delimiter).matrix


def gunzip(data: ByteInput) -> bytes:
    """Fully decompress a gzip stream."""
    raw = _read_all(data)
    try:
        return gzip.decompress(raw)
    except (OSError, EOFError, zlib.error) as e:
        # BadGzipFile is an OSError; truncated input is an EOFError
        raise DecompressionError(f"corrupt gzip stream: {e}") from e


def decode_table_gz(
    data: ByteInput, has_headers: bool = True, delimiter: str | bytes = ","
) -> DecodedTable:
    return decode_table(gunzip(data), has_headers=has_headers, delimiter=delimiter)


def array_from_csv_gz(
    data: ByteInput, has_headers: bool = True, delimiter: str | bytes = ","
) -> np.ndarray:
    return decode_table_gz(data, has_headers=has_headers, delimiter=delimiter).matrix


__all__ = [
    "DecodedTable",
    "array_from_csv",
    "array_from_csv_gz",
    "decode_table",
    "decode_table_gz",
    "gunzip",
]
