"""Byte sources that feed the CSV decoder.

A source only produces bytes and says whether they are gzip-compressed, so
tests and callers can swap the bundled asset for synthetic data.
"""

from __future__ import annotations

from dataclasses import dataclass
from importlib import resources
from pathlib import Path
from typing import Protocol, runtime_checkable

from winetree.datasets.decode import DecodedTable, decode_table, decode_table_gz


@runtime_checkable
class DataSource(Protocol):
    compressed: bool

    def read_bytes(self) -> bytes: ...

    def describe(self) -> dict: ...


@dataclass(frozen=True)
class BytesSource:
    data: bytes
    compressed: bool = False
    name: str = "memory"

    def read_bytes(self) -> bytes:
        return bytes(self.data)

    def describe(self) -> dict:
        return {"type": "bytes", "name": self.name, "n_bytes": len(self.data)}


@dataclass(frozen=True)
class FileSource:
    path: Path
    compressed: bool = False

    @staticmethod
    def from_path(path: str | Path) -> "FileSource":
        p = Path(path)
        return FileSource(path=p, compressed=p.suffix.lower() == ".gz")

    def read_bytes(self) -> bytes:
        if not self.path.exists():
            raise FileNotFoundError(str(self.path))
        return self.path.read_bytes()

    def describe(self) -> dict:
        return {"type": "file", "path": str(self.path)}


@dataclass(frozen=True)
class PackageSource:
    """Data file shipped inside the installed package."""

    package: str
    resource: str
    compressed: bool = True

    def read_bytes(self) -> bytes:
        return resources.files(self.package).joinpath(self.resource).read_bytes()

    def describe(self) -> dict:
        return {"type": "package", "package": self.package, "resource": self.resource}


def read_table(source: DataSource, has_headers: bool = True, delimiter: str = ",") -> DecodedTable:
    data = source.read_bytes()
    if source.compressed:
        return decode_table_gz(data, has_headers=has_headers, delimiter=delimiter)
    return decode_table(data, has_headers=has_headers, delimiter=delimiter)


__all__ = [
    "BytesSource",
    "DataSource",
    "FileSource",
    "PackageSource",
    "read_table",
]
