from __future__ import annotations

from winetree.datasets.bundle import Dataset
from winetree.datasets.decode import (
    DecodedTable,
    array_from_csv,
    array_from_csv_gz,
    decode_table,
    decode_table_gz,
)
from winetree.datasets.loader import cast_labels, dataset_from_matrix
from winetree.datasets.source import BytesSource, DataSource, FileSource, PackageSource
from winetree.datasets.split import shuffle, shuffle_split, split_with_ratio
from winetree.datasets.wine_quality import FEATURE_NAMES, winequality

__all__ = [
    "FEATURE_NAMES",
    "BytesSource",
    "DataSource",
    "Dataset",
    "DecodedTable",
    "FileSource",
    "PackageSource",
    "array_from_csv",
    "array_from_csv_gz",
    "cast_labels",
    "dataset_from_matrix",
    "decode_table",
    "decode_table_gz",
    "shuffle",
    "shuffle_split",
    "split_with_ratio",
    "winequality",
]
