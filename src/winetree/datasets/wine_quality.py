"""The red wine-quality table, bundled or read from an injected source."""

from __future__ import annotations

from winetree.common.logging import get_logger
from winetree.datasets.bundle import Dataset
from winetree.datasets.loader import dataset_from_matrix
from winetree.datasets.source import DataSource, PackageSource, read_table

FEATURE_NAMES = [
    "fixed acidity",
    "volatile acidity",
    "citric acid",
    "residual sugar",
    "chlorides",
    "free sulfur dioxide",
    "total sulfur dioxide",
    "density",
    "pH",
    "sulphates",
    "alcohol",
]
LABEL_COL = 11
N_COLUMNS = 12

log = get_logger(__name__)

EMBEDDED = PackageSource(package="winetree.datasets.data", resource="winequality-red.csv.gz")


def winequality(source: DataSource | None = None) -> Dataset:
    """Red wine-quality dataset: 11 physico-chemical features, integer quality label.

    ``source`` defaults to the gzip CSV bundled with the package; any other
    source must hold the same 12-column layout with a header row.
    """
    src = source or EMBEDDED
    table = read_table(src, has_headers=True, delimiter=",")
    if table.matrix.shape[1] != N_COLUMNS:
        raise ValueError(
            f"wine-quality data needs {N_COLUMNS} columns, got {table.matrix.shape[1]}"
        )
    ds = dataset_from_matrix(
        table.matrix,
        label_col=LABEL_COL,
        feature_cols=slice(0, LABEL_COL),
        feature_names=FEATURE_NAMES,
        meta={"source": src.describe()},
    )
    log.info(
        "loaded wine-quality data from %s: %d rows, %d features",
        src.describe(),
        ds.n_samples(),
        ds.n_features(),
    )
    return ds
