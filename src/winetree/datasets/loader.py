from __future__ import annotations

from collections.abc import Sequence
from typing import Any

import numpy as np

from winetree.common.errors import LabelCastError
from winetree.datasets.bundle import Dataset

# largest float64 that still holds every smaller integer exactly
MAX_LABEL = float(2**53)


def _feature_indices(
    n_cols: int, label_idx: int, feature_cols: slice | Sequence[int] | None
) -> list[int]:
    if feature_cols is None:
        return [i for i in range(n_cols) if i != label_idx]
    if isinstance(feature_cols, slice):
        idx = list(range(n_cols))[feature_cols]
    else:
        idx = []
        for c in feature_cols:
            c = int(c)
            if not -n_cols <= c < n_cols:
                raise ValueError(f"feature column out of range: {c} (n_cols={n_cols})")
            idx.append(c % n_cols)
    if not idx:
        raise ValueError("no feature columns selected")
    if label_idx in idx:
        raise ValueError(f"label column {label_idx} is also selected as a feature")
    return idx


def cast_labels(values: np.ndarray) -> np.ndarray:
    """Cast a float label column to int64 class indices.

    Labels must be finite, integral, non-negative and no larger than 2**53;
    anything else raises :class:`LabelCastError` instead of being truncated.
    """
    v = np.asarray(values, dtype=float)
    bad = ~np.isfinite(v)
    bad |= v < 0
    bad |= v > MAX_LABEL
    bad |= np.where(np.isfinite(v), v != np.floor(v), False)
    if bad.any():
        row = int(np.flatnonzero(bad)[0])
        raise LabelCastError(
            f"row {row}: label {v[row]!r} is not a non-negative integral class index"
        )
    return v.astype(np.int64)


def dataset_from_matrix(
    matrix: np.ndarray,
    *,
    label_col: int = -1,
    feature_cols: slice | Sequence[int] | None = None,
    feature_names: Sequence[str] | None = None,
    meta: dict[str, Any] | None = None,
) -> Dataset:
    """Slice a raw matrix into features and an integer label column."""
    m = np.asarray(matrix, dtype=float)
    if m.ndim != 2:
        raise ValueError(f"matrix must be 2D, got shape={m.shape}")
    n_cols = m.shape[1]
    if not -n_cols <= label_col < n_cols:
        raise ValueError(f"label column out of range: {label_col} (n_cols={n_cols})")
    label_idx = label_col % n_cols

    idx = _feature_indices(n_cols, label_idx, feature_cols)
    if feature_names is not None and len(feature_names) != len(idx):
        raise ValueError(
            f"expected {len(idx)} feature names, got {len(feature_names)}"
        )

    X = m[:, idx]
    y = cast_labels(m[:, label_idx])

    info = dict(meta or {})
    info.setdefault("label_col", label_idx)
    info.setdefault("feature_cols", idx)
    return Dataset(
        X=X,
        y=y,
        feature_names=list(feature_names) if feature_names is not None else None,
        meta=info,
    )
