from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

import numpy as np


def _frozen(a: np.ndarray) -> np.ndarray:
    a = np.array(a, copy=True)
    a.setflags(write=False)
    return a


@dataclass(frozen=True)
class Dataset:
    """Labeled tabular dataset.

    - X: (n_samples, n_features) float64
    - y: (n_samples,) int64 class labels
    - feature_names: column names of X, or None
    - meta: provenance (source, split, scaling) for logs and reports

    Arrays are copied and made read-only on construction; every transform
    builds a new Dataset instead of editing one in place.
    """

    X: np.ndarray
    y: np.ndarray
    feature_names: list[str] | None = None
    meta: dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        X = np.asarray(self.X, dtype=float)
        y = np.asarray(self.y)
        if X.ndim != 2:
            raise ValueError(f"X must be 2D array, got shape={X.shape}")
        if y.ndim != 1:
            raise ValueError(f"y must be 1D array, got shape={y.shape}")
        if X.shape[0] != y.shape[0]:
            raise ValueError(f"X/y size mismatch: {X.shape[0]} vs {y.shape[0]}")
        if y.size and not np.issubdtype(y.dtype, np.integer):
            raise ValueError(f"y must hold integer class labels, got dtype={y.dtype}")

        names = None
        if self.feature_names is not None:
            names = [str(n) for n in self.feature_names]
            if len(names) != X.shape[1]:
                raise ValueError(
                    f"feature_names has {len(names)} entries for {X.shape[1]} feature columns"
                )

        object.__setattr__(self, "X", _frozen(X))
        object.__setattr__(self, "y", _frozen(y.astype(np.int64)))
        object.__setattr__(self, "feature_names", names)
        object.__setattr__(self, "meta", dict(self.meta or {}))

    def n_samples(self) -> int:
        return int(self.X.shape[0])

    def n_features(self) -> int:
        return int(self.X.shape[1])

    def take(self, indices: np.ndarray, *, meta: dict[str, Any] | None = None) -> "Dataset":
        """Rows at ``indices`` in the given order."""
        idx = np.asarray(indices, dtype=np.intp)
        return Dataset(
            X=self.X[idx],
            y=self.y[idx],
            feature_names=self.feature_names,
            meta={**self.meta, **(meta or {})},
        )

    def with_features(self, X: np.ndarray, *, meta: dict[str, Any] | None = None) -> "Dataset":
        """Same targets and names, new feature matrix."""
        return Dataset(
            X=X,
            y=self.y,
            feature_names=self.feature_names,
            meta={**self.meta, **(meta or {})},
        )
