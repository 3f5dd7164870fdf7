"""Standardization fitted on the train partition only."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np
from sklearn.preprocessing import StandardScaler

from winetree.common.logging import get_logger
from winetree.datasets.bundle import Dataset

log = get_logger(__name__)


@dataclass(frozen=True)
class ScalerState:
    """Per-feature mean and standard deviation.

    A feature that is constant on the train partition keeps ``scale == 1``,
    so transforming it only removes the mean and never divides by zero.
    """

    location: np.ndarray
    scale: np.ndarray

    def __post_init__(self) -> None:
        loc = np.array(self.location, dtype=float, copy=True)
        sc = np.array(self.scale, dtype=float, copy=True)
        if loc.ndim != 1 or loc.shape != sc.shape:
            raise ValueError(f"location/scale shape mismatch: {loc.shape} vs {sc.shape}")
        if not np.all(np.isfinite(sc)) or np.any(sc <= 0):
            raise ValueError("scale must be finite and strictly positive")
        loc.setflags(write=False)
        sc.setflags(write=False)
        object.__setattr__(self, "location", loc)
        object.__setattr__(self, "scale", sc)

    def n_features(self) -> int:
        return int(self.location.shape[0])


def fit_scaler(train: Dataset) -> ScalerState:
    if train.n_samples() == 0:
        raise ValueError("cannot fit a scaler on an empty dataset")
    sk = StandardScaler().fit(train.X)
    # sklearn replaces near-zero variances with a unit scale
    state = ScalerState(location=sk.mean_, scale=sk.scale_)
    log.debug("scaler fitted on %d samples, %d features", train.n_samples(), state.n_features())
    return state


def transform(dataset: Dataset, state: ScalerState) -> Dataset:
    if dataset.n_features() != state.n_features():
        raise ValueError(
            f"scaler was fitted on {state.n_features()} features, "
            f"dataset has {dataset.n_features()}"
        )
    X = (dataset.X - state.location) / state.scale
    return dataset.with_features(X, meta={"scaled": True})
