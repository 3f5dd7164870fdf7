from __future__ import annotations

import math

import numpy as np

from winetree.common.errors import InsufficientSamplesError, InvalidRatioError
from winetree.common.logging import get_logger
from winetree.datasets.bundle import Dataset

log = get_logger(__name__)


def permutation(n_samples: int, seed: int) -> np.ndarray:
    """Seeded permutation of ``range(n_samples)`` (numpy PCG64)."""
    rng = np.random.default_rng(seed)
    return rng.permutation(n_samples)


def shuffle(dataset: Dataset, seed: int) -> Dataset:
    if dataset.n_samples() == 0:
        raise InsufficientSamplesError("cannot shuffle an empty dataset")
    perm = permutation(dataset.n_samples(), seed)
    return dataset.take(perm, meta={"shuffle_seed": int(seed)})


def _record(part: str, ratio: float, seed: int | None) -> dict:
    return {"part": part, "ratio": ratio, "seed": seed}


def split_with_ratio(dataset: Dataset, ratio: float) -> tuple[Dataset, Dataset]:
    """First ``floor(ratio * n)`` rows go to train, the rest to test."""
    ratio = float(ratio)
    if not (0.0 < ratio < 1.0):
        raise InvalidRatioError(f"split ratio must be in (0, 1), got {ratio}")
    n = dataset.n_samples()
    if n == 0:
        raise InsufficientSamplesError("cannot split an empty dataset")

    n_train = int(math.floor(ratio * n))
    idx = np.arange(n)
    seed = dataset.meta.get("shuffle_seed")
    train = dataset.take(idx[:n_train], meta={"split": _record("train", ratio, seed)})
    test = dataset.take(idx[n_train:], meta={"split": _record("test", ratio, seed)})
    return train, test


def shuffle_split(dataset: Dataset, seed: int, ratio: float) -> tuple[Dataset, Dataset]:
    if not (0.0 < float(ratio) < 1.0):
        raise InvalidRatioError(f"split ratio must be in (0, 1), got {ratio}")
    train, test = split_with_ratio(shuffle(dataset, seed), ratio)
    log.debug(
        "split n=%d seed=%d ratio=%s -> train=%d test=%d",
        dataset.n_samples(),
        seed,
        ratio,
        train.n_samples(),
        test.n_samples(),
    )
    return train, test
