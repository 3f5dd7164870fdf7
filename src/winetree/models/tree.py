"""Decision-tree capability consumed by the pipeline.

The pipeline only talks to :class:`TreeBackend`; the scikit-learn backend is
registered under ``"sklearn"`` and can be swapped through the registry.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Protocol

import numpy as np
from sklearn.tree import DecisionTreeClassifier

from winetree.common.errors import ModelFitError
from winetree.common.logging import get_logger
from winetree.datasets.bundle import Dataset

log = get_logger(__name__)


class SplitQuality(str, Enum):
    GINI = "gini"
    ENTROPY = "entropy"

    @property
    def display_name(self) -> str:
        return self.value.capitalize()


@dataclass(frozen=True)
class TreeParams:
    split_quality: SplitQuality = SplitQuality.GINI
    max_depth: int | None = None
    min_weight_split: float = 2.0
    min_weight_leaf: float = 1.0
    random_state: int | None = 42

    def __post_init__(self) -> None:
        if self.max_depth is not None and self.max_depth < 1:
            raise ValueError(f"max_depth must be >= 1 or None, got {self.max_depth}")
        if self.min_weight_split < 0 or self.min_weight_leaf < 0:
            raise ValueError("min weights must be non-negative")


@dataclass(frozen=True)
class TreeNode:
    """One node of a fitted tree; ``feature`` is None for leaves."""

    node_id: int
    feature: int | None
    threshold: float | None
    impurity: float
    n_samples: int
    label: int
    left: int | None
    right: int | None

    @property
    def is_leaf(self) -> bool:
        return self.feature is None


class TrainedTree(Protocol):
    params: TreeParams
    n_features: int

    def predict(self, X: np.ndarray) -> np.ndarray: ...

    def features(self) -> list[int]: ...

    def nodes(self) -> list[TreeNode]: ...


class TreeBackend(Protocol):
    def fit(self, dataset: Dataset, params: TreeParams) -> TrainedTree: ...


class SklearnTree:
    def __init__(self, clf: DecisionTreeClassifier, params: TreeParams) -> None:
        self.clf = clf
        self.params = params
        self.n_features = int(clf.n_features_in_)

    def predict(self, X: np.ndarray) -> np.ndarray:
        X = np.asarray(X, dtype=float)
        if X.ndim != 2 or X.shape[1] != self.n_features:
            raise ValueError(f"expected (n, {self.n_features}) features, got shape={X.shape}")
        return np.asarray(self.clf.predict(X), dtype=np.int64)

    def features(self) -> list[int]:
        feat = self.clf.tree_.feature
        return sorted({int(f) for f in feat if f >= 0})

    def nodes(self) -> list[TreeNode]:
        tree = self.clf.tree_
        classes = self.clf.classes_
        out = []
        for node_id in range(tree.node_count):
            left = int(tree.children_left[node_id])
            right = int(tree.children_right[node_id])
            leaf = left == right
            out.append(
                TreeNode(
                    node_id=node_id,
                    feature=None if leaf else int(tree.feature[node_id]),
                    threshold=None if leaf else float(tree.threshold[node_id]),
                    impurity=float(tree.impurity[node_id]),
                    n_samples=int(tree.n_node_samples[node_id]),
                    label=int(classes[int(np.argmax(tree.value[node_id][0]))]),
                    left=None if leaf else left,
                    right=None if leaf else right,
                )
            )
        return out

    def depth(self) -> int:
        return int(self.clf.get_depth())

    def n_leaves(self) -> int:
        return int(self.clf.get_n_leaves())


class SklearnTreeBackend:
    """scikit-learn backend; every sample weighs 1, so weights become counts."""

    @staticmethod
    def to_estimator(params: TreeParams) -> DecisionTreeClassifier:
        return DecisionTreeClassifier(
            criterion=params.split_quality.value,
            max_depth=params.max_depth,
            min_samples_split=max(2, math.ceil(params.min_weight_split)),
            min_samples_leaf=max(1, math.ceil(params.min_weight_leaf)),
            random_state=params.random_state,
        )

    def fit(self, dataset: Dataset, params: TreeParams) -> SklearnTree:
        clf = self.to_estimator(params)
        try:
            clf.fit(dataset.X, dataset.y)
        except ValueError as e:
            raise ModelFitError(
                f"{params.split_quality.display_name} tree failed to fit on "
                f"{dataset.n_samples()} samples: {e}"
            ) from e
        model = SklearnTree(clf, params)
        log.info(
            "fitted %s tree: depth=%d leaves=%d",
            params.split_quality.value,
            model.depth(),
            model.n_leaves(),
        )
        return model


BackendFactory = Callable[[], TreeBackend]

_BACKENDS: dict[str, BackendFactory] = {}


def register_backend(name: str, factory: BackendFactory, *, overwrite: bool = False) -> None:
    k = name.strip().lower()
    if not k:
        raise ValueError("backend name is required")
    if (k in _BACKENDS) and (not overwrite):
        raise ValueError(f"backend already registered: {k}")
    _BACKENDS[k] = factory


def list_backends() -> list[str]:
    return sorted(_BACKENDS.keys())


def get_backend(name: str = "sklearn") -> TreeBackend:
    k = name.strip().lower()
    if k not in _BACKENDS:
        known = ", ".join(list_backends()) or "(none)"
        raise ValueError(f"unknown tree backend: {k} (known: {known})")
    return _BACKENDS[k]()


def fit(dataset: Dataset, params: TreeParams, backend: str = "sklearn") -> TrainedTree:
    if dataset.n_samples() == 0:
        raise ModelFitError("cannot fit a tree on an empty training set")
    return get_backend(backend).fit(dataset, params)


def predict(model: TrainedTree, dataset: Dataset) -> np.ndarray:
    return model.predict(dataset.X)


register_backend("sklearn", SklearnTreeBackend, overwrite=True)
