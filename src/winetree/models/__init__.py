from __future__ import annotations

from winetree.models.metrics import ConfusionMatrix, accuracy, confusion_matrix
from winetree.models.tree import (
    SplitQuality,
    TrainedTree,
    TreeBackend,
    TreeNode,
    TreeParams,
    fit,
    get_backend,
    list_backends,
    predict,
    register_backend,
)

__all__ = [
    "ConfusionMatrix",
    "SplitQuality",
    "TrainedTree",
    "TreeBackend",
    "TreeNode",
    "TreeParams",
    "accuracy",
    "confusion_matrix",
    "fit",
    "get_backend",
    "list_backends",
    "predict",
    "register_backend",
]
