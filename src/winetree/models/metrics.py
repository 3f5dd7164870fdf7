from __future__ import annotations

from dataclasses import dataclass

import numpy as np
import pandas as pd
from sklearn.metrics import confusion_matrix as sk_confusion_matrix


@dataclass(frozen=True)
class ConfusionMatrix:
    """Rows are true classes, columns are predicted classes."""

    labels: tuple[int, ...]
    matrix: np.ndarray

    def total(self) -> int:
        return int(self.matrix.sum())

    def accuracy(self) -> float:
        return accuracy(self)

    def to_frame(self) -> pd.DataFrame:
        return pd.DataFrame(
            self.matrix,
            index=pd.Index(self.labels, name="true"),
            columns=pd.Index(self.labels, name="predicted"),
        )

    def render(self) -> str:
        return self.to_frame().to_string()


def confusion_matrix(predicted: np.ndarray, true: np.ndarray) -> ConfusionMatrix:
    p = np.asarray(predicted).astype(np.int64)
    t = np.asarray(true).astype(np.int64)
    if p.shape != t.shape or p.ndim != 1:
        raise ValueError(f"predicted/true shape mismatch: {p.shape} vs {t.shape}")
    labels = np.unique(np.concatenate([t, p]))
    if labels.size:
        m = np.asarray(sk_confusion_matrix(t, p, labels=labels), dtype=np.int64)
    else:
        m = np.zeros((0, 0), dtype=np.int64)
    m.setflags(write=False)
    return ConfusionMatrix(labels=tuple(int(v) for v in labels), matrix=m)


def accuracy(cm: ConfusionMatrix) -> float:
    total = cm.total()
    if total == 0:
        raise ValueError("accuracy is undefined for an empty confusion matrix")
    return float(np.trace(cm.matrix)) / total
