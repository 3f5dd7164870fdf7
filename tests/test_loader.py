from __future__ import annotations

import numpy as np
import pytest

from winetree.common.errors import LabelCastError
from winetree.datasets import Dataset, cast_labels, dataset_from_matrix


def _matrix() -> np.ndarray:
    return np.array(
        [
            [1.0, 2.0, 3.0, 5.0],
            [4.0, 5.0, 6.0, 6.0],
            [7.0, 8.0, 9.0, 5.0],
        ]
    )


def test_last_column_is_label_by_default():
    ds = dataset_from_matrix(_matrix(), feature_names=["a", "b", "c"])
    assert ds.X.shape == (3, 3)
    assert ds.y.tolist() == [5, 6, 5]
    assert ds.y.dtype == np.int64
    assert ds.feature_names == ["a", "b", "c"]


def test_contiguous_feature_range():
    ds = dataset_from_matrix(_matrix(), label_col=3, feature_cols=slice(0, 2))
    np.testing.assert_array_equal(ds.X, [[1.0, 2.0], [4.0, 5.0], [7.0, 8.0]])
    assert ds.feature_names is None


def test_feature_name_count_must_match():
    with pytest.raises(ValueError, match="feature names"):
        dataset_from_matrix(_matrix(), feature_names=["a", "b"])


def test_label_cannot_also_be_a_feature():
    with pytest.raises(ValueError):
        dataset_from_matrix(_matrix(), label_col=0, feature_cols=[0, 1])


@pytest.mark.parametrize("bad", [5.5, -1.0, np.nan, np.inf, 2.0**60])
def test_cast_labels_rejects_unusable_values(bad: float):
    with pytest.raises(LabelCastError, match="row 1"):
        cast_labels(np.array([3.0, bad]))


def test_cast_labels_accepts_integral_floats():
    assert cast_labels(np.array([0.0, 3.0, 8.0])).tolist() == [0, 3, 8]


def test_dataset_is_read_only_and_validated():
    ds = Dataset(X=np.zeros((2, 2)), y=np.array([1, 2]))
    with pytest.raises(ValueError):
        ds.X[0, 0] = 1.0

    with pytest.raises(ValueError, match="size mismatch"):
        Dataset(X=np.zeros((2, 2)), y=np.array([1]))
    with pytest.raises(ValueError, match="integer"):
        Dataset(X=np.zeros((2, 2)), y=np.array([1.5, 2.0]))
    with pytest.raises(ValueError, match="feature_names"):
        Dataset(X=np.zeros((2, 2)), y=np.array([1, 2]), feature_names=["a"])


def test_dataset_copies_its_inputs():
    X = np.zeros((2, 2))
    ds = Dataset(X=X, y=np.array([1, 2]))
    X[0, 0] = 9.0
    assert ds.X[0, 0] == 0.0
