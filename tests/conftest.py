from __future__ import annotations

import gzip
import sys
from pathlib import Path

import numpy as np
import pandas as pd
import pytest

# put repo root and src/ on the import path for pytest
ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"

root_str = str(ROOT)
src_str = str(SRC)

if root_str not in sys.path:
    sys.path.insert(0, root_str)

if src_str not in sys.path:
    sys.path.insert(0, src_str)


def make_frame(n_rows: int = 20, seed: int = 0) -> pd.DataFrame:
    """3 features + integer label; the label depends on f1 so trees can learn it."""
    rng = np.random.default_rng(seed)
    f1 = rng.normal(size=n_rows).round(4)
    f2 = rng.normal(size=n_rows).round(4)
    f3 = rng.uniform(0, 10, size=n_rows).round(4)
    label = np.where(f1 > 0, 6, 5)
    return pd.DataFrame({"f1": f1, "f2": f2, "f3": f3, "label": label})


@pytest.fixture
def toy_frame() -> pd.DataFrame:
    return make_frame()


@pytest.fixture
def toy_csv_bytes(toy_frame: pd.DataFrame) -> bytes:
    return toy_frame.to_csv(index=False).encode("utf-8")


@pytest.fixture
def toy_csv_gz_bytes(toy_csv_bytes: bytes) -> bytes:
    return gzip.compress(toy_csv_bytes)
