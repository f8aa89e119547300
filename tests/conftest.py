"""Pytest configuration and shared fixtures for fsel-ranking tests."""

import numpy as np
import polars as pl
import pytest
from scipy import sparse


@pytest.fixture
def perfect_data() -> tuple[pl.DataFrame, list[str]]:
    """Binary attribute perfectly correlated with a two-class label."""
    x = pl.DataFrame({"signal": [1, 1, 1, 1, 0, 0, 0, 0]})
    y = ["a", "a", "a", "a", "b", "b", "b", "b"]
    return x, y


@pytest.fixture
def mixed_frame() -> tuple[pl.DataFrame, pl.Series]:
    """Mixed-dtype attributes with a partly informative class."""
    rng = np.random.default_rng(42)
    n = 200
    label = rng.integers(0, 3, n)
    noisy = np.where(rng.random(n) < 0.8, label, rng.integers(0, 3, n))

    x = pl.DataFrame({
        "noisy_copy": noisy,
        "noise": rng.integers(0, 5, n),
        "measure": np.round(rng.normal(0, 1, n), 1),
        "colour": rng.choice(["red", "green", "blue"], n),
        "constant": np.ones(n, dtype=np.int64),
    })
    y = pl.Series("species", np.array(["setosa", "versicolor", "virginica"])[label])
    return x, y


@pytest.fixture
def sparse_example() -> tuple[sparse.csc_matrix, np.ndarray]:
    """8 x 10 sparse matrix with seven stored values and a two-class label."""
    rows = np.array([0, 2, 3, 4, 5, 6, 7])
    cols = np.array([1, 8, 5, 6, 7, 8, 9])
    values = 7.0 * np.arange(1, 8)
    x = sparse.csc_matrix((values, (rows, cols)), shape=(8, 10))
    y = np.array([1, 1, 1, 1, 2, 2, 2, 2])
    return x, y


@pytest.fixture
def random_sparse() -> tuple[sparse.csc_matrix, np.ndarray]:
    """Random integer-valued sparse matrix with a four-class label."""
    rng = np.random.default_rng(7)
    n_rows, n_cols = 120, 15
    x = sparse.random(
        n_rows,
        n_cols,
        density=0.15,
        format="csc",
        random_state=7,
        data_rvs=lambda k: rng.integers(1, 4, k).astype(np.float64),
    )
    y = rng.integers(0, 4, n_rows)
    return x, y
