"""Attribute containers.

Every supported input is resolved once, at the boundary, into one of two
canonical shapes:

- ``AttributeMatrix``: dense columns already factorized to integer codes.
- ``SparseAttributeMatrix``: a canonical CSC matrix whose stored entries are
  exactly the non-zero ones; every unlisted entry is the implicit zero.

Both expose ``names``, ``n_rows``, ``n_cols`` and ``take(indices)`` so that
row resampling never needs to know which shape it is working on.
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import cached_property
from typing import TYPE_CHECKING, Any, Sequence, Union

import numpy as np
import polars as pl
from scipy import sparse

from fsel.ranking.entropy import factorize
from fsel.ranking.exceptions import InvalidArgumentError, ShapeMismatchError

if TYPE_CHECKING:
    from numpy.typing import NDArray


def encode_column(series: pl.Series, treat_integers_as_continuous: bool = True) -> NDArray[np.int64]:
    """Factorize one attribute column.

    Floating-point columns, and integer columns when
    ``treat_integers_as_continuous`` is set, are grouped by exact numeric
    value. Other integer columns use their raw values as labels, and any
    remaining dtype (strings, categoricals, booleans) is grouped by label.
    Missing values form one extra category. No binning is applied.
    """
    dtype = series.dtype
    if dtype.is_float() or (dtype.is_integer() and treat_integers_as_continuous):
        return factorize(series.cast(pl.Float64).to_numpy())
    return factorize(series)


def encode_array_column(values: np.ndarray, treat_integers_as_continuous: bool = True) -> NDArray[np.int64]:
    """Factorize one column of a 2-D numpy array under the same policy.

    ``object`` columns, including mixed-type ones, are grouped by equality.
    """
    kind = values.dtype.kind
    if kind in "iu" and treat_integers_as_continuous:
        return factorize(values.astype(np.float64))
    return factorize(values)


@dataclass(frozen=True)
class AttributeMatrix:
    """Dense attribute matrix of factorized columns.

    Attributes:
        names: Column names, in input order.
        columns: One int64 code array per column.
        n_rows: Number of observations.
    """

    names: list[Any]
    columns: list[np.ndarray]
    n_rows: int

    @property
    def n_cols(self) -> int:
        return len(self.columns)

    @classmethod
    def from_frame(
        cls,
        frame: pl.DataFrame,
        treat_integers_as_continuous: bool = True,
    ) -> AttributeMatrix:
        """Factorize every column of a Polars DataFrame."""
        columns = [
            encode_column(frame.get_column(name), treat_integers_as_continuous)
            for name in frame.columns
        ]
        return cls(names=list(frame.columns), columns=columns, n_rows=frame.height)

    @classmethod
    def from_array(
        cls,
        x: np.ndarray,
        treat_integers_as_continuous: bool = True,
        names: Sequence[Any] | None = None,
    ) -> AttributeMatrix:
        """Factorize every column of a 2-D array; unnamed columns are ``column_<j>``."""
        n_rows, n_cols = x.shape
        if names is None:
            names = [f"column_{j}" for j in range(n_cols)]
        elif len(names) != n_cols:
            raise ShapeMismatchError(
                "Number of attribute names must match number of columns",
                expected=n_cols,
                actual=len(names),
            )
        columns = [encode_array_column(x[:, j], treat_integers_as_continuous) for j in range(n_cols)]
        return cls(names=list(names), columns=columns, n_rows=n_rows)

    def take(self, indices: NDArray[np.integer]) -> AttributeMatrix:
        """Select rows (with repetition) by position."""
        return AttributeMatrix(
            names=self.names,
            columns=[column[indices] for column in self.columns],
            n_rows=len(indices),
        )


@dataclass(frozen=True)
class SparseAttributeMatrix:
    """Column-compressed attribute matrix with an implicit zero default.

    Attributes:
        matrix: Canonical CSC matrix (sorted indices, no duplicates, no
            stored zeros).
        names: Attribute identifiers; 1-based positions when not supplied.
    """

    matrix: sparse.csc_matrix
    names: list[Any]

    @property
    def n_rows(self) -> int:
        return self.matrix.shape[0]

    @property
    def n_cols(self) -> int:
        return self.matrix.shape[1]

    @cached_property
    def _row_major(self) -> sparse.csr_matrix:
        return self.matrix.tocsr()

    @classmethod
    def from_sparse(
        cls,
        matrix: Any,
        names: Sequence[Any] | None = None,
    ) -> SparseAttributeMatrix:
        """Canonicalize any scipy sparse matrix or array."""
        csc = sparse.csc_matrix(matrix, copy=True)
        csc.sum_duplicates()
        csc.eliminate_zeros()
        if names is None:
            names = list(range(1, csc.shape[1] + 1))
        elif len(names) != csc.shape[1]:
            raise ShapeMismatchError(
                "Number of attribute names must match number of columns",
                expected=csc.shape[1],
                actual=len(names),
            )
        return cls(matrix=csc, names=list(names))

    def column(self, j: int) -> tuple[np.ndarray, np.ndarray]:
        """Return (row indices, values) of the non-zero entries of column ``j``."""
        start, end = self.matrix.indptr[j], self.matrix.indptr[j + 1]
        return self.matrix.indices[start:end], self.matrix.data[start:end]

    def take(self, indices: NDArray[np.integer]) -> SparseAttributeMatrix:
        """Select rows (with repetition) by position."""
        picked = self._row_major[indices].tocsc()
        picked.sort_indices()
        return SparseAttributeMatrix(matrix=picked, names=self.names)


Attributes = Union[AttributeMatrix, SparseAttributeMatrix]


def resolve_attributes(
    x: Any,
    treat_integers_as_continuous: bool = True,
    names: Sequence[Any] | None = None,
) -> Attributes:
    """Resolve a supported attribute container into its canonical shape.

    Args:
        x: Polars DataFrame, 2-D numpy array, or scipy sparse matrix/array.
        treat_integers_as_continuous: Grouping policy for integer columns.
        names: Optional attribute names for numpy and sparse inputs.

    Returns:
        AttributeMatrix for dense input, SparseAttributeMatrix for sparse input.

    Raises:
        InvalidArgumentError: If the container type is not supported.
        ShapeMismatchError: If ``names`` does not match the column count.
    """
    if isinstance(x, (AttributeMatrix, SparseAttributeMatrix)):
        return x
    if sparse.issparse(x):
        return SparseAttributeMatrix.from_sparse(x, names)
    if isinstance(x, np.ndarray):
        if x.ndim != 2:
            raise InvalidArgumentError(
                "Attribute array must be two-dimensional",
                parameter="x",
                value=f"<ndarray ndim={x.ndim}>",
                valid_range="ndim == 2",
            )
        return AttributeMatrix.from_array(x, treat_integers_as_continuous, names)
    if isinstance(x, pl.DataFrame):
        return AttributeMatrix.from_frame(x, treat_integers_as_continuous)
    raise InvalidArgumentError(
        "Unsupported data type",
        parameter="x",
        value=type(x).__name__,
        valid_range="polars.DataFrame, numpy.ndarray or scipy.sparse matrix",
    )


def check_alignment(n_rows: int, n_cols: int, n_labels: int) -> None:
    """Fail fast unless attributes and class labels can be paired.

    Raises:
        ShapeMismatchError: On an empty attribute set or a row-count mismatch.
    """
    if n_cols < 1:
        raise ShapeMismatchError(
            "At least one attribute is required",
            expected=1,
            actual=n_cols,
        )
    if n_rows != n_labels:
        raise ShapeMismatchError(
            "Attributes and class labels must have the same number of rows",
            expected=n_labels,
            actual=n_rows,
        )
