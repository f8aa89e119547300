"""Shannon entropy of categorical data.

Entropies are plug-in estimates over empirical frequencies, in nats.
Categories with a zero count never enter the sum (``entr(0) == 0``), so the
estimate is finite for any alphabet size.

Example:
    >>> from fsel.ranking.entropy import entropy, joint_entropy
    >>> entropy(["a", "a", "b", "b"])
    0.6931471805599453
    >>> joint_entropy([1, 1, 0, 0], ["a", "a", "b", "b"])
    0.6931471805599453
"""

from __future__ import annotations

import math
from typing import TYPE_CHECKING, Any, NamedTuple

import numpy as np
import polars as pl
from polars.exceptions import PolarsError
from scipy.special import entr

from fsel.ranking.exceptions import ShapeMismatchError

if TYPE_CHECKING:
    from numpy.typing import NDArray

# Above this many cells, counting switches from bincount to a sort-based unique
_MAX_BINCOUNT_CELLS = 1 << 22

# numpy kinds that np.unique can sort directly
_SORTABLE_KINDS = "iufbUSMm"

_MISSING = object()


class EntropyPair(NamedTuple):
    """Marginal entropy of an attribute and its joint entropy with the class."""

    entropy: float
    joint_entropy: float


def _unique_codes(values: np.ndarray) -> NDArray[np.int64]:
    if values.size == 0:
        return np.zeros(0, dtype=np.int64)
    _, codes = np.unique(values, return_inverse=True)
    return codes.reshape(-1).astype(np.int64, copy=False)


def _freeze(value: Any) -> Any:
    if isinstance(value, (list, tuple)):
        return tuple(_freeze(v) for v in value)
    if isinstance(value, dict):
        return tuple(sorted((k, _freeze(v)) for k, v in value.items()))
    return value


def _codes_by_equality(values: list[Any]) -> NDArray[np.int64]:
    """Number labels by first appearance; None and NaN share one code."""
    mapping: dict[Any, int] = {}
    codes = np.empty(len(values), dtype=np.int64)
    for i, value in enumerate(values):
        if value is None or (isinstance(value, (float, np.floating)) and math.isnan(value)):
            key = _MISSING
        else:
            key = _freeze(value)
        codes[i] = mapping.setdefault(key, len(mapping))
    return codes


def _series_codes(series: pl.Series) -> NDArray[np.int64]:
    dtype = series.dtype
    if dtype == pl.Object or dtype.is_nested():
        return _codes_by_equality(series.to_list())
    if dtype == pl.Boolean:
        series = series.cast(pl.UInt8)
    elif dtype == pl.Decimal:
        series = series.cast(pl.Float64)
    elif not (dtype.is_numeric() or dtype.is_temporal()):
        # Dense rank orders labels by value, never by a shared string cache
        series = series.cast(pl.String).rank("dense")
    # Nulls come back as NaN and form a category of their own
    return _unique_codes(series.to_physical().to_numpy())


def factorize(labels: Any) -> NDArray[np.int64]:
    """Encode a categorical sequence as dense integer codes ``0..k-1``.

    Labels are compared by equality only, and the codes depend on nothing
    but the labels themselves. Missing values (null, NaN) are grouped into a
    single extra category. Labels polars cannot type (mixed Python types,
    tuples, arbitrary objects) are numbered by first appearance.

    Args:
        labels: Polars Series, numpy array or any sequence of labels.

    Returns:
        1-D int64 array of codes, same length as ``labels``.
    """
    if isinstance(labels, np.ndarray):
        flat = labels.ravel()
        if flat.dtype.kind in _SORTABLE_KINDS:
            return _unique_codes(flat)
        return _codes_by_equality(flat.tolist())

    if isinstance(labels, pl.Series):
        return _series_codes(labels)

    values = list(labels)
    try:
        series = pl.Series(values=values)
    except (TypeError, PolarsError):
        return _codes_by_equality(values)
    if series.dtype.is_nested():
        return _codes_by_equality(values)
    return _series_codes(series)


def category_counts(codes: NDArray[np.int64], n_categories: int | None = None) -> np.ndarray:
    """Count occurrences of each non-negative integer code.

    The result may contain zero counts; they do not affect entropy.
    """
    if codes.size == 0:
        return np.zeros(n_categories or 0, dtype=np.int64)
    upper = int(codes.max()) + 1 if n_categories is None else n_categories
    if upper <= _MAX_BINCOUNT_CELLS or upper <= 4 * codes.size:
        return np.bincount(codes, minlength=upper)
    return np.unique(codes, return_counts=True)[1]


def entropy_from_counts(counts: np.ndarray) -> float:
    """Shannon entropy (nats) of a frequency table.

    Args:
        counts: Non-negative category counts. Zero cells are ignored.

    Returns:
        Entropy value; 0.0 for an empty table or a point mass. The value does
        not depend on the order of the cells.
    """
    # Summing in sorted order makes the result independent of code order
    counts = np.sort(np.asarray(counts, dtype=np.float64).ravel())
    total = counts.sum()
    if total <= 0:
        return 0.0
    # + 0.0 normalises the -0.0 produced by entr(1.0)
    return float(entr(counts / total).sum()) + 0.0


def entropy_of_codes(codes: NDArray[np.int64]) -> float:
    """Entropy of an already factorized categorical vector."""
    return entropy_from_counts(category_counts(codes))


def joint_entropy_of_codes(
    attribute_codes: NDArray[np.int64],
    class_codes: NDArray[np.int64],
    n_classes: int,
) -> float:
    """Joint entropy of two factorized vectors of equal length.

    Args:
        attribute_codes: Codes of the attribute.
        class_codes: Codes of the class, all below ``n_classes``.
        n_classes: Size of the class alphabet.
    """
    cells = attribute_codes * n_classes + class_codes
    return entropy_from_counts(category_counts(cells))


def entropy(labels: Any) -> float:
    """Compute Shannon entropy of a categorical sequence.

    Args:
        labels: Sequence of category labels.

    Returns:
        ``-sum(p * log(p))`` over the empirical label distribution, in nats.
        Empty input or a single distinct label gives 0.0.
    """
    return entropy_of_codes(factorize(labels))


def joint_entropy(attribute: Any, labels: Any) -> float:
    """Compute entropy of the joint distribution of (attribute, label) pairs.

    Args:
        attribute: Sequence of attribute categories.
        labels: Sequence of class labels, same length as ``attribute``.

    Returns:
        Joint entropy in nats.

    Raises:
        ShapeMismatchError: If the sequences differ in length.
    """
    attribute_codes = factorize(attribute)
    class_codes = factorize(labels)
    if attribute_codes.size != class_codes.size:
        raise ShapeMismatchError(
            "Attribute and class labels must have equal length",
            expected=int(class_codes.size),
            actual=int(attribute_codes.size),
        )
    if class_codes.size == 0:
        return 0.0
    return joint_entropy_of_codes(attribute_codes, class_codes, int(class_codes.max()) + 1)
