"""Equal frequency binning for a continuous response."""

from __future__ import annotations

from typing import Any

import numpy as np
import polars as pl

from fsel.ranking.exceptions import InvalidArgumentError


def equal_freq_bin(values: Any, nbins: int) -> np.ndarray:
    """Discretize values into ``nbins`` groups of near-equal size.

    Values are ranked (ties keep their input order) and the ranks are
    split into ``nbins`` consecutive groups whose sizes differ by at most
    one. Only used on the class vector; attributes are never binned.

    Args:
        values: Real-valued sequence without missing values.
        nbins: Number of bins.

    Returns:
        int64 array of bin labels in ``0..nbins-1``, aligned with ``values``.

    Raises:
        InvalidArgumentError: If ``nbins`` is not positive, values are not
            finite, or there are fewer distinct values than bins.

    Example:
        >>> equal_freq_bin([1, 2, 3, 4, 5, 6, 7, 8, 9, 10], 2).tolist()
        [0, 0, 0, 0, 0, 1, 1, 1, 1, 1]
    """
    if isinstance(nbins, bool) or not isinstance(nbins, (int, np.integer)) or nbins < 1:
        raise InvalidArgumentError(
            "Number of bins must be a positive integer",
            parameter="nbins",
            value=nbins,
            valid_range="nbins >= 1",
        )

    if isinstance(values, pl.Series):
        arr = values.cast(pl.Float64).to_numpy()
    else:
        arr = np.asarray(values, dtype=np.float64).ravel()

    if not np.isfinite(arr).all():
        raise InvalidArgumentError(
            "Values to discretize must be finite",
            parameter="values",
            value=f"<{int((~np.isfinite(arr)).sum())} non-finite>",
        )

    n_distinct = np.unique(arr).size
    if n_distinct < nbins:
        raise InvalidArgumentError(
            "Too many bins for the number of distinct values",
            parameter="nbins",
            value=int(nbins),
            valid_range=f"nbins <= {n_distinct}",
        )

    n = arr.size
    order = np.argsort(arr, kind="stable")
    ranks = np.empty(n, dtype=np.int64)
    ranks[order] = np.arange(n, dtype=np.int64)
    return ranks * int(nbins) // n
