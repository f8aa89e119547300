"""Bootstrap confidence intervals for attribute importance.

Each draw resamples rows with replacement, reruns the full scoring pipeline
on the resample and stores one importance per attribute. Bounds are the
empirical ``(1 - confidence) / 2`` and ``1 - (1 - confidence) / 2`` quantiles
of each attribute's draws, with linear interpolation between order
statistics.

Non-finite draws (a resample that makes an attribute constant, or a draw
whose class preparation fails) are left out of that attribute's quantiles
and counted in ``BootstrapInterval.n_nonfinite``. An attribute with no finite
draw gets NaN bounds.

Example:
    >>> intervals = bootstrap_ci(score, attributes, labels, n_boot=1000, confidence=0.95)
    >>> intervals["petal_width"].lower
"""

from __future__ import annotations

import warnings
from typing import Any, Callable, NamedTuple

import numpy as np

from fsel.ranking.exceptions import InvalidArgumentError, ShapeMismatchError
from fsel.ranking.logging_config import get_logger, log_function_entry, log_result
from fsel.ranking.matrix import Attributes
from fsel.ranking.parallel import fork_join

logger = get_logger("bootstrap")

ComputeFn = Callable[[Attributes, Any], np.ndarray]


class BootstrapInterval(NamedTuple):
    """Quantile bounds of one attribute's bootstrap distribution."""

    lower: float
    upper: float
    n_nonfinite: int


def bootstrap_ci(
    compute_fn: ComputeFn,
    attributes: Attributes,
    class_labels: Any,
    n_boot: int,
    confidence: float,
    *,
    random_state: int | None = None,
    n_jobs: int | None = 1,
) -> dict[Any, BootstrapInterval]:
    """Estimate per-attribute confidence bounds by bootstrap resampling.

    Args:
        compute_fn: Scores a (attributes, class labels) pair, returning one
            importance per attribute.
        attributes: Resolved attribute matrix (dense or sparse).
        class_labels: Class labels supporting integer-array indexing
            (Polars Series or numpy array), aligned with ``attributes``.
        n_boot: Number of bootstrap draws.
        confidence: Confidence level in (0, 1].
        random_state: Seed; draws are reproducible for any ``n_jobs``.
        n_jobs: Worker threads across draws. None = all cores.

    Returns:
        Mapping of attribute to BootstrapInterval, in column order.

    Raises:
        InvalidArgumentError: If ``n_boot`` or ``confidence`` is out of range.
        ShapeMismatchError: If there are no rows to resample.
    """
    if isinstance(n_boot, bool) or not isinstance(n_boot, (int, np.integer)) or n_boot < 1:
        raise InvalidArgumentError(
            "Number of bootstrap draws must be a positive integer",
            parameter="n_boot",
            value=n_boot,
            valid_range="n_boot >= 1",
        )
    if not 0 < confidence <= 1:
        raise InvalidArgumentError(
            "Confidence level must be in (0, 1]",
            parameter="confidence",
            value=confidence,
            valid_range="0 < confidence <= 1",
        )

    if attributes.n_rows < 1:
        raise ShapeMismatchError(
            "Cannot resample a dataset without rows",
            expected=1,
            actual=attributes.n_rows,
        )

    log_function_entry(
        logger,
        "bootstrap_ci",
        n_rows=attributes.n_rows,
        n_cols=attributes.n_cols,
        n_boot=n_boot,
        confidence=confidence,
        random_state=random_state,
    )

    n_rows = attributes.n_rows
    n_cols = attributes.n_cols
    # Child seeds make each draw independent of scheduling order
    seeds = np.random.SeedSequence(random_state).spawn(n_boot)

    def draw(i: int) -> np.ndarray:
        rng = np.random.default_rng(seeds[i])
        indices = rng.integers(0, n_rows, size=n_rows)
        try:
            return np.asarray(
                compute_fn(attributes.take(indices), class_labels[indices]),
                dtype=np.float64,
            )
        except InvalidArgumentError as e:
            logger.debug(f"Bootstrap draw {i} could not be scored: {e}")
            return np.full(n_cols, np.nan)

    samples = np.vstack(fork_join(draw, n_boot, n_jobs)).reshape(n_boot, n_cols)

    finite = np.isfinite(samples)
    n_nonfinite = (~finite).sum(axis=0)
    alpha = (1 - confidence) / 2

    with warnings.catch_warnings():
        # All-NaN columns are expected for degenerate attributes
        warnings.simplefilter("ignore", RuntimeWarning)
        bounds = np.nanquantile(
            np.where(finite, samples, np.nan),
            [alpha, 1 - alpha],
            axis=0,
            method="linear",
        )

    intervals = {
        name: BootstrapInterval(float(bounds[0, j]), float(bounds[1, j]), int(n_nonfinite[j]))
        for j, name in enumerate(attributes.names)
    }

    log_result(
        logger,
        "Bootstrap complete",
        n_boot=n_boot,
        attributes=n_cols,
        nonfinite_draws=int(n_nonfinite.sum()),
    )
    return intervals
