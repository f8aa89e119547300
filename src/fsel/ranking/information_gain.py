"""Entropy-based filters: rank attributes by association with a class.

Implements the information gain, gain ratio and symmetrical uncertainty
filters for dense tables and sparse matrices, with optional bootstrap
confidence intervals.

Example:
    >>> import polars as pl
    >>> from fsel.ranking import information_gain
    >>>
    >>> x = pl.DataFrame({"a": [1, 1, 1, 1, 0, 0, 0, 0], "b": [1, 0, 1, 0, 1, 0, 1, 0]})
    >>> y = ["a", "a", "a", "a", "b", "b", "b", "b"]
    >>> result = information_gain(x, y, type="gainratio", conf_int=None)
    >>> result.to_frame()
    shape: (2, 2)
    ┌────────────┬────────────┐
    │ attributes ┆ importance │
    ├────────────┼────────────┤
    │ a          ┆ 1.0        │
    │ b          ┆ 0.0        │
    └────────────┴────────────┘
"""

from __future__ import annotations

from functools import partial
from typing import Any, Callable, Sequence

import numpy as np
import polars as pl

from fsel.ranking.bootstrap import bootstrap_ci
from fsel.ranking.config import RankingConfig
from fsel.ranking.dense import compute_dense
from fsel.ranking.discretize import equal_freq_bin
from fsel.ranking.entropy import entropy_of_codes, factorize
from fsel.ranking.exceptions import InvalidArgumentError
from fsel.ranking.importance import importance_scores
from fsel.ranking.logging_config import (
    get_logger,
    log_function_entry,
    log_advisory,
    log_result,
)
from fsel.ranking.matrix import (
    Attributes,
    SparseAttributeMatrix,
    check_alignment,
    resolve_attributes,
)
from fsel.ranking.results import Advisory, RankingResult, assemble_result
from fsel.ranking.sparse import compute_sparse

logger = get_logger("information_gain")


def information_gain(
    x: Any,
    y: Any,
    *,
    type: str = "infogain",
    equal: bool = False,
    nbins: int = 5,
    disc_integers: bool = True,
    conf_int: float | None = 0.95,
    n_boot: int = 1000,
    random_state: int | None = None,
    n_jobs: int | None = 1,
    attribute_names: Sequence[Any] | None = None,
) -> RankingResult:
    """Rank attributes by entropy-based association with a class.

    ``infogain`` is H(Class) + H(Attribute) - H(Class, Attribute);
    ``gainratio`` divides it by H(Attribute); ``symuncert`` is twice it over
    H(Attribute) + H(Class). Entropies are in nats.

    Args:
        x: Attributes: Polars DataFrame, 2-D numpy array or scipy sparse
            matrix (implicit entries are zero).
        y: Class vector aligned with the rows of ``x``.
        type: "infogain", "gainratio" or "symuncert".
        equal: Discretize a floating-point ``y`` with equal frequency binning.
            Otherwise a floating-point ``y`` is used as categorical by value.
        nbins: Number of bins when ``equal`` is set.
        disc_integers: Treat integer attributes as continuous (grouped by
            exact value) rather than as raw labels.
        conf_int: Confidence level of bootstrap bounds, or None/False to skip.
        n_boot: Number of bootstrap draws.
        random_state: Seed for the bootstrap.
        n_jobs: Worker threads. 1 = single-threaded, None = all cores.
        attribute_names: Names for numpy or sparse attributes. Unnamed sparse
            attributes are numbered from 1.

    Returns:
        RankingResult with one record per attribute, in input order. Constant
        attributes yield non-finite gain ratios. Their symmetrical uncertainty
        is 0 while the class varies and non-finite only when the class is
        constant too. Non-finite scores are kept, not dropped.

    Raises:
        InvalidArgumentError: On malformed options or unsupported input types.
        ShapeMismatchError: If ``x`` has no columns or its row count differs
            from ``y``.
    """
    config = RankingConfig.build(
        type=type,
        equal=equal,
        nbins=nbins,
        disc_integers=disc_integers,
        conf_int=conf_int,
        n_boot=n_boot,
        random_state=random_state,
        n_jobs=n_jobs,
    )

    attributes = resolve_attributes(x, config.disc_integers, attribute_names)
    labels = _as_series(y)
    check_alignment(attributes.n_rows, attributes.n_cols, labels.len())

    log_function_entry(
        logger,
        "information_gain",
        n_rows=attributes.n_rows,
        n_cols=attributes.n_cols,
        sparse=isinstance(attributes, SparseAttributeMatrix),
        type=config.type,
        conf_int=config.conf_int,
        n_boot=config.n_boot,
    )

    advisories: list[Advisory] = []
    attributes, labels = _drop_missing_response(attributes, labels, advisories)

    if labels.dtype.is_float() and not config.equal:
        advisories.append(Advisory(
            code="numeric_response_as_factor",
            message=(
                "Dependent variable is numeric; its distinct values are used as "
                "classes. Set equal=True for equal frequency binning."
            ),
            context={"n_distinct": labels.n_unique()},
        ))

    calculator = compute_sparse if isinstance(attributes, SparseAttributeMatrix) else compute_dense
    score = partial(_score, calculator=calculator, config=config)

    scores = score(attributes, labels, n_jobs=config.n_jobs)

    intervals = None
    if config.conf_int is not None:
        intervals = bootstrap_ci(
            score,
            attributes,
            labels,
            config.n_boot,
            config.conf_int,
            random_state=config.random_state,
            n_jobs=config.n_jobs,
        )
        for name, interval in intervals.items():
            if interval.n_nonfinite:
                advisories.append(Advisory(
                    code="nonfinite_bootstrap_draws",
                    message="Non-finite bootstrap draws excluded from the interval",
                    context={
                        "attribute": name,
                        "n_excluded": interval.n_nonfinite,
                        "n_boot": config.n_boot,
                    },
                ))

    for advisory in advisories:
        log_advisory(logger, advisory)

    result = assemble_result(
        attributes.names,
        scores,
        importance_type=config.type,
        bounds=intervals,
        confidence=config.conf_int,
        n_boot=config.n_boot,
        advisories=advisories,
    )
    log_result(
        logger,
        "Ranked attributes",
        n_attributes=len(result),
        type=config.type,
        intervals=result.has_intervals,
    )
    return result


def information_gain_frame(
    data: pl.DataFrame,
    target: str,
    features: Sequence[str] | None = None,
    **options: Any,
) -> RankingResult:
    """Rank the columns of a table against one of its columns.

    Args:
        data: Table holding both the class and the attributes.
        target: Name of the class column.
        features: Attribute columns. If None, every column except ``target``.
        **options: Keyword options of :func:`information_gain`.

    Raises:
        InvalidArgumentError: If ``target`` or a feature is not a column.
    """
    if target not in data.columns:
        raise InvalidArgumentError(
            f"Column '{target}' not found in DataFrame",
            parameter="target",
            value=target,
        )
    if features is None:
        features = [c for c in data.columns if c != target]
    missing = [f for f in features if f not in data.columns]
    if missing:
        raise InvalidArgumentError(
            "Feature columns not found in DataFrame",
            parameter="features",
            value=missing,
        )
    return information_gain(data.select(list(features)), data.get_column(target), **options)


def prepare_class(labels: pl.Series, equal: bool, nbins: int) -> np.ndarray:
    """Turn the class vector into integer codes.

    A floating-point class is binned with ``equal_freq_bin`` when ``equal``
    is set; every other class is factorized by value.
    """
    if equal and labels.dtype.is_float():
        return equal_freq_bin(labels, nbins)
    return factorize(labels)


def _score(
    attributes: Attributes,
    labels: pl.Series,
    *,
    calculator: Callable[..., dict],
    config: RankingConfig,
    n_jobs: int | None = 1,
) -> np.ndarray:
    class_codes = prepare_class(labels, config.equal, config.nbins)
    values = calculator(attributes, class_codes, config.disc_integers, n_jobs=n_jobs)
    return importance_scores(entropy_of_codes(class_codes), values, config.type)


def _as_series(y: Any) -> pl.Series:
    if isinstance(y, pl.Series):
        return y
    if isinstance(y, np.ndarray):
        return pl.Series("class", y.ravel())
    return pl.Series("class", list(y))


def _drop_missing_response(
    attributes: Attributes,
    labels: pl.Series,
    advisories: list[Advisory],
) -> tuple[Attributes, pl.Series]:
    """Remove rows whose class is null or NaN."""
    missing = labels.is_null()
    if labels.dtype.is_float():
        missing = missing | labels.is_nan().fill_null(True)
    n_missing = int(missing.sum())
    if n_missing == 0:
        return attributes, labels

    keep = np.flatnonzero(~missing.to_numpy())
    advisories.append(Advisory(
        code="missing_response_removed",
        message="Rows with a missing dependent variable were removed",
        context={"n_removed": n_missing, "n_remaining": int(keep.size)},
    ))
    return attributes.take(keep), labels.filter(~missing)
