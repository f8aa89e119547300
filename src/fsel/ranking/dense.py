"""Per-attribute entropies for dense attribute tables."""

from __future__ import annotations

from typing import Any

import polars as pl

from fsel.ranking.entropy import (
    EntropyPair,
    entropy_of_codes,
    factorize,
    joint_entropy_of_codes,
)
from fsel.ranking.logging_config import get_logger, log_function_entry
from fsel.ranking.matrix import AttributeMatrix, check_alignment
from fsel.ranking.parallel import fork_join

logger = get_logger("dense")

# For few columns, sequential is faster than starting threads
MIN_PARALLEL_COLUMNS = 10


def compute_dense(
    attributes: AttributeMatrix | pl.DataFrame,
    class_labels: Any,
    treat_integers_as_continuous: bool = True,
    *,
    n_jobs: int | None = 1,
) -> dict[Any, EntropyPair]:
    """Compute attribute entropy and joint entropy with the class, per column.

    Args:
        attributes: Factorized AttributeMatrix, or a Polars DataFrame which is
            factorized here.
        class_labels: Class labels aligned with the attribute rows.
        treat_integers_as_continuous: Grouping policy for integer columns of a
            DataFrame. An AttributeMatrix already carries its encoding.
        n_jobs: Worker threads for the per-column loop. None = all cores.

    Returns:
        Mapping of column name to EntropyPair, in column order.

    Raises:
        ShapeMismatchError: If there are no columns or the row counts differ.
    """
    if isinstance(attributes, pl.DataFrame):
        attributes = AttributeMatrix.from_frame(attributes, treat_integers_as_continuous)

    class_codes = factorize(class_labels)
    check_alignment(attributes.n_rows, attributes.n_cols, class_codes.size)
    log_function_entry(
        logger, "compute_dense", attributes=attributes.names, n_rows=attributes.n_rows
    )

    n_classes = int(class_codes.max()) + 1 if class_codes.size else 0

    def column_entropies(j: int) -> EntropyPair:
        codes = attributes.columns[j]
        return EntropyPair(
            entropy_of_codes(codes),
            joint_entropy_of_codes(codes, class_codes, n_classes),
        )

    pairs = fork_join(
        column_entropies,
        attributes.n_cols,
        n_jobs,
        min_tasks=MIN_PARALLEL_COLUMNS,
    )
    return dict(zip(attributes.names, pairs))

