"""Per-attribute entropies for sparse attribute matrices.

Only the stored (non-zero) entries of each column are visited. The count of
the implicit zero category is ``n_rows - nnz``, and its joint cells with the
class are the overall class counts minus the class counts of the rows that
do have a stored entry. The result matches the dense computation on the
materialized matrix up to floating-point summation order.
"""

from __future__ import annotations

from typing import Any

import numpy as np

from fsel.ranking.entropy import (
    EntropyPair,
    category_counts,
    entropy_from_counts,
    factorize,
)
from fsel.ranking.logging_config import get_logger, log_function_entry
from fsel.ranking.matrix import SparseAttributeMatrix, check_alignment
from fsel.ranking.parallel import fork_join

logger = get_logger("sparse")

MIN_PARALLEL_COLUMNS = 10


def compute_sparse(
    attributes: Any,
    class_labels: Any,
    treat_integers_as_continuous: bool = True,
    *,
    n_jobs: int | None = 1,
) -> dict[Any, EntropyPair]:
    """Compute attribute entropy and joint entropy with the class, per column.

    Args:
        attributes: SparseAttributeMatrix, or any scipy sparse matrix (whose
            attributes are then named 1..n_cols).
        class_labels: Class labels aligned with the matrix rows.
        treat_integers_as_continuous: If False, integer-valued matrices use
            their raw values as labels; otherwise values are grouped by exact
            floating-point value.
        n_jobs: Worker threads for the per-column loop. None = all cores.

    Returns:
        Mapping of attribute identifier to EntropyPair, in column order.

    Raises:
        ShapeMismatchError: If there are no columns or the row counts differ.
    """
    if not isinstance(attributes, SparseAttributeMatrix):
        attributes = SparseAttributeMatrix.from_sparse(attributes)

    class_codes = factorize(class_labels)
    n_rows = attributes.n_rows
    check_alignment(n_rows, attributes.n_cols, class_codes.size)
    log_function_entry(
        logger,
        "compute_sparse",
        shape=attributes.matrix,
        nnz=int(attributes.matrix.nnz),
    )

    n_classes = int(class_codes.max()) + 1 if class_codes.size else 0
    class_totals = np.bincount(class_codes, minlength=n_classes)
    raw_labels = attributes.matrix.dtype.kind in "iub" and not treat_integers_as_continuous

    def column_entropies(j: int) -> EntropyPair:
        rows, values = attributes.column(j)
        if not raw_labels:
            values = values.astype(np.float64, copy=False)
        value_codes = factorize(values)

        n_implicit = n_rows - rows.size
        attribute_counts = np.concatenate(([n_implicit], category_counts(value_codes)))

        stored_classes = class_codes[rows]
        implicit_cells = class_totals - np.bincount(stored_classes, minlength=n_classes)
        stored_cells = category_counts(value_codes * n_classes + stored_classes)
        joint_counts = np.concatenate((implicit_cells, stored_cells))

        return EntropyPair(
            entropy_from_counts(attribute_counts),
            entropy_from_counts(joint_counts),
        )

    pairs = fork_join(
        column_entropies,
        attributes.n_cols,
        n_jobs,
        min_tasks=MIN_PARALLEL_COLUMNS,
    )
    return dict(zip(attributes.names, pairs))
