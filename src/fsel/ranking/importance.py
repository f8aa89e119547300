"""Entropy-based importance measures.

With H(C) the class entropy, H(A) the attribute entropy and H(A, C) their
joint entropy:

- ``infogain``  = H(C) + H(A) - H(A, C)
- ``gainratio`` = infogain / H(A)
- ``symuncert`` = 2 * infogain / (H(A) + H(C))

Nothing is clamped. A constant attribute (H(A) = 0) yields a non-finite gain
ratio, and symmetrical uncertainty is non-finite when both entropies are 0;
these values are returned as-is so callers can spot degenerate attributes.
Rounding may also leave a perfectly predictive attribute with an
information gain a few ulps away from H(C).
"""

from __future__ import annotations

from typing import Any, Literal, Mapping

import numpy as np

from fsel.ranking.entropy import EntropyPair
from fsel.ranking.exceptions import InvalidArgumentError

ImportanceType = Literal["infogain", "gainratio", "symuncert"]
IMPORTANCE_TYPES: tuple[str, ...] = ("infogain", "gainratio", "symuncert")


def importance_scores(
    class_entropy: float,
    values: Mapping[Any, EntropyPair],
    type: ImportanceType = "infogain",
) -> np.ndarray:
    """Combine class entropy with per-attribute entropies into scores.

    Args:
        class_entropy: Entropy of the class vector.
        values: Mapping of attribute to EntropyPair, in output order.
        type: One of "infogain", "gainratio", "symuncert".

    Returns:
        float64 array of scores aligned with ``values``.

    Raises:
        InvalidArgumentError: If ``type`` is unknown.
    """
    if type not in IMPORTANCE_TYPES:
        raise InvalidArgumentError(
            "Unknown importance type",
            parameter="type",
            value=type,
            valid_range=", ".join(IMPORTANCE_TYPES),
        )

    table = np.array([tuple(pair) for pair in values.values()], dtype=np.float64)
    table = table.reshape(-1, 2)
    attribute_entropy = table[:, 0]
    joint_entropy = table[:, 1]

    with np.errstate(divide="ignore", invalid="ignore"):
        gain = class_entropy + attribute_entropy - joint_entropy
        if type == "gainratio":
            return gain / attribute_entropy
        if type == "symuncert":
            return 2 * gain / (attribute_entropy + class_entropy)
    return gain
