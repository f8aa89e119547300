"""Entropy-based attribute ranking.

This package provides:
- Shannon entropy and joint entropy of categorical data
- Equal frequency binning of a continuous class
- Per-attribute entropies for dense tables and sparse matrices
- Information gain, gain ratio and symmetrical uncertainty
- Bootstrap confidence intervals for every score

Example:
    >>> import polars as pl
    >>> from fsel.ranking import information_gain, information_gain_frame
    >>>
    >>> # x/y interface
    >>> result = information_gain(features_df, target_series, type="symuncert")
    >>> result.to_frame(sort=True)
    >>>
    >>> # table interface: every other column ranked against "species"
    >>> result = information_gain_frame(iris, "species", conf_int=0.9, n_boot=500)
    >>>
    >>> # sparse interface: attributes are named 1..n_cols
    >>> from scipy import sparse
    >>> result = information_gain(sparse.csc_matrix(counts), labels, conf_int=None)
"""

from fsel.ranking.bootstrap import BootstrapInterval, bootstrap_ci
from fsel.ranking.config import RankingConfig
from fsel.ranking.dense import compute_dense
from fsel.ranking.discretize import equal_freq_bin
from fsel.ranking.entropy import EntropyPair, entropy, factorize, joint_entropy
from fsel.ranking.exceptions import (
    InvalidArgumentError,
    RankingError,
    ShapeMismatchError,
)
from fsel.ranking.importance import IMPORTANCE_TYPES, importance_scores
from fsel.ranking.information_gain import information_gain, information_gain_frame
from fsel.ranking.matrix import AttributeMatrix, SparseAttributeMatrix, resolve_attributes
from fsel.ranking.results import (
    Advisory,
    ImportanceRecord,
    RankingResult,
    assemble_result,
)
from fsel.ranking.sparse import compute_sparse

__all__ = [
    # Entry points
    "information_gain",
    "information_gain_frame",
    "RankingConfig",
    # Entropy
    "entropy",
    "joint_entropy",
    "factorize",
    "EntropyPair",
    # Discretization
    "equal_freq_bin",
    # Attribute containers
    "AttributeMatrix",
    "SparseAttributeMatrix",
    "resolve_attributes",
    # Calculators
    "compute_dense",
    "compute_sparse",
    "importance_scores",
    "IMPORTANCE_TYPES",
    # Bootstrap
    "bootstrap_ci",
    "BootstrapInterval",
    # Results
    "ImportanceRecord",
    "Advisory",
    "RankingResult",
    "assemble_result",
    # Exceptions
    "RankingError",
    "InvalidArgumentError",
    "ShapeMismatchError",
]
