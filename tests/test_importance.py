"""Tests for fsel.ranking.importance module."""

import math
import warnings

import numpy as np
import pytest

from fsel.ranking.entropy import EntropyPair, entropy, joint_entropy
from fsel.ranking.exceptions import InvalidArgumentError
from fsel.ranking.importance import IMPORTANCE_TYPES, importance_scores

LOG2 = math.log(2)


class TestImportanceScores:
    """Tests for importance_scores function."""

    def test_perfect_attribute(self) -> None:
        """A perfectly predictive binary attribute scores log 2, 1 and 1."""
        values = {"signal": EntropyPair(LOG2, LOG2)}

        assert importance_scores(LOG2, values, "infogain")[0] == pytest.approx(LOG2)
        assert importance_scores(LOG2, values, "gainratio")[0] == pytest.approx(1.0)
        assert importance_scores(LOG2, values, "symuncert")[0] == pytest.approx(1.0)

    def test_default_type_is_infogain(self) -> None:
        """Omitting the type gives information gain."""
        values = {"signal": EntropyPair(LOG2, LOG2)}
        assert importance_scores(LOG2, values)[0] == pytest.approx(LOG2)

    def test_constant_attribute(self) -> None:
        """Zero attribute entropy: gain 0, gain ratio non-finite, symuncert 0."""
        values = {"constant": EntropyPair(0.0, LOG2)}

        assert importance_scores(LOG2, values, "infogain")[0] == pytest.approx(0.0)
        assert not np.isfinite(importance_scores(LOG2, values, "gainratio")[0])
        assert importance_scores(LOG2, values, "symuncert")[0] == pytest.approx(0.0)

    def test_constant_attribute_and_class(self) -> None:
        """Symmetrical uncertainty is non-finite when both entropies are 0."""
        values = {"constant": EntropyPair(0.0, 0.0)}
        assert np.isnan(importance_scores(0.0, values, "symuncert")[0])

    def test_degenerate_inputs_do_not_warn(self) -> None:
        """Division by a zero entropy is silent."""
        values = {"constant": EntropyPair(0.0, 0.0)}
        with warnings.catch_warnings():
            warnings.simplefilter("error")
            for importance_type in IMPORTANCE_TYPES:
                importance_scores(0.0, values, importance_type)

    def test_order_follows_mapping(self) -> None:
        """Scores are aligned with the mapping's iteration order."""
        values = {
            "weak": EntropyPair(LOG2, 2 * LOG2),
            "strong": EntropyPair(LOG2, LOG2),
        }
        scores = importance_scores(LOG2, values, "infogain")
        assert scores[0] == pytest.approx(0.0)
        assert scores[1] == pytest.approx(LOG2)

    def test_infogain_non_negative_on_data(self) -> None:
        """Information gain from plug-in entropies is never meaningfully negative."""
        rng = np.random.default_rng(42)
        for _ in range(20):
            a = rng.integers(0, 5, 60)
            c = rng.integers(0, 3, 60)
            values = {"a": EntropyPair(entropy(a), joint_entropy(a, c))}
            assert importance_scores(entropy(c), values)[0] >= -1e-12

    def test_gainratio_and_symuncert_bounded(self) -> None:
        """Normalized measures stay within [0, 1] on non-degenerate data."""
        rng = np.random.default_rng(0)
        for _ in range(20):
            a = rng.integers(0, 4, 80)
            c = rng.integers(0, 3, 80)
            values = {"a": EntropyPair(entropy(a), joint_entropy(a, c))}
            for importance_type in ("gainratio", "symuncert"):
                score = importance_scores(entropy(c), values, importance_type)[0]
                assert -1e-12 <= score <= 1 + 1e-12

    def test_unknown_type_raises(self) -> None:
        """Only the three known measures are accepted."""
        with pytest.raises(InvalidArgumentError) as exc_info:
            importance_scores(LOG2, {"a": EntropyPair(LOG2, LOG2)}, "chisquared")
        assert exc_info.value.parameter == "type"
