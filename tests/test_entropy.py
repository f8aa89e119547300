"""Tests for fsel.ranking.entropy module."""

import math
from concurrent.futures import ThreadPoolExecutor

import numpy as np
import polars as pl
import pytest

from fsel.ranking.entropy import (
    entropy,
    entropy_from_counts,
    factorize,
    joint_entropy,
)
from fsel.ranking.exceptions import ShapeMismatchError


class TestEntropy:
    """Tests for entropy function."""

    def test_single_label_is_zero(self) -> None:
        """A point mass has zero entropy."""
        assert entropy(["x"] * 7) == 0.0

    def test_empty_is_zero(self) -> None:
        """Empty input has zero entropy."""
        assert entropy([]) == 0.0

    @pytest.mark.parametrize("k", [2, 3, 4, 10])
    def test_uniform_distribution(self, k: int) -> None:
        """k equally frequent labels give log(k)."""
        labels = [f"c{i % k}" for i in range(5 * k)]
        assert entropy(labels) == pytest.approx(math.log(k))

    def test_natural_log_units(self) -> None:
        """Entropy is in nats."""
        assert entropy([0, 1]) == pytest.approx(0.6931471805599453)

    def test_known_skewed_value(self) -> None:
        """Compare against the closed form for p = (0.75, 0.25)."""
        expected = -(0.75 * math.log(0.75) + 0.25 * math.log(0.25))
        assert entropy([1, 1, 1, 2]) == pytest.approx(expected)

    def test_input_types_agree(self) -> None:
        """Lists, numpy arrays and Polars Series give the same entropy."""
        values = ["a", "b", "b", "c", "c", "c"]
        from_list = entropy(values)
        assert entropy(np.array(values)) == pytest.approx(from_list)
        assert entropy(pl.Series(values)) == pytest.approx(from_list)

    def test_large_alphabet(self) -> None:
        """All-distinct labels give log(n)."""
        n = 5000
        assert entropy(np.arange(n)) == pytest.approx(math.log(n))

    def test_non_negative(self) -> None:
        """Entropy is never negative."""
        rng = np.random.default_rng(42)
        for _ in range(20):
            assert entropy(rng.integers(0, 6, 50)) >= 0.0


class TestJointEntropy:
    """Tests for joint_entropy function."""

    def test_at_least_each_marginal(self) -> None:
        """Joint entropy is never below either marginal."""
        rng = np.random.default_rng(42)
        for _ in range(20):
            a = rng.integers(0, 4, 80)
            c = rng.integers(0, 3, 80)
            joint = joint_entropy(a, c)
            assert joint >= max(entropy(a), entropy(c)) - 1e-12

    def test_identical_sequences(self) -> None:
        """Pairing a sequence with a relabelled copy adds no entropy."""
        a = [1, 1, 0, 0, 2]
        c = ["x", "x", "y", "y", "z"]
        assert joint_entropy(a, c) == pytest.approx(entropy(a))

    def test_independent_sequences(self) -> None:
        """Fully crossed sequences add their entropies."""
        a = [0, 0, 1, 1]
        c = [0, 1, 0, 1]
        assert joint_entropy(a, c) == pytest.approx(2 * math.log(2))

    def test_length_mismatch_raises(self) -> None:
        """Unequal lengths are a programming error."""
        with pytest.raises(ShapeMismatchError):
            joint_entropy([1, 2, 3], [1, 2])

    def test_empty_is_zero(self) -> None:
        """Two empty sequences have zero joint entropy."""
        assert joint_entropy([], []) == 0.0


class TestFactorize:
    """Tests for factorize and entropy_from_counts helpers."""

    def test_codes_are_dense(self) -> None:
        """Codes run from 0 to k-1."""
        codes = factorize(["b", "a", "c", "a"])
        assert sorted(set(codes.tolist())) == [0, 1, 2]
        assert codes[1] == codes[3]

    def test_missing_values_form_one_category(self) -> None:
        """Nulls and NaNs group together into their own category."""
        codes = factorize([1.0, float("nan"), float("nan"), 2.0])
        assert codes[1] == codes[2]
        assert len(set(codes.tolist())) == 3

        string_codes = factorize(["a", None, "a", None])
        assert string_codes[1] == string_codes[3]
        assert string_codes[0] != string_codes[1]

    def test_boolean_labels(self) -> None:
        """Booleans are ordinary labels."""
        codes = factorize(pl.Series([True, False, True]))
        assert codes[0] == codes[2] != codes[1]

    def test_zero_counts_ignored(self) -> None:
        """Zero cells do not contribute to entropy."""
        assert entropy_from_counts(np.array([2, 0, 2, 0])) == pytest.approx(math.log(2))

    def test_point_mass_is_positive_zero(self) -> None:
        """A single non-empty cell gives +0.0, never -0.0."""
        value = entropy_from_counts(np.array([0, 5]))
        assert value == 0.0
        assert math.copysign(1.0, value) == 1.0

    def test_mixed_type_labels(self) -> None:
        """Labels of different Python types are compared by equality."""
        assert entropy([1, "a", 1, "a"]) == pytest.approx(math.log(2))
        codes = factorize([1, "a", 1, "a", None])
        assert codes[0] == codes[2]
        assert codes[1] == codes[3]
        assert len(set(codes.tolist())) == 3

    def test_tuple_labels(self) -> None:
        """Composite labels are grouped by value."""
        labels = [(1, 2), (1, 2), (3, 4), (3, 4)]
        assert entropy(labels) == pytest.approx(math.log(2))
        assert joint_entropy(labels, ["x", "x", "y", "y"]) == pytest.approx(math.log(2))

    def test_object_array(self) -> None:
        """Mixed object arrays group equal labels and one missing category."""
        codes = factorize(np.array(["u", 1, "u", None, float("nan")], dtype=object))
        assert codes[0] == codes[2]
        assert codes[3] == codes[4]
        assert len(set(codes.tolist())) == 3

    def test_string_codes_sorted_by_value(self) -> None:
        """String codes follow label order, not first appearance."""
        assert factorize(["virginica", "setosa", "versicolor"]).tolist() == [2, 0, 1]
        assert factorize(pl.Series(["b", None, "a"], dtype=pl.Categorical))[2] == 0

    def test_codes_identical_across_threads(self) -> None:
        """Concurrent factorization gives the same codes as sequential runs."""
        rng = np.random.default_rng(0)
        species = np.array(["setosa", "versicolor", "virginica"], dtype=object)
        draws = [species[rng.integers(0, 3, 40)] for _ in range(300)]
        inputs = [pl.Series(d.tolist()) if i % 2 else d for i, d in enumerate(draws)]

        sequential = [factorize(labels) for labels in inputs]
        with ThreadPoolExecutor(max_workers=8) as executor:
            threaded = list(executor.map(factorize, inputs))

        for expected, got in zip(sequential, threaded):
            np.testing.assert_array_equal(got, expected)

    def test_entropy_independent_of_cell_order(self) -> None:
        """Permuting a frequency table leaves the entropy bit-identical."""
        rng = np.random.default_rng(1)
        counts = rng.integers(0, 50, 30)
        expected = entropy_from_counts(counts)
        for _ in range(20):
            assert entropy_from_counts(rng.permutation(counts)) == expected
