"""Tests for ranking exception hierarchy.

Verifies that exceptions are properly formatted and contain
contextual information.
"""

from __future__ import annotations

import pytest

from fsel.ranking.exceptions import (
    InvalidArgumentError,
    RankingError,
    ShapeMismatchError,
)


class TestRankingError:
    """Tests for RankingError base class."""

    def test_message_only(self) -> None:
        """RankingError with message only."""
        err = RankingError("Something went wrong")
        assert str(err) == "Something went wrong"
        assert err.message == "Something went wrong"
        assert err.context == {}

    def test_message_with_context(self) -> None:
        """RankingError with context dictionary."""
        err = RankingError("Failed", {"attribute": "petal", "draw": 5})
        assert "attribute=petal" in str(err)
        assert "draw=5" in str(err)
        assert err.context["attribute"] == "petal"


class TestInvalidArgumentError:
    """Tests for InvalidArgumentError."""

    def test_basic_usage(self) -> None:
        """Parameter, value and range are kept and formatted."""
        err = InvalidArgumentError(
            "Too many bins",
            parameter="nbins",
            value=12,
            valid_range="nbins <= 4",
        )
        assert err.parameter == "nbins"
        assert err.value == 12
        assert err.valid_range == "nbins <= 4"
        assert "parameter=nbins" in str(err)
        assert "valid_range=nbins <= 4" in str(err)

    def test_without_range(self) -> None:
        """valid_range is optional and omitted from the context."""
        err = InvalidArgumentError("Unsupported data type", parameter="x", value="list")
        assert err.valid_range is None
        assert "valid_range" not in err.context

    def test_extra_context(self) -> None:
        """Additional context is merged in."""
        err = InvalidArgumentError("bad", parameter="x", value=1, context={"hint": "use a DataFrame"})
        assert err.context["hint"] == "use a DataFrame"

    def test_catchable_as_value_error(self) -> None:
        """Callers can catch ValueError or RankingError."""
        with pytest.raises(ValueError):
            raise InvalidArgumentError("bad", parameter="x", value=1)
        with pytest.raises(RankingError):
            raise InvalidArgumentError("bad", parameter="x", value=1)


class TestShapeMismatchError:
    """Tests for ShapeMismatchError."""

    def test_basic_usage(self) -> None:
        """Expected and actual lengths are reported."""
        err = ShapeMismatchError("Row mismatch", expected=10, actual=9)
        assert err.expected == 10
        assert err.actual == 9
        assert "expected=10" in str(err)
        assert "actual=9" in str(err)

    def test_inheritance(self) -> None:
        """ShapeMismatchError is a RankingError and a ValueError."""
        err = ShapeMismatchError("x", expected=1, actual=0)
        assert isinstance(err, RankingError)
        assert isinstance(err, ValueError)
