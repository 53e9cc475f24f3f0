"""Tests for the shared data types."""

from __future__ import annotations

import math

import pytest

from glassbox.exceptions import ConfigValidationError
from glassbox.types import (
    PredictionResult,
    RequestParameters,
    TokenCandidate,
    validate_temperature,
)


class TestTokenCandidate:
    """Tests for TokenCandidate."""

    def test_probability_derived_from_log_probability(self) -> None:
        candidate = TokenCandidate(token="a", log_probability=math.log(0.25))
        assert candidate.probability == pytest.approx(25.0)

    def test_zero_log_probability_is_certain(self) -> None:
        assert TokenCandidate(token="a", log_probability=0.0).probability == 100.0

    def test_sentinel_is_negligible(self) -> None:
        assert TokenCandidate(token="a", log_probability=-100.0).probability < 1e-40

    def test_frozen(self) -> None:
        candidate = TokenCandidate(token="a", log_probability=0.0)
        with pytest.raises(AttributeError):
            candidate.log_probability = -1.0  # type: ignore[misc]

    def test_probability_not_stored(self) -> None:
        """Only token and log_probability are fields; probability is computed."""
        assert TokenCandidate.__slots__ == ("token", "log_probability")


class TestPredictionResult:
    """Tests for PredictionResult."""

    def test_top_candidate(self) -> None:
        first = TokenCandidate(token="a", log_probability=-0.1)
        second = TokenCandidate(token="b", log_probability=-2.0)
        result = PredictionResult(
            chosen_token="a",
            candidates=(first, second),
            latency_ms=10,
            estimated_cost=0.0,
        )
        assert result.top_candidate is first

    def test_top_candidate_none_when_empty(self) -> None:
        result = PredictionResult(chosen_token="", candidates=(), latency_ms=0, estimated_cost=0.0)
        assert result.top_candidate is None

    def test_frozen(self) -> None:
        result = PredictionResult(chosen_token="", candidates=(), latency_ms=0, estimated_cost=0.0)
        with pytest.raises(AttributeError):
            result.chosen_token = "x"  # type: ignore[misc]


class TestRequestParameters:
    """Boundary validation performed by callers."""

    @pytest.mark.parametrize("temperature", [0.0, 0.7, 2.0])
    def test_valid(self, temperature: float) -> None:
        params = RequestParameters(context_text="Hello", temperature=temperature)
        assert params.validate() is params

    def test_empty_context_rejected(self) -> None:
        with pytest.raises(ConfigValidationError, match="context_text"):
            RequestParameters(context_text="", temperature=1.0).validate()

    @pytest.mark.parametrize("temperature", [-0.1, 2.01, 10.0])
    def test_out_of_range_temperature_rejected(self, temperature: float) -> None:
        with pytest.raises(ConfigValidationError, match="temperature"):
            RequestParameters(context_text="Hello", temperature=temperature).validate()

    def test_validate_temperature_returns_value(self) -> None:
        assert validate_temperature(1.25) == 1.25
