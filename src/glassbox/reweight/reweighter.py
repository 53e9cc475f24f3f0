"""Temperature re-weighting of reported top-K log-probabilities.

Recomputes display percentages for a different temperature without querying
the service again:

    weight_i     = exp(log_probability_i / T)
    percentage_i = 100 * weight_i / sum(weights)

This is a softmax over the handful of candidates the service reported, not
over the model's vocabulary. Probability mass held by unreported tokens is
ignored, so percentages always sum to 100 even when the reported candidates
covered much less. Treat the result as an illustration of how temperature
sharpens or flattens the distribution, not as the true sampling
distribution at that temperature.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING

import numpy as np

from glassbox.reweight.types import WeightedToken

if TYPE_CHECKING:
    from glassbox.types import PredictionResult, TokenCandidate

DEFAULT_MIN_TEMPERATURE = 0.01


def format_label(token: str) -> str:
    r"""Quote *token* and render each newline as a visible ``\n``."""
    escaped = token.replace("\n", "\\n")
    return f'"{escaped}"'


def reweight(
    candidates: Sequence[TokenCandidate],
    temperature: float,
    chosen_token: str | None = None,
    min_temperature: float = DEFAULT_MIN_TEMPERATURE,
) -> list[WeightedToken]:
    """Re-weight *candidates* for *temperature*.

    Pure function: the input is never mutated and identical inputs give
    bit-identical outputs. Output order equals input order.

    Args:
        candidates: Reported candidates with raw log-probabilities.
        temperature: Display temperature. Values below *min_temperature*
            are raised to it.
        chosen_token: Generated token to highlight, if any.
        min_temperature: Floor preventing division by zero.

    Returns:
        One WeightedToken per candidate. Empty for empty input.
    """
    if not candidates:
        return []

    effective_t = max(temperature, min_temperature)
    log_probs = np.array([c.log_probability for c in candidates], dtype=np.float64)
    scaled = log_probs / effective_t

    # Shift by max before exp: same ratios, but the largest weight is exactly 1,
    # so the sum cannot underflow to zero at tiny temperatures.
    weights = np.exp(scaled - np.max(scaled))
    percentages = weights / np.sum(weights) * 100.0

    return [
        WeightedToken(
            label=format_label(c.token),
            percentage=float(pct),
            is_chosen=chosen_token is not None and c.token == chosen_token,
            token=c.token,
        )
        for c, pct in zip(candidates, percentages)
    ]


def reweight_prediction(
    result: PredictionResult,
    temperature: float,
    min_temperature: float = DEFAULT_MIN_TEMPERATURE,
) -> list[WeightedToken]:
    """Re-weight a prediction's candidates, highlighting its chosen token."""
    return reweight(
        result.candidates,
        temperature,
        chosen_token=result.chosen_token,
        min_temperature=min_temperature,
    )


def rank_descending(weighted: Sequence[WeightedToken]) -> list[WeightedToken]:
    """Return a new list sorted by percentage, highest first (stable on ties)."""
    return sorted(weighted, key=lambda w: w.percentage, reverse=True)


def distribution_entropy(weighted: Sequence[WeightedToken]) -> float:
    """Shannon entropy H = -sum(p * ln(p)) of the displayed distribution, in nats.

    Returns 0.0 for empty input or when all mass sits on one candidate.
    """
    if not weighted:
        return 0.0
    probs = np.array([w.percentage for w in weighted], dtype=np.float64) / 100.0
    mask = probs > 0
    entropy = -float(np.sum(probs[mask] * np.log(probs[mask])))
    # Guard against floating-point artifacts producing tiny negatives.
    return max(0.0, entropy)
