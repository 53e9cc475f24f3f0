"""Pull the chosen token and its top-K alternatives out of a service response.

Field access goes through ``getattr`` so that any partially populated
response (missing candidates, missing logprobs result, empty parts) degrades
to an empty value instead of raising.
"""

from __future__ import annotations

from typing import Any

from glassbox.types import PredictionResult, TokenCandidate

# Substituted when the service reports a candidate without a log-probability.
UNKNOWN_LOG_PROBABILITY = -100.0


def _first_candidate(response: Any) -> Any:
    candidates = getattr(response, "candidates", None)
    if not candidates:
        return None
    return candidates[0]


def _to_token_candidate(entry: Any) -> TokenCandidate:
    token = getattr(entry, "token", None) or ""
    log_probability = getattr(entry, "log_probability", None)
    if log_probability is None:
        log_probability = UNKNOWN_LOG_PROBABILITY
    return TokenCandidate(token=token, log_probability=float(log_probability))


def extract_candidates(response: Any) -> list[TokenCandidate]:
    """Extract reported alternatives for the single generated position.

    Prefers per-position top candidates, then chosen-path candidates.

    Args:
        response: A ``GenerateContentResponse`` (or compatible object).

    Returns:
        Candidates in the order the service reported them. Empty if the
        response carries no log-probability data.
    """
    candidate = _first_candidate(response)
    logprobs_result = getattr(candidate, "logprobs_result", None)
    if logprobs_result is None:
        return []

    top_candidates = getattr(logprobs_result, "top_candidates", None)
    if top_candidates:
        first_position = getattr(top_candidates[0], "candidates", None)
        if first_position:
            return [_to_token_candidate(entry) for entry in first_position]

    chosen_candidates = getattr(logprobs_result, "chosen_candidates", None)
    if chosen_candidates:
        return [_to_token_candidate(entry) for entry in chosen_candidates]

    return []


def extract_chosen_token(response: Any) -> str:
    """Return the generated text of the first part, or ``""``."""
    candidate = _first_candidate(response)
    content = getattr(candidate, "content", None)
    parts = getattr(content, "parts", None)
    if not parts:
        return ""
    return getattr(parts[0], "text", None) or ""


def build_prediction(
    response: Any,
    *,
    latency_ms: int,
    estimated_cost: float,
    model: str,
) -> PredictionResult:
    """Assemble a PredictionResult from a successful response.

    When no log-probabilities were reported but text was generated, the
    chosen token becomes the sole candidate with log-probability 0 (100%).

    Args:
        response: The successful service response.
        latency_ms: Measured call duration.
        estimated_cost: Cost computed by the requester.
        model: Identifier of the model that produced the response.

    Returns:
        PredictionResult with candidates sorted most probable first.
    """
    chosen_token = extract_chosen_token(response)
    candidates = extract_candidates(response)
    if not candidates and chosen_token:
        candidates = [TokenCandidate(token=chosen_token, log_probability=0.0)]

    # sorted() is stable: ties keep service order.
    ranked = sorted(candidates, key=lambda c: c.probability, reverse=True)
    return PredictionResult(
        chosen_token=chosen_token,
        candidates=tuple(ranked),
        latency_ms=latency_ms,
        estimated_cost=estimated_cost,
        model=model,
    )
