"""Data types for the diagnostic logging subsystem."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class PredictionRecord:
    """Immutable record of a single successful prediction.

    Attributes:
        timestamp_ns: Wall-clock time of completion (nanoseconds since epoch).
        model: Identifier of the model that answered.
        attempted_models: Every model tried for this call, in order.
        latency_ms: Duration of the successful call (ms).
        estimated_cost: Illustrative cost of the call.
        temperature: Temperature sent with the request.
        chosen_token: Text the model generated.
        top_probability: Probability (%) of the most probable candidate.
        num_candidates: Number of candidates reported.
        shannon_entropy: Entropy (nats) of the displayed distribution at
            the request temperature.
        config_hash: 16-char SHA-256 prefix of the active config.
    """

    timestamp_ns: int
    model: str
    attempted_models: tuple[str, ...]
    latency_ms: int
    estimated_cost: float
    temperature: float
    chosen_token: str
    top_probability: float
    num_candidates: int
    shannon_entropy: float
    config_hash: str
