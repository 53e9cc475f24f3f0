"""Data types shared by the requester, the reweighter and the session."""

from __future__ import annotations

import math
from dataclasses import dataclass

from glassbox.exceptions import ConfigValidationError

MIN_TEMPERATURE = 0.0
MAX_TEMPERATURE = 2.0


def validate_temperature(temperature: float) -> float:
    """Return *temperature* unchanged if it lies in ``[0, 2]``.

    Raises:
        ConfigValidationError: If *temperature* is out of range.
    """
    if not MIN_TEMPERATURE <= temperature <= MAX_TEMPERATURE:
        raise ConfigValidationError(
            f"temperature must be in [{MIN_TEMPERATURE}, {MAX_TEMPERATURE}], got {temperature}"
        )
    return temperature


@dataclass(frozen=True, slots=True)
class TokenCandidate:
    """One possible next token and the model's log-probability for it.

    Attributes:
        token: Token text exactly as reported by the service.
        log_probability: Natural log of the token's predicted likelihood.
    """

    token: str
    log_probability: float

    @property
    def probability(self) -> float:
        """Display percentage, recomputed from ``log_probability`` on every access."""
        return math.exp(self.log_probability) * 100


@dataclass(frozen=True, slots=True)
class PredictionResult:
    """Outcome of one successful next-token request.

    Attributes:
        chosen_token: Text the model actually generated.
        candidates: Top-K alternatives, most probable first.
        latency_ms: Wall-clock duration of the successful call.
        estimated_cost: Illustrative cost from a flat per-character rate.
        model: Identifier of the model that answered.
    """

    chosen_token: str
    candidates: tuple[TokenCandidate, ...]
    latency_ms: int
    estimated_cost: float
    model: str = ""

    @property
    def top_candidate(self) -> TokenCandidate | None:
        """Most probable candidate, or ``None`` when nothing was reported."""
        return self.candidates[0] if self.candidates else None


@dataclass(frozen=True, slots=True)
class RequestParameters:
    """Caller-supplied inputs for a prediction.

    Validation happens at the caller boundary via :meth:`validate`; the
    requester itself forwards whatever it is given.
    """

    context_text: str
    temperature: float

    def validate(self) -> RequestParameters:
        """Check the parameters and return ``self``.

        Raises:
            ConfigValidationError: If the context is empty or the temperature
                lies outside ``[0, 2]``.
        """
        if not self.context_text:
            raise ConfigValidationError("context_text must not be empty")
        validate_temperature(self.temperature)
        return self
