"""Caller-side session: the state a playground keeps between predictions.

Owns the running context, the display temperature, the API key for the
lifetime of the session, and a busy flag that refuses overlapping requests.
Each successful step appends the generated token to the context, so
repeated steps walk the text forward one token at a time.
"""

from __future__ import annotations

import logging
import threading
from typing import TYPE_CHECKING

from glassbox.exceptions import ConfigValidationError, SessionBusyError
from glassbox.prediction.requester import PredictionRequester
from glassbox.reweight.reweighter import reweight_prediction
from glassbox.types import RequestParameters, validate_temperature

if TYPE_CHECKING:
    from glassbox.reweight.types import WeightedToken
    from glassbox.types import PredictionResult

logger = logging.getLogger("glassbox")

INITIAL_CONTEXT = "The artificial intelligence revolution is"
DEFAULT_TEMPERATURE = 0.5

PRESETS: dict[str, str] = {
    "Sci-Fi Intro": "The year is 3042 and the first thing I saw when I woke up was",
    "Coding (JS)": "function calculateFibonacci(n) {",
    "Poetry": "The autumn leaves fell gently like",
    "Philosophy": "The true nature of consciousness is",
    "Mystery": "The detective looked at the shattered glass and realized",
    "Recipe": "To make the perfect chocolate cake, first you must",
}

# A question with a false premise: a confident answer is a hallucination.
HALLUCINATION_PROMPT = "Who was the first Martian President in 1600? The answer is"

_MIN_API_KEY_LENGTH = 11


class PredictionSession:
    """Interactive next-token session.

    Args:
        api_key: Service credential. Surrounding whitespace is stripped.
            Held in memory only.
        requester: Requester to use. Defaults to one built from the
            environment config.
        context: Starting context text.
        temperature: Starting temperature, used both for requests and for
            re-weighting the displayed distribution.

    Raises:
        ConfigValidationError: If the API key is too short to be real or
            the temperature is out of range.
    """

    def __init__(
        self,
        api_key: str,
        requester: PredictionRequester | None = None,
        context: str = INITIAL_CONTEXT,
        temperature: float = DEFAULT_TEMPERATURE,
    ) -> None:
        key = api_key.strip()
        if len(key) < _MIN_API_KEY_LENGTH:
            raise ConfigValidationError("API key is missing or too short")
        self._api_key = key
        self._requester = requester or PredictionRequester()
        self.context = context
        self._temperature = validate_temperature(temperature)
        self.last_prediction: PredictionResult | None = None
        self.last_error: Exception | None = None
        self.low_confidence = False
        self._lock = threading.Lock()

    @property
    def busy(self) -> bool:
        """True while a prediction is in flight."""
        return self._lock.locked()

    @property
    def temperature(self) -> float:
        return self._temperature

    def set_temperature(self, temperature: float) -> None:
        """Change the temperature used for the next request and for display.

        Raises:
            ConfigValidationError: If *temperature* is outside ``[0, 2]``.
        """
        self._temperature = validate_temperature(temperature)

    def step(self, context_override: str | None = None) -> PredictionResult:
        """Predict one token and append it to the context.

        Args:
            context_override: Context to use instead of the current one.
                It replaces the current context before the chosen token is
                appended.

        Returns:
            The new prediction.

        Raises:
            SessionBusyError: If a step is already in flight.
            ConfigValidationError: If the context is empty.
            GlassboxError: Any request failure from the requester; it is
                also stored on ``last_error``.
        """
        self._acquire()
        try:
            context = context_override if context_override is not None else self.context
            return self._predict(context)
        finally:
            self._lock.release()

    def distribution(self) -> list[WeightedToken]:
        """Re-weighted view of the last prediction at the current temperature."""
        if self.last_prediction is None:
            return []
        return reweight_prediction(
            self.last_prediction,
            self._temperature,
            min_temperature=self._requester.config.min_temperature,
        )

    def select_preset(self, name: str) -> None:
        """Replace the context with a named preset and clear prior results.

        Raises:
            KeyError: If *name* is not a preset.
        """
        if name not in PRESETS:
            available = ", ".join(sorted(PRESETS))
            raise KeyError(f"Unknown preset '{name}'. Available: {available}")
        self._clear(PRESETS[name])

    def reset(self) -> None:
        """Restore the initial context and clear prior results."""
        self._clear(INITIAL_CONTEXT)

    def hallucination_check(self) -> PredictionResult:
        """Step on a false-premise question to show how confidence drops.

        Raises:
            SessionBusyError: If a step is already in flight. The context
                is left untouched.
        """
        self._acquire()
        try:
            self._clear(HALLUCINATION_PROMPT)
            return self._predict(self.context)
        finally:
            self._lock.release()

    def _acquire(self) -> None:
        if not self._lock.acquire(blocking=False):
            raise SessionBusyError("A prediction is already in progress")

    def _predict(self, context: str) -> PredictionResult:
        """Run one request for *context*. The caller holds the lock."""
        params = RequestParameters(context, self._temperature).validate()

        self.last_error = None
        try:
            result = self._requester.predict(self._api_key, params.context_text, params.temperature)
        except Exception as exc:
            self.last_error = exc
            raise

        top = result.top_candidate
        threshold = self._requester.config.low_confidence_threshold
        self.low_confidence = False
        if top is not None and top.probability < threshold:
            self.low_confidence = True
            logger.info(
                "Low-confidence prediction: top candidate %r at %.2f%%",
                top.token,
                top.probability,
            )

        self.last_prediction = result
        self.context = context + result.chosen_token
        return result

    def _clear(self, context: str) -> None:
        self.context = context
        self.last_prediction = None
        self.last_error = None
        self.low_confidence = False
