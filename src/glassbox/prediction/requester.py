"""Prediction requester: one next-token request with model fallback.

Tries an ordered list of model identifiers until one answers:

    for model in config.candidate_models:
        success       -> return PredictionResult, stop
        auth failure  -> raise AuthError, stop
        anything else -> remember the error, try the next model

When every model fails, the last error decides which caller-facing
exception is raised. Attempts are strictly sequential and each model is
called at most once per ``predict()``; a miss is final for that call.
"""

from __future__ import annotations

import enum
import hashlib
import logging
import time
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from google import genai
from google.genai import types

from glassbox.config import GlassboxConfig
from glassbox.exceptions import (
    AuthError,
    FeatureUnavailableError,
    NoCompatibleModelError,
    UnknownRequestError,
)
from glassbox.logging.logger import PredictionLogger
from glassbox.logging.types import PredictionRecord
from glassbox.prediction.errors import FailureKind, classify_error, error_message
from glassbox.prediction.extraction import build_prediction, extract_chosen_token
from glassbox.prediction.prompt import build_contents, build_generation_config
from glassbox.reweight.reweighter import distribution_entropy, reweight_prediction

if TYPE_CHECKING:
    from collections.abc import Callable

    from glassbox.types import PredictionResult

logger = logging.getLogger("glassbox")


class AttemptOutcome(enum.Enum):
    """Tag of a single model attempt."""

    SUCCESS = "success"
    SOFT_FAILURE = "soft_failure"
    HARD_FAILURE = "hard_failure"


@dataclass(frozen=True, slots=True)
class AttemptResult:
    """Tagged result of calling one model.

    Attributes:
        model: Model identifier that was called.
        outcome: Whether the attempt succeeded, failed recoverably, or
            failed in a way that must stop the loop.
        prediction: The result on success, else ``None``.
        error: The raised exception on failure, else ``None``.
        failure_kind: Classification of ``error``, else ``None``.
    """

    model: str
    outcome: AttemptOutcome
    prediction: PredictionResult | None = None
    error: BaseException | None = None
    failure_kind: FailureKind | None = None


def estimate_cost(context_text: str, chosen_token: str, cost_per_character: float) -> float:
    """Linear, illustrative cost estimate. Not billing-accurate.

    Args:
        context_text: Text sent as the live context.
        chosen_token: Text generated by the model.
        cost_per_character: Flat rate per character.

    Returns:
        ``(len(context_text) + len(chosen_token)) * cost_per_character``.
    """
    return (len(context_text) + len(chosen_token)) * cost_per_character


def _config_hash(config: GlassboxConfig) -> str:
    """First 16 hex characters of the SHA-256 digest of the config dump."""
    raw = config.model_dump_json().encode("utf-8")
    return hashlib.sha256(raw).hexdigest()[:16]


def default_client_factory(config: GlassboxConfig) -> Callable[[str], Any]:
    """Return a factory building a ``google.genai.Client`` for an API key.

    Args:
        config: Configuration providing the transport timeout.

    Returns:
        Callable taking an API key and returning a client.
    """

    def factory(api_key: str) -> genai.Client:
        return genai.Client(
            api_key=api_key,
            http_options=types.HttpOptions(timeout=config.request_timeout_ms),
        )

    return factory


def _close_client(client: Any) -> None:
    """Release the client's HTTP resources, if it holds any."""
    close = getattr(client, "close", None)
    if close is None:
        return
    try:
        close()
    except Exception as exc:
        logger.warning("Failed to close client: %s", exc)


class PredictionRequester:
    """Issues single-token predictions against the generative service.

    Holds no per-call state: every ``predict()`` builds its own client and
    walks the model list from the top. Concurrent calls are independent.

    Args:
        config: Configuration. Defaults to ``GlassboxConfig()``.
        client_factory: Callable mapping an API key to an object exposing
            ``models.generate_content(model=, contents=, config=)``.
            Defaults to a ``google.genai.Client`` factory.
        prediction_logger: Diagnostic logger. Defaults to one built from
            *config*.
    """

    def __init__(
        self,
        config: GlassboxConfig | None = None,
        client_factory: Callable[[str], Any] | None = None,
        prediction_logger: PredictionLogger | None = None,
    ) -> None:
        self._config = config if config is not None else GlassboxConfig()
        self._client_factory = client_factory or default_client_factory(self._config)
        self._logger = prediction_logger or PredictionLogger(self._config)
        self._config_hash = _config_hash(self._config)

    @property
    def config(self) -> GlassboxConfig:
        """Active configuration."""
        return self._config

    @property
    def prediction_logger(self) -> PredictionLogger:
        """Logger receiving one record per successful prediction."""
        return self._logger

    def predict(self, api_key: str, context_text: str, temperature: float) -> PredictionResult:
        """Predict the next token of *context_text*.

        Args:
            api_key: Session credential for the service. Never stored.
            context_text: Text to continue.
            temperature: Sampling temperature forwarded to the service.

        Returns:
            PredictionResult from the first model that answered.

        Raises:
            AuthError: The key is blank, no client could be built for it,
                or the service rejected it.
            NoCompatibleModelError: Every model was reported as not found.
            FeatureUnavailableError: Log-probabilities are unsupported.
            UnknownRequestError: Any other failure after all models.
        """
        # A blank key would let the SDK fall back to credentials from the
        # environment; only the caller's key may be used.
        if not api_key or not api_key.strip():
            raise AuthError("No API key was provided")
        try:
            client = self._client_factory(api_key)
        except Exception as exc:
            raise AuthError(f"Could not create a client: {exc}") from exc

        attempted: list[str] = []
        last: AttemptResult | None = None
        try:
            for model in self._config.candidate_models:
                attempted.append(model)
                last = self._attempt(client, model, context_text, temperature)

                if last.outcome is AttemptOutcome.SUCCESS and last.prediction is not None:
                    self._log_success(last.prediction, attempted, temperature)
                    return last.prediction

                if last.outcome is AttemptOutcome.HARD_FAILURE and last.error is not None:
                    raise AuthError(error_message(last.error)) from last.error
        finally:
            _close_client(client)

        logger.error("All model attempts failed: %s", ", ".join(attempted))
        cause = last.error if last is not None else None
        raise self._exhausted_error(last, attempted) from cause

    def _attempt(
        self,
        client: Any,
        model: str,
        context_text: str,
        temperature: float,
    ) -> AttemptResult:
        """Call one model once and tag the outcome."""
        start = time.perf_counter()
        try:
            response = client.models.generate_content(
                model=model,
                contents=build_contents(context_text),
                config=build_generation_config(temperature, self._config),
            )
        except Exception as exc:  # Intentional: every failure is classified below
            kind = classify_error(exc)
            logger.warning("Attempt with %s failed (%s): %s", model, kind.value, exc)
            if kind is FailureKind.AUTH:
                outcome = AttemptOutcome.HARD_FAILURE
            else:
                outcome = AttemptOutcome.SOFT_FAILURE
            return AttemptResult(model=model, outcome=outcome, error=exc, failure_kind=kind)

        latency_ms = round((time.perf_counter() - start) * 1000)
        cost = estimate_cost(
            context_text, extract_chosen_token(response), self._config.cost_per_character
        )
        prediction = build_prediction(
            response,
            latency_ms=latency_ms,
            estimated_cost=cost,
            model=model,
        )
        return AttemptResult(model=model, outcome=AttemptOutcome.SUCCESS, prediction=prediction)

    @staticmethod
    def _exhausted_error(last: AttemptResult | None, attempted: list[str]) -> Exception:
        """Map the last failed attempt to a caller-facing exception."""
        if last is None or last.error is None:
            return UnknownRequestError()
        if last.failure_kind is FailureKind.MODEL_NOT_FOUND:
            return NoCompatibleModelError(attempted)
        if last.failure_kind is FailureKind.LOGPROBS_UNSUPPORTED:
            return FeatureUnavailableError()
        return UnknownRequestError(error_message(last.error))

    def _log_success(
        self,
        prediction: PredictionResult,
        attempted: list[str],
        temperature: float,
    ) -> None:
        top = prediction.top_candidate
        weighted = reweight_prediction(
            prediction, temperature, min_temperature=self._config.min_temperature
        )
        self._logger.log_prediction(
            PredictionRecord(
                timestamp_ns=time.time_ns(),
                model=prediction.model,
                attempted_models=tuple(attempted),
                latency_ms=prediction.latency_ms,
                estimated_cost=prediction.estimated_cost,
                temperature=temperature,
                chosen_token=prediction.chosen_token,
                top_probability=top.probability if top is not None else 0.0,
                num_candidates=len(prediction.candidates),
                shannon_entropy=distribution_entropy(weighted),
                config_hash=self._config_hash,
            )
        )


def predict(api_key: str, context_text: str, temperature: float) -> PredictionResult:
    """Predict the next token using a requester built from the environment config.

    See :meth:`PredictionRequester.predict`.
    """
    return PredictionRequester().predict(api_key, context_text, temperature)
