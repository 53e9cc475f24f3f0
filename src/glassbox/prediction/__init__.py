"""Prediction requester subsystem for glassbox.

Frames a single-token continuation request, walks the model fallback list,
classifies failures and extracts the chosen token with its top-K
alternatives.
"""

from glassbox.prediction.errors import FailureKind, classify_error
from glassbox.prediction.extraction import build_prediction, extract_candidates
from glassbox.prediction.requester import (
    AttemptOutcome,
    AttemptResult,
    PredictionRequester,
    estimate_cost,
    predict,
)

__all__ = [
    "AttemptOutcome",
    "AttemptResult",
    "FailureKind",
    "PredictionRequester",
    "build_prediction",
    "classify_error",
    "estimate_cost",
    "extract_candidates",
    "predict",
]
