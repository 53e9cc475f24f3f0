"""glassbox: look inside a single next-token prediction.

Asks a generative model for one token of continuation together with its
top-K alternatives and their log-probabilities, falling back across an
ordered list of models, and re-weights that small distribution for any
display temperature without querying the model again.
"""

from __future__ import annotations

try:
    from importlib.metadata import PackageNotFoundError, version

    __version__ = version("glassbox")
except PackageNotFoundError:
    __version__ = "0.0.0"

from glassbox.config import GlassboxConfig, resolve_config
from glassbox.exceptions import (
    AuthError,
    ConfigValidationError,
    FeatureUnavailableError,
    GlassboxError,
    NoCompatibleModelError,
    SessionBusyError,
    UnknownRequestError,
)
from glassbox.prediction.requester import PredictionRequester, predict
from glassbox.reweight.reweighter import reweight, reweight_prediction
from glassbox.reweight.types import WeightedToken
from glassbox.session import PredictionSession
from glassbox.types import PredictionResult, RequestParameters, TokenCandidate

__all__ = [
    "AuthError",
    "ConfigValidationError",
    "FeatureUnavailableError",
    "GlassboxConfig",
    "GlassboxError",
    "NoCompatibleModelError",
    "PredictionRequester",
    "PredictionResult",
    "PredictionSession",
    "RequestParameters",
    "SessionBusyError",
    "TokenCandidate",
    "UnknownRequestError",
    "WeightedToken",
    "__version__",
    "predict",
    "resolve_config",
    "reweight",
    "reweight_prediction",
]
