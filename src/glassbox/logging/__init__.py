"""Diagnostic logging subsystem for glassbox.

Per-prediction records with configurable verbosity and in-memory diagnostic
storage for post-hoc analysis.
"""

from glassbox.logging.logger import PredictionLogger
from glassbox.logging.types import PredictionRecord

__all__ = [
    "PredictionLogger",
    "PredictionRecord",
]
