"""Distribution reweighting subsystem for glassbox.

Recomputes display percentages from reported log-probabilities for any
temperature, with no I/O.
"""

from glassbox.reweight.reweighter import (
    distribution_entropy,
    format_label,
    rank_descending,
    reweight,
    reweight_prediction,
)
from glassbox.reweight.types import WeightedToken

__all__ = [
    "WeightedToken",
    "distribution_entropy",
    "format_label",
    "rank_descending",
    "reweight",
    "reweight_prediction",
]
