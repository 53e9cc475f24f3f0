"""Data types for the reweighting subsystem."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class WeightedToken:
    """One bar of the displayed distribution.

    Attributes:
        label: Display text: the token in double quotes, newlines escaped.
        percentage: Temperature-adjusted share of the observed candidates (0-100).
        is_chosen: True for the candidate matching the generated token.
        token: Raw token text.
    """

    label: str
    percentage: float
    is_chosen: bool
    token: str
