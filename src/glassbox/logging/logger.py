"""Diagnostic logger for prediction events.

Uses the standard ``logging`` module with the ``"glassbox"`` logger.
No ``print()`` statements. Supports three verbosity levels and an
in-memory diagnostic mode for post-hoc analysis.
"""

from __future__ import annotations

import json
import logging
from dataclasses import asdict
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from glassbox.config import GlassboxConfig
    from glassbox.logging.types import PredictionRecord

logger = logging.getLogger("glassbox")


class PredictionLogger:
    """Per-prediction diagnostic logger.

    Log levels:
        ``"none"``: No logging output. Records are still stored if
        ``diagnostic_mode=True``.

        ``"summary"``: One line per prediction with model, token, top
        probability, entropy, latency and cost.

        ``"full"``: Full JSON dump of all record fields.
    """

    def __init__(self, config: GlassboxConfig) -> None:
        self._log_level = config.log_level
        self._diagnostic_mode = config.diagnostic_mode
        self._records: list[PredictionRecord] = []

    def log_prediction(self, record: PredictionRecord) -> None:
        """Log a single prediction event.

        Args:
            record: Immutable record of the prediction.
        """
        if self._diagnostic_mode:
            self._records.append(record)

        if self._log_level == "none":
            return

        if self._log_level == "summary":
            logger.info(
                "model=%s token=%r top=%.2f%% candidates=%d temp=%.2f "
                "entropy=%.3f latency=%dms cost=%.8f attempts=%d",
                record.model,
                record.chosen_token,
                record.top_probability,
                record.num_candidates,
                record.temperature,
                record.shannon_entropy,
                record.latency_ms,
                record.estimated_cost,
                len(record.attempted_models),
            )
        elif self._log_level == "full":
            logger.info("prediction_record: %s", json.dumps(asdict(record), default=str))

    def get_diagnostic_data(self) -> list[PredictionRecord]:
        """Return all stored records (empty unless ``diagnostic_mode=True``)."""
        return list(self._records)

    def get_summary_stats(self) -> dict[str, Any]:
        """Compute summary statistics over all stored records.

        Returns:
            Dictionary with aggregate stats, or empty dict if no records.
        """
        if not self._records:
            return {}

        latencies = [r.latency_ms for r in self._records]
        costs = [r.estimated_cost for r in self._records]
        top_probs = [r.top_probability for r in self._records]
        entropies = [r.shannon_entropy for r in self._records]
        fallback_count = sum(1 for r in self._records if len(r.attempted_models) > 1)
        models: dict[str, int] = {}
        for r in self._records:
            models[r.model] = models.get(r.model, 0) + 1

        n = len(self._records)
        return {
            "total_predictions": n,
            "mean_latency_ms": sum(latencies) / n,
            "max_latency_ms": max(latencies),
            "total_cost": sum(costs),
            "mean_top_probability": sum(top_probs) / n,
            "mean_entropy": sum(entropies) / n,
            "fallback_count": fallback_count,
            "fallback_rate": fallback_count / n,
            "models": models,
        }
