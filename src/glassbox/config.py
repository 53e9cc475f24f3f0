"""Configuration system for glassbox.

Uses pydantic-settings for declarative, layered configuration:
init kwargs -> environment variables (GLASSBOX_*) -> .env file -> field defaults.

Per-call overrides are applied via resolve_config() which creates a new
config instance without mutating the defaults. API keys are session
credentials and are never part of the configuration.
"""

from __future__ import annotations

from typing import Any

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from glassbox.exceptions import ConfigValidationError

# Priority order, most preferred first.
DEFAULT_CANDIDATE_MODELS: tuple[str, ...] = (
    "gemini-3-flash-preview",
    "gemini-2.0-flash-exp",
    "gemini-1.5-pro-002",
    "gemini-1.5-flash-002",
    "gemini-2.0-flash",
    "gemini-flash-latest",
)

DEFAULT_SYSTEM_INSTRUCTION = (
    "You are a pure text completion engine. You are NOT a chat assistant. "
    "You must continue the stream of text provided by the user. "
    "Do not repeat the input. Do not start a new sentence unless the previous "
    "one is finished. Output ONLY the immediate next likely token."
)

# 0.00001875 per 1K characters.
DEFAULT_COST_PER_CHARACTER = 0.00001875 / 1000


class GlassboxConfig(BaseSettings):
    """Configuration for glassbox.

    Resolution order: init kwargs -> env vars (GLASSBOX_*) -> .env file -> defaults.

    Fields are divided into three groups:
    - **Request**: model list, generation parameters, transport timeout.
    - **Display**: temperature floor and low-confidence threshold used when
      re-weighting and flagging predictions.
    - **Logging**: verbosity and in-memory diagnostic mode.
    """

    model_config = SettingsConfigDict(
        env_prefix="GLASSBOX_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # --- Request ---

    candidate_models: list[str] = Field(
        default_factory=lambda: list(DEFAULT_CANDIDATE_MODELS),
        description="Model identifiers tried in order until one succeeds",
    )
    max_output_tokens: int = Field(
        default=1,
        description="Maximum generated tokens per request",
    )
    top_logprobs: int = Field(
        default=5,
        description="Number of alternative tokens reported with log-probabilities",
    )
    system_instruction: str = Field(
        default=DEFAULT_SYSTEM_INSTRUCTION,
        description="Fixed instruction framing the model as a completion engine",
    )
    cost_per_character: float = Field(
        default=DEFAULT_COST_PER_CHARACTER,
        description="Illustrative flat rate applied to context + token characters",
    )
    request_timeout_ms: int = Field(
        default=30000,
        description="Transport timeout per model attempt in milliseconds",
    )

    # --- Display ---

    min_temperature: float = Field(
        default=0.01,
        description="Floor applied to the temperature before re-weighting",
    )
    low_confidence_threshold: float = Field(
        default=40.0,
        description="Top-candidate probability (%) below which a prediction is flagged",
    )

    # --- Logging ---

    log_level: str = Field(
        default="summary",
        description="Logging verbosity: 'none', 'summary', 'full'",
    )
    diagnostic_mode: bool = Field(
        default=False,
        description="Store all prediction records in memory for analysis",
    )

    @field_validator("candidate_models")
    @classmethod
    def _require_models(cls, value: list[str]) -> list[str]:
        if not value:
            raise ValueError("candidate_models must name at least one model")
        return value

    @field_validator("log_level")
    @classmethod
    def _known_log_level(cls, value: str) -> str:
        if value not in {"none", "summary", "full"}:
            raise ValueError(f"log_level must be 'none', 'summary' or 'full', got {value!r}")
        return value


_ALL_FIELDS: frozenset[str] = frozenset(GlassboxConfig.model_fields.keys())


def resolve_config(
    defaults: GlassboxConfig,
    overrides: dict[str, Any] | None,
) -> GlassboxConfig:
    """Create a new config instance merging defaults with overrides.

    Args:
        defaults: The base configuration loaded from environment.
        overrides: Field values to replace, keyed by field name.

    Returns:
        A new GlassboxConfig with overrides applied, or *defaults* itself
        when there is nothing to override.

    Raises:
        ConfigValidationError: If a key is unknown or a value fails validation.
    """
    if not overrides:
        return defaults

    for key in overrides:
        if key not in _ALL_FIELDS:
            raise ConfigValidationError(f"Unknown config field: '{key}'")

    # model_copy(update=...) skips validation; model_validate coerces and checks.
    merged = defaults.model_dump()
    merged.update(overrides)
    try:
        return GlassboxConfig.model_validate(merged)
    except ValidationError as exc:
        raise ConfigValidationError(str(exc)) from exc
