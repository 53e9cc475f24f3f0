"""Exception hierarchy for glassbox.

All exceptions derive from GlassboxError, enabling broad catch patterns
at the application boundary while allowing fine-grained handling internally.
The four request failures are the only kinds a caller of ``predict()`` sees;
transport errors are chained as ``__cause__`` and never leak directly.
"""

from __future__ import annotations

from collections.abc import Sequence


class GlassboxError(Exception):
    """Base exception for all glassbox errors."""


class AuthError(GlassboxError):
    """The API key was rejected as invalid or unauthorized.

    Raised on the first attempt that reports an authentication failure.
    No further models are tried.
    """


class NoCompatibleModelError(GlassboxError):
    """Every candidate model identifier was rejected as unknown or unavailable.

    Attributes:
        attempted_models: The model identifiers tried, in priority order.
    """

    def __init__(self, attempted_models: Sequence[str]) -> None:
        self.attempted_models = tuple(attempted_models)
        super().__init__(
            "Could not find a compatible model. Tried: "
            f"{', '.join(self.attempted_models)}. Please check your API key access."
        )


class FeatureUnavailableError(GlassboxError):
    """Log-probability reporting is unsupported by every reachable model."""

    def __init__(self, message: str | None = None) -> None:
        super().__init__(
            message
            or "Logprobs feature is currently unavailable for the models accessible by your key."
        )


class UnknownRequestError(GlassboxError):
    """Any other failure after all candidate models were exhausted.

    Carries the last underlying error message, or a generic message if the
    underlying error had none.
    """

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or "Failed to generate token after multiple attempts.")


class ConfigValidationError(GlassboxError):
    """Configuration or request parameter validation failed.

    Raised for unknown override keys, an empty model list, an empty context,
    a temperature outside [0, 2], or a malformed API key.
    """


class SessionBusyError(GlassboxError):
    """A prediction was requested while another one is still pending."""
