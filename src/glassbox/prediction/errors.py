"""Classification of per-model request failures.

Every failure is mapped to a :class:`FailureKind`. The requester decides from
the kind whether to abort (authentication) or move on to the next model
(everything else), and which caller-facing exception to raise once the model
list is exhausted.
"""

from __future__ import annotations

import enum

from google.genai import errors as genai_errors

_AUTH_CODES = frozenset({401, 403})
_AUTH_STATUSES = frozenset({"UNAUTHENTICATED", "PERMISSION_DENIED"})
_INVALID_KEY_MARKERS = ("API key not valid", "API_KEY_INVALID")
_AUTH_MARKERS = (*_INVALID_KEY_MARKERS, "403")
_NOT_FOUND_MARKERS = ("NOT_FOUND", "404")


class FailureKind(enum.Enum):
    """Category of a failed model attempt."""

    AUTH = "auth"
    MODEL_NOT_FOUND = "model_not_found"
    LOGPROBS_UNSUPPORTED = "logprobs_unsupported"
    OTHER = "other"


def error_message(exc: BaseException) -> str:
    """Best human-readable message for *exc*.

    Uses ``APIError.message`` when the service supplied one, otherwise
    ``str(exc)``.
    """
    if isinstance(exc, genai_errors.APIError) and exc.message:
        return str(exc.message)
    return str(exc)


def classify_error(exc: BaseException) -> FailureKind:
    """Classify a failed attempt.

    For an ``APIError`` the structured ``code`` and ``status`` decide, plus
    the invalid-key wording the service uses on a plain 400. Numeric markers
    such as ``"404"`` are only searched in errors raised outside the SDK's
    hierarchy, which carry nothing but their message.

    Args:
        exc: The exception raised by the attempt.

    Returns:
        The failure category.
    """
    # str(APIError) includes code, status and details; message alone may not.
    text = f"{error_message(exc)} {exc}"

    if isinstance(exc, genai_errors.APIError):
        if exc.code in _AUTH_CODES or exc.status in _AUTH_STATUSES:
            return FailureKind.AUTH
        if any(marker in text for marker in _INVALID_KEY_MARKERS):
            return FailureKind.AUTH
        if exc.code == 404 or exc.status == "NOT_FOUND":
            return FailureKind.MODEL_NOT_FOUND
    else:
        if any(marker in text for marker in _AUTH_MARKERS):
            return FailureKind.AUTH
        if any(marker in text for marker in _NOT_FOUND_MARKERS):
            return FailureKind.MODEL_NOT_FOUND

    if "logprobs" in text.lower():
        return FailureKind.LOGPROBS_UNSUPPORTED

    return FailureKind.OTHER
