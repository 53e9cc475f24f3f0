"""Shared pytest fixtures for glassbox tests.

Provides a quiet configuration, builders for service responses shaped like
``google.genai`` ``GenerateContentResponse`` objects, and a scripted fake
client that stands in for ``google.genai.Client`` so no test touches the
network.
"""

from __future__ import annotations

from collections.abc import Callable
from types import SimpleNamespace
from typing import Any

import pytest
from google.genai import errors as genai_errors

from glassbox.config import GlassboxConfig

MODELS = ["model-a", "model-b", "model-c"]


class FakeModels:
    """Scripted stand-in for ``client.models``.

    Each entry of *script* maps a model identifier to either a response
    object (returned) or an exception (raised). Every call is recorded.
    """

    def __init__(self, script: dict[str, Any]) -> None:
        self._script = script
        self.calls: list[dict[str, Any]] = []

    def generate_content(self, *, model: str, contents: Any, config: Any) -> Any:
        self.calls.append({"model": model, "contents": contents, "config": config})
        outcome = self._script[model]
        if isinstance(outcome, BaseException):
            raise outcome
        return outcome

    @property
    def called_models(self) -> list[str]:
        return [c["model"] for c in self.calls]


class FakeClient:
    """Stand-in for ``google.genai.Client`` exposing ``models`` and ``close()``."""

    def __init__(self, script: dict[str, Any]) -> None:
        self.models = FakeModels(script)
        self.api_keys: list[str] = []
        self.closed = 0

    def close(self) -> None:
        self.closed += 1


def _entry(token: str | None, log_probability: float | None) -> SimpleNamespace:
    return SimpleNamespace(token=token, log_probability=log_probability)


def build_response(
    text: str | None,
    top: list[tuple[str | None, float | None]] | None = None,
    chosen: list[tuple[str | None, float | None]] | None = None,
) -> SimpleNamespace:
    """Build an object shaped like ``GenerateContentResponse``."""
    top_candidates = None
    if top is not None:
        top_candidates = [SimpleNamespace(candidates=[_entry(t, lp) for t, lp in top])]
    chosen_candidates = None
    if chosen is not None:
        chosen_candidates = [_entry(t, lp) for t, lp in chosen]

    logprobs_result = None
    if top_candidates is not None or chosen_candidates is not None:
        logprobs_result = SimpleNamespace(
            top_candidates=top_candidates,
            chosen_candidates=chosen_candidates,
        )

    parts = [SimpleNamespace(text=text)] if text is not None else []
    candidate = SimpleNamespace(
        content=SimpleNamespace(role="model", parts=parts),
        logprobs_result=logprobs_result,
    )
    return SimpleNamespace(candidates=[candidate])


def client_error(code: int, status: str, message: str) -> genai_errors.ClientError:
    """Build a ``ClientError`` the way the SDK does from an HTTP error body."""
    return genai_errors.ClientError(
        code, {"error": {"code": code, "status": status, "message": message}}
    )


@pytest.fixture()
def config() -> GlassboxConfig:
    """Config with a short model list and logging silenced."""
    return GlassboxConfig(
        _env_file=None,  # type: ignore[call-arg]
        candidate_models=list(MODELS),
        log_level="none",
    )


@pytest.fixture()
def diagnostic_config() -> GlassboxConfig:
    """Config that keeps every prediction record in memory."""
    return GlassboxConfig(
        _env_file=None,  # type: ignore[call-arg]
        candidate_models=list(MODELS),
        log_level="none",
        diagnostic_mode=True,
    )


@pytest.fixture()
def make_response() -> Callable[..., SimpleNamespace]:
    """Factory for fake service responses."""
    return build_response


@pytest.fixture()
def make_client_error() -> Callable[[int, str, str], genai_errors.ClientError]:
    """Factory for SDK client errors."""
    return client_error


@pytest.fixture()
def fake_client_factory() -> Callable[[dict[str, Any]], tuple[FakeClient, Callable[[str], Any]]]:
    """Return ``make(script) -> (client, factory)`` for a scripted client.

    The factory records the API key it is called with and always returns
    the same client.
    """

    def make(script: dict[str, Any]) -> tuple[FakeClient, Callable[[str], Any]]:
        client = FakeClient(script)

        def factory(api_key: str) -> FakeClient:
            client.api_keys.append(api_key)
            return client

        return client, factory

    return make


@pytest.fixture()
def fox_response() -> SimpleNamespace:
    """A typical successful response: ' fox' chosen among three candidates."""
    return build_response(
        " fox",
        top=[(" dog", -2.5), (" fox", -0.1), (" cat", -3.0)],
        chosen=[(" fox", -0.1)],
    )
