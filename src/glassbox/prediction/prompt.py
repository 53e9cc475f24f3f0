"""Few-shot prompt framing for single-token continuation.

General-purpose chat models answer questions; this module frames every
request as pure text continuation instead. A handful of fixed
input/output pairs, each continuing a string by exactly one token, precede
the live context, and a system instruction tells the model to behave as a
completion engine.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from google.genai import types

if TYPE_CHECKING:
    from glassbox.config import GlassboxConfig

FEW_SHOT_EXAMPLES: tuple[tuple[str, str], ...] = (
    ("The quick brown", " fox"),
    ("To be or not to", " be"),
    ("I enjoy walking in the", " rain"),
)


def build_contents(context_text: str) -> list[types.Content]:
    """Build the alternating user/model turn list ending with the live context.

    Args:
        context_text: Text the model should continue.

    Returns:
        Few-shot turns followed by the live context as the final user turn.
    """
    contents: list[types.Content] = []
    for prompt, continuation in FEW_SHOT_EXAMPLES:
        contents.append(types.Content(role="user", parts=[types.Part.from_text(text=prompt)]))
        contents.append(
            types.Content(role="model", parts=[types.Part.from_text(text=continuation)])
        )
    contents.append(types.Content(role="user", parts=[types.Part.from_text(text=context_text)]))
    return contents


def build_generation_config(
    temperature: float, config: GlassboxConfig
) -> types.GenerateContentConfig:
    """Build the generation config for one single-token request.

    Args:
        temperature: Sampling temperature forwarded to the service.
        config: Active configuration providing token limit, top-K and
            system instruction.

    Returns:
        A ``GenerateContentConfig`` with log-probability reporting enabled.
    """
    return types.GenerateContentConfig(
        temperature=temperature,
        max_output_tokens=config.max_output_tokens,
        response_logprobs=True,
        logprobs=config.top_logprobs,
        system_instruction=config.system_instruction,
    )
