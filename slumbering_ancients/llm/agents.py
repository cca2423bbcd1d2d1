"""Pydantic AI agents of the service.

Two agents talk to the LLM provider:

- ``assistant_agent`` answers lore questions. Its system prompt is rendered
  per run from the retrieved wiki context passed as dependencies.
- ``map_analysis_agent`` describes the areas of a map image and answers with
  a JSON array (parsed by :mod:`slumbering_ancients.server.services.map_analysis`).

Both agents are created without a model; callers pass the model for each run
(see :func:`build_openai_model`), and tests swap it with ``agent.override``.
"""

from __future__ import annotations

from dataclasses import dataclass

from pydantic_ai import Agent, RunContext
from pydantic_ai.models.openai import OpenAIChatModel
from pydantic_ai.providers.openai import OpenAIProvider
from pydantic_ai.settings import ModelSettings

from slumbering_ancients.core.errors import ConfigurationError

from .prompts import build_assistant_prompt


@dataclass
class AssistantDeps:
    """Run dependencies of the assistant: the rendered context block."""

    context_text: str = ""


assistant_agent: Agent[AssistantDeps, str] = Agent(
    deps_type=AssistantDeps,
    output_type=str,
    name="slumbering-ancients-assistant",
)


@assistant_agent.system_prompt
def _assistant_system_prompt(ctx: RunContext[AssistantDeps]) -> str:
    return build_assistant_prompt(ctx.deps.context_text)


map_analysis_agent: Agent[None, str] = Agent(
    output_type=str,
    name="map-analysis",
    system_prompt="You are a cartographer describing fantasy maps for a tabletop campaign.",
)


def build_openai_model(model_name: str, *, api_key: str | None, base_url: str | None = None) -> OpenAIChatModel:
    """Create an OpenAI chat model for an agent run.

    Raises:
        ConfigurationError: when no API key is configured.
    """
    if not api_key:
        raise ConfigurationError("OpenAI API key not configured")
    provider = OpenAIProvider(api_key=api_key, base_url=base_url)
    return OpenAIChatModel(model_name, provider=provider)


def chat_settings(*, max_tokens: int, temperature: float | None = None) -> ModelSettings:
    """Model settings for one run."""
    model_settings = ModelSettings(max_tokens=max_tokens)
    if temperature is not None:
        model_settings["temperature"] = temperature
    return model_settings
