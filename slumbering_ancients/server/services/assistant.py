"""
Lore assistant service.

Answers a question by retrieving wiki pages and asking the chat model with
those pages rendered into the system prompt.
"""

from __future__ import annotations

import time

from pydantic_ai.exceptions import AgentRunError, ModelHTTPError
from pydantic_ai.models import Model

from slumbering_ancients.core.errors import ValidationFailedError
from slumbering_ancients.core.logging_config import get_logger
from slumbering_ancients.core.monitoring import log_llm_call
from slumbering_ancients.llm.agents import AssistantDeps, assistant_agent, chat_settings
from slumbering_ancients.llm.errors import OpenAIApiError
from slumbering_ancients.llm.prompts import build_context

from .retrieval import WikiRetriever

logger = get_logger(__name__)


class AssistantService:
    """Retrieval-augmented chat over the campaign wiki."""

    def __init__(
        self,
        retriever: WikiRetriever,
        model: Model | str,
        *,
        temperature: float = 0.8,
        max_tokens: int = 1500,
    ) -> None:
        self.retriever = retriever
        self.model = model
        self.temperature = temperature
        self.max_tokens = max_tokens

    async def answer(self, message: str) -> str:
        """Answer ``message`` using the most relevant wiki pages as context.

        Raises:
            ValidationFailedError: for an empty message.
            OpenAIApiError: when embedding or chat completion fails.
        """
        if not message or not message.strip():
            raise ValidationFailedError("Message is required")

        logger.info(f"Assistant question received ({len(message)} chars)")
        retrieval = await self.retriever.retrieve(message)
        logger.debug(f"Retrieved {len(retrieval.documents)} pages via {retrieval.strategy} search")
        deps = AssistantDeps(context_text=build_context(retrieval.documents))

        started = time.perf_counter()
        try:
            result = await assistant_agent.run(
                message,
                deps=deps,
                model=self.model,
                model_settings=chat_settings(max_tokens=self.max_tokens, temperature=self.temperature),
            )
        except ModelHTTPError as e:
            raise OpenAIApiError(
                f"Chat completion failed: {e.status_code}", upstream_status=e.status_code, details={"body": e.body}
            ) from e
        except AgentRunError as e:
            raise OpenAIApiError(f"Chat completion failed: {e}") from e

        log_llm_call(
            model=str(getattr(self.model, "model_name", self.model)),
            purpose="chat",
            tokens_used=result.usage.total_tokens,
            duration_ms=(time.perf_counter() - started) * 1000,
        )
        return result.output
