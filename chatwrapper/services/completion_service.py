"""Completion client over a LangChain chat model."""

from dataclasses import dataclass
from typing import Any

import structlog
from langchain_core.language_models import BaseChatModel
from langchain_core.messages import AIMessage, BaseMessage, HumanMessage, SystemMessage

from chatwrapper.core.exceptions import UpstreamError

logger = structlog.get_logger()


@dataclass(frozen=True)
class PromptMessage:
    """A role-tagged message sent to the model."""

    role: str
    content: str


@dataclass(frozen=True)
class CompletionResult:
    """Reply text plus the token counts reported by the provider."""

    reply: str
    input_tokens: int
    output_tokens: int
    total_tokens: int


class CompletionClient:
    """Sends an ordered message list to the model and returns its reply."""

    def __init__(self, llm: BaseChatModel, model_name: str) -> None:
        self._llm = llm
        self.model_name = model_name

    async def complete(self, messages: list[PromptMessage]) -> CompletionResult:
        """Run one completion call.

        Raises:
            UpstreamError: the call failed or produced no text.
        """
        try:
            response = await self._llm.ainvoke(self._to_langchain(messages))
        except Exception as exc:
            logger.warning(
                "Completion call failed",
                model=self.model_name,
                error_type=type(exc).__name__,
            )
            raise UpstreamError from exc

        reply = self._extract_text(response)
        if not reply.strip():
            logger.warning("Completion returned no text", model=self.model_name)
            raise UpstreamError

        input_tokens, output_tokens, total_tokens = self._extract_usage(response)
        return CompletionResult(
            reply=reply,
            input_tokens=input_tokens,
            output_tokens=output_tokens,
            total_tokens=total_tokens,
        )

    @staticmethod
    def _to_langchain(messages: list[PromptMessage]) -> list[BaseMessage]:
        """Convert role-tagged messages to LangChain message objects."""
        converted: list[BaseMessage] = []
        for msg in messages:
            if msg.role == "system":
                converted.append(SystemMessage(content=msg.content))
            elif msg.role == "assistant":
                converted.append(AIMessage(content=msg.content))
            else:
                converted.append(HumanMessage(content=msg.content))
        return converted

    @staticmethod
    def _extract_text(response: Any) -> str:
        """Flatten message content (string or content blocks) into text."""
        content = getattr(response, "content", None)
        if isinstance(content, str):
            return content
        if isinstance(content, list):
            parts = []
            for block in content:
                if isinstance(block, str):
                    parts.append(block)
                elif isinstance(block, dict) and block.get("type") == "text":
                    parts.append(str(block.get("text", "")))
            return "".join(parts)
        return ""

    @staticmethod
    def _extract_usage(response: Any) -> tuple[int, int, int]:
        """Read input/output/total token counts; missing values count as zero."""
        usage = getattr(response, "usage_metadata", None) or {}
        input_tokens = int(usage.get("input_tokens") or 0)
        output_tokens = int(usage.get("output_tokens") or 0)
        total_tokens = int(usage.get("total_tokens") or (input_tokens + output_tokens))
        return input_tokens, output_tokens, total_tokens
