"""Tests for CompletionClient."""

from unittest.mock import AsyncMock, MagicMock

import pytest
from langchain_core.messages import AIMessage, HumanMessage, SystemMessage

from chatwrapper.core.exceptions import UpstreamError
from chatwrapper.services.completion_service import CompletionClient, PromptMessage
from tests.conftest import TEST_MODEL, make_ai_message


class TestComplete:
    """Single completion calls against a mocked chat model."""

    async def test_returns_reply_and_usage(
        self, completion_client: CompletionClient
    ) -> None:
        result = await completion_client.complete(
            [PromptMessage(role="user", content="Hello")]
        )
        assert result.reply == "Test response"
        assert result.input_tokens == 12
        assert result.output_tokens == 8
        assert result.total_tokens == 20

    async def test_converts_roles(
        self, completion_client: CompletionClient, mock_llm: MagicMock
    ) -> None:
        await completion_client.complete(
            [
                PromptMessage(role="system", content="be nice"),
                PromptMessage(role="user", content="hi"),
                PromptMessage(role="assistant", content="hello"),
                PromptMessage(role="user", content="how are you"),
            ]
        )
        sent = mock_llm.ainvoke.call_args.args[0]
        assert [type(m) for m in sent] == [
            SystemMessage,
            HumanMessage,
            AIMessage,
            HumanMessage,
        ]
        assert [m.content for m in sent] == ["be nice", "hi", "hello", "how are you"]

    async def test_reply_is_not_trimmed(
        self, completion_client: CompletionClient, mock_llm: MagicMock
    ) -> None:
        mock_llm.ainvoke = AsyncMock(return_value=make_ai_message("  spaced \n"))
        result = await completion_client.complete([PromptMessage("user", "x")])
        assert result.reply == "  spaced \n"

    async def test_content_blocks_are_flattened(
        self, completion_client: CompletionClient, mock_llm: MagicMock
    ) -> None:
        mock_llm.ainvoke = AsyncMock(
            return_value=AIMessage(
                content=[
                    {"type": "text", "text": "Hello"},
                    ", ",
                    {"type": "text", "text": "world"},
                ]
            )
        )
        result = await completion_client.complete([PromptMessage("user", "x")])
        assert result.reply == "Hello, world"

    async def test_missing_usage_counts_as_zero(
        self, completion_client: CompletionClient, mock_llm: MagicMock
    ) -> None:
        mock_llm.ainvoke = AsyncMock(return_value=AIMessage(content="ok"))
        result = await completion_client.complete([PromptMessage("user", "x")])
        assert (result.input_tokens, result.output_tokens, result.total_tokens) == (0, 0, 0)

    async def test_model_name_exposed(self, completion_client: CompletionClient) -> None:
        assert completion_client.model_name == TEST_MODEL


class TestCompleteFailures:
    """Provider failures surface as UpstreamError."""

    async def test_provider_exception(
        self, completion_client: CompletionClient, mock_llm: MagicMock
    ) -> None:
        mock_llm.ainvoke = AsyncMock(side_effect=RuntimeError("connection reset"))
        with pytest.raises(UpstreamError) as exc_info:
            await completion_client.complete([PromptMessage("user", "x")])
        assert isinstance(exc_info.value.__cause__, RuntimeError)

    @pytest.mark.parametrize("content", ["", "   \n"])
    async def test_empty_reply(
        self, completion_client: CompletionClient, mock_llm: MagicMock, content: str
    ) -> None:
        mock_llm.ainvoke = AsyncMock(return_value=AIMessage(content=content))
        with pytest.raises(UpstreamError):
            await completion_client.complete([PromptMessage("user", "x")])
