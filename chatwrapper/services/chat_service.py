"""Chat turn pipeline: throttle, assemble context, complete, persist, account."""

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from chatwrapper.core.config import settings
from chatwrapper.core.exceptions import RateLimitError
from chatwrapper.core.rate_limit import FixedWindowRateLimiter, chat_key
from chatwrapper.repositories.message_repo import MessageRepository
from chatwrapper.repositories.usage_repo import UsageRepository
from chatwrapper.schemas.chat_schema import ChatResponse, TokenUsage
from chatwrapper.services.completion_service import CompletionClient, PromptMessage
from chatwrapper.services.pricing import estimate_cost_usd

logger = structlog.get_logger()

SYSTEM_PROMPT_TEMPLATE = (
    "You are a friendly, helpful assistant for {display_name}.\n"
    "Keep responses concise but clear. Use plain language.\n"
    "You are running inside a lightweight personal web wrapper."
)


def build_system_prompt(display_name: str) -> str:
    return SYSTEM_PROMPT_TEMPLATE.format(display_name=display_name or "the user")


class ChatService:
    """Runs one chat turn for an authenticated user."""

    def __init__(
        self,
        message_repo: MessageRepository,
        usage_repo: UsageRepository,
        completion_client: CompletionClient,
        rate_limiter: FixedWindowRateLimiter,
        session: AsyncSession,
    ) -> None:
        self._message_repo = message_repo
        self._usage_repo = usage_repo
        self._completion_client = completion_client
        self._rate_limiter = rate_limiter
        self._session = session

    async def chat(self, user_id: str, display_name: str, message: str) -> ChatResponse:
        """Process a chat message and return the assistant's reply.

        The user's message is committed before the completion call so it
        survives an upstream failure; the reply and the usage row are only
        written once the call succeeds.
        """
        if not self._rate_limiter.hit(chat_key(user_id), settings.rate_limit.chat):
            logger.warning("Chat throttled", user_id=user_id)
            raise RateLimitError

        prompt = await self._assemble_prompt(user_id, display_name, message)

        await self._message_repo.append(user_id, "user", message)
        await self._session.commit()

        result = await self._completion_client.complete(prompt)

        cost = estimate_cost_usd(
            self._completion_client.model_name,
            result.input_tokens,
            result.output_tokens,
        )
        await self._message_repo.append(user_id, "assistant", result.reply)
        await self._usage_repo.record(
            user_id=user_id,
            input_tokens=result.input_tokens,
            output_tokens=result.output_tokens,
            total_tokens=result.total_tokens,
            cost_usd=cost,
        )
        await self._session.commit()

        logger.info(
            "Chat completed",
            user_id=user_id,
            model=self._completion_client.model_name,
            input_tokens=result.input_tokens,
            output_tokens=result.output_tokens,
            cost_usd=cost,
        )
        return ChatResponse(
            reply=result.reply,
            usage=TokenUsage(
                input_tokens=result.input_tokens,
                output_tokens=result.output_tokens,
                total_tokens=result.total_tokens,
            ),
            estimated_cost_usd=cost,
        )

    async def _assemble_prompt(
        self, user_id: str, display_name: str, message: str
    ) -> list[PromptMessage]:
        """System instruction, then the recent window oldest-first, then the new message."""
        recent = await self._message_repo.find_recent(
            user_id, settings.history.prompt_window
        )
        return [
            PromptMessage(role="system", content=build_system_prompt(display_name)),
            *(PromptMessage(role=m.role, content=m.content) for m in recent),
            PromptMessage(role="user", content=message),
        ]
