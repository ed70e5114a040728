"""Read-side views of a user's conversation log and usage ledger."""

from chatwrapper.core.config import settings
from chatwrapper.repositories.message_repo import MessageRepository
from chatwrapper.repositories.usage_repo import UsageRepository
from chatwrapper.schemas.history_schema import (
    HistoryMessage,
    HistoryResponse,
    UsageDayResponse,
    UsageSummaryResponse,
)


class HistoryService:
    """Builds history and usage responses for the current user."""

    def __init__(
        self,
        message_repo: MessageRepository,
        usage_repo: UsageRepository,
        user_id: str,
    ) -> None:
        self._message_repo = message_repo
        self._usage_repo = usage_repo
        self._user_id = user_id

    async def recent_history(self, limit: int | None = None) -> HistoryResponse:
        """Most recent messages in chronological order."""
        window = limit if limit is not None else settings.history.ui_window
        messages = await self._message_repo.find_recent(self._user_id, window)
        return HistoryResponse(
            user_id=self._user_id,
            messages=[HistoryMessage.model_validate(m) for m in messages],
        )

    async def usage_summary(self) -> UsageSummaryResponse:
        """Daily usage totals, newest day first."""
        days = await self._usage_repo.summarize(
            self._user_id, limit_days=settings.history.usage_summary_days
        )
        return UsageSummaryResponse(
            user_id=self._user_id,
            summary=[UsageDayResponse.model_validate(day) for day in days],
        )
