"""Tests for HistoryService."""

import datetime

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from chatwrapper.repositories.message_repo import MessageRepository
from chatwrapper.repositories.usage_repo import UsageRepository
from chatwrapper.services.history_service import HistoryService


@pytest.fixture
def message_repo(db_session: AsyncSession) -> MessageRepository:
    return MessageRepository(db_session)


@pytest.fixture
def usage_repo(db_session: AsyncSession) -> UsageRepository:
    return UsageRepository(db_session)


@pytest.fixture
def service(message_repo: MessageRepository, usage_repo: UsageRepository) -> HistoryService:
    return HistoryService(message_repo=message_repo, usage_repo=usage_repo, user_id="u1")


class TestRecentHistory:
    async def test_empty(self, service: HistoryService) -> None:
        history = await service.recent_history()
        assert history.user_id == "u1"
        assert history.messages == []

    async def test_default_window_is_30(
        self, service: HistoryService, message_repo: MessageRepository
    ) -> None:
        for i in range(35):
            await message_repo.append("u1", "user" if i % 2 == 0 else "assistant", f"m{i}")
        history = await service.recent_history()
        assert len(history.messages) == 30
        assert history.messages[0].content == "m5"
        assert history.messages[-1].content == "m34"

    async def test_explicit_limit(
        self, service: HistoryService, message_repo: MessageRepository
    ) -> None:
        for i in range(5):
            await message_repo.append("u1", "user", f"m{i}")
        history = await service.recent_history(limit=2)
        assert [m.content for m in history.messages] == ["m3", "m4"]

    async def test_serializes_camel_case(
        self, service: HistoryService, message_repo: MessageRepository
    ) -> None:
        await message_repo.append("u1", "user", "hi")
        body = (await service.recent_history()).model_dump(by_alias=True)
        assert body == {"userId": "u1", "messages": [{"role": "user", "content": "hi"}]}


class TestUsageSummary:
    async def test_summary(self, service: HistoryService, usage_repo: UsageRepository) -> None:
        await usage_repo.record("u1", 10, 5, 15, 0.5, day=datetime.date(2025, 5, 1))
        await usage_repo.record("u1", 1, 1, 2, 0.25, day=datetime.date(2025, 5, 2))
        summary = await service.usage_summary()
        assert summary.user_id == "u1"
        assert [d.date for d in summary.summary] == [
            datetime.date(2025, 5, 2),
            datetime.date(2025, 5, 1),
        ]
        body = summary.model_dump(by_alias=True, mode="json")
        assert body["summary"][0] == {
            "date": "2025-05-02",
            "inputTokens": 1,
            "outputTokens": 1,
            "totalTokens": 2,
            "costUsd": 0.25,
        }
