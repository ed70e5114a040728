"""History and usage summary schemas."""

import datetime

from pydantic import ConfigDict

from chatwrapper.schemas.chat_schema import Role
from chatwrapper.schemas.response_schema import CamelModel


class HistoryMessage(CamelModel):
    """A message as shown in the conversation view."""

    model_config = ConfigDict(frozen=True, from_attributes=True)

    role: Role
    content: str


class HistoryResponse(CamelModel):
    """Recent conversation window for UI bootstrap."""

    model_config = ConfigDict(frozen=True)

    user_id: str
    messages: list[HistoryMessage]


class UsageDayResponse(CamelModel):
    """Token and cost totals for one day."""

    model_config = ConfigDict(frozen=True, from_attributes=True)

    date: datetime.date
    input_tokens: int
    output_tokens: int
    total_tokens: int
    cost_usd: float


class UsageSummaryResponse(CamelModel):
    """Per-day usage, newest first."""

    model_config = ConfigDict(frozen=True)

    user_id: str
    summary: list[UsageDayResponse]
