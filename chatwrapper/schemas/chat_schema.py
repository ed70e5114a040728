"""Chat request and response schemas."""

from typing import Literal

from pydantic import ConfigDict, Field, StrictStr

from chatwrapper.schemas.response_schema import CamelModel

Role = Literal["user", "assistant", "system"]


class ChatRequest(CamelModel):
    """Chat API request schema."""

    message: StrictStr = Field(..., min_length=1)


class TokenUsage(CamelModel):
    """Token counts reported by the completion service."""

    model_config = ConfigDict(frozen=True)

    input_tokens: int = Field(ge=0)
    output_tokens: int = Field(ge=0)
    total_tokens: int = Field(ge=0)


class ChatResponse(CamelModel):
    """Chat API response schema."""

    model_config = ConfigDict(frozen=True)

    reply: str
    usage: TokenUsage
    estimated_cost_usd: float
