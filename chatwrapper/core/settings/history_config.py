"""Conversation history and usage summary configuration."""

from pydantic import BaseModel


class HistoryConfig(BaseModel, frozen=True):
    """Window sizes for history reads and the usage summary."""

    prompt_window: int
    ui_window: int
    usage_summary_days: int
