"""Per-model token pricing."""

from dataclasses import dataclass

import structlog

logger = structlog.get_logger()

TOKENS_PER_UNIT = 1_000_000


@dataclass(frozen=True)
class ModelRate:
    """USD per million input and output tokens."""

    input_per_million: float
    output_per_million: float


MODEL_RATES: dict[str, ModelRate] = {
    "gpt-4o-mini": ModelRate(input_per_million=0.15, output_per_million=0.60),
    "gpt-4o": ModelRate(input_per_million=2.50, output_per_million=10.00),
    "gpt-4.1": ModelRate(input_per_million=2.00, output_per_million=8.00),
    "gpt-4.1-mini": ModelRate(input_per_million=0.40, output_per_million=1.60),
    "gpt-4.1-nano": ModelRate(input_per_million=0.10, output_per_million=0.40),
    "claude-sonnet-4-20250514": ModelRate(input_per_million=3.00, output_per_million=15.00),
    "claude-3-5-haiku-20241022": ModelRate(input_per_million=0.80, output_per_million=4.00),
}


def estimate_cost_usd(model: str, input_tokens: int, output_tokens: int) -> float:
    """Estimate the USD cost of one call; unknown models are priced at zero."""
    rate = MODEL_RATES.get(model)
    if rate is None:
        logger.warning("No pricing for model", model=model)
        return 0.0
    return (
        input_tokens * rate.input_per_million + output_tokens * rate.output_per_million
    ) / TOKENS_PER_UNIT
