"""LLM cost estimation for generation logs."""

import logging

logger = logging.getLogger(__name__)

# Price per 1K tokens (USD), approximate
MODEL_PRICING: dict[str, dict[str, float]] = {
    "gpt-4.1-nano": {"input": 0.0001, "output": 0.0004},
    "gpt-4.1-mini": {"input": 0.0004, "output": 0.0016},
    "gpt-4o-mini": {"input": 0.00015, "output": 0.0006},
    "llama-3.1-8b-instant": {"input": 0.00005, "output": 0.00008},
    "llama-3.3-70b-versatile": {"input": 0.00059, "output": 0.00079},
}

# Fallback pricing for unknown models
DEFAULT_PRICING = {"input": 0.0005, "output": 0.001}


def estimate_cost(input_tokens: int, output_tokens: int, model: str) -> float:
    """Estimate cost in USD for a single LLM call."""
    pricing = MODEL_PRICING.get(model, DEFAULT_PRICING)
    cost = (input_tokens / 1000) * pricing["input"] + (output_tokens / 1000) * pricing["output"]
    return round(cost, 8)


def log_cost(input_tokens: int, output_tokens: int, model: str) -> float:
    cost = estimate_cost(input_tokens, output_tokens, model)
    logger.info(
        "LLM cost: model=%s input_tokens=%d output_tokens=%d cost=$%.6f",
        model, input_tokens, output_tokens, cost,
    )
    return cost
