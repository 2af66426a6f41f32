"""Completion provider clients: OpenAI-compatible endpoint (default) and Groq."""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass

from study_buddy.config.settings import Settings

logger = logging.getLogger(__name__)

# Fixed generation parameters, not tunable per request
MAX_OUTPUT_TOKENS = 1500
TEMPERATURE = 0.7
PRESENCE_PENALTY = 0.1
FREQUENCY_PENALTY = 0.1


class ProviderFailure(Exception):
    """The completion call failed or produced no usable text."""


@dataclass(frozen=True)
class CompletionConfig:
    provider: str
    api_key: str
    model: str
    base_url: str | None = None

    @classmethod
    def from_settings(cls, settings: Settings) -> "CompletionConfig":
        if settings.LLM_PROVIDER == "groq":
            return cls(provider="groq", api_key=settings.GROQ_API_KEY, model=settings.GROQ_MODEL)
        return cls(
            provider=settings.LLM_PROVIDER,
            api_key=settings.OPENAI_API_KEY,
            model=settings.DEFAULT_MODEL,
            base_url=settings.OPENAI_BASE_URL,
        )


def _completion_kwargs(model: str, messages: list[dict]) -> dict:
    return {
        "model": model,
        "messages": messages,
        "max_tokens": MAX_OUTPUT_TOKENS,
        "temperature": TEMPERATURE,
        "presence_penalty": PRESENCE_PENALTY,
        "frequency_penalty": FREQUENCY_PENALTY,
    }


def _first_choice(response) -> dict:
    if not response.choices:
        raise ProviderFailure("No response from AI")
    choice = response.choices[0]
    return {
        "content": choice.message.content or "",
        "finish_reason": choice.finish_reason,
        "input_tokens": response.usage.prompt_tokens if response.usage else 0,
        "output_tokens": response.usage.completion_tokens if response.usage else 0,
    }


class LLMClient(ABC):
    model: str

    @abstractmethod
    async def generate(self, messages: list[dict]) -> dict:
        """Return {"content": str, "finish_reason": str, "input_tokens": int, "output_tokens": int}.

        SDK errors are re-raised as ProviderFailure with a description that
        names the failure class ("rate limit", "network").
        """
        ...


class OpenAIClient(LLMClient):
    def __init__(self, config: CompletionConfig):
        from openai import AsyncOpenAI
        self.model = config.model
        self._client = AsyncOpenAI(api_key=config.api_key, base_url=config.base_url)

    async def generate(self, messages: list[dict]) -> dict:
        import openai

        try:
            response = await self._client.chat.completions.create(**_completion_kwargs(self.model, messages))
        except openai.RateLimitError as exc:
            raise ProviderFailure(f"rate limit exceeded: {exc}") from exc
        except openai.APIConnectionError as exc:
            raise ProviderFailure(f"network error: {exc}") from exc
        except openai.APIError as exc:
            raise ProviderFailure(f"provider error: {exc}") from exc
        return _first_choice(response)


class GroqClient(LLMClient):
    def __init__(self, config: CompletionConfig):
        from groq import AsyncGroq
        self.model = config.model
        self._client = AsyncGroq(api_key=config.api_key, base_url=config.base_url)

    async def generate(self, messages: list[dict]) -> dict:
        import groq

        try:
            response = await self._client.chat.completions.create(**_completion_kwargs(self.model, messages))
        except groq.RateLimitError as exc:
            raise ProviderFailure(f"rate limit exceeded: {exc}") from exc
        except groq.APIConnectionError as exc:
            raise ProviderFailure(f"network error: {exc}") from exc
        except groq.APIError as exc:
            raise ProviderFailure(f"provider error: {exc}") from exc
        return _first_choice(response)


def create_llm_client(config: CompletionConfig) -> LLMClient:
    if config.provider == "openai":
        return OpenAIClient(config)
    if config.provider == "groq":
        return GroqClient(config)
    raise ValueError(f"Unknown LLM provider: {config.provider}")
