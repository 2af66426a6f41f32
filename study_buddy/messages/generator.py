"""Turns a conversation's history into exactly one persisted assistant reply."""

import logging

from study_buddy.llm.client import LLMClient, ProviderFailure
from study_buddy.llm.prompts import build_prompt
from study_buddy.messages import service
from study_buddy.utils.cost_tracker import log_cost

logger = logging.getLogger(__name__)

APOLOGY_PREFIX = "I apologize, but I'm experiencing technical difficulties right now. "
RATE_LIMIT_APOLOGY = "I'm currently handling many requests. Please try again in a moment."
NETWORK_APOLOGY = "There seems to be a connection issue. Please check your internet and try again."
GENERIC_APOLOGY = "Please try rephrasing your question or try again in a few moments."


def apology_for(error: BaseException) -> str:
    """Pick the user-facing apology from a keyword match on the error description."""
    description = str(error).lower()
    if "rate limit" in description:
        return APOLOGY_PREFIX + RATE_LIMIT_APOLOGY
    if "network" in description:
        return APOLOGY_PREFIX + NETWORK_APOLOGY
    return APOLOGY_PREFIX + GENERIC_APOLOGY


class ResponseGenerator:
    def __init__(self, client: LLMClient):
        self._client = client

    async def _complete(self, conversation_id: str) -> str:
        history = service.list_messages_for_generation(conversation_id)
        result = await self._client.generate(build_prompt(history))

        content = result.get("content") or ""
        if not content.strip():
            raise ProviderFailure("No response from AI")

        log_cost(result.get("input_tokens", 0), result.get("output_tokens", 0), self._client.model)
        return content

    async def generate_response(self, conversation_id: str) -> dict:
        """Single attempt; failures become an apology message and are not re-raised."""
        try:
            content = await self._complete(conversation_id)
            message = service.save_assistant_message(conversation_id, content)
        except Exception as exc:
            logger.exception("AI response error for conversation %s", conversation_id)
            message = service.save_assistant_message(conversation_id, apology_for(exc))

        logger.info("Saved assistant reply %s for conversation %s", message["id"], conversation_id)
        return message
