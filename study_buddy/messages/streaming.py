"""SSE stream of newly stored messages for one conversation."""

import asyncio
import json
import logging
from collections.abc import AsyncIterator

from study_buddy.messages.service import messages_after

logger = logging.getLogger(__name__)

POLL_INTERVAL_SECONDS = 1.0
KEEPALIVE_EVERY_POLLS = 15


def _sse(event: str, data: dict) -> str:
    return f"event: {event}\ndata: {json.dumps(data, default=str)}\n\n"


def format_new_message(message: dict) -> str:
    return _sse("new_message", message)


def format_keepalive() -> str:
    # Comment line: ignored by EventSource, keeps idle proxies from closing the stream
    return ": keepalive\n\n"


async def conversation_events(
    request,
    conversation_id: str,
    seen: int,
    poll_interval: float = POLL_INTERVAL_SECONDS,
) -> AsyncIterator[str]:
    """Yield a ``new_message`` frame for every message past the first ``seen``.

    Runs until the client disconnects. Ownership must be checked by the caller.
    """
    idle_polls = 0
    while True:
        if await request.is_disconnected():
            logger.info("Events client disconnected from conversation %s", conversation_id)
            break
        new_msgs = messages_after(conversation_id, seen)
        for msg in new_msgs:
            yield format_new_message(msg)
        seen += len(new_msgs)

        idle_polls = 0 if new_msgs else idle_polls + 1
        if idle_polls >= KEEPALIVE_EVERY_POLLS:
            yield format_keepalive()
            idle_polls = 0
        await asyncio.sleep(poll_interval)
