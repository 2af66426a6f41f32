"""Message business logic: list, submit, and persist assistant replies."""

import logging

from study_buddy.auth.dependencies import CurrentUser, require_user
from study_buddy.conversations import repository as conversations
from study_buddy.conversations.service import get_owned_conversation
from study_buddy.db.client import get_store
from study_buddy.db.models import MESSAGES, ROLE_ASSISTANT, ROLE_USER, VALID_ROLES, now_ms
from study_buddy.messages.scheduler import GenerationScheduler
from study_buddy.utils.exceptions import NotFound

logger = logging.getLogger(__name__)


def _append_message(conversation: dict, role: str, content: str) -> dict:
    """Insert a message and bump the conversation's activity time. Call inside a transaction."""
    if role not in VALID_ROLES:
        raise ValueError(f"Invalid message role: {role}")
    timestamp = now_ms()
    message = get_store().insert(MESSAGES, {
        "conversation_id": conversation["id"],
        "user_id": conversation["user_id"],
        "content": content,
        "role": role,
        "timestamp": timestamp,
    })
    conversations.touch(conversation["id"], timestamp)
    return message


def _scan_messages(conversation_id: str) -> list[dict]:
    return get_store().scan(MESSAGES, "conversation_id", conversation_id, order_by="timestamp")


def list_messages(user: CurrentUser | None, conversation_id: str) -> list[dict]:
    user = require_user(user)
    get_owned_conversation(conversation_id, user.id)
    return _scan_messages(conversation_id)


def list_messages_for_generation(conversation_id: str) -> list[dict]:
    """Ordered history without a user check.

    Only the generation worker calls this; the id it passes was validated by
    the submit that scheduled the job.
    """
    return _scan_messages(conversation_id)


def send_message(
    user: CurrentUser | None,
    conversation_id: str,
    content: str,
    scheduler: GenerationScheduler,
) -> dict:
    """Record the user's message and schedule the assistant reply.

    Returns the stored user message as soon as the generation job is queued.
    The job is queued last inside the transaction, so a failure to queue it
    discards the message too.
    """
    user = require_user(user)
    store = get_store()

    with store.transaction():
        conv = get_owned_conversation(conversation_id, user.id)
        message = _append_message(conv, ROLE_USER, content)
        scheduler.run_after(0, conversation_id)

    logger.info("Queued generation for conversation %s", conversation_id)
    return message


def save_assistant_message(conversation_id: str, content: str) -> dict:
    store = get_store()
    with store.transaction():
        conv = conversations.get_by_id(conversation_id)
        if not conv:
            raise NotFound()
        return _append_message(conv, ROLE_ASSISTANT, content)


def messages_after(conversation_id: str, seen: int) -> list[dict]:
    """Messages beyond the first ``seen`` ones, for the live events stream."""
    return _scan_messages(conversation_id)[seen:]
