"""Data access layer for conversations."""

import uuid

from study_buddy.db.client import get_store
from study_buddy.db.models import CONVERSATIONS, now_ms


def create(user_id: str, title: str) -> dict:
    timestamp = now_ms()
    row = {
        "user_id": user_id,
        "title": title,
        "last_message_at": timestamp,
        "created_at": timestamp,
    }
    return get_store().insert(CONVERSATIONS, row)


def list_by_user(user_id: str) -> list[dict]:
    return get_store().scan(CONVERSATIONS, "user_id", user_id, order_by="last_message_at", desc=True)


def get_by_id(conversation_id: str) -> dict | None:
    # Ids are uuids; anything else cannot name a stored conversation
    try:
        uuid.UUID(conversation_id)
    except ValueError:
        return None
    return get_store().get(CONVERSATIONS, conversation_id)


def touch(conversation_id: str, timestamp: int) -> dict | None:
    """Refresh the last-activity timestamp after a message is appended."""
    return get_store().patch(CONVERSATIONS, conversation_id, {"last_message_at": timestamp})
