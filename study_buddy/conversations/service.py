"""Business logic for conversations with ownership verification."""

from datetime import datetime

from study_buddy.auth.dependencies import CurrentUser, require_user
from study_buddy.conversations import repository
from study_buddy.utils.exceptions import NotFound


def default_title() -> str:
    return f"Study Session - {datetime.now().strftime('%m/%d/%Y')}"


def get_owned_conversation(conversation_id: str, user_id: str) -> dict:
    """Missing and foreign conversations are indistinguishable to the caller."""
    conv = repository.get_by_id(conversation_id)
    if not conv or conv["user_id"] != user_id:
        raise NotFound()
    return conv


def list_conversations(user: CurrentUser | None) -> list[dict]:
    user = require_user(user)
    return repository.list_by_user(user.id)


def create_conversation(user: CurrentUser | None, title: str | None = None) -> dict:
    user = require_user(user)
    return repository.create(user.id, title if title is not None else default_title())


def get_conversation(user: CurrentUser | None, conversation_id: str) -> dict:
    user = require_user(user)
    return get_owned_conversation(conversation_id, user.id)
