"""Database table name constants and type references."""

import time

# Table names — single source of truth for store queries
USERS = "users"
REFRESH_TOKENS = "refresh_tokens"
CONVERSATIONS = "conversations"
MESSAGES = "messages"

# Role constants
ROLE_USER = "user"
ROLE_ASSISTANT = "assistant"
VALID_ROLES = {ROLE_USER, ROLE_ASSISTANT}


def now_ms() -> int:
    """Current time as integer milliseconds since the epoch."""
    return int(time.time() * 1000)
