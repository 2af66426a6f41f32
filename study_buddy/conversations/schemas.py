"""Pydantic schemas for conversation requests and responses."""

from pydantic import BaseModel


# --- Requests ---

class CreateConversationRequest(BaseModel):
    title: str | None = None


# --- Responses ---

class ConversationResponse(BaseModel):
    id: str
    user_id: str
    title: str
    last_message_at: int
    created_at: int | None = None

    model_config = {"from_attributes": True}


class ConversationEnvelope(BaseModel):
    status: str = "success"
    data: ConversationResponse


class ConversationListResponse(BaseModel):
    status: str = "success"
    data: list[ConversationResponse]
