"""Pydantic schemas for message requests and responses."""

from typing import Literal

from pydantic import BaseModel


class SendMessageRequest(BaseModel):
    content: str


class MessageResponse(BaseModel):
    id: str
    conversation_id: str
    user_id: str
    role: Literal["user", "assistant"]
    content: str
    timestamp: int

    model_config = {"from_attributes": True}


class MessageEnvelope(BaseModel):
    status: str = "success"
    data: MessageResponse


class MessageListResponse(BaseModel):
    status: str = "success"
    data: list[MessageResponse]
