"""Conversation endpoints."""

from fastapi import APIRouter, Depends

from study_buddy.auth.dependencies import CurrentUser, get_current_user
from study_buddy.conversations.schemas import (
    ConversationEnvelope,
    ConversationListResponse,
    CreateConversationRequest,
)
from study_buddy.conversations.service import create_conversation, get_conversation, list_conversations

router = APIRouter(prefix="/api/v1/conversations", tags=["Conversations"])


@router.post("", status_code=201, response_model=ConversationEnvelope, summary="Create a conversation", description="Start a new study session. Without a title one is derived from today's date.")
async def create(body: CreateConversationRequest, user: CurrentUser = Depends(get_current_user)):
    conv = create_conversation(user, body.title)
    return ConversationEnvelope(data=conv)


@router.get("", response_model=ConversationListResponse, summary="List conversations", description="List the authenticated user's conversations, most recent activity first.")
async def list_all(user: CurrentUser = Depends(get_current_user)):
    return ConversationListResponse(data=list_conversations(user))


@router.get("/{conversation_id}", response_model=ConversationEnvelope, summary="Get a conversation", description="Retrieve a single conversation owned by the caller.")
async def get(conversation_id: str, user: CurrentUser = Depends(get_current_user)):
    return ConversationEnvelope(data=get_conversation(user, conversation_id))
