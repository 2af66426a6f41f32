"""Message endpoints: list, send, live events."""

from fastapi import APIRouter, Depends, Request
from starlette.responses import StreamingResponse

from study_buddy.auth.dependencies import CurrentUser, get_current_user
from study_buddy.messages.scheduler import GenerationScheduler
from study_buddy.messages.schemas import MessageEnvelope, MessageListResponse, SendMessageRequest
from study_buddy.messages.service import list_messages, send_message
from study_buddy.messages.streaming import conversation_events

router = APIRouter(prefix="/api/v1/conversations/{conversation_id}", tags=["Messages"])


def get_scheduler(request: Request) -> GenerationScheduler:
    return request.app.state.scheduler


@router.get("/messages", response_model=MessageListResponse, summary="List messages", description="All messages of the conversation, oldest first.")
async def list_all(conversation_id: str, user: CurrentUser = Depends(get_current_user)):
    return MessageListResponse(data=list_messages(user, conversation_id))


@router.post("/messages", status_code=202, response_model=MessageEnvelope, summary="Send a message", description="Store the user's message and queue the assistant reply. Returns before the reply exists.")
async def send(
    conversation_id: str,
    body: SendMessageRequest,
    user: CurrentUser = Depends(get_current_user),
    scheduler: GenerationScheduler = Depends(get_scheduler),
):
    message = send_message(user, conversation_id, body.content, scheduler)
    return MessageEnvelope(data=message)


@router.get("/events", summary="Live message events", description="SSE stream emitting `new_message` for every message stored after the stream opens.")
async def events(
    conversation_id: str,
    request: Request,
    user: CurrentUser = Depends(get_current_user),
):
    # Raises NotFound before any bytes are streamed
    seen = len(list_messages(user, conversation_id))

    return StreamingResponse(
        conversation_events(request, conversation_id, seen),
        media_type="text/event-stream",
        headers={"Cache-Control": "no-cache", "Connection": "keep-alive", "X-Accel-Buffering": "no"},
    )
