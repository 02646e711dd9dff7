"""Session and turn endpoints.

A session handle is the remote thread id. No transcript is kept on the server
between requests; each turn rebuilds its handle from the path, and concurrent
turns on one thread wait for each other.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from ts_helper.client.errors import AssistantClientError
from ts_helper.client.service import ChatService, get_chat_service
from ts_helper.models.schemas import ChatRequest, SessionCreated, TurnReply

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/sessions", tags=["sessions"])


@router.post("", response_model=SessionCreated, status_code=status.HTTP_201_CREATED)
async def create_session(
    service: ChatService = Depends(get_chat_service),
) -> SessionCreated:
    """Create a conversation thread.

    Returns:
        SessionCreated with the thread id and the greeting to display.

    Raises:
        502: The assistant service could not create a thread.
    """
    try:
        session = await service.create_session()
    except AssistantClientError as e:
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail=service.thread_failed_message,
        ) from e

    return SessionCreated(thread_id=session.thread_id, greeting=service.greeting)


@router.post("/{thread_id}/turns", response_model=TurnReply)
async def send_turn(
    thread_id: str,
    request: ChatRequest,
    service: ChatService = Depends(get_chat_service),
) -> TurnReply:
    """Send a user message and return the assistant's reply.

    Failures of the assistant service are reported in the body
    (success=false with a fallback message), not as HTTP errors.

    Args:
        thread_id: Handle returned by POST /sessions.
        request: The user's message.

    Returns:
        TurnReply with the reply text and success flag.
    """
    session = service.resume_session(thread_id)
    reply = await service.send_turn(session, request.message)
    if not reply.success:
        logger.info(f"Turn on thread {thread_id} answered with fallback: {reply.error}")
    return reply
