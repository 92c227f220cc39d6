"""Chat API routes."""

import logging

from fastapi import APIRouter, HTTPException, status

from app.core.dependencies import ChatServiceDep
from app.schemas.chat import ChatRequest, ChatResponse, SessionResetResponse

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("", response_model=ChatResponse)
async def chat(payload: ChatRequest, service: ChatServiceDep) -> ChatResponse:
    """
    Answer a customer message.

    The first call omits ``session_id``; the response carries the id to send
    with later messages so follow-up questions see the conversation.
    """
    logger.info("Received chat query: %r", payload.query[:100])
    result = await service.chat(
        payload.query,
        session_id=payload.session_id,
        user_id=payload.user_id,
    )
    return ChatResponse(reply=result.reply, session_id=result.session_id)


@router.delete("/sessions/{session_id}", response_model=SessionResetResponse)
async def reset_session(session_id: str, service: ChatServiceDep) -> SessionResetResponse:
    """
    Clear a session's conversation history.

    Raises:
        HTTPException 404: If the session is unknown or already expired.
    """
    if not service.reset(session_id):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Session not found",
        )
    return SessionResetResponse(session_id=session_id)
