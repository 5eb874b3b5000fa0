"""
Design assistant chat route
"""
import logging

from fastapi import APIRouter, Depends
from fastapi.responses import StreamingResponse

from podmayak.core.auth import get_current_user
from podmayak.core.dependencies import get_ai_service, get_renovation_service
from podmayak.database.models import User
from podmayak.schemas.chat import ChatRequest
from podmayak.services.google_ai_service import RenovationAIService
from podmayak.services.renovation_service import RenovationService

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post("/stream")
async def stream_chat(
    request: ChatRequest,
    current_user: User = Depends(get_current_user),
    ai_service: RenovationAIService = Depends(get_ai_service),
    renovation_service: RenovationService = Depends(get_renovation_service),
):
    """
    Stream the assistant's answer as plain-text chunks.

    The first chunk is awaited before the response starts, so a backend
    failure is reported with a proper status code instead of a cut stream.
    """
    api_key = await renovation_service.resolve_api_key()
    stream = ai_service.stream_chat_response(request.history, request.message, api_key=api_key)

    try:
        first_chunk = await stream.__anext__()
    except StopAsyncIteration:
        first_chunk = ""

    logger.info(f"Chat reply started for {current_user.email} ({len(request.history)} prior messages)")

    async def body():
        if first_chunk:
            yield first_chunk
        async for chunk in stream:
            yield chunk

    return StreamingResponse(body(), media_type="text/plain; charset=utf-8")
