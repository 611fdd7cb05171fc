"""
Stateless ask endpoint.

Routes: POST /ask

Dependencies: chat_engine.application.services.ask_service
System role: Non-streaming Q&A HTTP API
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from chat_engine.api.deps import get_ask_service
from chat_engine.application.services import AskService
from chat_engine.core.exceptions import CompletionEndpointError, MalformedInputError
from chat_engine.models.chat import AskRequest, AskResponse

logger = logging.getLogger(__name__)
router = APIRouter(tags=["ask"])


@router.post("/ask", response_model=AskResponse)
async def ask(
    request: AskRequest,
    ask_service: AskService = Depends(get_ask_service),
) -> AskResponse:
    """
    Answer a question against the chunks sent with the request.

    Raises:
        HTTPException: 400 for a blank question or missing chunks,
            502 when the completion endpoint fails
    """
    try:
        return await ask_service.answer(request)
    except MalformedInputError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message)
    except CompletionEndpointError as e:
        logger.warning("Ask completion failed", extra={"error_kind": e.kind.value, "error_msg": e.message})
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=e.message)
