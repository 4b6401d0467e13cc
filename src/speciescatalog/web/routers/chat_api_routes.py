"""Species assistant chat endpoint."""

import json
import logging
from typing import Annotated

from dependency_injector.wiring import Provide, inject
from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from speciescatalog.chat.service import SpeciesChatService
from speciescatalog.web.core.container import Container
from speciescatalog.web.models.chat import ChatRequest, ChatResponse, ErrorResponse

logger = logging.getLogger(__name__)

router = APIRouter()


def _error(message: str, status_code: int) -> JSONResponse:
    return JSONResponse(ErrorResponse(error=message).model_dump(), status_code=status_code)


@router.post(
    "/chat",
    response_model=ChatResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Malformed body or blank message"},
        502: {"model": ErrorResponse, "description": "Unexpected failure"},
    },
)
@inject
async def chat(
    request: Request,
    chat_service: Annotated[SpeciesChatService, Depends(Provide[Container.chat_service])],
) -> ChatResponse | JSONResponse:
    """Answer one animal or species question.

    Provider problems such as a missing key or exhausted quota still return
    200 with a fixed apology as the response text.
    """
    try:
        body = await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError):
        return _error("Invalid request body", status.HTTP_400_BAD_REQUEST)

    try:
        chat_request = ChatRequest.model_validate(body)
    except ValidationError:
        return _error("Invalid or missing message", status.HTTP_400_BAD_REQUEST)

    try:
        reply = await chat_service.generate_response(chat_request.message)
    except Exception:
        logger.exception("Error in chat API route")
        return _error("Service temporarily unavailable", status.HTTP_502_BAD_GATEWAY)

    return ChatResponse(response=reply)
