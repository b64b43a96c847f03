"""
Chat API endpoint.

POST /api/chat takes the conversation transcript and streams the assistant's
reply back as plain text, fragment by fragment. Each request is one
independent turn.
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import StreamingResponse
from pydantic import ValidationError

from invoice_assistant.agents.chat import ChatResponder, chat_turn_stream
from invoice_assistant.auth.dependencies import get_chat_responder
from invoice_assistant.config import settings
from invoice_assistant.schemas.chat import ChatErrorResponse, ChatRequest
from invoice_assistant.services.errors import MalformedRequestError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["chat"])


async def _parse_chat_request(request: Request) -> ChatRequest:
    """
    Read and validate the chat body.

    Raises:
        MalformedRequestError: body is not JSON or does not match ChatRequest
    """
    try:
        body = await request.json()
        return ChatRequest.model_validate(body)
    except ValidationError as e:
        raise MalformedRequestError(f"{e.error_count()} validation error(s)") from e
    except ValueError as e:
        raise MalformedRequestError("body is not valid JSON") from e


@router.post(
    "/chat",
    status_code=status.HTTP_200_OK,
    summary="Chat with the invoice assistant",
    response_class=StreamingResponse,
    responses={
        200: {"content": {"text/plain": {}}, "description": "Reply streamed word by word"},
        500: {"model": ChatErrorResponse, "description": "Malformed request body"},
    },
    description="""
    Send the conversation so far; the latest user message is answered.

    Supported requests:
    - greetings ("hello")
    - "show me invoice 2" / "get invoice INV-2"
    - "summarize invoice 2"
    - "list all invoices" / "show all invoices"

    The reply never contains raw error details; lookup failures produce a
    generic apology.
    """
)
async def chat(
    request: Request,
    responder: Annotated[ChatResponder, Depends(get_chat_responder)],
) -> StreamingResponse:
    chat_request = await _parse_chat_request(request)
    logger.info(f"Chat turn started ({len(chat_request.messages)} messages in transcript)")

    return StreamingResponse(
        chat_turn_stream(responder, chat_request.messages, delay=settings.CHAT_STREAM_DELAY),
        media_type="text/plain; charset=utf-8",
    )
