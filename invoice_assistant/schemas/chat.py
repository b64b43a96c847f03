"""
Pydantic schemas for the chat endpoint.
"""

from typing import List, Literal

from pydantic import BaseModel, Field


class ChatMessage(BaseModel):
    """One entry of the conversation transcript."""
    role: Literal["user", "assistant"] = Field(..., description="Who wrote the message")
    content: str = Field(..., description="Message text")


class ChatRequest(BaseModel):
    """
    Request body for POST /api/chat.

    The transcript is append-only; the latest user message drives the reply.
    """
    messages: List[ChatMessage] = Field(..., min_length=1)

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "messages": [
                        {"role": "user", "content": "show me invoice 2"}
                    ]
                }
            ]
        }
    }


class ChatErrorResponse(BaseModel):
    """Error body returned when the chat request cannot be parsed."""
    error: str = Field(..., examples=["Internal server error"])
