"""
Chat Responder Package

Pattern-based assistant behind POST /api/chat. The latest user message is
classified by ordered regex rules (greeting, get/show invoice, summarize
invoice, list all invoices, help) and answered from the invoice repository.

Main Components:
- intents: ordered intent rules and the pure classifier
- prompts: canned replies and reply builders
- responder: ChatResponder plus the fragment streaming helpers

Usage:
    from invoice_assistant.agents.chat import ChatResponder, chat_turn_stream

    responder = ChatResponder(repository)
    async for fragment in chat_turn_stream(responder, messages, delay=0.05):
        ...
"""

from invoice_assistant.agents.chat.intents import (
    INTENT_RULES,
    Intent,
    IntentMatch,
    IntentRule,
    classify_message,
)
from invoice_assistant.agents.chat.prompts import (
    GREETING_REPLY,
    HELP_REPLY,
    TROUBLE_REPLY,
)
from invoice_assistant.agents.chat.responder import (
    ChatResponder,
    chat_turn_stream,
    stream_reply,
)

__all__ = [
    "ChatResponder",
    "chat_turn_stream",
    "stream_reply",
    "classify_message",
    "Intent",
    "IntentMatch",
    "IntentRule",
    "INTENT_RULES",
    "GREETING_REPLY",
    "HELP_REPLY",
    "TROUBLE_REPLY",
]
