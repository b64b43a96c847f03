"""
Chat Responder

Turns a conversation transcript into a reply and delivers it as a stream of
text fragments. Reply construction (classification + invoice lookups) is
separate from delivery so either can be tested on its own.
"""

import asyncio
import logging
from typing import AsyncIterator, Awaitable, Callable, Dict, Optional, Sequence

from invoice_assistant.agents.chat.intents import Intent, classify_message
from invoice_assistant.agents.chat.prompts import (
    GREETING_REPLY,
    HELP_REPLY,
    TROUBLE_REPLY,
    build_detail_reply,
    build_list_reply,
    build_missing_number_reply,
    build_not_found_reply,
    build_summary_reply,
)
from invoice_assistant.agents.tools import ToolRegistry, build_invoice_tools
from invoice_assistant.schemas.chat import ChatMessage
from invoice_assistant.services.errors import InvoiceNotFoundError
from invoice_assistant.services.invoice_repository import InvoiceRepository

logger = logging.getLogger(__name__)


class ChatResponder:
    """
    Pattern-based invoice assistant.

    Args:
        repository: Invoice data source
        tools: Tool registry bound to the same repository (built if omitted)
    """

    def __init__(self, repository: InvoiceRepository, tools: Optional[ToolRegistry] = None):
        self._repository = repository
        self._tools = tools or build_invoice_tools(repository)
        self._handlers: Dict[Intent, Callable[[Optional[str]], Awaitable[str]]] = {
            Intent.GREETING: self._greet,
            Intent.GET_INVOICE: self._show_invoice,
            Intent.SUMMARIZE_INVOICE: self._summarize_invoice,
            Intent.LIST_INVOICES: self._list_invoices,
            Intent.HELP: self._help,
        }

    async def respond(self, messages: Sequence[ChatMessage]) -> str:
        """
        Build the reply to the latest user message.

        Never raises: any failure becomes a generic apology so the transcript
        never carries raw error detail.
        """
        latest = next((m.content for m in reversed(messages) if m.role == "user"), "")

        try:
            match = classify_message(latest)
            logger.info(f"Chat intent matched: {match.intent.value}")
            return await self._handlers[match.intent](match.ref)
        except Exception as e:
            logger.error(f"Chat turn failed: {e}", exc_info=True)
            return TROUBLE_REPLY

    async def _greet(self, ref: Optional[str]) -> str:
        return GREETING_REPLY

    async def _help(self, ref: Optional[str]) -> str:
        return HELP_REPLY

    async def _list_invoices(self, ref: Optional[str]) -> str:
        invoices = await self._repository.list_invoices()
        return build_list_reply(invoices)

    async def _show_invoice(self, ref: Optional[str]) -> str:
        if ref is None:
            invoices = await self._repository.list_invoices()
            return build_missing_number_reply(invoices, command="show me invoice")

        try:
            invoice = await self._tools.execute("getInvoice", {"id": ref})
        except InvoiceNotFoundError:
            invoices = await self._repository.list_invoices()
            return build_not_found_reply(ref, invoices)
        return build_detail_reply(invoice)

    async def _summarize_invoice(self, ref: Optional[str]) -> str:
        if ref is None:
            invoices = await self._repository.list_invoices()
            return build_missing_number_reply(invoices, command="summarize invoice")

        try:
            summary = await self._tools.execute("summarizeInvoice", {"id": ref})
        except InvoiceNotFoundError:
            invoices = await self._repository.list_invoices()
            return build_not_found_reply(ref, invoices)
        return build_summary_reply(summary)


async def stream_reply(text: str, delay: float = 0.0) -> AsyncIterator[str]:
    """
    Yield a reply word by word, sleeping ``delay`` seconds after each fragment.

    Fragments keep their separating space, so joining them restores ``text``.
    """
    words = text.split(" ")
    for index, word in enumerate(words):
        yield word if index == len(words) - 1 else word + " "
        await asyncio.sleep(delay)


async def chat_turn_stream(
    responder: ChatResponder,
    messages: Sequence[ChatMessage],
    delay: float = 0.0,
) -> AsyncIterator[str]:
    """One chat turn as a lazy, single-use fragment stream."""
    reply = await responder.respond(messages)
    async for fragment in stream_reply(reply, delay):
        yield fragment
