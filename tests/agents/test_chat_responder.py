"""
Tests for the chat responder.

Intent classification, reply texts for every intent, error collapsing and
fragment streaming.
"""

from unittest.mock import AsyncMock, MagicMock

import pytest

from invoice_assistant.agents.chat import (
    GREETING_REPLY,
    HELP_REPLY,
    TROUBLE_REPLY,
    ChatResponder,
    Intent,
    chat_turn_stream,
    classify_message,
    stream_reply,
)
from invoice_assistant.schemas.chat import ChatMessage
from invoice_assistant.services.quickbooks_client import QuickBooksAPIError


def user(content):
    return [ChatMessage(role="user", content=content)]


async def collect(fragments):
    return [fragment async for fragment in fragments]


class TestClassifyMessage:

    @pytest.mark.parametrize("message", ["hello", "Hi", "  hey  ", "greetings", "Good Morning"])
    def test_greetings(self, message):
        assert classify_message(message).intent == Intent.GREETING

    def test_greeting_must_be_the_whole_message(self):
        assert classify_message("hello, show me invoice 2").intent == Intent.GET_INVOICE

    @pytest.mark.parametrize("message, ref", [
        ("show me invoice 2", "2"),
        ("Show me invoice #4", "4"),
        ("get invoice inv-3", "3"),
        ("could you get invoice 12 please", "12"),
    ])
    def test_get_invoice_extracts_number(self, message, ref):
        match = classify_message(message)

        assert match.intent == Intent.GET_INVOICE
        assert match.ref == ref

    def test_get_invoice_without_number(self):
        match = classify_message("show me invoice")

        assert match.intent == Intent.GET_INVOICE
        assert match.ref is None

    def test_summarize(self):
        match = classify_message("summarize invoice INV-5")

        assert match.intent == Intent.SUMMARIZE_INVOICE
        assert match.ref == "5"

    @pytest.mark.parametrize("message", ["list all invoices", "Show all invoices"])
    def test_list(self, message):
        assert classify_message(message).intent == Intent.LIST_INVOICES

    def test_get_rule_wins_over_summarize(self):
        assert classify_message("get invoice 2 and summarize invoice 3").intent == Intent.GET_INVOICE

    def test_fallback_is_help(self):
        assert classify_message("what is the weather").intent == Intent.HELP


class TestChatResponder:

    @pytest.mark.asyncio
    async def test_greeting_does_not_touch_repository(self):
        repository = MagicMock()
        repository.list_invoices = AsyncMock()
        repository.get_invoice = AsyncMock()

        reply = await ChatResponder(repository).respond(user("hello"))

        assert reply == GREETING_REPLY
        repository.list_invoices.assert_not_awaited()
        repository.get_invoice.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_help(self, repository):
        assert await ChatResponder(repository).respond(user("what can you do?")) == HELP_REPLY

    @pytest.mark.asyncio
    async def test_show_invoice(self, repository):
        reply = await ChatResponder(repository).respond(user("show me invoice 2"))

        assert reply == (
            "Here are the details for Invoice #INV-2:\n"
            "Customer: Customer 2\n"
            "Amount: $200.00\n"
            "Date: 10/1/2026\n"
            "Balance: $200.00"
        )

    @pytest.mark.asyncio
    async def test_show_unknown_invoice_lists_valid_numbers(self, repository):
        reply = await ChatResponder(repository).respond(user("show me invoice 999"))

        assert reply == (
            "I'm sorry, but I couldn't find Invoice #999. Here are the available invoice numbers:\n"
            "- INV-1\n- INV-2\n- INV-3\n- INV-4\n- INV-5"
        )

    @pytest.mark.asyncio
    async def test_show_without_number_lists_invoices(self, repository):
        reply = await ChatResponder(repository).respond(user("show me invoice"))

        assert reply.startswith("Please provide a valid invoice number.")
        assert "• Invoice #INV-3 - Customer 3 ($300.00)" in reply
        assert "• show me invoice INV-[number]" in reply

    @pytest.mark.asyncio
    async def test_summarize_invoice(self, repository):
        reply = await ChatResponder(repository).respond(user("summarize invoice 3"))

        assert reply == (
            "Invoice #INV-3 for Customer 3:\n"
            "Amount: $300.00\n"
            "Date: 10/1/2026\n"
            "Due Date: 10/31/2026\n"
            "Balance: $300.00\n"
            "Memo: Quarterly tax preparation"
        )

    @pytest.mark.asyncio
    async def test_summarize_without_number(self, repository):
        reply = await ChatResponder(repository).respond(user("summarize invoice"))

        assert "• summarize invoice #[number]" in reply

    @pytest.mark.asyncio
    async def test_list_invoices(self, repository):
        reply = await ChatResponder(repository).respond(user("list all invoices"))

        lines = reply.split("\n")
        assert lines[0] == "Here are all your invoices:"
        assert lines[1] == "- Invoice #INV-1: Customer 1 - $100.00"
        assert len(lines) == 6

    @pytest.mark.asyncio
    async def test_answers_latest_user_message(self, repository):
        messages = [
            ChatMessage(role="user", content="show me invoice 1"),
            ChatMessage(role="assistant", content="Here are the details for Invoice #INV-1: ..."),
            ChatMessage(role="user", content="hello"),
            ChatMessage(role="assistant", content="show me invoice 3"),
        ]

        assert await ChatResponder(repository).respond(messages) == GREETING_REPLY

    @pytest.mark.asyncio
    async def test_live_listed_doc_number_resolves(self, live_repository):
        reply = await ChatResponder(live_repository).respond(user("show me invoice 1037"))

        assert reply.startswith("Here are the details for Invoice #1037:\nCustomer: Sonnenschein Family Store")

    @pytest.mark.asyncio
    async def test_live_not_found_lists_live_numbers(self, live_repository):
        reply = await ChatResponder(live_repository).respond(user("show me invoice 999"))

        assert reply.endswith("- 1037\n- 1036")

    @pytest.mark.asyncio
    async def test_provider_failure_becomes_apology(self, live_repository, fake_provider):
        fake_provider.get_error = QuickBooksAPIError(500, "QuickBooks API returned 500")

        reply = await ChatResponder(live_repository).respond(user("show me invoice 999"))

        assert reply == TROUBLE_REPLY

    @pytest.mark.asyncio
    async def test_unexpected_failure_becomes_apology(self):
        repository = MagicMock()
        repository.list_invoices = AsyncMock(side_effect=RuntimeError("boom"))

        reply = await ChatResponder(repository).respond(user("list all invoices"))

        assert reply == TROUBLE_REPLY
        assert "boom" not in reply


class TestStreaming:

    @pytest.mark.asyncio
    async def test_stream_reply_splits_on_words(self):
        fragments = await collect(stream_reply("Hello there friend"))

        assert fragments == ["Hello ", "there ", "friend"]

    @pytest.mark.asyncio
    async def test_fragments_join_to_reply(self, repository):
        responder = ChatResponder(repository)
        reply = await responder.respond(user("summarize invoice 2"))

        fragments = await collect(chat_turn_stream(responder, user("summarize invoice 2")))

        assert "".join(fragments) == reply
        assert len(fragments) > 1
