"""
Assistant components for the Invoice Assistant backend.

1. Chat Responder (pattern-based, no LLM)
   - Classifies the latest chat message with ordered regex rules
   - Answers from the invoice repository, streamed word by word

2. Invoice Tools
   - getInvoice / listInvoices / summarizeInvoice / analyzeInvoices
   - Schema-validated; shared by the chat responder and the tools endpoint

The responder only depends on the repository and tool registry, so a
model-backed responder could replace it behind the same interface.
"""

from invoice_assistant.agents.chat import ChatResponder, chat_turn_stream
from invoice_assistant.agents.tools import ToolRegistry, build_invoice_tools

__all__ = [
    "ChatResponder",
    "chat_turn_stream",
    "ToolRegistry",
    "build_invoice_tools",
]
