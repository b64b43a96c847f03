"""
Invoice Tools Package

Fixed catalog of invoice operations shared by the chat responder and the
tools panel endpoint:
- getInvoice: one invoice by id or display number
- listInvoices: all invoices from the active data source
- summarizeInvoice: display summary of one invoice
- analyzeInvoices: trends / customer / amounts aggregation

Usage:
    from invoice_assistant.agents.tools import build_invoice_tools

    tools = build_invoice_tools(repository)
    result = await tools.execute("summarizeInvoice", {"id": "INV-2"})
"""

from invoice_assistant.agents.tools.registry import (
    ToolDescriptor,
    ToolRegistry,
    analyze,
    build_invoice_tools,
    summarize,
)
from invoice_assistant.agents.tools.types import (
    AmountsData,
    AnalysisResult,
    InvoiceSummary,
    SummaryDetails,
)

__all__ = [
    "ToolDescriptor",
    "ToolRegistry",
    "build_invoice_tools",
    "summarize",
    "analyze",
    "AmountsData",
    "AnalysisResult",
    "InvoiceSummary",
    "SummaryDetails",
]
