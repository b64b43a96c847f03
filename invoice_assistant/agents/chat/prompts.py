"""
Chat Responder reply templates.

Canned texts and builders for every reply the responder can produce.
"""

from typing import List

from invoice_assistant.agents.tools.types import InvoiceSummary
from invoice_assistant.schemas.invoices import Invoice
from invoice_assistant.utils.formatting import format_currency, format_display_date

GREETING_REPLY = "Hello! How can I help you with your invoices today?"

HELP_REPLY = (
    "I can help you with your invoices. You can ask me to:\n"
    "• Show a specific invoice (e.g., 'show me invoice 1')\n"
    "• List all invoices (e.g., 'show all invoices')\n"
    "• Summarize an invoice (e.g., 'summarize invoice 1')\n\n"
    "What would you like to know about your invoices?"
)

TROUBLE_REPLY = "I'm having trouble accessing the invoice data. Please try again later."


def build_detail_reply(invoice: Invoice) -> str:
    """Detail block: doc number, customer, amount, date, balance."""
    return (
        f"Here are the details for Invoice #{invoice.doc_number}:\n"
        f"Customer: {invoice.customer_name}\n"
        f"Amount: {format_currency(invoice.total_amount)}\n"
        f"Date: {format_display_date(invoice.transaction_date)}\n"
        f"Balance: {format_currency(invoice.balance)}"
    )


def build_summary_reply(summary: InvoiceSummary) -> str:
    details = summary["details"]
    return (
        f"{summary['summary']}:\n"
        f"Amount: {details['amount']}\n"
        f"Date: {details['date']}\n"
        f"Due Date: {details['dueDate']}\n"
        f"Balance: {details['balance']}\n"
        f"Memo: {details['memo']}"
    )


def build_not_found_reply(ref: str, invoices: List[Invoice]) -> str:
    """Apology followed by every valid doc number as a recovery hint."""
    return (
        f"I'm sorry, but I couldn't find Invoice #{ref}. "
        "Here are the available invoice numbers:\n"
        + "\n".join(f"- {invoice.doc_number}" for invoice in invoices)
    )


def build_list_reply(invoices: List[Invoice]) -> str:
    return "Here are all your invoices:\n" + "\n".join(
        f"- Invoice #{invoice.doc_number}: {invoice.customer_name} - "
        f"{format_currency(invoice.total_amount)}"
        for invoice in invoices
    )


def build_missing_number_reply(invoices: List[Invoice], command: str) -> str:
    """
    Invoice list plus usage hints, for requests without an invoice number.

    Args:
        invoices: Invoices from the active data source
        command: Phrase the hints start with, e.g. "show me invoice"
    """
    return (
        "Please provide a valid invoice number. Here are your available invoices:\n\n"
        + "\n".join(
            f"• Invoice #{invoice.doc_number} - {invoice.customer_name} "
            f"({format_currency(invoice.total_amount)})"
            for invoice in invoices
        )
        + "\n\nYou can use any of these formats:\n"
        f"• {command} [number]\n"
        f"• {command} INV-[number]\n"
        f"• {command} #[number]"
    )
