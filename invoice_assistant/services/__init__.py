"""
Service layer for the Invoice Assistant backend.

Contains the data-source logic shared by routes, tools and the chat responder:
- Normalizes QuickBooks and canonical invoice payloads into Invoice models
- Provides the demo dataset used while no QuickBooks company is connected
- Talks to the QuickBooks Online accounting API
- Switches between mock and live data with fallback on provider failure

Services act as the glue between routes (HTTP layer) and QuickBooks.
"""

from .errors import (
    AuthUrlError,
    CallbackError,
    ErrorCode,
    InvoiceAssistantError,
    InvoiceNotFoundError,
    MalformedRequestError,
    ProviderError,
    ToolValidationError,
    UnknownToolError,
)
from .invoice_repository import InvoiceRepository, clean_invoice_ref
from .mock_data import DEMO_RECORDS, load_mock_invoices
from .normalizer import demo_record_to_raw, normalize_invoice
from .quickbooks_client import InvoiceProvider, QuickBooksAPIError, QuickBooksClient

__all__ = [
    # Errors
    "ErrorCode",
    "InvoiceAssistantError",
    "InvoiceNotFoundError",
    "ProviderError",
    "ToolValidationError",
    "UnknownToolError",
    "AuthUrlError",
    "CallbackError",
    "MalformedRequestError",
    # Invoice data
    "InvoiceRepository",
    "clean_invoice_ref",
    "normalize_invoice",
    "demo_record_to_raw",
    "DEMO_RECORDS",
    "load_mock_invoices",
    # QuickBooks
    "InvoiceProvider",
    "QuickBooksAPIError",
    "QuickBooksClient",
]
