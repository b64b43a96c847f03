"""
Invoice tool type definitions.

Result contracts for the tool handlers. All types are JSON-serializable.
"""

from typing import Dict, Literal, Optional, TypedDict, Union


class SummaryDetails(TypedDict):
    """Display-formatted fields of an invoice summary."""
    amount: str  # "$1,234.50"
    date: str  # M/D/YYYY
    dueDate: str  # M/D/YYYY
    balance: str
    memo: str  # "No memo" when the invoice has none


class InvoiceSummary(TypedDict):
    """Result of summarizeInvoice."""
    summary: str  # "Invoice #INV-2 for Customer 2"
    details: SummaryDetails


class AmountsData(TypedDict):
    """Totals over invoice amounts."""
    total: float
    average: Optional[float]  # None when there are no invoices
    count: int


class AnalysisResult(TypedDict):
    """Result of analyzeInvoices."""
    type: Literal["trends", "customer", "amounts"]
    data: Union[Dict[str, float], AmountsData]
