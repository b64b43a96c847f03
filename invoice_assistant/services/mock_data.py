"""
Static demo dataset served while no QuickBooks session is connected.

Each demo record is expanded into a QuickBooks-shaped record and run through
the normalizer, so mock mode exercises the same mapping as live mode.
"""

from datetime import date
from typing import Any, Dict, List, Optional

from invoice_assistant.schemas.invoices import Invoice
from invoice_assistant.services.normalizer import demo_record_to_raw, normalize_invoice

DEMO_RECORDS: List[Dict[str, Any]] = [
    {"id": 1, "title": "Website redesign deposit"},
    {"id": 2, "title": "Monthly bookkeeping retainer"},
    {"id": 3, "title": "Quarterly tax preparation"},
    {"id": 4, "title": "Payroll setup and onboarding"},
    {"id": 5, "title": "Year-end financial review"},
]


def load_mock_invoices(
    records: Optional[List[Dict[str, Any]]] = None,
    today: Optional[date] = None,
) -> List[Invoice]:
    """
    Build the mock invoice list.

    Args:
        records: Demo records ``{id, title}`` (defaults to DEMO_RECORDS)
        today: Transaction date for every invoice (defaults to date.today())

    Returns:
        Canonical invoices in record order
    """
    if records is None:
        records = DEMO_RECORDS
    if today is None:
        today = date.today()
    return [normalize_invoice(demo_record_to_raw(record, today)) for record in records]
