"""
Display formatting helpers shared by the tools and the chat responder.
"""

from datetime import date


def format_currency(amount: float) -> str:
    """Format an amount as US dollars, e.g. 1234.5 -> "$1,234.50"."""
    return f"${amount:,.2f}"


def format_display_date(value: str) -> str:
    """
    Format an ISO-8601 date as M/D/YYYY.

    Values that are not ISO dates are returned unchanged.
    """
    try:
        parsed = date.fromisoformat(value[:10])
    except (TypeError, ValueError):
        return value
    return f"{parsed.month}/{parsed.day}/{parsed.year}"
