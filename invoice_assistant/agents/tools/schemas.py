"""
Invoice tool parameter schemas.

Each tool publishes a JSON-schema style parameter description (for the tools
panel and any future LLM function calling) and validates incoming arguments
with the matching pydantic model.
"""

from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

AnalysisType = Literal["trends", "customer", "amounts"]
Timeframe = Literal["week", "month", "year"]


# --- Argument models ---

class NoArgs(BaseModel):
    """Tools without parameters accept (and ignore) any object."""
    model_config = ConfigDict(extra="ignore")


class InvoiceIdArgs(BaseModel):
    """Arguments for tools addressing one invoice."""
    model_config = ConfigDict(extra="ignore")

    id: str = Field(..., description="Invoice id or display number")


class AnalyzeInvoicesArgs(BaseModel):
    """Arguments for analyzeInvoices."""
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    analysis_type: AnalysisType = Field(..., alias="analysisType")
    # Accepted but not applied to the aggregation
    timeframe: Optional[Timeframe] = None


# --- Published parameter schemas ---

GET_INVOICE_PARAMETERS = {
    "type": "object",
    "properties": {
        "id": {
            "type": "string",
            "description": "The ID of the invoice to retrieve"
        }
    },
    "required": ["id"]
}

LIST_INVOICES_PARAMETERS = {
    "type": "object",
    "properties": {}
}

SUMMARIZE_INVOICE_PARAMETERS = {
    "type": "object",
    "properties": {
        "id": {
            "type": "string",
            "description": "The ID of the invoice to summarize"
        }
    },
    "required": ["id"]
}

ANALYZE_INVOICES_PARAMETERS = {
    "type": "object",
    "properties": {
        "analysisType": {
            "type": "string",
            "enum": ["trends", "customer", "amounts"],
            "description": "Type of analysis to perform"
        },
        "timeframe": {
            "type": "string",
            "enum": ["week", "month", "year"],
            "description": "Time period to analyze"
        }
    },
    "required": ["analysisType"]
}
