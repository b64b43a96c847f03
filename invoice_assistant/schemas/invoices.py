"""
Pydantic schemas for invoice data.

These models define the canonical Invoice shape used throughout the app.
Attributes are snake_case in Python and camelCase on the wire.
"""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base model serializing to camelCase while accepting either naming."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )


# --- Line item models ---

class ItemRef(CamelModel):
    """Reference to a product/service item in the accounting system."""
    value: str = Field("", description="Item id in the provider")
    name: str = Field("", description="Item display name")


class SalesItemDetail(CamelModel):
    """Sales item block attached to a line of type SalesItemLineDetail."""
    item_ref: ItemRef = Field(default_factory=ItemRef)
    unit_price: float = Field(0, description="Price per unit")
    quantity: float = Field(0, description="Quantity sold")


class LineItem(CamelModel):
    """A single invoice line."""
    id: str = Field("", description="Line id within the invoice")
    line_number: int = Field(0, description="1-based position of the line")
    description: str = Field("", description="Line description")
    amount: float = Field(0, description="Line amount")
    detail_type: str = Field("", description="Provider line type, e.g. 'SalesItemLineDetail'")
    sales_item_detail: Optional[SalesItemDetail] = Field(
        None,
        description="Present only for sales item lines"
    )


class DeliveryInfo(CamelModel):
    """How and when the invoice was delivered to the customer."""
    delivery_type: Optional[str] = None
    delivery_time: Optional[str] = None


# --- Invoice ---

class Invoice(CamelModel):
    """
    Canonical invoice record.

    Produced by the normalizer from either a QuickBooks record or a mock/demo
    record. Optional metadata is only set when the provider supplied it.
    """
    id: str = Field(..., description="Provider id, stable for the session")
    doc_number: str = Field(..., description="Human-facing number, e.g. 'INV-12'")
    transaction_date: str = Field("", description="ISO-8601 transaction date")
    due_date: str = Field("", description="ISO-8601 due date")
    total_amount: float = Field(0, description="Invoice total")
    balance: float = Field(0, description="Outstanding balance")
    customer_name: str = Field("Unknown Customer", description="Billed party display name")
    lines: List[LineItem] = Field(default_factory=list)
    memo: Optional[str] = Field(None, description="Customer-facing memo")
    private_note: Optional[str] = Field(None, description="Internal note")
    email_status: Optional[str] = Field(None, description="Provider email status")
    delivery_info: Optional[DeliveryInfo] = None

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        json_schema_extra={
            "examples": [
                {
                    "id": "2",
                    "docNumber": "INV-2",
                    "transactionDate": "2026-10-01",
                    "dueDate": "2026-10-31",
                    "totalAmount": 200.0,
                    "balance": 200.0,
                    "customerName": "Customer 2",
                    "lines": [],
                    "memo": "Quarterly bookkeeping"
                }
            ]
        }
    )


class InvoiceErrorResponse(BaseModel):
    """Error body for the invoice endpoints."""
    error: str = Field(..., examples=["Invoice not found"])
