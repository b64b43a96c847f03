"""
Invoice normalization.

Maps raw records into the canonical Invoice shape. Two input shapes are
accepted:

- QuickBooks Online records (PascalCase keys: Id, DocNumber, TotalAmt, ...)
- Canonical records (an Invoice, or a dict with camelCase/snake_case keys)

Normalization is pure and never raises: missing or unparseable fields
degrade to defaults.
"""

from datetime import date, timedelta
from typing import Any, Dict, List, Optional

from invoice_assistant.schemas.invoices import (
    DeliveryInfo,
    Invoice,
    ItemRef,
    LineItem,
    SalesItemDetail,
)

UNKNOWN_CUSTOMER = "Unknown Customer"
DEMO_DUE_DAYS = 30

_QUICKBOOKS_KEYS = ("Id", "DocNumber", "TxnDate", "TotalAmt", "CustomerRef", "Line")


def _to_float(value: Any, default: float = 0.0) -> float:
    if value is None or isinstance(value, bool):
        return default
    try:
        return float(value)
    except (TypeError, ValueError, OverflowError):
        return default


def _to_int(value: Any, default: int = 0) -> int:
    if value is None or isinstance(value, bool):
        return default
    try:
        return int(value)
    except (TypeError, ValueError, OverflowError):
        return default


def _to_str(value: Any, default: str = "") -> str:
    if value is None:
        return default
    return str(value)


def _optional_str(value: Any) -> Optional[str]:
    return None if value is None else str(value)


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_list(value: Any) -> List[Any]:
    return value if isinstance(value, list) else []


def _pick(raw: Dict[str, Any], snake: str, camel: str) -> Any:
    """Read a canonical field under either its snake_case or camelCase key."""
    if snake in raw:
        return raw[snake]
    return raw.get(camel)


def _build_invoice(
    invoice_id: str,
    doc_number: Any,
    transaction_date: Any,
    due_date: Any,
    total_amount: Any,
    balance: Any,
    customer_name: Any,
    lines: List[LineItem],
    memo: Any = None,
    private_note: Any = None,
    email_status: Any = None,
    delivery_info: Optional[DeliveryInfo] = None,
) -> Invoice:
    """Apply the shared default rules and build the Invoice."""
    total = _to_float(total_amount)
    return Invoice(
        id=invoice_id,
        doc_number=_to_str(doc_number) or f"INV-{invoice_id}",
        transaction_date=_to_str(transaction_date),
        due_date=_to_str(due_date),
        total_amount=total,
        balance=_to_float(balance, default=total),
        customer_name=_to_str(customer_name) or UNKNOWN_CUSTOMER,
        lines=lines,
        memo=_optional_str(memo),
        private_note=_optional_str(private_note),
        email_status=_optional_str(email_status),
        delivery_info=delivery_info,
    )


# --- QuickBooks shape ---

def _quickbooks_line(raw_line: Dict[str, Any]) -> LineItem:
    detail = raw_line.get("SalesItemLineDetail")
    sales_item_detail = None
    if isinstance(detail, dict):
        item_ref = _as_dict(detail.get("ItemRef"))
        sales_item_detail = SalesItemDetail(
            item_ref=ItemRef(
                value=_to_str(item_ref.get("value")),
                name=_to_str(item_ref.get("name")),
            ),
            unit_price=_to_float(detail.get("UnitPrice")),
            quantity=_to_float(detail.get("Qty")),
        )

    return LineItem(
        id=_to_str(raw_line.get("Id")),
        line_number=_to_int(raw_line.get("LineNum")),
        description=_to_str(raw_line.get("Description")),
        amount=_to_float(raw_line.get("Amount")),
        detail_type=_to_str(raw_line.get("DetailType")),
        sales_item_detail=sales_item_detail,
    )


def _from_quickbooks(raw: Dict[str, Any]) -> Invoice:
    delivery = raw.get("DeliveryInfo")
    delivery_info = None
    if isinstance(delivery, dict):
        delivery_info = DeliveryInfo(
            delivery_type=_optional_str(delivery.get("DeliveryType")),
            delivery_time=_optional_str(delivery.get("DeliveryTime")),
        )

    memo = raw.get("CustomerMemo")
    return _build_invoice(
        invoice_id=_to_str(raw.get("Id")),
        doc_number=raw.get("DocNumber"),
        transaction_date=raw.get("TxnDate"),
        due_date=raw.get("DueDate"),
        total_amount=raw.get("TotalAmt"),
        balance=raw.get("Balance"),
        customer_name=_as_dict(raw.get("CustomerRef")).get("name"),
        lines=[_quickbooks_line(line) for line in _as_list(raw.get("Line")) if isinstance(line, dict)],
        memo=memo.get("value") if isinstance(memo, dict) else None,
        private_note=raw.get("PrivateNote"),
        email_status=raw.get("EmailStatus"),
        delivery_info=delivery_info,
    )


# --- Canonical shape ---

def _canonical_line(raw_line: Dict[str, Any]) -> LineItem:
    detail = _pick(raw_line, "sales_item_detail", "salesItemDetail")
    sales_item_detail = None
    if isinstance(detail, dict):
        item_ref = _as_dict(_pick(detail, "item_ref", "itemRef"))
        sales_item_detail = SalesItemDetail(
            item_ref=ItemRef(
                value=_to_str(item_ref.get("value")),
                name=_to_str(item_ref.get("name")),
            ),
            unit_price=_to_float(_pick(detail, "unit_price", "unitPrice")),
            quantity=_to_float(detail.get("quantity")),
        )

    return LineItem(
        id=_to_str(raw_line.get("id")),
        line_number=_to_int(_pick(raw_line, "line_number", "lineNumber")),
        description=_to_str(raw_line.get("description")),
        amount=_to_float(raw_line.get("amount")),
        detail_type=_to_str(_pick(raw_line, "detail_type", "detailType")),
        sales_item_detail=sales_item_detail,
    )


def _from_canonical(raw: Dict[str, Any]) -> Invoice:
    delivery = _pick(raw, "delivery_info", "deliveryInfo")
    delivery_info = None
    if isinstance(delivery, dict):
        delivery_info = DeliveryInfo(
            delivery_type=_optional_str(_pick(delivery, "delivery_type", "deliveryType")),
            delivery_time=_optional_str(_pick(delivery, "delivery_time", "deliveryTime")),
        )

    raw_lines = _as_list(raw.get("lines"))
    return _build_invoice(
        invoice_id=_to_str(raw.get("id")),
        doc_number=_pick(raw, "doc_number", "docNumber"),
        transaction_date=_pick(raw, "transaction_date", "transactionDate"),
        due_date=_pick(raw, "due_date", "dueDate"),
        total_amount=_pick(raw, "total_amount", "totalAmount"),
        balance=raw.get("balance"),
        customer_name=_pick(raw, "customer_name", "customerName"),
        lines=[_canonical_line(line) for line in raw_lines if isinstance(line, dict)],
        memo=raw.get("memo"),
        private_note=_pick(raw, "private_note", "privateNote"),
        email_status=_pick(raw, "email_status", "emailStatus"),
        delivery_info=delivery_info,
    )


def normalize_invoice(raw: Any) -> Invoice:
    """
    Map a raw invoice record into the canonical Invoice.

    Rules:
    - docNumber defaults to "INV-" + id
    - totalAmount defaults to 0, balance defaults to totalAmount
    - customerName defaults to "Unknown Customer"
    - salesItemDetail only when the raw line carries a sales item block

    Normalizing an already-canonical Invoice returns an equal Invoice.
    """
    if isinstance(raw, Invoice):
        return _from_canonical(raw.model_dump())

    record = _as_dict(raw)
    if any(key in record for key in _QUICKBOOKS_KEYS):
        return _from_quickbooks(record)
    return _from_canonical(record)


def demo_record_to_raw(record: Dict[str, Any], today: date) -> Dict[str, Any]:
    """
    Build a QuickBooks-shaped record from a demo record ``{id, title}``.

    Amounts are derived from the id (id * 100), the invoice is dated today
    and due in 30 days.
    """
    record_id = _to_int(record.get("id"))
    amount = record_id * 100
    return {
        "Id": str(record_id),
        "DocNumber": f"INV-{record_id}",
        "TxnDate": today.isoformat(),
        "DueDate": (today + timedelta(days=DEMO_DUE_DAYS)).isoformat(),
        "TotalAmt": amount,
        "Balance": amount,
        "CustomerRef": {"name": record.get("customer") or f"Customer {record_id}"},
        "Line": [],
        "CustomerMemo": {"value": _to_str(record.get("title"))},
    }
